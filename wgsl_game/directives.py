"""
Directive tokenizer.

Finds every ``@name(...)`` macro of the game dialect in one left-to-right pass
and returns typed :class:`Directive` records carrying their source span.
WGSL's own attributes (``@group``, ``@binding``, ``@vertex``, ...) are not
directives and are never matched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple


class DirectiveKind(str, Enum):
    IMPORT = "import"
    SET_TITLE = "set_title"
    SET_SIZE = "set_size"
    SOUND = "sound"
    TEXTURE = "texture"
    TEXTURE_INDEX = "texture_index"
    VIDEO = "video"
    CAMERA = "camera"
    MODEL = "model"
    OSC = "osc"
    STR = "str"
    ENGINE = "engine"


# Alternatives are tried in order at each position; each group name maps to a
# DirectiveKind, the optional member groups capture suffixes.
_DIRECTIVE_RE = re.compile(
    r"""
      @import\("(?P<import>[^"]+)"\)
    | @set_title\("(?P<set_title>[^"]+)"\)
    | @set_size\((?P<set_size>[^)]*)\)
    | @sound\("(?P<sound>[^"]+)"\)(?:\.(?P<sound_member>play|stop)\(\))?
    | @texture_index\("(?P<texture_index>[^"]+)"\)
    | @texture\("(?P<texture>[^"]+)"\)
    | @video\("(?P<video>[^"]+)"\)
    | @camera\((?P<camera>[^)]*)\)
    | @model\("(?P<model>[^"]+)"\)(?:\.(?P<model_member>positions|normals)\b)?
    | @osc\("(?P<osc>[^"]+)"\)
    | @str\("(?P<str>(?:[^"\\]|\\.)*)"\)
    | @engine\.(?P<engine>[A-Za-z_]\w*)
    """,
    re.VERBOSE,
)

_MEMBER_GROUPS = {
    DirectiveKind.SOUND: "sound_member",
    DirectiveKind.MODEL: "model_member",
}
# lastgroup names the suffix group when a member was captured.
_SUFFIX_OWNERS = {group: kind.value for kind, group in _MEMBER_GROUPS.items()}


@dataclass(frozen=True)
class Directive:
    """One macro occurrence. ``span`` is the half-open range it occupies."""

    kind: DirectiveKind
    argument: str
    span: Tuple[int, int]
    member: Optional[str] = None

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]


def iter_directives(source: str, kinds: Optional[Iterable[DirectiveKind]] = None) -> Iterator[Directive]:
    wanted = frozenset(kinds) if kinds is not None else None
    for match in _DIRECTIVE_RE.finditer(source):
        kind = DirectiveKind(_SUFFIX_OWNERS.get(match.lastgroup, match.lastgroup))
        if wanted is not None and kind not in wanted:
            continue
        member_group = _MEMBER_GROUPS.get(kind)
        yield Directive(
            kind=kind,
            argument=match.group(kind.value),
            span=match.span(),
            member=match.group(member_group) if member_group else None,
        )


def scan_directives(source: str, kinds: Optional[Iterable[DirectiveKind]] = None) -> List[Directive]:
    return list(iter_directives(source, kinds))


def line_end(source: str, index: int) -> int:
    """Index of the newline ending the line that contains ``index`` (or len)."""
    pos = source.find("\n", index)
    return len(source) if pos < 0 else pos
