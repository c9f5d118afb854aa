"""
Macro rewriting.

Every directive found by the tokenizer is turned into an :class:`Edit` over its
span; edits are applied back to front so earlier offsets stay valid. Nothing
is substituted twice, and generated text is never rescanned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .config import PreprocessorConfig
from .directives import Directive, DirectiveKind, line_end, scan_directives
from .errors import DirectiveParseError
from .header import camera_ident, model_buffer_ident, texture_ident, video_ident
from .metadata import Metadata
from .scanner import parse_camera_index

logger = logging.getLogger("wgsl_game")

ENGINE_FIELDS = {
    "buttons": "_engine.buttons",
    "time": "_engine.time",
    "delta_time": "_engine.delta_time",
    "screen_width": "_engine.screen_width",
    "screen_height": "_engine.screen_height",
    "mouse": "_engine.mouse",
    "keys": "_engine.keys",
    "sampler": "_engine_sampler",
    "state": "_engine.state",
    "osc": "_engine.osc",
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}


@dataclass(frozen=True)
class Edit:
    start: int
    end: int
    text: str


def unescape(literal: str) -> str:
    """Resolve ``\\n \\r \\t \\" \\\\``; any other escape is kept verbatim."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), literal)


def string_array_literal(literal: str, length: int) -> str:
    codes = [ord(ch) for ch in unescape(literal)]
    if len(codes) > length:
        raise DirectiveParseError("@str", f"{len(codes)} characters exceed the fixed length {length}")
    codes += [0] * (length - len(codes))
    return f"array<u32, {length}>({', '.join(f'{code}u' for code in codes)})"


def replacement_for(directive: Directive, metadata: Metadata, config: PreprocessorConfig) -> Optional[str]:
    """Text replacing ``directive``, or None to leave it untouched."""
    kind = directive.kind
    arg = directive.argument

    if kind is DirectiveKind.ENGINE:
        path = ENGINE_FIELDS.get(arg)
        if path is None:
            logger.warning("unknown engine field @engine.%s left as is", arg)
        return path
    if kind is DirectiveKind.OSC:
        return f"_engine.osc[{metadata.osc_params.index(arg)}]"
    if kind is DirectiveKind.SOUND:
        slot = metadata.sounds.index(arg)
        if directive.member == "play":
            return f"_engine.audio[{slot}]++"
        if directive.member == "stop":
            return f"/* stop sound {slot} - not implemented */"
        return f"_engine.audio[{slot}]"
    if kind is DirectiveKind.TEXTURE:
        return texture_ident(metadata.textures.index(arg))
    if kind is DirectiveKind.TEXTURE_INDEX:
        return f"{metadata.textures.index(arg)}u"
    if kind is DirectiveKind.VIDEO:
        return video_ident(metadata.videos.index(arg))
    if kind is DirectiveKind.CAMERA:
        return camera_ident(metadata.cameras.index(parse_camera_index(arg)))
    if kind is DirectiveKind.MODEL:
        slot = metadata.models.index(arg)
        if directive.member is None:
            logger.warning('@model("%s") used without .positions or .normals', arg)
            return f"/* @model({arg}) - use .positions or .normals */"
        return f"{model_buffer_ident(slot, directive.member)}.data"
    if kind is DirectiveKind.STR:
        return string_array_literal(arg, config.str_length)
    # imports are resolved before rewriting; set_* are handled as line edits
    return None


def plan_edits(
    source: str,
    directives: Sequence[Directive],
    metadata: Metadata,
    config: Optional[PreprocessorConfig] = None,
) -> List[Edit]:
    cfg = config or PreprocessorConfig()
    edits = []
    for directive in directives:
        if directive.kind in (DirectiveKind.SET_TITLE, DirectiveKind.SET_SIZE):
            # the directive and the rest of its line are dropped
            edits.append(Edit(directive.start, line_end(source, directive.start), ""))
            continue
        text = replacement_for(directive, metadata, cfg)
        if text is not None:
            edits.append(Edit(directive.start, directive.end, text))
    return edits


def apply_edits(source: str, edits: Iterable[Edit]) -> str:
    """Splice ``edits`` into ``source``; an edit overlapping an earlier one is dropped."""
    kept: List[Edit] = []
    for edit in sorted(edits, key=lambda e: (e.start, -e.end)):
        if kept and edit.start < kept[-1].end:
            if edit.end > kept[-1].end:
                logger.debug("dropping edit %d..%d overlapping %d..%d", edit.start, edit.end, kept[-1].start, kept[-1].end)
            continue
        kept.append(edit)
    pieces: List[str] = []
    tail = len(source)
    for edit in reversed(kept):
        pieces.append(source[edit.end : tail])
        pieces.append(edit.text)
        tail = edit.start
    pieces.append(source[:tail])
    return "".join(reversed(pieces))


def rewrite(
    source: str,
    metadata: Metadata,
    config: Optional[PreprocessorConfig] = None,
    directives: Optional[Sequence[Directive]] = None,
    extra_edits: Iterable[Edit] = (),
) -> str:
    if directives is None:
        directives = scan_directives(source)
    edits = plan_edits(source, directives, metadata, config)
    edits.extend(extra_edits)
    return apply_edits(source, edits)
