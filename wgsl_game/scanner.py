from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import PreprocessorConfig
from .directives import Directive, DirectiveKind, scan_directives
from .errors import DirectiveParseError
from .metadata import Metadata

logger = logging.getLogger("wgsl_game")

_SIZE_ARGS = re.compile(r"^\s*(\d+)\s*,\s*(\d+)\s*$")
_CAMERA_ARG = re.compile(r"^\s*(\d+)\s*$")
_U32_MAX = 0xFFFFFFFF

# Directive kind -> Metadata list it appends to.
_SLOT_LISTS = {
    DirectiveKind.SOUND: "sounds",
    DirectiveKind.TEXTURE: "textures",
    DirectiveKind.TEXTURE_INDEX: "textures",
    DirectiveKind.VIDEO: "videos",
    DirectiveKind.MODEL: "models",
    DirectiveKind.OSC: "osc_params",
}


def parse_size(argument: str) -> Tuple[int, int]:
    match = _SIZE_ARGS.match(argument)
    if match is None:
        raise DirectiveParseError("@set_size", f"expected two unsigned integers, got {argument!r}")
    width, height = int(match.group(1)), int(match.group(2))
    if width > _U32_MAX or height > _U32_MAX:
        raise DirectiveParseError("@set_size", f"size out of range: {width}x{height}")
    return width, height


def parse_camera_index(argument: str) -> int:
    match = _CAMERA_ARG.match(argument)
    if match is None or int(match.group(1)) > _U32_MAX:
        raise DirectiveParseError("@camera", f"expected an unsigned integer index, got {argument!r}")
    return int(match.group(1))


def _append_unique(items: List[Any], value: Any) -> None:
    if value not in items:
        items.append(value)


def scan_metadata(
    source: str,
    config: Optional[PreprocessorConfig] = None,
    directives: Optional[Sequence[Directive]] = None,
    **extra: Any,
) -> Metadata:
    """
    Collect resource references from an import-expanded source.

    Slots follow first occurrence in the text; both texture directive kinds
    feed one list. Camera indexes are deduplicated then sorted. ``extra``
    passes through to :class:`Metadata` (``state_size`` etc).
    """
    cfg = config or PreprocessorConfig()
    if directives is None:
        directives = scan_directives(source)

    fields: Dict[str, Any] = {
        "title": cfg.default_title,
        "width": cfg.default_width,
        "height": cfg.default_height,
    }
    lists: Dict[str, List[Any]] = {name: [] for name in set(_SLOT_LISTS.values())}
    cameras: List[int] = []

    for directive in directives:
        kind = directive.kind
        if kind is DirectiveKind.SET_TITLE:
            fields["title"] = directive.argument
        elif kind is DirectiveKind.SET_SIZE:
            fields["width"], fields["height"] = parse_size(directive.argument)
        elif kind is DirectiveKind.CAMERA:
            _append_unique(cameras, parse_camera_index(directive.argument))
        elif kind in _SLOT_LISTS:
            _append_unique(lists[_SLOT_LISTS[kind]], directive.argument)

    if len(lists["osc_params"]) > cfg.osc_float_count:
        raise DirectiveParseError(
            "@osc",
            f"{len(lists['osc_params'])} parameters referenced, only {cfg.osc_float_count} slots exist",
        )

    metadata = Metadata(
        cameras=tuple(sorted(cameras)),
        osc_float_count=cfg.osc_float_count,
        **fields,
        **{name: tuple(values) for name, values in lists.items()},
        **extra,
    )
    logger.debug(
        "scanned %d directives: %d textures, %d sounds, %d videos, %d cameras, %d models, %d osc",
        len(directives),
        len(metadata.textures),
        len(metadata.sounds),
        len(metadata.videos),
        len(metadata.cameras),
        len(metadata.models),
        len(metadata.osc_params),
    )
    return metadata
