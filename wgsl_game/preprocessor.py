from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Set, Union

from .config import DEFAULT_ENTRY, STATE_STRUCT_NAME, PreprocessorConfig
from .directives import scan_directives
from .header import build_header
from .host_layout import HostLayout
from .imports import resolve_imports
from .layout import StructLayout, analyze_struct, find_struct
from .metadata import Metadata
from .rewriter import Edit, rewrite
from .scanner import scan_metadata
from .source import GameSource, open_game_source

logger = logging.getLogger("wgsl_game")


@dataclass(frozen=True)
class PreprocessResult:
    """Rewritten shader plus what the runtime must allocate for it.

    Unpacks as ``code, metadata``.
    """

    code: str
    metadata: Metadata
    state_layout: Optional[StructLayout] = None
    config: Optional[PreprocessorConfig] = None

    def __iter__(self) -> Iterator:
        return iter((self.code, self.metadata))

    def host_layout(self) -> HostLayout:
        return HostLayout.for_metadata(self.metadata, self.config)


class PreprocessorState:
    """
    One top-level preprocessing request.

    Holds the game source and the set of files already inlined; a fresh
    instance is used for every pass so concurrent or repeated passes never
    share import bookkeeping.
    """

    def __init__(
        self,
        game_source: GameSource,
        config: Optional[PreprocessorConfig] = None,
        imported_files: Optional[Set[str]] = None,
    ):
        self.game_source = game_source
        self.config = config or PreprocessorConfig()
        self.imported_files: Set[str] = set() if imported_files is None else imported_files

    def expand_imports(self, source: str) -> str:
        return resolve_imports(source, self.game_source, self.imported_files, self._expand_nested)

    def _expand_nested(self, source: str) -> str:
        return self.preprocess_shader(source, is_top_level=False).code

    def preprocess_shader(self, source: str, is_top_level: bool = True) -> PreprocessResult:
        """
        Run the pipeline over ``source``.

        Nested calls (``is_top_level=False``) only inline imports: directives
        are left for the outermost pass, which assigns every slot over the
        fully expanded text and is the only one to emit a header.
        """
        source = self.expand_imports(source)
        directives = scan_directives(source)
        if not is_top_level:
            return PreprocessResult(source, scan_metadata(source, self.config, directives), None, self.config)

        decl = find_struct(source, STATE_STRUCT_NAME)
        state_layout = analyze_struct(decl) if decl is not None else None
        state = {}
        if state_layout is not None:
            state = {"state_size": state_layout.size, "state_alignment": state_layout.alignment}
        metadata = scan_metadata(source, self.config, directives, **state)

        extra = []
        if decl is not None:
            # the declaration moves into the header, ahead of the engine struct
            extra.append(Edit(decl.span[0], decl.span[1], ""))
        body = rewrite(source, metadata, self.config, directives, extra)
        header = build_header(metadata, decl.text if decl is not None else None, self.config)
        logger.info(
            "preprocessed %r: %dx%d, %d textures, %d sounds, state %d bytes",
            metadata.title,
            metadata.width,
            metadata.height,
            len(metadata.textures),
            len(metadata.sounds),
            metadata.state_size,
        )
        return PreprocessResult(header + body, metadata, state_layout, self.config)


def preprocess(
    game_source: GameSource,
    entry: str = DEFAULT_ENTRY,
    config: Optional[PreprocessorConfig] = None,
) -> PreprocessResult:
    """Preprocess ``entry`` read from ``game_source``; the entry counts as imported."""
    state = PreprocessorState(game_source, config)
    state.imported_files.add(entry)
    return state.preprocess_shader(game_source.read_text(entry), is_top_level=True)


def preprocess_file(path: Union[str, Path], config: Optional[PreprocessorConfig] = None) -> PreprocessResult:
    game_source, entry = open_game_source(path)
    with game_source:
        return preprocess(game_source, entry, config)
