from __future__ import annotations

import logging
from typing import Callable, List, MutableSet

from .directives import DirectiveKind, scan_directives
from .rewriter import Edit, apply_edits
from .source.base import GameSource

logger = logging.getLogger("wgsl_game")

ExpandFn = Callable[[str], str]


def already_imported_marker(name: str) -> str:
    return f"// Already imported: {name}"


def imported_block(name: str, body: str) -> str:
    return f"// Imported from {name}\n{body}\n// End import {name}\n"


def resolve_imports(
    source: str,
    game_source: GameSource,
    imported: MutableSet[str],
    expand: ExpandFn,
) -> str:
    """
    Inline every ``@import("file")`` of ``source``, depth first.

    A name is added to ``imported`` before its file is read, so the first
    occurrence of each file is inlined and every later one (including an
    import cycle back to it) becomes an "already imported" comment.
    ``expand`` preprocesses the imported text itself as a nested call.
    Read failures propagate unchanged.
    """
    while True:
        directives = scan_directives(source, kinds=(DirectiveKind.IMPORT,))
        if not directives:
            return source
        edits: List[Edit] = []
        for directive in directives:
            name = directive.argument
            if name in imported:
                logger.debug("skipping duplicate import of %s", name)
                edits.append(Edit(directive.start, directive.end, already_imported_marker(name)))
                continue
            imported.add(name)
            logger.debug("importing %s", name)
            body = expand(game_source.read_text(name))
            edits.append(Edit(directive.start, directive.end, imported_block(name, body)))
        source = apply_edits(source, edits)
