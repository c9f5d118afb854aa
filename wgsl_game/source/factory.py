from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

from ..config import DEFAULT_ENTRY
from .archive import ArchiveSource
from .base import GameSource
from .directory import DirectorySource


def open_game_source(path: Union[str, Path]) -> Tuple[GameSource, str]:
    """
    Open whatever ``path`` points at and return ``(source, entry_name)``.

    A single ``.wgsl`` file is served from its parent directory with the file
    itself as entry; a ``.zip`` becomes an archive source; anything else is a
    game directory. The latter two use ``main.wgsl`` as entry.
    """
    path = Path(path)
    if path.suffix == ".wgsl":
        return DirectorySource(path.parent), path.name
    if path.suffix == ".zip":
        return ArchiveSource(path), DEFAULT_ENTRY
    return DirectorySource(path), DEFAULT_ENTRY
