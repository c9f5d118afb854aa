from .archive import ArchiveSource
from .base import GameSource
from .directory import DirectorySource
from .factory import open_game_source

__all__ = [
    "ArchiveSource",
    "DirectorySource",
    "GameSource",
    "open_game_source",
]
