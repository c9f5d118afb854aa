from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from ..errors import DirectoryTraversalError, SourceIOError, SourceNotFoundError
from .base import GameSource

_SEPARATORS = re.compile(r"[\\/]")


def _is_escaping(path: str) -> bool:
    if path.startswith(("/", "\\")) or re.match(r"^[A-Za-z]:", path):
        return True
    return any(part == ".." for part in _SEPARATORS.split(path))


class DirectorySource(GameSource):
    """Files below a fixed base directory; nothing outside it is reachable."""

    kind = "directory"

    def __init__(self, base: Union[str, Path]):
        self.base = Path(base)

    def read_bytes(self, path: str) -> bytes:
        if _is_escaping(path):
            raise DirectoryTraversalError(path)
        target = self.base / path
        try:
            return target.read_bytes()
        except FileNotFoundError as exc:
            raise SourceNotFoundError(path) from exc
        except OSError as exc:
            raise SourceIOError(path, f"Failed to read {path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.base)!r})"
