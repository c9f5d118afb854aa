from __future__ import annotations

import zipfile
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..errors import SourceIOError, SourceNotFoundError
from .base import GameSource


class ArchiveSource(GameSource):
    """Files stored in a zip archive.

    Entry names are matched exactly; a leading ``./`` on the requested name
    is ignored. The archive stays open until :meth:`close`.
    """

    kind = "archive"

    def __init__(self, archive: Union[str, Path, BinaryIO]):
        self.name: Optional[str] = str(archive) if isinstance(archive, (str, Path)) else None
        try:
            self._zip = zipfile.ZipFile(archive)
        except FileNotFoundError as exc:
            raise SourceNotFoundError(str(archive)) from exc
        except (OSError, zipfile.BadZipFile) as exc:
            raise SourceIOError(str(archive), f"Cannot open archive {archive}: {exc}") from exc

    def read_bytes(self, path: str) -> bytes:
        stripped = path[2:] if path.startswith("./") else path
        try:
            return self._zip.read(stripped)
        except KeyError as exc:
            raise SourceNotFoundError(path, f"File not found in zip: {path}") from exc
        except (OSError, zipfile.BadZipFile) as exc:
            raise SourceIOError(path, f"Failed to read {path} from archive: {exc}") from exc

    def names(self):
        return tuple(self._zip.namelist())

    def close(self) -> None:
        self._zip.close()

    def __repr__(self) -> str:
        return f"ArchiveSource({self.name!r})"
