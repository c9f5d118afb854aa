from __future__ import annotations

from abc import ABC, abstractmethod

from ..errors import SourceEncodingError


class GameSource(ABC):
    """Read access to shader and asset files of one game.

    Paths are relative, ``/``-separated names as they appear inside
    ``@import``/``@texture``/... directives.
    """

    kind: str = "base"

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        raise NotImplementedError

    def read_text(self, path: str) -> str:
        data = self.read_bytes(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SourceEncodingError(path, exc.reason) from exc

    def close(self) -> None:
        return

    def __enter__(self) -> "GameSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
