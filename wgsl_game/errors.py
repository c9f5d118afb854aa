from __future__ import annotations


class WgslGameError(Exception):
    """Base class for every failure raised while preprocessing a game."""


class SourceNotFoundError(WgslGameError, FileNotFoundError):
    """A requested file is absent from the game source."""

    def __init__(self, path: str, message: str = "") -> None:
        self.path = path
        super().__init__(message or f"File not found in game source: {path}")


class DirectoryTraversalError(SourceNotFoundError):
    def __init__(self, path: str) -> None:
        super().__init__(path, f"Directory traversal not allowed: {path}")


class SourceIOError(WgslGameError, OSError):
    """The underlying store failed while reading an existing file."""

    def __init__(self, path: str, message: str = "") -> None:
        self.path = path
        super().__init__(message or f"Failed to read {path}")


class SourceEncodingError(WgslGameError, ValueError):
    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"{path} is not valid UTF-8{detail}")


class DirectiveParseError(WgslGameError, ValueError):
    """A directive argument (size, camera index, literal, ...) could not be parsed."""

    def __init__(self, directive: str, message: str) -> None:
        self.directive = directive
        super().__init__(f"{directive}: {message}")


class ModelFormatError(WgslGameError, ValueError):
    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"{name}: {message}")
