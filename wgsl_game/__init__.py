from .config import PreprocessorConfig
from .directives import Directive, DirectiveKind, scan_directives
from .errors import (
    DirectiveParseError,
    DirectoryTraversalError,
    ModelFormatError,
    SourceEncodingError,
    SourceIOError,
    SourceNotFoundError,
    WgslGameError,
)
from .header import build_header
from .host_layout import HostInput, HostLayout
from .input import keycode_index
from .layout import StructLayout, VectorShape, struct_layout
from .metadata import Metadata
from .models import ObjModel, load_obj
from .preprocessor import PreprocessorState, PreprocessResult, preprocess, preprocess_file
from .rewriter import rewrite
from .scanner import scan_metadata
from .source import ArchiveSource, DirectorySource, GameSource, open_game_source

__all__ = [
    "ArchiveSource",
    "build_header",
    "Directive",
    "DirectiveKind",
    "DirectiveParseError",
    "DirectorySource",
    "DirectoryTraversalError",
    "GameSource",
    "HostInput",
    "HostLayout",
    "keycode_index",
    "load_obj",
    "Metadata",
    "ModelFormatError",
    "ObjModel",
    "open_game_source",
    "preprocess",
    "preprocess_file",
    "PreprocessorConfig",
    "PreprocessorState",
    "PreprocessResult",
    "rewrite",
    "scan_directives",
    "scan_metadata",
    "SourceEncodingError",
    "SourceIOError",
    "SourceNotFoundError",
    "struct_layout",
    "StructLayout",
    "VectorShape",
    "WgslGameError",
]
