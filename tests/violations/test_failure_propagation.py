import pytest

from wgsl_game.config import PreprocessorConfig
from wgsl_game.errors import (
    DirectiveParseError,
    DirectoryTraversalError,
    SourceEncodingError,
    SourceIOError,
    SourceNotFoundError,
    WgslGameError,
)
from wgsl_game.preprocessor import preprocess
from wgsl_game.source import DirectorySource, GameSource
from wgsl_game.testing.memory_source import MemorySource


class BrokenSource(GameSource):
    def read_bytes(self, path: str) -> bytes:
        if path == "main.wgsl":
            return b'@import("flaky.wgsl")'
        raise SourceIOError(path, "device went away")


def test_io_failure_in_import_propagates():
    with pytest.raises(SourceIOError):
        preprocess(BrokenSource())


def test_traversal_in_import_is_rejected(tmp_path):
    game = tmp_path / "game"
    game.mkdir()
    (game / "main.wgsl").write_text('@import("../outside.wgsl")')
    (tmp_path / "outside.wgsl").write_text("fn leaked() {}")
    with pytest.raises(DirectoryTraversalError):
        preprocess(DirectorySource(game))


def test_invalid_utf8_import():
    source = MemorySource({"main.wgsl": '@import("bin.wgsl")', "bin.wgsl": b"\xc3\x28"})
    with pytest.raises(SourceEncodingError):
        preprocess(source)


def test_missing_entry():
    with pytest.raises(SourceNotFoundError):
        preprocess(MemorySource({}))


@pytest.mark.parametrize(
    "text",
    [
        "@set_size(640)",
        "@set_size(-1, 2)",
        "@camera(abc)",
        '@str("' + "x" * 200 + '")',
    ],
)
def test_bad_directive_arguments(text):
    with pytest.raises(DirectiveParseError):
        preprocess(MemorySource({"main.wgsl": text}))


def test_osc_overflow():
    text = " ".join(f'@osc("p{i}")' for i in range(5))
    with pytest.raises(DirectiveParseError):
        preprocess(MemorySource({"main.wgsl": text}), config=PreprocessorConfig(osc_float_count=4))


def test_errors_share_a_base_class():
    for error in (
        SourceNotFoundError("x"),
        DirectoryTraversalError("../x"),
        SourceIOError("x"),
        SourceEncodingError("x"),
        DirectiveParseError("@camera", "bad"),
    ):
        assert isinstance(error, WgslGameError)
    assert isinstance(DirectoryTraversalError("../x"), FileNotFoundError)
    assert str(DirectiveParseError("@camera", "bad")) == "@camera: bad"


def test_invalid_config_values():
    with pytest.raises(ValueError):
        PreprocessorConfig(default_width=0)
    with pytest.raises(ValueError):
        PreprocessorConfig(osc_float_count=0)
