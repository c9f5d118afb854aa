import pytest

from wgsl_game.errors import SourceNotFoundError
from wgsl_game.imports import already_imported_marker, imported_block, resolve_imports
from wgsl_game.preprocessor import PreprocessorState, preprocess
from wgsl_game.testing.memory_source import MemorySource


def _identity(text):
    return text


def test_import_is_inlined_between_markers():
    source = MemorySource({"lib.wgsl": "fn helper() {}"})
    out = resolve_imports('@import("lib.wgsl")\nfn main() {}', source, set(), _identity)
    assert out == "// Imported from lib.wgsl\nfn helper() {}\n// End import lib.wgsl\n\nfn main() {}"


def test_repeated_import_becomes_marker():
    source = MemorySource({"lib.wgsl": "fn helper() {}"})
    imported = set()
    out = resolve_imports('@import("lib.wgsl")\n@import("lib.wgsl")', source, imported, _identity)
    assert out.count("fn helper() {}") == 1
    assert out.endswith(already_imported_marker("lib.wgsl"))
    assert imported == {"lib.wgsl"}
    assert source.reads == ["lib.wgsl"]


def test_previously_imported_names_are_not_read():
    source = MemorySource({})
    out = resolve_imports('@import("lib.wgsl")', source, {"lib.wgsl"}, _identity)
    assert out == "// Already imported: lib.wgsl"
    assert source.reads == []


def test_nested_imports_expand_depth_first():
    source = MemorySource(
        {
            "main.wgsl": '@import("a.wgsl")\nfn main() {}',
            "a.wgsl": '@import("b.wgsl")\nfn a() {}',
            "b.wgsl": "fn b() {}",
        }
    )
    code = preprocess(source).code
    assert code.index("// Imported from a.wgsl") < code.index("// Imported from b.wgsl")
    assert code.index("fn b() {}") < code.index("fn a() {}") < code.index("fn main() {}")
    assert "@import" not in code


def test_import_cycle_terminates():
    source = MemorySource({"a.wgsl": '@import("b.wgsl")\nfn a() {}', "b.wgsl": '@import("a.wgsl")\nfn b() {}'})
    code = preprocess(source, "a.wgsl").code
    assert "// Already imported: a.wgsl" in code
    assert code.count("fn a() {}") == 1
    assert code.count("fn b() {}") == 1
    assert source.reads == ["a.wgsl", "b.wgsl"]


def test_diamond_imports_inline_once():
    source = MemorySource(
        {
            "main.wgsl": '@import("a.wgsl")\n@import("b.wgsl")',
            "a.wgsl": '@import("common.wgsl")',
            "b.wgsl": '@import("common.wgsl")',
            "common.wgsl": "const SHARED = 1;",
        }
    )
    code = preprocess(source).code
    assert code.count("const SHARED = 1;") == 1
    assert "// Already imported: common.wgsl" in code


def test_missing_import_propagates():
    source = MemorySource({"main.wgsl": '@import("missing.wgsl")'})
    with pytest.raises(SourceNotFoundError) as info:
        preprocess(source)
    assert info.value.path == "missing.wgsl"


def test_each_request_has_its_own_import_set():
    source = MemorySource({"main.wgsl": '@import("lib.wgsl")', "lib.wgsl": "fn helper() {}"})
    first = preprocess(source).code
    second = preprocess(source).code
    assert first == second
    assert "fn helper() {}" in second


def test_state_tracks_imported_files():
    source = MemorySource({"lib.wgsl": "fn helper() {}"})
    state = PreprocessorState(source)
    state.expand_imports('@import("lib.wgsl")')
    assert state.imported_files == {"lib.wgsl"}


def test_imported_block_format():
    assert imported_block("x.wgsl", "body") == "// Imported from x.wgsl\nbody\n// End import x.wgsl\n"
