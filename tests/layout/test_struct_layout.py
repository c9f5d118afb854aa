import pytest

from wgsl_game.layout import (
    VectorShape,
    classify_type,
    find_struct,
    layout_members,
    parse_type_tree,
    round_up,
    split_fields,
    struct_layout,
)


def test_two_scalars():
    layout = struct_layout("struct GameState { x: f32, y: f32 }", "GameState")
    assert layout.size == 8
    assert layout.alignment == 4
    assert [f.offset for f in layout.fields] == [0, 4]


def test_vec3_forces_sixteen_byte_alignment():
    layout = struct_layout("struct GameState { pos: vec3f, id: u32 }", "GameState")
    assert layout.size == 16
    assert layout.alignment == 16
    assert layout.offset_of("id") == 12


def test_size_is_a_multiple_of_alignment():
    layout = struct_layout("struct GameState { v: vec4f, n: u32 }", "GameState")
    assert layout.alignment == 16
    assert layout.size == 32
    assert layout.size % layout.alignment == 0


def test_members_are_aligned_individually():
    layout = struct_layout("struct GameState { a: f32, b: vec2f, c: f32, d: vec4<f32> }", "GameState")
    assert [f.offset for f in layout.fields] == [0, 8, 16, 32]
    assert layout.size == 48


def test_arrays_use_element_stride():
    layout = struct_layout("struct GameState { pts: array<vec3f, 4>, score: array<u32, 3> }", "GameState")
    assert layout.fields[0].size == 64
    assert layout.fields[1].size == 12
    assert layout.size == 80


def test_field_names_containing_type_names():
    layout = struct_layout("struct GameState { vec3f_count: u32, f32s: vec2<f32> }", "GameState")
    assert [(f.name, f.size, f.align) for f in layout.fields] == [("vec3f_count", 4, 4), ("f32s", 8, 8)]
    assert layout.size == 16


def test_semicolons_comments_and_attributes():
    source = """
    struct GameState {
        // player position
        @align(16) pos: vec2<f32>;  /* packed */
        lives: i32,
        flags: atomic<u32>,
    }
    """
    decl = find_struct(source, "GameState")
    assert decl.fields == (("pos", "vec2<f32>"), ("lives", "i32"), ("flags", "atomic<u32>"))
    assert struct_layout(source, "GameState").size == 16


def test_unsupported_types_are_skipped():
    layout = struct_layout("struct GameState { m: mat4x4f, t: f16, n: u32, r: array<f32> }", "GameState")
    assert [f.name for f in layout.fields] == ["n"]
    assert layout.size == 4


def test_empty_struct_has_minimum_alignment():
    layout = struct_layout("struct GameState {}", "GameState")
    assert layout.size == 0
    assert layout.alignment == 4


def test_missing_struct():
    assert struct_layout("struct Other { x: f32 }", "GameState") is None


def test_find_struct_span():
    source = "const a = 1;\nstruct GameState { x: f32 }\nfn main() {}"
    decl = find_struct(source, "GameState")
    assert source[decl.span[0] : decl.span[1]] == decl.text
    assert decl.text.startswith("struct GameState")


def test_struct_name_must_match_exactly():
    assert find_struct("struct GameStateExtra { x: f32 }", "GameState") is None


def test_classify_type():
    assert classify_type("vec3<u32>").shape is VectorShape.VEC3
    assert classify_type("array<vec2i, 2>").count == 2
    assert classify_type("array<f32, 0>") is None
    assert classify_type("vec5f") is None
    assert classify_type("atomic<f32>") is None


def test_parse_type_tree():
    assert parse_type_tree("array<vec3<f32>, 4>") == ("array", (("vec3", (("f32", ()),)), 4))
    assert parse_type_tree("array<u32, 8u,>") == ("array", (("u32", ()), 8))
    with pytest.raises(ValueError):
        parse_type_tree("array<u32, 4")


def test_split_fields_keeps_template_commas():
    assert split_fields(" a: array<f32, 4>, b: u32 ") == [("a", "array<f32, 4>"), ("b", "u32")]


def test_layout_members_and_round_up():
    layout = layout_members("S", [("a", 4, 4), ("b", 16, 16)])
    assert layout.offset_of("b") == 16
    assert layout.size == 32
    assert round_up(13, 8) == 16
    assert round_up(16, 8) == 16
    with pytest.raises(KeyError):
        layout.offset_of("c")


def test_vec3_array_stride():
    assert VectorShape.VEC3.array_stride == 16
    assert VectorShape.VEC2.array_stride == 8
