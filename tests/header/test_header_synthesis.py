from wgsl_game.config import PreprocessorConfig
from wgsl_game.directives import scan_directives
from wgsl_game.header import (
    BANNER,
    build_bindings,
    build_constants,
    build_header,
    build_host_struct,
    model_binding,
)
from wgsl_game.metadata import Metadata


def _member_names(struct_text):
    names = []
    for line in struct_text.splitlines():
        line = line.strip()
        if ":" in line and not line.startswith("//"):
            names.append(line.split(":")[0])
    return names


def test_host_struct_without_state():
    text = build_host_struct(Metadata())
    assert _member_names(text) == [
        "buttons",
        "time",
        "delta_time",
        "screen_width",
        "screen_height",
        "mouse",
        "osc",
        "keys",
    ]
    assert "array<i32, 12>" in text
    assert "array<f32, 64>" in text
    assert "array<u32, 194>" in text


def test_host_struct_with_state_and_sounds():
    meta = Metadata(sounds=("a.wav", "b.wav"), state_size=16, state_alignment=16)
    names = _member_names(build_host_struct(meta))
    assert names.index("mouse") < names.index("state") < names.index("audio") < names.index("osc")
    assert "audio: array<u32, 2>," in build_host_struct(meta)
    assert "state: GameState," in build_host_struct(meta)


def test_host_struct_without_mouse():
    cfg = PreprocessorConfig(include_mouse=False)
    assert "mouse" not in _member_names(build_host_struct(Metadata(), cfg))


def test_button_and_key_constants():
    text = build_constants()
    assert "const BTN_UP: u32 = 0u;" in text
    assert "const BTN_SELECT: u32 = 11u;" in text
    assert "const KEY_0: u32 = 5u;" in text
    assert "@engine" not in text
    assert "KEY_" not in build_constants(PreprocessorConfig(include_key_constants=False))


def test_group0_binding_order():
    meta = Metadata(textures=("a.png", "b.png"), videos=("v.mp4",), cameras=(0, 2))
    text = build_bindings(meta)
    assert "@group(0) @binding(0) var _engine_sampler: sampler;" in text
    assert "@group(0) @binding(1) var _texture_0: texture_2d<f32>; // a.png" in text
    assert "@group(0) @binding(2) var _texture_1: texture_2d<f32>; // b.png" in text
    assert "@group(0) @binding(3) var _video_0: texture_2d<f32>; // v.mp4" in text
    assert "@group(0) @binding(4) var _camera_0: texture_2d<f32>; // camera 0" in text
    assert "@group(0) @binding(5) var _camera_1: texture_2d<f32>; // camera 2" in text
    assert "@group(1) @binding(0) var<storage, read_write> _engine: GameEngineHost;" in text


def test_model_buffers():
    meta = Metadata(models=("a.obj", "b.obj"))
    text = build_bindings(meta)
    assert [model_binding(1, "positions"), model_binding(1, "normals")] == [3, 4]
    assert "struct Model1Normals { data: array<vec3f> }" in text
    assert "@group(2) @binding(1) var<storage, read> _model_0_positions: Model0Positions; // a.obj" in text
    assert "@group(2) @binding(4) var<storage, read> _model_1_normals: Model1Normals;" in text
    assert "@group(2)" not in build_bindings(Metadata())


def test_header_places_state_before_host_struct():
    meta = Metadata(state_size=8, state_alignment=4)
    header = build_header(meta, "struct GameState { x: f32, y: f32 }")
    assert header.startswith(BANNER)
    assert header.index("struct GameState") < header.index("struct GameEngineHost")


def test_header_contains_no_directives():
    meta = Metadata(textures=("a.png",), sounds=("s.wav",), models=("m.obj",), cameras=(1,))
    assert scan_directives(build_header(meta)) == []
