from wgsl_game.directives import DirectiveKind, line_end, scan_directives


def _kinds(source):
    return [d.kind for d in scan_directives(source)]


def test_every_directive_kind_is_recognised():
    source = "\n".join(
        [
            '@import("lib.wgsl")',
            '@set_title("Pong")',
            "@set_size(640, 480)",
            '@sound("hit.wav")',
            '@texture("ball.png")',
            '@texture_index("ball.png")',
            '@video("intro.mp4")',
            "@camera(0)",
            '@model("ship.obj").positions',
            '@osc("bass")',
            '@str("hi")',
            "@engine.time",
        ]
    )
    assert _kinds(source) == [
        DirectiveKind.IMPORT,
        DirectiveKind.SET_TITLE,
        DirectiveKind.SET_SIZE,
        DirectiveKind.SOUND,
        DirectiveKind.TEXTURE,
        DirectiveKind.TEXTURE_INDEX,
        DirectiveKind.VIDEO,
        DirectiveKind.CAMERA,
        DirectiveKind.MODEL,
        DirectiveKind.OSC,
        DirectiveKind.STR,
        DirectiveKind.ENGINE,
    ]


def test_wgsl_attributes_are_not_directives():
    source = "@group(0) @binding(1) var t: texture_2d<f32>;\n@vertex fn vs() {}\n@compute @workgroup_size(8, 8)"
    assert scan_directives(source) == []


def test_spans_cover_the_directive_text():
    source = 'let x = @texture("a.png");'
    (directive,) = scan_directives(source)
    assert source[directive.start : directive.end] == '@texture("a.png")'
    assert directive.argument == "a.png"
    assert directive.member is None


def test_texture_index_is_not_read_as_texture():
    (directive,) = scan_directives('@texture_index("a.png")')
    assert directive.kind is DirectiveKind.TEXTURE_INDEX
    assert directive.argument == "a.png"


def test_sound_members_extend_the_span():
    source = '@sound("a.wav").play(); @sound("a.wav").stop(); @sound("a.wav")'
    play, stop, bare = scan_directives(source)
    assert (play.member, stop.member, bare.member) == ("play", "stop", None)
    assert source[play.start : play.end] == '@sound("a.wav").play()'
    assert all(d.kind is DirectiveKind.SOUND for d in (play, stop, bare))


def test_model_member_needs_word_boundary():
    positions, other = scan_directives('@model("m.obj").positions; @model("m.obj").positionsX')
    assert positions.member == "positions"
    assert other.member is None
    assert other.kind is DirectiveKind.MODEL


def test_engine_field_captures_identifier():
    (directive,) = scan_directives("let t = @engine.delta_time * 2.0;")
    assert directive.kind is DirectiveKind.ENGINE
    assert directive.argument == "delta_time"


def test_str_allows_escaped_quotes():
    source = r'@str("say \"hi\"")'
    (directive,) = scan_directives(source)
    assert directive.argument == r"say \"hi\""
    assert directive.end == len(source)


def test_kind_filter():
    source = '@import("a.wgsl") @texture("t.png") @import("b.wgsl")'
    imports = scan_directives(source, kinds=(DirectiveKind.IMPORT,))
    assert [d.argument for d in imports] == ["a.wgsl", "b.wgsl"]


def test_empty_quoted_argument_is_not_a_directive():
    assert scan_directives('@texture("")') == []


def test_line_end():
    source = "abc\ndef"
    assert line_end(source, 1) == 3
    assert line_end(source, 5) == len(source)
