"""
Input constants shared by every host.

Key indexes follow the key-code enumeration order used by both the native and
the web runtime (names are ``KeyboardEvent.code`` strings), so a shader's
``KEY_*`` constants address the same slot of the ``keys`` array everywhere.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

BUTTON_NAMES: Tuple[str, ...] = (
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "A",
    "B",
    "X",
    "Y",
    "L",
    "R",
    "START",
    "SELECT",
)
BUTTONS: Dict[str, int] = {f"BTN_{name}": index for index, name in enumerate(BUTTON_NAMES)}

KEY_CODES: Tuple[str, ...] = (
    "Backquote", "Backslash", "BracketLeft", "BracketRight", "Comma", "Digit0",
    "Digit1", "Digit2", "Digit3", "Digit4", "Digit5", "Digit6",
    "Digit7", "Digit8", "Digit9", "Equal", "IntlBackslash", "IntlRo",
    "IntlYen", "KeyA", "KeyB", "KeyC", "KeyD", "KeyE",
    "KeyF", "KeyG", "KeyH", "KeyI", "KeyJ", "KeyK",
    "KeyL", "KeyM", "KeyN", "KeyO", "KeyP", "KeyQ",
    "KeyR", "KeyS", "KeyT", "KeyU", "KeyV", "KeyW",
    "KeyX", "KeyY", "KeyZ", "Minus", "Period", "Quote",
    "Semicolon", "Slash", "AltLeft", "AltRight", "Backspace", "CapsLock",
    "ContextMenu", "ControlLeft", "ControlRight", "Enter", "SuperLeft", "SuperRight",
    "ShiftLeft", "ShiftRight", "Space", "Tab", "Convert", "KanaMode",
    "Lang1", "Lang2", "Lang3", "Lang4", "Lang5", "NonConvert",
    "Delete", "End", "Help", "Home", "Insert", "PageDown",
    "PageUp", "ArrowDown", "ArrowLeft", "ArrowRight", "ArrowUp", "NumLock",
    "Numpad0", "Numpad1", "Numpad2", "Numpad3", "Numpad4", "Numpad5",
    "Numpad6", "Numpad7", "Numpad8", "Numpad9", "NumpadAdd", "NumpadBackspace",
    "NumpadClear", "NumpadClearEntry", "NumpadComma", "NumpadDecimal", "NumpadDivide", "NumpadEnter",
    "NumpadEqual", "NumpadHash", "NumpadMemoryAdd", "NumpadMemoryClear", "NumpadMemoryRecall", "NumpadMemoryStore",
    "NumpadMemorySubtract", "NumpadMultiply", "NumpadParenLeft", "NumpadParenRight", "NumpadStar", "NumpadSubtract",
    "Escape", "Fn", "FnLock", "PrintScreen", "ScrollLock", "Pause",
    "BrowserBack", "BrowserFavorites", "BrowserForward", "BrowserHome", "BrowserRefresh", "BrowserSearch",
    "BrowserStop", "Eject", "LaunchApp1", "LaunchApp2", "LaunchMail", "MediaPlayPause",
    "MediaSelect", "MediaStop", "MediaTrackNext", "MediaTrackPrevious", "Power", "Sleep",
    "AudioVolumeDown", "AudioVolumeMute", "AudioVolumeUp", "WakeUp", "Meta", "Hyper",
    "Turbo", "Abort", "Resume", "Suspend", "Again", "Copy",
    "Cut", "Find", "Open", "Paste", "Props", "Select",
    "Undo", "Hiragana", "Katakana", "F1", "F2", "F3",
    "F4", "F5", "F6", "F7", "F8", "F9",
    "F10", "F11", "F12", "F13", "F14", "F15",
    "F16", "F17", "F18", "F19", "F20", "F21",
    "F22", "F23", "F24", "F25", "F26", "F27",
    "F28", "F29", "F30", "F31", "F32", "F33",
    "F34", "F35",
)
_KEY_INDEX: Dict[str, int] = {code: index for index, code in enumerate(KEY_CODES)}

# Named constants emitted into every generated header: constant -> key code.
KEY_CONSTANTS: Tuple[Tuple[str, str], ...] = (
    ("KEY_BACKQUOTE", "Backquote"),
    ("KEY_BACKSLASH", "Backslash"),
    ("KEY_BRACKET_LEFT", "BracketLeft"),
    ("KEY_BRACKET_RIGHT", "BracketRight"),
    ("KEY_COMMA", "Comma"),
    ("KEY_0", "Digit0"),
    ("KEY_1", "Digit1"),
    ("KEY_2", "Digit2"),
    ("KEY_3", "Digit3"),
    ("KEY_4", "Digit4"),
    ("KEY_5", "Digit5"),
    ("KEY_6", "Digit6"),
    ("KEY_7", "Digit7"),
    ("KEY_8", "Digit8"),
    ("KEY_9", "Digit9"),
    ("KEY_EQUAL", "Equal"),
    ("KEY_INTL_BACKSLASH", "IntlBackslash"),
    ("KEY_INTL_RO", "IntlRo"),
    ("KEY_INTL_YEN", "IntlYen"),
    ("KEY_A", "KeyA"),
    ("KEY_B", "KeyB"),
    ("KEY_C", "KeyC"),
    ("KEY_D", "KeyD"),
    ("KEY_E", "KeyE"),
    ("KEY_F", "KeyF"),
    ("KEY_G", "KeyG"),
    ("KEY_H", "KeyH"),
    ("KEY_I", "KeyI"),
    ("KEY_J", "KeyJ"),
    ("KEY_K", "KeyK"),
    ("KEY_L", "KeyL"),
    ("KEY_M", "KeyM"),
    ("KEY_N", "KeyN"),
    ("KEY_O", "KeyO"),
    ("KEY_P", "KeyP"),
    ("KEY_Q", "KeyQ"),
    ("KEY_R", "KeyR"),
    ("KEY_S", "KeyS"),
    ("KEY_T", "KeyT"),
    ("KEY_U", "KeyU"),
    ("KEY_V", "KeyV"),
    ("KEY_W", "KeyW"),
    ("KEY_X", "KeyX"),
    ("KEY_Y", "KeyY"),
    ("KEY_Z", "KeyZ"),
    ("KEY_MINUS", "Minus"),
    ("KEY_PERIOD", "Period"),
    ("KEY_QUOTE", "Quote"),
    ("KEY_SEMICOLON", "Semicolon"),
    ("KEY_SLASH", "Slash"),
    ("KEY_ALT_LEFT", "AltLeft"),
    ("KEY_ALT_RIGHT", "AltRight"),
    ("KEY_BACKSPACE", "Backspace"),
    ("KEY_CAPS_LOCK", "CapsLock"),
    ("KEY_CONTEXT_MENU", "ContextMenu"),
    ("KEY_CTRL_LEFT", "ControlLeft"),
    ("KEY_CTRL_RIGHT", "ControlRight"),
    ("KEY_ENTER", "Enter"),
    ("KEY_SUPER_LEFT", "SuperLeft"),
    ("KEY_SUPER_RIGHT", "SuperRight"),
    ("KEY_SHIFT_LEFT", "ShiftLeft"),
    ("KEY_SHIFT_RIGHT", "ShiftRight"),
    ("KEY_SPACE", "Space"),
    ("KEY_TAB", "Tab"),
    ("KEY_DELETE", "Delete"),
    ("KEY_END", "End"),
    ("KEY_HOME", "Home"),
    ("KEY_INSERT", "Insert"),
    ("KEY_PAGE_DOWN", "PageDown"),
    ("KEY_PAGE_UP", "PageUp"),
    ("KEY_DOWN", "ArrowDown"),
    ("KEY_LEFT", "ArrowLeft"),
    ("KEY_RIGHT", "ArrowRight"),
    ("KEY_UP", "ArrowUp"),
    ("KEY_ESCAPE", "Escape"),
    ("KEY_F1", "F1"),
    ("KEY_F2", "F2"),
    ("KEY_F3", "F3"),
    ("KEY_F4", "F4"),
    ("KEY_F5", "F5"),
    ("KEY_F6", "F6"),
    ("KEY_F7", "F7"),
    ("KEY_F8", "F8"),
    ("KEY_F9", "F9"),
    ("KEY_F10", "F10"),
    ("KEY_F11", "F11"),
    ("KEY_F12", "F12"),
)


def keycode_index(code: str) -> Optional[int]:
    """Slot of ``code`` in the ``keys`` array, None for codes no host reports."""
    return _KEY_INDEX.get(code)


def key_constant_values() -> Dict[str, int]:
    return {name: _KEY_INDEX[code] for name, code in KEY_CONSTANTS}
