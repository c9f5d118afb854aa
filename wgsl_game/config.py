from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TITLE = "WGSL Game"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_ENTRY = "main.wgsl"

# Shared with every host runtime; changing any of these breaks the buffer contract.
BUTTON_COUNT = 12
OSC_FLOAT_COUNT = 64
KEY_ARRAY_SIZE = 194
STR_LENGTH = 128

STATE_STRUCT_NAME = "GameState"
HOST_STRUCT_NAME = "GameEngineHost"


@dataclass(frozen=True)
class PreprocessorConfig:
    """Knobs for one preprocessing pass.

    The defaults reproduce the layout every runtime expects. ``include_mouse``
    and ``include_key_constants`` exist for hosts built against the earlier
    revision of the engine struct, which had neither.
    """

    default_title: str = DEFAULT_TITLE
    default_width: int = DEFAULT_WIDTH
    default_height: int = DEFAULT_HEIGHT
    osc_float_count: int = OSC_FLOAT_COUNT
    str_length: int = STR_LENGTH
    include_mouse: bool = True
    include_key_constants: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.default_width <= 0 or self.default_height <= 0:
            raise ValueError("default surface size must be positive")
        if self.osc_float_count <= 0:
            raise ValueError("osc_float_count must be positive")
        if self.str_length <= 0:
            raise ValueError("str_length must be positive")
