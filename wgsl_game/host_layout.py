"""
Byte layout of the shared engine buffer (``struct GameEngineHost``).

The generated header and the host-side packer both derive from
:func:`engine_host_members`, so the struct text the shader sees and the offsets
the host writes cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .config import BUTTON_COUNT, HOST_STRUCT_NAME, KEY_ARRAY_SIZE, STATE_STRUCT_NAME, PreprocessorConfig
from .layout import StructLayout, layout_members, round_up
from .metadata import Metadata

HOST_BUFFER_ALIGNMENT = 16


@dataclass(frozen=True)
class HostMember:
    name: str
    wgsl_type: str
    size: int
    align: int
    comment: str


def engine_host_members(metadata: Metadata, config: Optional[PreprocessorConfig] = None) -> List[HostMember]:
    cfg = config or PreprocessorConfig()
    members = [
        HostMember("buttons", f"array<i32, {BUTTON_COUNT}>", 4 * BUTTON_COUNT, 4,
                   "the current state of virtual SNES gamepad (BTN_*)"),
        HostMember("time", "f32", 4, 4, "clock time"),
        HostMember("delta_time", "f32", 4, 4, "time since last frame"),
        HostMember("screen_width", "f32", 4, 4, "current screensize"),
        HostMember("screen_height", "f32", 4, 4, "current screensize"),
    ]
    if cfg.include_mouse:
        members.append(HostMember("mouse", "vec4f", 16, 16,
                                  "mouse state (iMouse): xy=pos, z=click_x (neg if not pressed), w=click_y"))
    if metadata.has_state:
        members.append(HostMember("state", STATE_STRUCT_NAME, metadata.state_size, metadata.state_alignment,
                                  "user's game state that persists across frames"))
    if metadata.sounds:
        members.append(HostMember("audio", f"array<u32, {len(metadata.sounds)}>", 4 * len(metadata.sounds), 4,
                                  "audio trigger counters"))
    members.append(HostMember("osc", f"array<f32, {metadata.osc_float_count}>", 4 * metadata.osc_float_count, 4,
                              "OSC float uniforms: /u/name or /u/N"))
    members.append(HostMember("keys", f"array<u32, {KEY_ARRAY_SIZE}>", 4 * KEY_ARRAY_SIZE, 4,
                              "raw key state: 1=down, 0=up, indexed by KEY_* constants"))
    return members


@dataclass
class HostInput:
    """Host-side values for one frame, in the shapes :meth:`HostLayout.pack` expects."""

    buttons: np.ndarray
    mouse: np.ndarray
    audio: np.ndarray
    osc: np.ndarray
    keys: np.ndarray
    state: bytearray
    time: float = 0.0
    delta_time: float = 0.0
    screen_width: float = 0.0
    screen_height: float = 0.0

    def set_osc(self, metadata: Metadata, path: str, value: float) -> bool:
        """Apply an OSC message such as ``/u/bass`` or ``/u/3``; False if it addresses nothing."""
        slot = metadata.osc_slot(path)
        if slot is None or slot >= len(self.osc):
            return False
        self.osc[slot] = value
        return True


@dataclass(frozen=True)
class HostLayout:
    struct: StructLayout
    audio_count: int
    osc_count: int
    state_size: int
    offsets: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def for_metadata(cls, metadata: Metadata, config: Optional[PreprocessorConfig] = None) -> "HostLayout":
        members = engine_host_members(metadata, config)
        struct = layout_members(HOST_STRUCT_NAME, [(m.name, m.size, m.align) for m in members])
        return cls(
            struct=struct,
            audio_count=len(metadata.sounds),
            osc_count=metadata.osc_float_count,
            state_size=metadata.state_size,
            offsets={f.name: f.offset for f in struct.fields},
        )

    @property
    def size(self) -> int:
        return round_up(self.struct.size, HOST_BUFFER_ALIGNMENT)

    @property
    def core_size(self) -> int:
        """Size of the button/clock/state/audio/osc sections alone, as older hosts allocate it."""
        return round_up(
            4 * BUTTON_COUNT + 16 + round_up(self.state_size, 8) + 4 * self.audio_count + 4 * self.osc_count,
            HOST_BUFFER_ALIGNMENT,
        )

    def offset(self, name: str) -> Optional[int]:
        return self.offsets.get(name)

    def new_input(self, screen_width: float = 0.0, screen_height: float = 0.0) -> HostInput:
        return HostInput(
            buttons=np.zeros(BUTTON_COUNT, dtype=np.int32),
            mouse=np.zeros(4, dtype=np.float32),
            audio=np.zeros(self.audio_count, dtype=np.uint32),
            osc=np.zeros(self.osc_count, dtype=np.float32),
            keys=np.zeros(KEY_ARRAY_SIZE, dtype=np.uint32),
            state=bytearray(self.state_size),
            screen_width=screen_width,
            screen_height=screen_height,
        )

    def pack(self, values: HostInput) -> bytes:
        """Serialize ``values`` into a little-endian buffer of :attr:`size` bytes."""
        buf = np.zeros(self.size, dtype=np.uint8)
        self._put(buf, "buttons", values.buttons, "<i4", BUTTON_COUNT)
        self._put(buf, "time", [values.time], "<f4", 1)
        self._put(buf, "delta_time", [values.delta_time], "<f4", 1)
        self._put(buf, "screen_width", [values.screen_width], "<f4", 1)
        self._put(buf, "screen_height", [values.screen_height], "<f4", 1)
        self._put(buf, "mouse", values.mouse, "<f4", 4)
        if "state" in self.offsets:
            state = bytes(values.state)
            if len(state) > self.state_size:
                raise ValueError(f"state is {len(state)} bytes, layout reserves {self.state_size}")
            self._put(buf, "state", np.frombuffer(state, dtype=np.uint8), "u1", self.state_size)
        self._put(buf, "audio", values.audio, "<u4", self.audio_count)
        self._put(buf, "osc", values.osc, "<f4", self.osc_count)
        self._put(buf, "keys", values.keys, "<u4", KEY_ARRAY_SIZE)
        return buf.tobytes()

    def _put(self, buf: np.ndarray, name: str, values: Any, dtype: str, count: int) -> None:
        offset = self.offsets.get(name)
        if offset is None:
            return
        data = np.asarray(values, dtype=dtype).ravel()
        if data.size > count:
            raise ValueError(f"{name}: {data.size} values do not fit {count} slots")
        section = np.zeros(count, dtype=dtype)
        section[: data.size] = data
        raw = section.view(np.uint8)
        buf[offset : offset + raw.size] = raw

    def read_audio_triggers(self, data: Any) -> np.ndarray:
        """Audio counters from a buffer read back from the device."""
        offset = self.offsets.get("audio")
        if offset is None:
            return np.zeros(0, dtype=np.uint32)
        return np.frombuffer(bytes(data), dtype="<u4", count=self.audio_count, offset=offset).astype(np.uint32)
