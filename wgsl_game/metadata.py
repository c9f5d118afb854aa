from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from .config import DEFAULT_HEIGHT, DEFAULT_TITLE, DEFAULT_WIDTH, OSC_FLOAT_COUNT

OSC_PATH_PREFIX = "/u/"


def _slot(items: Sequence[Any], key: Any) -> Optional[int]:
    try:
        return items.index(key)
    except ValueError:
        return None


@dataclass(frozen=True)
class Metadata:
    """Everything a runtime needs to allocate for one preprocessed game.

    Every resource tuple is deduplicated and its index is the slot used by the
    rewritten shader. ``cameras`` is sorted by device index; the other tuples
    keep first-occurrence order.
    """

    title: str = DEFAULT_TITLE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    textures: Tuple[str, ...] = ()
    sounds: Tuple[str, ...] = ()
    videos: Tuple[str, ...] = ()
    models: Tuple[str, ...] = ()
    cameras: Tuple[int, ...] = ()
    osc_params: Tuple[str, ...] = ()
    state_size: int = 0
    state_alignment: int = 0
    osc_float_count: int = field(default=OSC_FLOAT_COUNT, repr=False)

    def __post_init__(self) -> None:
        for name in ("textures", "sounds", "videos", "models", "cameras", "osc_params"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        self.validate()

    def validate(self) -> None:
        for name in ("textures", "sounds", "videos", "models", "cameras", "osc_params"):
            values = getattr(self, name)
            if len(set(values)) != len(values):
                raise ValueError(f"{name} must not contain duplicates")
        if list(self.cameras) != sorted(self.cameras):
            raise ValueError("cameras must be sorted ascending")
        if len(self.osc_params) > self.osc_float_count:
            raise ValueError(f"at most {self.osc_float_count} osc parameters are addressable")
        if self.state_size < 0:
            raise ValueError("state_size must be non-negative")

    # ---- slot lookups ------------------------------------------------------
    def texture_slot(self, name: str) -> Optional[int]:
        return _slot(self.textures, name)

    def sound_slot(self, name: str) -> Optional[int]:
        return _slot(self.sounds, name)

    def video_slot(self, name: str) -> Optional[int]:
        return _slot(self.videos, name)

    def model_slot(self, name: str) -> Optional[int]:
        return _slot(self.models, name)

    def camera_slot(self, index: int) -> Optional[int]:
        return _slot(self.cameras, index)

    def osc_slot(self, name_or_path: str) -> Optional[int]:
        """Resolve ``name``, ``/u/name`` or ``/u/N`` to an osc float slot.

        Named parameters win over numeric ones, so ``/u/3`` addresses the
        parameter literally called ``"3"`` when the shader declares one.
        """
        name = name_or_path
        if name.startswith(OSC_PATH_PREFIX):
            name = name[len(OSC_PATH_PREFIX):]
        slot = _slot(self.osc_params, name)
        if slot is not None:
            return slot
        if name.isdigit() and int(name) < self.osc_float_count:
            return int(name)
        return None

    # ---- group 0 binding numbers ---------------------------------------------
    # binding 0 is the sampler; textures, videos and cameras follow in that order.
    def texture_binding(self, slot: int) -> int:
        return 1 + slot

    def video_binding(self, slot: int) -> int:
        return 1 + len(self.textures) + slot

    def camera_binding(self, slot: int) -> int:
        return 1 + len(self.textures) + len(self.videos) + slot

    @property
    def group0_binding_count(self) -> int:
        return 1 + len(self.textures) + len(self.videos) + len(self.cameras)

    @property
    def has_state(self) -> bool:
        return self.state_alignment > 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in ("textures", "sounds", "videos", "models", "cameras", "osc_params"):
            data[name] = list(data[name])
        return data
