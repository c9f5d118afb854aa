from __future__ import annotations

from typing import List, Optional

from .config import HOST_STRUCT_NAME, PreprocessorConfig
from .host_layout import engine_host_members
from .input import BUTTONS, key_constant_values
from .metadata import Metadata

BANNER = "// Preprocessed WGSL - generated from macros\n\n"


def texture_ident(slot: int) -> str:
    return f"_texture_{slot}"


def video_ident(slot: int) -> str:
    return f"_video_{slot}"


def camera_ident(slot: int) -> str:
    return f"_camera_{slot}"


def model_buffer_ident(slot: int, member: str) -> str:
    return f"_model_{slot}_{member}"


def model_binding(slot: int, member: str) -> int:
    base = 1 + slot * 2
    return base if member == "positions" else base + 1


def build_host_struct(metadata: Metadata, config: Optional[PreprocessorConfig] = None) -> str:
    lines = ["// Engine host struct that contains all engine state", f"struct {HOST_STRUCT_NAME} {{"]
    for member in engine_host_members(metadata, config):
        lines.append(f"    {member.name}: {member.wgsl_type}, // {member.comment}")
    lines.append("}")
    return "\n".join(lines) + "\n\n"


def build_constants(config: Optional[PreprocessorConfig] = None) -> str:
    cfg = config or PreprocessorConfig()
    lines = ["// Button constants for input"]
    lines += [f"const {name}: u32 = {index}u;" for name, index in BUTTONS.items()]
    text = "\n".join(lines) + "\n\n"
    if cfg.include_key_constants:
        lines = ["// Key constants indexing the engine keys array, identical on every host"]
        lines += [f"const {name}: u32 = {index}u;" for name, index in key_constant_values().items()]
        text += "\n".join(lines) + "\n\n"
    return text


def build_bindings(metadata: Metadata) -> str:
    lines: List[str] = [
        "// Bindings: group 0 = sampler and textures, group 1 = engine state, group 2 = models",
        "",
        "@group(0) @binding(0) var _engine_sampler: sampler;",
    ]
    for slot, name in enumerate(metadata.textures):
        lines.append(
            f"@group(0) @binding({metadata.texture_binding(slot)}) var {texture_ident(slot)}: texture_2d<f32>; // {name}"
        )
    for slot, name in enumerate(metadata.videos):
        lines.append(
            f"@group(0) @binding({metadata.video_binding(slot)}) var {video_ident(slot)}: texture_2d<f32>; // {name}"
        )
    for slot, index in enumerate(metadata.cameras):
        lines.append(
            f"@group(0) @binding({metadata.camera_binding(slot)}) var {camera_ident(slot)}: texture_2d<f32>; "
            f"// camera {index}"
        )
    lines.append("")
    lines.append(f"@group(1) @binding(0) var<storage, read_write> _engine: {HOST_STRUCT_NAME};")

    if metadata.models:
        lines.append("")
        lines.append("// Model data buffers")
        for slot, name in enumerate(metadata.models):
            for member in ("positions", "normals"):
                struct_name = f"Model{slot}{member.capitalize()}"
                comment = f" // {name}" if member == "positions" else ""
                lines.append(f"struct {struct_name} {{ data: array<vec3f> }}")
                lines.append(
                    f"@group(2) @binding({model_binding(slot, member)}) var<storage, read> "
                    f"{model_buffer_ident(slot, member)}: {struct_name};{comment}"
                )
    return "\n".join(lines) + "\n\n"


def build_header(
    metadata: Metadata,
    state_struct: Optional[str] = None,
    config: Optional[PreprocessorConfig] = None,
) -> str:
    """
    Generated preamble for the outermost file.

    ``state_struct`` is the user's ``GameState`` declaration; it is placed ahead
    of the engine struct that embeds it.
    """
    header = BANNER
    if state_struct:
        header += state_struct + "\n\n"
    header += build_host_struct(metadata, config)
    header += build_constants(config)
    header += build_bindings(metadata)
    return header
