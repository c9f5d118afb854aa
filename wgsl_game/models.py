from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .errors import ModelFormatError
from .source.base import GameSource

logger = logging.getLogger("wgsl_game")


@dataclass(frozen=True)
class ObjModel:
    """Triangle mesh backing one ``@model("file.obj")`` slot.

    ``positions`` and ``normals`` are ``(n, 3) float32``; ``indices`` is a flat
    ``uint32`` array, three entries per triangle.
    """

    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.size // 3)

    @classmethod
    def parse(cls, text: str, name: str = "<obj>") -> "ObjModel":
        positions = []
        normals = []
        indices = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            tag = parts[0]
            if tag in ("v", "vn") and len(parts) >= 4:
                target = positions if tag == "v" else normals
                target.append([_number(parts[i], float, name, lineno) for i in (1, 2, 3)])
            elif tag == "f" and len(parts) >= 4:
                # v, v/vt, v/vt/vn and v//vn all start with the 1-based position index
                for corner in parts[1:4]:
                    index = _number(corner.split("/")[0], int, name, lineno)
                    if index < 1:
                        raise ModelFormatError(name, f"line {lineno}: unsupported face index {index}")
                    indices.append(index - 1)

        pos = np.asarray(positions, dtype=np.float32).reshape(-1, 3)
        idx = np.asarray(indices, dtype=np.uint32)
        if idx.size and int(idx.max()) >= pos.shape[0]:
            raise ModelFormatError(name, f"face references vertex {int(idx.max()) + 1} of {pos.shape[0]}")
        nrm = np.asarray(normals, dtype=np.float32).reshape(-1, 3)
        if nrm.size == 0 and pos.size and idx.size:
            nrm = smooth_normals(pos, idx)

        logger.debug("loaded OBJ %s: %d vertices, %d normals, %d triangles", name, len(pos), len(nrm), idx.size // 3)
        return cls(positions=pos, normals=nrm, indices=idx)


def _number(token: str, kind, name: str, lineno: int):
    try:
        return kind(token)
    except ValueError:
        raise ModelFormatError(name, f"line {lineno}: cannot parse {token!r}") from None


def smooth_normals(positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Per-vertex normals: sum of adjacent face normals, normalised."""
    tris = indices.reshape(-1, 3).astype(np.int64)
    v0, v1, v2 = positions[tris[:, 0]], positions[tris[:, 1]], positions[tris[:, 2]]
    face = np.cross(v1 - v0, v2 - v0)
    acc = np.zeros_like(positions, dtype=np.float32)
    for corner in range(3):
        np.add.at(acc, tris[:, corner], face)
    length = np.linalg.norm(acc, axis=1, keepdims=True)
    return np.where(length > 0, acc / np.where(length > 0, length, 1), acc).astype(np.float32)


def load_obj(game_source: GameSource, name: str) -> ObjModel:
    return ObjModel.parse(game_source.read_text(name), name)
