"""Vertex description and 4x4 transform helpers (column-vector convention)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

__all__ = [
    "Vertex",
    "normalize",
    "translate",
    "rotate",
    "scale_matrix",
    "look_at",
    "perspective",
]


def _floats(values: Iterable[float], size: int, name: str) -> tuple[float, ...]:
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name} must have {size} components, got {len(result)}")
    return result


def _vec3(vector) -> np.ndarray:
    arr = np.asarray(vector, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


@dataclass
class Vertex:
    """A mesh vertex: position, normal and texture coordinate."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0)
    tex_coord: tuple[float, float] = field(default=(0.0, 0.0))

    def __post_init__(self) -> None:
        self.position = _floats(self.position, 3, "position")
        self.normal = _floats(self.normal, 3, "normal")
        self.tex_coord = _floats(self.tex_coord, 2, "tex_coord")

    def __setattr__(self, name, value):
        sizes = {"position": 3, "normal": 3, "tex_coord": 2}
        if name in sizes:
            value = _floats(value, sizes[name], name)
        super().__setattr__(name, value)


def normalize(vector) -> np.ndarray:
    """Return the vector scaled to unit length."""
    v = np.asarray(vector, dtype=float)
    length = float(np.linalg.norm(v))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


def translate(offset) -> np.ndarray:
    """Return a 4x4 matrix translating by ``offset``."""
    m = np.identity(4)
    m[:3, 3] = _vec3(offset)
    return m


def rotate(angle: float, axis) -> np.ndarray:
    """Return a 4x4 matrix rotating by ``angle`` radians around ``axis``."""
    x, y, z = normalize(_vec3(axis))
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    m = np.identity(4)
    m[:3, :3] = [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return m


def scale_matrix(factors) -> np.ndarray:
    """Return a 4x4 matrix scaling each axis by ``factors``."""
    m = np.identity(4)
    m[:3, :3] = np.diag(_vec3(factors))
    return m


def look_at(eye, center, up) -> np.ndarray:
    """Return a right-handed view matrix looking from ``eye`` to ``center``."""
    eye = _vec3(eye)
    f = normalize(_vec3(center) - eye)
    s = normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -float(np.dot(s, eye))
    m[1, 3] = -float(np.dot(u, eye))
    m[2, 3] = float(np.dot(f, eye))
    return m


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must be non-zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    if tan_half == 0.0:
        raise ValueError("field of view must be non-zero")
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m