"""Heightmap loading, sampling and terrain mesh generation."""

from __future__ import annotations

import logging
import os

import numpy as np
from PIL import Image

from terrainwalk.geometry import Vertex
from terrainwalk.mesh import Mesh, Primitive

__all__ = [
    "HeightmapError",
    "load_heightmap",
    "default_heightmap",
    "sample_height",
    "highest_point",
    "height_at",
    "build_terrain_mesh",
]

log = logging.getLogger(__name__)

DEFAULT_MAX_HEIGHT = 20.0
DEFAULT_TILE_SIZE = 1.0
_DEFAULT_SIZE = 15
_DEFAULT_LEVEL = 128


class HeightmapError(Exception):
    """Raised when a heightmap cannot be loaded or used."""


def _as_heightmap(heightmap) -> np.ndarray:
    hm = np.asarray(heightmap)
    if hm.ndim != 2:
        raise HeightmapError(f"heightmap must be 2-D, got {hm.ndim} dimensions")
    return hm


def load_heightmap(path: str | os.PathLike[str]) -> np.ndarray:
    """Load an image as an 8-bit grayscale heightmap (rows x columns)."""
    log.info("Loading heightmap: %s", path)
    try:
        with Image.open(path) as image:
            data = np.array(image.convert("L"), dtype=np.uint8)
    except OSError as exc:
        raise HeightmapError(
            f"Failed to load heightmap from file: {os.fspath(path)}"
        ) from exc
    if data.size == 0:
        raise HeightmapError(f"Failed to load heightmap from file: {os.fspath(path)}")
    return data


def default_heightmap() -> np.ndarray:
    """Return the flat 15x15 heightmap used when no image is available."""
    return np.full((_DEFAULT_SIZE, _DEFAULT_SIZE), _DEFAULT_LEVEL, dtype=np.uint8)


def sample_height(heightmap, x: int, y: int) -> int:
    """Return the raw value at column ``x``, row ``y``, clamped to the map edges."""
    hm = _as_heightmap(heightmap)
    rows, cols = hm.shape
    if rows == 0 or cols == 0:
        raise HeightmapError("heightmap is empty")
    x = min(max(int(x), 0), cols - 1)
    y = min(max(int(y), 0), rows - 1)
    return int(hm[y, x])


def highest_point(heightmap) -> tuple[int, int, int]:
    """Return ``(value, x, z)`` of the first highest sample in row-major order."""
    hm = _as_heightmap(heightmap)
    if hm.size == 0:
        raise HeightmapError("heightmap is empty")
    z, x = np.unravel_index(int(np.argmax(hm)), hm.shape)
    return int(hm[z, x]), int(x), int(z)


def height_at(heightmap, row: int, col: int, max_height: float = DEFAULT_MAX_HEIGHT) -> float:
    """Return the world height of sample (``row``, ``col``) scaled to ``max_height``."""
    hm = _as_heightmap(heightmap)
    rows, cols = hm.shape
    if not (0 <= row < rows and 0 <= col < cols):
        raise IndexError(f"sample ({row}, {col}) outside heightmap of shape {hm.shape}")
    return float(hm[row, col]) / 255.0 * max_height


def build_terrain_mesh(
    heightmap,
    max_height: float = DEFAULT_MAX_HEIGHT,
    tile_size: float = DEFAULT_TILE_SIZE,
) -> Mesh:
    """Build a triangle grid mesh with per-vertex normals from a heightmap."""
    hm = _as_heightmap(heightmap)
    if hm.size == 0:
        raise HeightmapError("Heightmap is empty in build_terrain_mesh")
    rows, cols = hm.shape
    heights = hm.astype(float) / 255.0 * max_height

    padded = np.pad(heights, 1, mode="edge")
    h_left = padded[1:-1, :-2]
    h_right = padded[1:-1, 2:]
    h_up = padded[:-2, 1:-1]
    h_down = padded[2:, 1:-1]
    normals = np.stack(
        [h_left - h_right, np.full_like(heights, 2.0), h_up - h_down], axis=-1
    )
    normals /= np.linalg.norm(normals, axis=-1, keepdims=True)

    u_scale = 1.0 / (cols - 1) if cols > 1 else 0.0
    v_scale = 1.0 / (rows - 1) if rows > 1 else 0.0

    vertices = [
        Vertex(
            position=(x * tile_size, heights[y, x], y * tile_size),
            normal=tuple(normals[y, x]),
            tex_coord=(x * u_scale, y * v_scale),
        )
        for y, x in np.ndindex(rows, cols)
    ]

    indices: list[int] = []
    for y, x in np.ndindex(rows - 1, cols - 1):
        top_left = y * cols + x
        top_right = top_left + 1
        bottom_left = (y + 1) * cols + x
        bottom_right = bottom_left + 1
        indices.extend(
            (top_left, bottom_left, top_right, top_right, bottom_left, bottom_right)
        )

    return Mesh(Primitive.TRIANGLES, vertices, indices)