"""Indexed mesh data with material properties."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from terrainwalk.geometry import Vertex

__all__ = ["Primitive", "Mesh"]

Color = tuple[float, float, float, float]
Vec3 = tuple[float, float, float]

_WHITE: Color = (1.0, 1.0, 1.0, 1.0)
_ZERO3: Vec3 = (0.0, 0.0, 0.0)


class Primitive(enum.Enum):
    """How the indices of a mesh are assembled into primitives."""

    POINT = "point"
    LINES = "lines"
    TRIANGLES = "triangles"


def _tuple(values, size: int, name: str) -> tuple[float, ...]:
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name} must have {size} components, got {len(result)}")
    return result


@dataclass
class Mesh:
    """Vertices, indices, placement and material of one drawable piece."""

    primitive: Primitive = Primitive.POINT
    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    origin: Vec3 = _ZERO3
    orientation: Vec3 = _ZERO3
    texture_id: int = 0
    ambient_material: Color = _WHITE
    diffuse_material: Color = _WHITE
    specular_material: Color = _WHITE
    reflectivity: float = 1.0

    def __post_init__(self) -> None:
        self.primitive = Primitive(self.primitive)
        self.vertices = list(self.vertices)
        self.indices = [int(i) for i in self.indices]
        self.origin = _tuple(self.origin, 3, "origin")
        self.orientation = _tuple(self.orientation, 3, "orientation")
        self.ambient_material = _tuple(self.ambient_material, 4, "ambient_material")
        self.diffuse_material = _tuple(self.diffuse_material, 4, "diffuse_material")
        self.specular_material = _tuple(self.specular_material, 4, "specular_material")
        self.reflectivity = float(self.reflectivity)

    def clear(self) -> None:
        """Drop all geometry and the texture, returning to an empty point mesh."""
        self.texture_id = 0
        self.primitive = Primitive.POINT
        self.vertices.clear()
        self.indices.clear()
        self.origin = _ZERO3
        self.orientation = _ZERO3