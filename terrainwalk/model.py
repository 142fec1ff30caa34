"""A placed model made of meshes, with its model transform."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from itertools import zip_longest
from pathlib import Path

import numpy as np

from terrainwalk.geometry import Vertex, rotate, scale_matrix, translate
from terrainwalk.mesh import Mesh, Primitive
from terrainwalk.objloader import ObjError, load_obj

__all__ = ["Model"]

_X_AXIS = (1.0, 0.0, 0.0)
_Y_AXIS = (0.0, 1.0, 0.0)
_Z_AXIS = (0.0, 0.0, 1.0)
_DEFAULT_UV = (0.0, 0.0)
_DEFAULT_NORMAL = (0.0, 0.0, 1.0)


def _vec3(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


@dataclass
class Model:
    """Meshes with a position, orientation (radians) and scale."""

    meshes: list[Mesh] = field(default_factory=list)
    name: str = ""
    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    local_model_matrix: np.ndarray = field(default_factory=lambda: np.identity(4))
    transparent: bool = False
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.origin = _vec3(self.origin)
        self.orientation = _vec3(self.orientation)
        self.scale = _vec3(self.scale)
        self.angular_velocity = _vec3(self.angular_velocity)
        self.local_model_matrix = np.array(self.local_model_matrix, dtype=float)
        if self.local_model_matrix.shape != (4, 4):
            raise ValueError("local_model_matrix must be 4x4")

    @classmethod
    def from_obj(cls, path: str | os.PathLike[str]) -> "Model":
        """Build a one-mesh model from an OBJ file; an empty path gives an empty model."""
        raw = os.fspath(path)
        if not raw:
            return cls()
        model = cls(name=Path(raw).stem)
        try:
            data = load_obj(raw)
        except ObjError as exc:
            raise ObjError(f"Failed to load OBJ file: {raw}") from exc

        vertices = [
            Vertex(
                position=position,
                normal=normal if normal is not None else _DEFAULT_NORMAL,
                tex_coord=uv if uv is not None else _DEFAULT_UV,
            )
            for position, uv, normal in zip_longest(data.vertices, data.uvs, data.normals)
            if position is not None
        ]
        indices = list(range(len(vertices)))
        model.meshes.append(Mesh(Primitive.TRIANGLES, vertices, indices))
        return model

    def update(self, delta_t: float) -> None:
        """Advance the model's automatic rotation by ``delta_t`` seconds."""
        self.orientation = self.orientation + self.angular_velocity * float(delta_t)

    def model_matrix(self) -> np.ndarray:
        """Return local * scale * Rz * Ry * Rx * translate(origin)."""
        t = translate(self.origin)
        rx = rotate(float(self.orientation[0]), _X_AXIS)
        ry = rotate(float(self.orientation[1]), _Y_AXIS)
        rz = rotate(float(self.orientation[2]), _Z_AXIS)
        s = scale_matrix(self.scale)
        return self.local_model_matrix @ s @ rz @ ry @ rx @ t