"""Reader for Wavefront OBJ files with fully indexed ``v/vt/vn`` faces."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable

__all__ = ["ObjError", "ObjData", "parse_obj", "load_obj"]

log = logging.getLogger(__name__)

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


class ObjError(Exception):
    """Raised when an OBJ file cannot be read or is malformed."""


@dataclass
class ObjData:
    """De-indexed triangle data: one entry per triangle corner."""

    vertices: list[Vec3] = field(default_factory=list)
    uvs: list[Vec2] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.vertices)


def _read_floats(tokens: list[str], count: int) -> tuple[float, ...]:
    values = [0.0] * count
    for i, token in enumerate(tokens[:count]):
        try:
            values[i] = float(token)
        except ValueError:
            break
    return tuple(values)


def _read_corner(token: str, source: str) -> tuple[int, int, int]:
    parts = token.replace("/", " ").split()
    if len(parts) < 3:
        raise ObjError(f"Invalid face format in OBJ file: {source}")
    try:
        vi, ti, ni = (int(p) for p in parts[:3])
    except ValueError:
        raise ObjError(f"Invalid face format in OBJ file: {source}") from None
    return vi - 1, ti - 1, ni - 1


def parse_obj(lines: Iterable[str], source: str = "<string>") -> ObjData:
    """Parse OBJ text lines, fan-triangulating faces, into per-corner data."""
    positions: list[Vec3] = []
    tex_coords: list[Vec2] = []
    normals: list[Vec3] = []
    corners: list[tuple[int, int, int]] = []

    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        prefix, args = tokens[0], tokens[1:]
        if prefix == "v":
            positions.append(_read_floats(args, 3))
        elif prefix == "vt":
            tex_coords.append(_read_floats(args, 2))
        elif prefix == "vn":
            normals.append(_read_floats(args, 3))
        elif prefix == "f":
            face = [_read_corner(token, source) for token in args]
            if len(face) < 3:
                log.warning("Face with less than 3 vertices in OBJ file: %s", source)
                continue
            for second, third in zip(face[1:-1], face[2:]):
                corners.extend((face[0], second, third))

    result = ObjData()
    for vi, ti, ni in corners:
        if not (
            0 <= vi < len(positions)
            and 0 <= ti < len(tex_coords)
            and 0 <= ni < len(normals)
        ):
            raise ObjError(f"Invalid index in OBJ file: {source}")
        result.vertices.append(positions[vi])
        result.uvs.append(tex_coords[ti])
        result.normals.append(normals[ni])

    log.info("OBJ loaded successfully: %d vertices", len(result))
    return result


def load_obj(path: str | os.PathLike[str]) -> ObjData:
    """Read and parse the OBJ file at ``path``."""
    log.info("Loading OBJ file: %s", path)
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return parse_obj(handle, os.fspath(path))
    except OSError as exc:
        raise ObjError(f"Impossible to open the file: {os.fspath(path)}") from exc