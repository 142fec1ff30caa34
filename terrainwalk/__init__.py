"""Heightmap terrain, OBJ models, a walking camera and scene state for 3D rendering."""

__version__ = "0.1.0"