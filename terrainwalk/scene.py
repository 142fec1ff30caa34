"""Scene state: terrain, placed models, lights, camera and input handling."""

from __future__ import annotations

import enum
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Collection

import numpy as np
from PIL import Image

from terrainwalk.camera import Camera, Key
from terrainwalk.geometry import perspective
from terrainwalk.model import Model
from terrainwalk.terrain import (
    HeightmapError,
    build_terrain_mesh,
    default_heightmap,
    highest_point,
    load_heightmap,
    sample_height,
)

__all__ = ["Light", "Scene"]

log = logging.getLogger(__name__)

_NEAR = 0.1
_FAR = 20000.0
_MIN_FOV = 20.0
_MAX_FOV = 170.0
_ZOOM_STEP = 5.0
_COLOR_STEP = np.float32(0.1)


def _vec3(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.shape == ():
        arr = np.full(3, float(arr))
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


@dataclass
class Light:
    """A light source; unused fields are ignored by the light type that holds it."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))
    ambient: np.ndarray = field(default_factory=lambda: np.zeros(3))
    diffuse: np.ndarray = field(default_factory=lambda: np.zeros(3))
    specular: np.ndarray = field(default_factory=lambda: np.zeros(3))
    constant: float = 1.0
    linear: float = 0.0
    quadratic: float = 0.0
    cut_off: float = 0.0
    outer_cut_off: float = 0.0

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.direction = _vec3(self.direction)
        self.ambient = _vec3(self.ambient)
        self.diffuse = _vec3(self.diffuse)
        self.specular = _vec3(self.specular)


class _AppKey(enum.Enum):
    ESCAPE = "escape"
    F10 = "f10"
    F11 = "f11"
    R = "r"
    G = "g"
    B = "b"
    H = "h"


@dataclass(frozen=True)
class _Placement:
    path: str
    row: int
    col: int
    x: float
    z: float
    lift: float
    color: tuple[float, float, float, float]
    scale: tuple[float, float, float]


_TRANSPARENT_PLACEMENTS = (
    _Placement("models/tree.obj", 100, 100, 100.0, 100.0, 1.0, (0.3, 1.0, 0.3, 0.8), (1.0, 1.0, 1.0)),
    _Placement("models/bunny_tri_vnt.obj", 200, 200, 200.0, 200.0, 2.0, (1.0, 0.3, 0.3, 0.6), (1.0, 1.0, 1.0)),
    _Placement("models/house.obj", 300, 300, 300.0, 300.0, 1.0, (0.3, 0.3, 1.0, 0.4), (1.0, 1.0, 1.0)),
)

_OPAQUE_PLACEMENTS = (
    (_Placement("models/cube.obj", 150, 150, 150.0, 150.0, 1.0, (1.0, 1.0, 1.0, 1.0), (1.0, 1.0, 1.0)),
     "textures/krabice.jpg"),
    (_Placement("models/cat.obj", 150, 160, 150.0, 160.0, 1.0, (1.0, 1.0, 1.0, 1.0), (0.5, 0.5, 0.5)),
     "textures/Cat.jpg"),
    (_Placement("models/Tractor.obj", 150, 170, 150.0, 170.0, 1.0, (1.0, 1.0, 1.0, 1.0), (0.7, 0.7, 0.7)),
     "textures/Tractor.jpg"),
)


class Scene:
    """Everything the renderer draws and the state that input changes.

    Heightmap samples addressed outside the map are clamped to its edges.
    """

    DEFAULT_FOV = 60.0
    MAX_HEIGHT = 20.0
    TILE_SIZE = 1.0

    def __init__(self, heightmap=None, resources: str | os.PathLike[str] = "resources") -> None:
        self.resources = Path(resources)
        if heightmap is None:
            try:
                heightmap = load_heightmap(self.resources / "textures" / "heightmap.png")
            except HeightmapError as exc:
                log.error("Failed to load heightmap: %s", exc)
                heightmap = default_heightmap()
                log.info("Using default heightmap: 15x15")
        self.heightmap = np.asarray(heightmap)

        value, x, z = highest_point(self.heightmap)
        log.info("Max heightmap value: %d at (%d, %d)", value, x, z)
        self.max_terrain_height = value / 255.0 * self.MAX_HEIGHT

        self.width = 800
        self.height = 600
        self.fov = self.DEFAULT_FOV
        self.last_x = 400.0
        self.last_y = 300.0
        self.first_mouse = True
        self.cursor_captured = True
        self.show_info = True
        self.vsync = False
        self.fullscreen = False
        self.should_close = False
        self.r = 0.0
        self.g = 0.0
        self.b = 0.0

        bunny_height = self._ground(200, 200)
        self.camera = Camera(
            (200.0 * self.TILE_SIZE, bunny_height + 5.0, 195.0 * self.TILE_SIZE)
        )

        self.directional_light = Light(
            position=(200.0, 100.0, 200.0),
            direction=(-0.2, -1.0, -0.3),
            ambient=0.7,
            diffuse=0.8,
            specular=1.0,
        )
        self.point_lights = [
            Light(position=pos, ambient=amb, diffuse=col, specular=col,
                  constant=1.0, linear=0.001, quadratic=0.00001)
            for pos, amb, col in (
                ((110.0, 30.0, 110.0), (0.0, 0.2, 0.0), (0.0, 1.0, 0.0)),
                ((210.0, 30.0, 210.0), (0.2, 0.0, 0.0), (1.0, 0.0, 0.0)),
                ((310.0, 30.0, 310.0), (0.0, 0.0, 0.2), (0.0, 0.0, 1.0)),
            )
        ]
        self.spot_light = Light(
            position=self.camera.position,
            direction=self.camera.front,
            ambient=0.1,
            diffuse=1.0,
            specular=1.0,
            constant=1.0,
            linear=0.01,
            quadratic=0.001,
            cut_off=math.cos(math.radians(20.0)),
            outer_cut_off=math.cos(math.radians(25.0)),
        )

        self.textures: list[Path] = []
        self.terrain: Model | None = None
        self.maze_walls: list[Model] = []
        self.transparent_objects: list[Model] = []
        self.models: list[Model] = []

    def _ground(self, row: int, col: int) -> float:
        return sample_height(self.heightmap, col, row) / 255.0 * self.MAX_HEIGHT

    def _load_texture(self, relative: str) -> int:
        path = self.resources / relative
        try:
            with Image.open(path) as image:
                image.load()
        except OSError:
            log.error("Failed to load texture: %s", path)
            return 0
        self.textures.append(path)
        return len(self.textures)

    def _place(self, placement: _Placement, texture_id: int, transparent: bool) -> Model:
        model = Model.from_obj(self.resources / placement.path)
        if model.meshes:
            model.meshes[0].texture_id = texture_id
            model.meshes[0].diffuse_material = placement.color
        model.origin = np.array([
            placement.x * self.TILE_SIZE,
            self._ground(placement.row, placement.col) + placement.lift,
            placement.z * self.TILE_SIZE,
        ])
        model.scale = np.array(placement.scale, dtype=float)
        model.transparent = transparent
        return model

    def load_models(self) -> None:
        """Build the terrain and load the transparent and opaque models."""
        self.textures.clear()
        mesh = build_terrain_mesh(self.heightmap, self.MAX_HEIGHT, self.TILE_SIZE)
        mesh.texture_id = self._load_texture("textures/grass.png")
        mesh.diffuse_material = (1.0, 1.0, 1.0, 1.0)
        self.terrain = Model(meshes=[mesh])
        self.maze_walls = [self.terrain]

        bunny_texture = self._load_texture("textures/kralik.jpg")
        self.transparent_objects = [
            self._place(placement, bunny_texture, transparent=True)
            for placement in _TRANSPARENT_PLACEMENTS
        ]
        for model in self.transparent_objects:
            log.info("Placed transparent object at %s", tuple(model.origin))

        self.models = []
        for placement, texture in _OPAQUE_PLACEMENTS:
            model = self._place(placement, self._load_texture(texture), transparent=False)
            if placement.path == "models/cat.obj":
                model.orientation = np.array([0.0, math.radians(180.0), 0.0])
            self.models.append(model)
            log.info("Placed model at %s", tuple(model.origin))

    def update_lights(self, current_time: float) -> dict[str, Any]:
        """Animate the lights for ``current_time`` seconds and return shader uniforms."""
        sun_angle = current_time * 0.1
        sun = self.directional_light
        sun.direction = np.array([math.sin(sun_angle) * 0.5, -1.0, math.cos(sun_angle) * 0.5])
        sun.ambient = np.full(3, 0.7)
        sun.diffuse = np.array([
            0.9 + 0.1 * math.sin(sun_angle),
            0.9 + 0.1 * math.cos(sun_angle),
            0.9,
        ])
        sun.specular = np.full(3, 1.0)

        uniforms: dict[str, Any] = {
            "ambientLight.color": np.full(3, 0.2),
            "dirLights[0].direction": sun.direction.copy(),
            "dirLights[0].ambient": sun.ambient.copy(),
            "dirLights[0].diffuse": sun.diffuse.copy(),
            "dirLights[0].specular": sun.specular.copy(),
            "numPointLights": len(self.point_lights),
        }
        for i, light in enumerate(self.point_lights):
            intensity = 0.7 + 0.3 * math.sin(current_time * (i + 1))
            light.diffuse = light.diffuse * intensity
            light.specular = light.diffuse.copy()
            prefix = f"pointLights[{i}]."
            uniforms[prefix + "position"] = light.position.copy()
            uniforms[prefix + "ambient"] = light.ambient.copy()
            uniforms[prefix + "diffuse"] = light.diffuse.copy()
            uniforms[prefix + "specular"] = light.specular.copy()
            uniforms[prefix + "constant"] = light.constant
            uniforms[prefix + "linear"] = light.linear
            uniforms[prefix + "quadratic"] = light.quadratic

        spot = self.spot_light
        spot.position = self.camera.position.copy()
        spot.direction = self.camera.front.copy()
        uniforms["numSpotLights"] = 1
        uniforms.update({
            "spotLights[0].position": spot.position.copy(),
            "spotLights[0].direction": spot.direction.copy(),
            "spotLights[0].ambient": spot.ambient.copy(),
            "spotLights[0].diffuse": spot.diffuse.copy(),
            "spotLights[0].specular": spot.specular.copy(),
            "spotLights[0].constant": spot.constant,
            "spotLights[0].linear": spot.linear,
            "spotLights[0].quadratic": spot.quadratic,
            "spotLights[0].cutOff": spot.cut_off,
            "spotLights[0].outerCutOff": spot.outer_cut_off,
        })
        return uniforms

    def transparent_draw_order(self) -> list[Model]:
        """Return all transparent models sorted from farthest to nearest the camera."""
        candidates = [m for m in self.maze_walls if m.transparent]
        candidates.extend(self.transparent_objects)
        candidates.extend(m for m in self.models if m.transparent)
        position = self.camera.position
        return sorted(
            candidates,
            key=lambda m: float(np.linalg.norm(position - m.origin)),
            reverse=True,
        )

    def set_framebuffer_size(self, width: int, height: int) -> None:
        """Record a new framebuffer size."""
        self.width = int(width)
        self.height = max(int(height), 1)

    def scroll(self, yoffset: float) -> None:
        """Zoom by a scroll offset, keeping the field of view within 20..170 degrees."""
        self.fov = min(max(self.fov - _ZOOM_STEP * float(yoffset), _MIN_FOV), _MAX_FOV)

    def reset_zoom(self) -> None:
        """Restore the default field of view."""
        self.fov = self.DEFAULT_FOV

    def cursor_moved(self, xpos: float, ypos: float) -> None:
        """Turn the camera by the cursor's motion since the previous position."""
        if self.first_mouse:
            self.last_x = xpos
            self.last_y = ypos
            self.first_mouse = False
        xoffset = xpos - self.last_x
        yoffset = self.last_y - ypos
        self.last_x = xpos
        self.last_y = ypos
        self.camera.process_mouse_movement(xoffset, yoffset)

    def release_cursor(self) -> None:
        """Free the cursor; the next motion starts fresh without a jump."""
        self.cursor_captured = False
        self.first_mouse = True

    @staticmethod
    def _cycle(value: float) -> float:
        value = float(np.float32(value) + _COLOR_STEP)
        return 0.0 if value > 1.0 else value

    def press_key(self, key: str) -> None:
        """React to a key press by name; unknown keys are ignored."""
        try:
            app_key = _AppKey(str(key).lower())
        except ValueError:
            return
        if app_key is _AppKey.ESCAPE:
            self.should_close = True
        elif app_key is _AppKey.F10:
            self.vsync = not self.vsync
            log.info("VSync: %s", "ON" if self.vsync else "OFF")
        elif app_key is _AppKey.F11:
            self.fullscreen = not self.fullscreen
        elif app_key is _AppKey.R:
            self.r = self._cycle(self.r)
        elif app_key is _AppKey.G:
            self.g = self._cycle(self.g)
        elif app_key is _AppKey.B:
            self.b = self._cycle(self.b)
        elif app_key is _AppKey.H:
            self.show_info = not self.show_info
            self.cursor_captured = self.show_info

    def step(self, pressed_keys: Collection[Key], delta_time: float) -> np.ndarray:
        """Move the camera for one frame and return its new position."""
        direction = self.camera.process_keyboard(pressed_keys, delta_time)
        self.camera.move(direction, self.heightmap, 1.0, self.MAX_HEIGHT, delta_time)
        return self.camera.position.copy()

    def projection_matrix(self) -> np.ndarray:
        """Return the perspective projection for the current size and field of view."""
        height = max(self.height, 1)
        fov = self.fov if self.fov > 0.0 else self.DEFAULT_FOV
        return perspective(math.radians(fov), self.width / height, _NEAR, _FAR)