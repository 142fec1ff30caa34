"""First-person camera with jumping, gravity and heightmap ground following."""

from __future__ import annotations

import enum
import math
from typing import Collection

import numpy as np

from terrainwalk.geometry import look_at, normalize

__all__ = ["Key", "Camera"]

_WORLD_UP = np.array([0.0, 1.0, 0.0])
_TERRAIN_EXTENT = 15.0
_EYE_OFFSET = 0.5


class Key(enum.Enum):
    """Keys the camera reacts to."""

    W = "w"
    S = "s"
    A = "a"
    D = "d"
    SPACE = "space"
    LEFT_SHIFT = "left_shift"


class Camera:
    """Camera defined by a position and yaw/pitch angles in degrees."""

    GRAVITY = -30.81
    JUMP_SPEED = 25.0
    SPRINT_FACTOR = 2.5

    def __init__(self, position=(0.0, 0.0, 3.0)) -> None:
        self.position = np.array(position, dtype=float)
        self.front = np.array([0.0, 0.0, -1.0])
        self.up = np.array([0.0, 1.0, 0.0])
        self.right = np.array([1.0, 0.0, 0.0])
        self.yaw = -90.0
        self.pitch = 0.0
        self.roll = 0.0
        self.movement_speed = 15.5
        self.mouse_sensitivity = 0.1
        self.vertical_velocity = 0.0
        self.on_ground = True
        self._update_vectors()

    def view_matrix(self) -> np.ndarray:
        """Return the view matrix for the current position and orientation."""
        return look_at(self.position, self.position + self.front, self.up)

    def process_keyboard(self, pressed_keys: Collection[Key], delta_time: float) -> np.ndarray:
        """Return the displacement for this frame; SPACE starts a jump when grounded."""
        direction = np.zeros(3)
        if Key.W in pressed_keys:
            direction += self.front
        if Key.S in pressed_keys:
            direction -= self.front
        if Key.A in pressed_keys:
            direction -= self.right
        if Key.D in pressed_keys:
            direction += self.right

        if Key.SPACE in pressed_keys and self.on_ground:
            self.vertical_velocity = self.JUMP_SPEED
            self.on_ground = False

        if np.linalg.norm(direction) > 0.0:
            direction = normalize(direction)

        speed = self.movement_speed
        if Key.LEFT_SHIFT in pressed_keys:
            speed *= self.SPRINT_FACTOR
        return direction * speed * delta_time

    def move(self, direction, heightmap, speed: float, max_height: float, delta_time: float) -> None:
        """Apply movement and gravity, keeping the camera above the terrain."""
        hm = np.asarray(heightmap)
        if hm.ndim != 2 or hm.shape[0] < 2 or hm.shape[1] < 2:
            raise ValueError("heightmap must be a 2-D array of at least 2x2 samples")
        rows, cols = hm.shape

        new_pos = self.position + np.asarray(direction, dtype=float) * speed
        new_pos[1] += self.vertical_velocity * delta_time
        self.vertical_velocity += self.GRAVITY * delta_time

        grid_x = new_pos[0] / _TERRAIN_EXTENT * (cols - 1)
        grid_z = new_pos[2] / _TERRAIN_EXTENT * (rows - 1)
        x0 = min(max(int(grid_x), 0), cols - 2)
        z0 = min(max(int(grid_z), 0), rows - 2)
        fx = min(max(grid_x - x0, 0.0), 1.0)
        fz = min(max(grid_z - z0, 0.0), 1.0)

        def sample(z: int, x: int) -> float:
            return float(hm[z, x]) / 255.0 * max_height

        terrain_height = (
            sample(z0, x0) * (1 - fx) * (1 - fz)
            + sample(z0, x0 + 1) * fx * (1 - fz)
            + sample(z0 + 1, x0) * (1 - fx) * fz
            + sample(z0 + 1, x0 + 1) * fx * fz
        )

        if new_pos[1] < terrain_height + _EYE_OFFSET:
            new_pos[1] = terrain_height + _EYE_OFFSET
            if self.vertical_velocity <= 0.0:
                self.vertical_velocity = 0.0
                self.on_ground = True
        else:
            self.on_ground = False
        self.position = new_pos

    def process_mouse_movement(self, xoffset: float, yoffset: float, constrain_pitch: bool = True) -> None:
        """Turn the camera by a mouse offset, optionally limiting pitch to ±89°."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = min(max(self.pitch, -89.0), 89.0)
        self._update_vectors()

    def _update_vectors(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = np.array([
            math.cos(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.sin(yaw) * math.cos(pitch),
        ])
        self.front = normalize(front)
        self.right = normalize(np.cross(self.front, _WORLD_UP))
        self.up = normalize(np.cross(self.right, self.front))