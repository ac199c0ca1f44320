"""A camera that follows points across the world plane."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

PI = 3.141592653589

CAMERA_START_LOCATION = (0.0, 0.0, 85.0)
CAMERA_UP_VECTOR = (0.0, 1.0, 0.0)
FOVX = (40.0 / 360.0) * 2 * PI
Z_NEAR = 85.0
Z_FAR = 500.0


def _vec3(values: Sequence[float]) -> np.ndarray:
    vector = np.asarray(values, dtype=np.float64).reshape(-1)
    if vector.size == 2:
        vector = np.append(vector, 0.0)
    if vector.size != 3:
        raise ValueError(f"expected 2 or 3 components, got {vector.size}")
    return vector


def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """The world-to-view matrix of a viewer at ``eye`` looking at ``target``."""
    eye_v = _vec3(eye)
    forward = eye_v - _vec3(target)
    length = np.linalg.norm(forward)
    if length == 0.0:
        raise ValueError("eye and target must differ")
    z_axis = forward / length
    x_axis = np.cross(_vec3(up), z_axis)
    x_length = np.linalg.norm(x_axis)
    if x_length == 0.0:
        raise ValueError("up vector is parallel to the view direction")
    x_axis /= x_length
    y_axis = np.cross(z_axis, x_axis)

    view = np.identity(4)
    view[0, :3] = x_axis
    view[1, :3] = y_axis
    view[2, :3] = z_axis
    view[:3, 3] = -view[:3, :3] @ eye_v
    return view


class Camera:
    """A camera looking straight down the Z axis at the world plane."""

    def __init__(self, screen_width: float, screen_height: float) -> None:
        self.location = np.array(CAMERA_START_LOCATION, dtype=np.float64)
        self.aspect = 1.0
        self.projection = np.identity(4)
        self.lower_bounds = np.zeros(3)
        self.upper_bounds = np.zeros(3)
        self.set_projection(screen_width, screen_height)

    def set_projection(self, screen_width: float, screen_height: float) -> None:
        """Rebuild the infinite perspective projection for a screen size."""
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError("screen dimensions must be positive")
        self.aspect = float(screen_width) / float(screen_height)
        e = math.tan(PI * 0.5 - (0.5 * FOVX / self.aspect))
        self.projection = np.array(
            [
                [e / self.aspect, 0.0, 0.0, 0.0],
                [0.0, e, 0.0, 0.0],
                [0.0, 0.0, -1.0, -2.0 * Z_NEAR],
                [0.0, 0.0, -1.0, 0.0],
            ]
        )

    def update(self, tracking_points: Iterable[Sequence[float]]) -> None:
        """Move towards the average of the current location and ``tracking_points``."""
        points = [_vec3(point) for point in tracking_points]
        location = self.location.copy()
        for point in points:
            location += point
        if points:
            location /= len(points) + 1.0

        if float(self.upper_bounds @ self.upper_bounds) != 0.0:
            location = np.minimum(np.maximum(location, self.lower_bounds), self.upper_bounds)

        location[2] = self.location[2]
        self.location = location

    def set_bounds(self, bounds: Sequence[float]) -> None:
        """Set the upper corner of the area the camera may move in."""
        self.upper_bounds = _vec3(bounds)

    def world_to_view(self) -> np.ndarray:
        """The view matrix, looking straight down at the world plane."""
        target = self.location.copy()
        target[2] = 0.0
        return look_at(self.location, target, CAMERA_UP_VECTOR)

    def world_to_projection(self) -> np.ndarray:
        """The projection matrix combined with the view matrix."""
        return self.projection @ self.world_to_view()