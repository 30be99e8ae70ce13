"""A perspective camera."""

from __future__ import annotations

import math

from .linalg import perspective_fov, rotation_camera4x4
from .position import Position


class Camera(Position):
    """A positioned camera with a perspective projection."""

    def __init__(self):
        super().__init__()
        self._fov = math.pi / 4
        self._screen_aspect_ratio = 1.0
        self._screen_near = 0.1
        self._screen_far = 1000.0
        self._update_projection()

    def _update_projection(self):
        self._projection = perspective_fov(
            self._fov, self._screen_aspect_ratio, self._screen_near, self._screen_far
        )

    def update_screen_resolution(self, width, height):
        self._screen_aspect_ratio = width / height
        self._update_projection()

    def update_fov(self, fov):
        self._fov = fov
        self._update_projection()

    def update_screen_depth(self, near, far):
        self._screen_near = near
        self._screen_far = far
        self._update_projection()

    def camera_matrix(self):
        """Projection times view."""
        return self._projection * self.view()

    def view(self):
        return rotation_camera4x4(self.position, self.rotation)

    def projection(self):
        return self._projection