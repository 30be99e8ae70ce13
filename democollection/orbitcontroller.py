"""Mouse-driven orbiting of a position around a centre point."""

from __future__ import annotations

from enum import IntEnum

from .linalg import Vector, rotation3x3
from .position import Position


class MouseButton(IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class ButtonAction(IntEnum):
    RELEASE = 0
    PRESS = 1
    REPEAT = 2


_BUTTON_MASK = MouseButton.LEFT | MouseButton.RIGHT


class OrbitController:
    """Keeps ``target`` on a sphere around a centre: left drag rotates, right drag pans."""

    def __init__(self, target: Position):
        self._target = target
        self._center = Vector.filled(3, 0.0)
        self._distance = 1.0
        self._prev_cursor = Vector(0.0, 0.0)
        self._sensitivity = 0.008
        self._held_buttons = 0
        self._update_target_position()

    def _update_target_position(self):
        self._target.position = (
            rotation3x3(self._target.rotation) * Vector(0.0, 0.0, -self._distance) - self._center
        )

    def set_distance(self, distance):
        self._distance = distance
        self._update_target_position()

    def set_center(self, center):
        self._center = Vector(center)
        self._update_target_position()

    def mouse_move(self, x, y):
        cursor = Vector(float(x), float(y))
        if self._held_buttons:
            dx, dy = cursor - self._prev_cursor
            s = self._sensitivity
            if self._held_buttons & (1 << MouseButton.LEFT):
                self._target.look_up(-dy * s)
                self._target.turn_right(dx * s)
            if self._held_buttons & (1 << MouseButton.RIGHT):
                pan_scale = s * self._distance * 0.1
                self._center = self._center + rotation3x3(self._target.rotation) * Vector(
                    dx * pan_scale, -dy * pan_scale, 0.0
                )
            self._update_target_position()
        self._prev_cursor = cursor

    def mouse_button(self, button, action):
        bit = 1 << (int(button) & _BUTTON_MASK)
        if action == ButtonAction.PRESS:
            self._held_buttons |= bit
        elif action == ButtonAction.RELEASE:
            self._held_buttons &= ~bit

    def scroll(self, delta):
        self._distance *= 1.25 if delta < 0 else 0.8
        self._update_target_position()