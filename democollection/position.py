"""Position, orientation and scale of an object in 3D space."""

from __future__ import annotations

import math

from .linalg import (
    Vector,
    length,
    length_square,
    rotation3x3,
    rotation4x4,
    scaling3x3,
    scaling4x4,
    scaling_rotation_translation4x4,
    translation4x4,
    transpose,
)


class Position:
    """Holds ``position``, ``rotation`` (pitch, yaw, roll) and ``scale`` vectors."""

    def __init__(self):
        self.reset()

    def reset(self):
        """Move to the origin with no rotation and unit scale."""
        self.position = Vector.filled(3, 0)
        self.rotation = Vector.filled(3, 0)
        self.scale = Vector.filled(3, 1)

    def move_forward(self, d):
        yaw = self.rotation[1]
        self.position[0] += math.sin(yaw) * d
        self.position[2] += math.cos(yaw) * d

    def move_backward(self, d):
        yaw = self.rotation[1]
        self.position[0] -= math.sin(yaw) * d
        self.position[2] -= math.cos(yaw) * d

    def move_right(self, d):
        yaw = self.rotation[1]
        self.position[0] += math.cos(yaw) * d
        self.position[2] -= math.sin(yaw) * d

    def move_left(self, d):
        yaw = self.rotation[1]
        self.position[0] -= math.cos(yaw) * d
        self.position[2] += math.sin(yaw) * d

    def move_up(self, d):
        self.position[1] += d

    def move_down(self, d):
        self.position[1] -= d

    def move(self, delta):
        self.position = self.position + Vector(delta)

    def move_in_look_direction(self, delta):
        """Move by ``delta`` given in the object's own frame; a number moves straight ahead."""
        if not isinstance(delta, Vector):
            delta = Vector(0, 0, delta) if isinstance(delta, (int, float)) else Vector(delta)
        self.position = self.position + self.rotation_matrix3x3() * delta

    def look_down(self, r):
        self.rotation[0] += r

    def look_up(self, r):
        self.rotation[0] -= r

    def turn_right(self, r):
        self.rotation[1] += r

    def turn_left(self, r):
        self.rotation[1] -= r

    def roll_right(self, r):
        self.rotation[2] -= r

    def roll_left(self, r):
        self.rotation[2] += r

    def scale_x(self, s):
        self.scale[0] *= s

    def scale_y(self, s):
        self.scale[1] *= s

    def scale_z(self, s):
        self.scale[2] *= s

    def position_matrix(self):
        return translation4x4(self.position)

    def rotation_matrix(self):
        return rotation4x4(self.rotation)

    def scale_matrix(self):
        return scaling4x4(self.scale)

    def world_matrix(self):
        return scaling_rotation_translation4x4(self.scale, self.rotation, self.position)

    def position_matrix_inv(self):
        return translation4x4(-self.position)

    def rotation_matrix_inv(self):
        return transpose(rotation4x4(self.rotation))

    def scale_matrix_inv(self):
        return scaling4x4(Vector.filled(3, 1) / self.scale)

    def world_matrix_inv(self):
        return self.scale_matrix_inv() * self.rotation_matrix_inv() * self.position_matrix_inv()

    def look_direction(self):
        return self.rotation_matrix3x3() * Vector(0, 0, 1)

    def rotation_matrix3x3(self):
        return rotation3x3(self.rotation)

    def scale_matrix3x3(self):
        return scaling3x3(self.scale)

    def rotation_matrix_inv3x3(self):
        return transpose(rotation3x3(self.rotation))

    def scale_matrix_inv3x3(self):
        return scaling3x3(Vector.filled(3, 1) / self.scale)

    def distance_square(self, other):
        return length_square(self.position - other.position)

    def distance(self, other):
        return length(self.position - other.position)