"""Small fixed-size vectors and matrices with the transforms used for 3D rendering.

Matrices are indexed as ``m[x, y]`` where ``x`` is the column and ``y`` the row.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Callable, Iterable, Iterator


def _check_same_size(lhs: "Vector", rhs: "Vector") -> None:
    if len(lhs) != len(rhs):
        raise ValueError(f"vector sizes differ: {len(lhs)} and {len(rhs)}")


class Vector:
    """A vector of numbers with element-wise and scalar arithmetic."""

    __slots__ = ("_items",)

    def __init__(self, *args):
        if len(args) == 1 and not isinstance(args[0], Real):
            self._items = list(args[0])
        else:
            self._items = list(args)

    @classmethod
    def filled(cls, size, value):
        """A vector of ``size`` components all equal to ``value``."""
        return cls([value] * size)

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value):
        self._items[index] = value

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self):
        return f"Vector({', '.join(repr(e) for e in self._items)})"

    def __str__(self):
        return "(" + " ".join(str(e) for e in self._items) + ")\n"

    def _combine(self, other, op: Callable) -> "Vector":
        if isinstance(other, Vector):
            _check_same_size(self, other)
            return Vector(op(a, b) for a, b in zip(self._items, other._items))
        if isinstance(other, Real):
            return Vector(op(a, other) for a in self._items)
        return NotImplemented

    def __add__(self, other):
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other):
        return self._combine(other, lambda a, b: a - b)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            if other.columns != len(self):
                raise ValueError("vector size does not match matrix columns")
            return Vector(
                sum(other[i, y] * v for i, v in enumerate(self._items))
                for y in range(other.rows)
            )
        return self._combine(other, lambda a, b: a * b)

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Vector(other * a for a in self._items)
        return NotImplemented

    def __truediv__(self, other):
        return self._combine(other, lambda a, b: a / b)

    def __neg__(self):
        return Vector(-a for a in self._items)

    def resized(self, size):
        """A copy truncated or zero-padded to ``size`` components."""
        items = self._items[:size]
        return Vector(items + [0] * (size - len(items)))


class Matrix:
    """A ``columns`` x ``rows`` matrix stored row by row."""

    __slots__ = ("columns", "rows", "_values")

    def __init__(self, columns, rows, values=()):
        if columns < 1 or rows < 1:
            raise ValueError("matrix dimensions must be positive")
        vals = list(values)
        size = columns * rows
        if len(vals) > size:
            raise ValueError(f"too many values for a {columns}x{rows} matrix")
        self.columns = columns
        self.rows = rows
        self._values = vals + [0] * (size - len(vals))

    @classmethod
    def filled(cls, columns, rows, value):
        """A matrix with every element equal to ``value``."""
        return cls(columns, rows, [value] * (columns * rows))

    @property
    def values(self):
        """All elements, row by row."""
        return tuple(self._values)

    @property
    def is_square(self):
        return self.columns == self.rows

    def _index(self, key) -> int:
        x, y = key
        if not (0 <= x < self.columns and 0 <= y < self.rows):
            raise IndexError(f"matrix index {key} out of range")
        return y * self.columns + x

    def __getitem__(self, key):
        return self._values[self._index(key)]

    def __setitem__(self, key, value):
        self._values[self._index(key)] = value

    def resized(self, columns, rows):
        """Convert to another size: overlap is copied, new diagonal cells become 1."""
        m = Matrix(columns, rows)
        for i in range(min(self.columns, self.rows), min(columns, rows)):
            m[i, i] = 1
        for y in range(min(rows, self.rows)):
            for x in range(min(columns, self.columns)):
                m[x, y] = self[x, y]
        return m

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self.columns, self.rows, self._values) == (
            other.columns,
            other.rows,
            other._values,
        )

    __hash__ = None

    def __repr__(self):
        return f"Matrix({self.columns}, {self.rows}, {self._values!r})"

    def __str__(self):
        lines = []
        for y in range(self.rows):
            lines.append("|" + " ".join(str(self[x, y]) for x in range(self.columns)) + "|\n")
        return "".join(lines)

    def _combine(self, other, op: Callable) -> "Matrix":
        if isinstance(other, Matrix):
            if (self.columns, self.rows) != (other.columns, other.rows):
                raise ValueError("matrix sizes differ")
            return Matrix(
                self.columns, self.rows, (op(a, b) for a, b in zip(self._values, other._values))
            )
        if isinstance(other, Real):
            return Matrix(self.columns, self.rows, (op(a, other) for a in self._values))
        return NotImplemented

    def __add__(self, other):
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other):
        return self._combine(other, lambda a, b: a - b)

    def __mul__(self, other):
        if isinstance(other, Vector):
            if len(other) != self.columns:
                raise ValueError("vector size does not match matrix columns")
            return Vector(
                sum(self[i, y] * other[i] for i in range(self.columns))
                for y in range(self.rows)
            )
        if isinstance(other, Matrix):
            if self.columns != other.rows:
                raise ValueError("matrix sizes do not allow multiplication")
            return Matrix(
                other.columns,
                self.rows,
                (
                    sum(self[i, y] * other[x, i] for i in range(self.columns))
                    for y in range(self.rows)
                    for x in range(other.columns)
                ),
            )
        if isinstance(other, Real):
            return Matrix(self.columns, self.rows, (a * other for a in self._values))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Matrix(self.columns, self.rows, (other * a for a in self._values))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Real):
            return Matrix(self.columns, self.rows, (a / other for a in self._values))
        return NotImplemented

    def __neg__(self):
        return Matrix(self.columns, self.rows, (-a for a in self._values))

    def column(self, x):
        """Column ``x`` as a vector."""
        return Vector(self[x, y] for y in range(self.rows))

    def row(self, y):
        """Row ``y`` as a vector."""
        return Vector(self[x, y] for x in range(self.columns))


def _vec3(v: Iterable) -> Vector:
    v = v if isinstance(v, Vector) else Vector(v)
    if len(v) != 3:
        raise ValueError("a 3-component vector is required")
    return v


def dot(lhs, rhs):
    _check_same_size(lhs, rhs)
    return sum(a * b for a, b in zip(lhs, rhs))


def cross(lhs, rhs):
    a, b = _vec3(lhs), _vec3(rhs)
    return Vector(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length_square(v):
    return sum(e * e for e in v)


def length(v):
    return math.sqrt(length_square(v))


def normalized(v):
    return v / length(v)


def identity(size):
    m = Matrix(size, size)
    for i in range(size):
        m[i, i] = 1
    return m


def sub_matrix(matrix, excluded_x, excluded_y):
    """The matrix without column ``excluded_x`` and row ``excluded_y``."""
    return Matrix(
        matrix.columns - 1,
        matrix.rows - 1,
        (
            matrix[x, y]
            for y in range(matrix.rows)
            if y != excluded_y
            for x in range(matrix.columns)
            if x != excluded_x
        ),
    )


def _require_square(matrix):
    if not matrix.is_square:
        raise ValueError("a square matrix is required")


def determinant(matrix):
    _require_square(matrix)
    if matrix.columns == 1:
        return matrix[0, 0]
    d = 0
    for x in range(matrix.columns):
        term = matrix[x, 0] * determinant(sub_matrix(matrix, x, 0))
        d = d - term if x & 1 else d + term
    return d


def inverse(matrix):
    _require_square(matrix)
    size = matrix.columns
    if size == 1:
        return Matrix(1, 1, [1 / matrix[0, 0]])
    one_over_det = 1 / determinant(matrix)
    m = Matrix(size, size)
    for y in range(size):
        for x in range(size):
            value = determinant(sub_matrix(matrix, y, x)) * one_over_det
            m[x, y] = -value if (x ^ y) & 1 else value
    return m


def transpose(matrix):
    return Matrix(
        matrix.rows,
        matrix.columns,
        (matrix[y, x] for y in range(matrix.columns) for x in range(matrix.rows)),
    )


def scaling3x3(s):
    x, y, z = _vec3(s)
    return Matrix(3, 3, [x, 0, 0, 0, y, 0, 0, 0, z])


def scaling_inv3x3(s):
    x, y, z = _vec3(s)
    return scaling3x3(Vector(1 / x, 1 / y, 1 / z))


def rotation_x3x3(a):
    ca, sa = math.cos(a), math.sin(a)
    return Matrix(3, 3, [1, 0, 0, 0, ca, -sa, 0, sa, ca])


def rotation_y3x3(a):
    ca, sa = math.cos(a), math.sin(a)
    return Matrix(3, 3, [ca, 0, sa, 0, 1, 0, -sa, 0, ca])


def rotation_z3x3(a):
    ca, sa = math.cos(a), math.sin(a)
    return Matrix(3, 3, [ca, -sa, 0, sa, ca, 0, 0, 0, 1])


def rotation3x3(r):
    """Rotation from (pitch, yaw, roll) angles."""
    pitch, yaw, roll = _vec3(r)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    cr, sr = math.cos(roll), math.sin(roll)
    return Matrix(3, 3, [
        sy * sp * sr + cy * cr, sy * sp * cr - cy * sr, sy * cp,
        cp * sr, cp * cr, -sp,
        cy * sp * sr - sy * cr, cy * sp * cr + sy * sr, cy * cp,
    ])


def rotation_inv3x3(r):
    return transpose(rotation3x3(r))


def rotation_normal3x3(n, a):
    """Rotation by ``a`` around the unit vector ``n``."""
    nx, ny, nz = _vec3(n)
    ca, sa = math.cos(a), math.sin(a)
    t = 1 - ca
    return Matrix(3, 3, [
        ca + nx * nx * t, nx * ny * t - nz * sa, nx * nz * t + ny * sa,
        ny * nx * t + nz * sa, ca + ny * ny * t, ny * nz * t - nx * sa,
        nz * nx * t - ny * sa, nz * ny * t + nx * sa, ca + nz * nz * t,
    ])


def rotation_axis3x3(axis, a):
    return rotation_normal3x3(normalized(_vec3(axis)), a)


def rotation_camera3x3(r):
    pitch, yaw, roll = _vec3(r)
    sx, cx = math.sin(-pitch), math.cos(-pitch)
    sy, cy = math.sin(-yaw), math.cos(-yaw)
    sz, cz = math.sin(-roll), math.cos(-roll)
    return Matrix(3, 3, [
        cy * cz - sx * sy * sz, -cx * sz, sy * cz + sx * cy * sz,
        cy * sz + sx * sy * cz, cx * cz, sy * sz - sx * cy * cz,
        -cx * sy, sx, cx * cy,
    ])


def rotate_unit_vector3x3(source, target):
    """Rotation that turns the unit vector ``source`` into ``target``."""
    v = cross(source, target)
    t = 1 / (1 + dot(_vec3(source), _vec3(target)))
    return Matrix(3, 3, [
        1 - v[1] * v[1] * t - v[2] * v[2] * t, v[0] * v[1] * t - v[2], v[0] * v[2] * t + v[1],
        v[0] * v[1] * t + v[2], 1 - v[0] * v[0] * t - v[2] * v[2] * t, v[1] * v[2] * t - v[0],
        v[0] * v[2] * t - v[1], v[1] * v[2] * t + v[0], 1 - v[0] * v[0] * t - v[1] * v[1] * t,
    ])


def to_rotation_angles3x3(matrix):
    """Recover (pitch, yaw, roll) from a matrix built by :func:`rotation3x3`."""
    yaw = math.atan2(matrix[2, 0], matrix[2, 2])
    roll = math.atan2(matrix[0, 1], matrix[1, 1])
    if math.fmod(abs(yaw), math.pi / 2) < math.pi / 4:
        cos_pitch = matrix[2, 2] / math.cos(yaw)
    else:
        cos_pitch = matrix[2, 0] / math.sin(yaw)
    pitch = math.atan2(-matrix[2, 1], cos_pitch)
    return Vector(pitch, yaw, roll)


def to_camera_rotation3x3(matrix):
    return Vector(
        -math.asin(matrix[1, 2]),
        -math.atan2(-matrix[1, 0], matrix[1, 1]),
        -math.atan2(-matrix[0, 2], matrix[1, 2]),
    )


def scaling4x4(s):
    return scaling3x3(s).resized(4, 4)


def scaling_inv4x4(s):
    return scaling_inv3x3(s).resized(4, 4)


def translation4x4(t):
    x, y, z = _vec3(t)
    return Matrix(4, 4, [1, 0, 0, x, 0, 1, 0, y, 0, 0, 1, z, 0, 0, 0, 1])


def translation_inv4x4(t):
    return translation4x4(-_vec3(t))


def rotation_x4x4(a):
    return rotation_x3x3(a).resized(4, 4)


def rotation_y4x4(a):
    return rotation_y3x3(a).resized(4, 4)


def rotation_z4x4(a):
    return rotation_z3x3(a).resized(4, 4)


def rotation4x4(r):
    return rotation3x3(r).resized(4, 4)


def rotation_inv4x4(r):
    return rotation_inv3x3(r).resized(4, 4)


def rotation_normal4x4(n, a):
    return rotation_normal3x3(n, a).resized(4, 4)


def rotation_axis4x4(axis, a):
    return rotation_normal4x4(normalized(_vec3(axis)), a)


def _affine(m3, scale, t):
    sx, sy, sz = scale
    tx, ty, tz = t
    return Matrix(4, 4, [
        m3[0, 0] * sx, m3[1, 0] * sy, m3[2, 0] * sz, tx,
        m3[0, 1] * sx, m3[1, 1] * sy, m3[2, 1] * sz, ty,
        m3[0, 2] * sx, m3[1, 2] * sy, m3[2, 2] * sz, tz,
        0, 0, 0, 1,
    ])


def rotation_camera4x4(p, r):
    """View matrix of a camera at ``p`` with rotation ``r``."""
    m = rotation_camera3x3(r)
    v = m * _vec3(p)
    return _affine(m, (1, 1, 1), -v)


def scaling_rotation_translation4x4(s, r, t):
    return _affine(rotation3x3(r), _vec3(s), _vec3(t))


def rotation_translation4x4(r, t):
    return _affine(rotation3x3(r), (1, 1, 1), _vec3(t))


def scaling_translation4x4(s, t):
    sx, sy, sz = _vec3(s)
    tx, ty, tz = _vec3(t)
    return Matrix(4, 4, [sx, 0, 0, tx, 0, sy, 0, ty, 0, 0, sz, tz, 0, 0, 0, 1])


def scaling_rotation4x4(s, r):
    return _affine(rotation3x3(r), _vec3(s), (0, 0, 0))


def perspective_fov(fov, screen_aspect, screen_near, screen_depth):
    y_scale = 1 / math.tan(fov / 2)
    x_scale = y_scale / screen_aspect
    span = screen_depth - screen_near
    return Matrix(4, 4, [
        x_scale, 0, 0, 0,
        0, -y_scale, 0, 0,
        0, 0, screen_depth / span, -screen_depth * screen_near / span,
        0, 0, 1, 0,
    ])


def orthographic(view_width, view_height, screen_near, screen_depth):
    span = screen_depth - screen_near
    return Matrix(4, 4, [
        2 / view_width, 0, 0, 0,
        0, -2 / view_height, 0, 0,
        0, 0, 1 / span, -screen_near / span,
        0, 0, 0, 1,
    ])


def look_to(eye, direction, up):
    eye = _vec3(eye)
    zaxis = normalized(_vec3(direction))
    xaxis = normalized(cross(up, zaxis))
    yaxis = cross(zaxis, xaxis)
    return Matrix(4, 4, [
        xaxis[0], xaxis[1], xaxis[2], -dot(xaxis, eye),
        yaxis[0], yaxis[1], yaxis[2], -dot(yaxis, eye),
        zaxis[0], zaxis[1], zaxis[2], -dot(zaxis, eye),
        0, 0, 0, 1,
    ])


def look_at(eye, focus, up):
    return look_to(eye, _vec3(focus) - _vec3(eye), up)


def transform(matrix, v):
    """Apply a 4x4 matrix to a 3D point (w = 1) and drop the w component."""
    x, y, z = _vec3(v)
    return (matrix * Vector(x, y, z, 1)).resized(3)