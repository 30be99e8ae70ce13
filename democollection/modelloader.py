"""Builds model geometry: simple primitives or models read from PMX files."""

from __future__ import annotations

import math

from .linalg import Vector, determinant, inverse, normalized, transform, transpose
from .modeltypes import ModelData, Vertex
from .pmxloader import load_pmx


def _vertex(position, texcoord, normal):
    return Vertex(position=Vector(position), texcoord=Vector(texcoord), normal=Vector(normal))


class ModelLoader:
    """Holds the vertices, indices, materials and skeleton of one model."""

    def __init__(self):
        self._data = ModelData()

    def make_cube(self, corner1, corner2):
        """An axis-aligned box between two opposite corners, four vertices per face."""
        x1, y1, z1 = corner1
        x2, y2, z2 = corner2
        faces = [
            # top
            ((0.0, 1.0, 0.0), [(x1, y2, z1), (x1, y2, z2), (x2, y2, z2), (x2, y2, z1)]),
            # bottom
            ((0.0, -1.0, 0.0), [(x1, y1, z2), (x1, y1, z1), (x2, y1, z1), (x2, y1, z2)]),
            # front
            ((0.0, 0.0, -1.0), [(x1, y1, z1), (x1, y2, z1), (x2, y2, z1), (x2, y1, z1)]),
            # back
            ((0.0, 0.0, 1.0), [(x2, y1, z2), (x2, y2, z2), (x1, y2, z2), (x1, y1, z2)]),
            # left
            ((-1.0, 0.0, 0.0), [(x1, y1, z2), (x1, y2, z2), (x1, y2, z1), (x1, y1, z1)]),
            # right
            ((1.0, 0.0, 0.0), [(x2, y1, z1), (x2, y2, z1), (x2, y2, z2), (x2, y1, z2)]),
        ]
        texcoords = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]
        self._data.vertices = [
            _vertex(corner, uv, normal)
            for normal, corners in faces
            for corner, uv in zip(corners, texcoords)
        ]
        self._data.indices = [
            base + offset
            for base in range(0, 24, 4)
            for offset in (0, 1, 2, 2, 3, 0)
        ]

    def make_plain(self, corner1, corner2, plain_y, subdivisions):
        """A flat grid at height ``plain_y`` facing up, split into ``subdivisions`` cells."""
        sub_x, sub_y = (int(s) for s in subdivisions)
        if sub_x <= 0 or sub_y <= 0:
            raise ValueError("subdivisions must be positive")
        x1, z1 = corner1
        x2, z2 = corner2
        size_x, size_z = x2 - x1, z2 - z1

        vertices = []
        for y in range(sub_y + 1):
            for x in range(sub_x + 1):
                u, v = x / sub_x, y / sub_y
                vertices.append(
                    _vertex((x1 + u * size_x, plain_y, z1 + v * size_z), (u, v), (0.0, 1.0, 0.0))
                )

        stride = sub_x + 1
        indices = []
        for y in range(sub_y):
            for x in range(sub_x):
                indices += [
                    stride * (y + 1) + x,
                    stride * y + (x + 1),
                    stride * y + x,
                    stride * (y + 1) + (x + 1),
                    stride * y + (x + 1),
                    stride * (y + 1) + x,
                ]
        self._data.vertices = vertices
        self._data.indices = indices

    def make_uv_sphere(self, center, radius, latitude_count, longitude_count):
        """An ellipsoid of latitude rings and longitude segments; too few of either clears."""
        if latitude_count < 3 or longitude_count < 2:
            self.clear()
            return

        center = Vector(center)
        radius = Vector(radius)
        normal_scaler = normalized(Vector.filled(3, 1.0) / radius)

        vertices = [_vertex(center + Vector(0.0, radius[1], 0.0), (0.5, 0.0), (0.0, 1.0, 0.0))]
        for v in range(1, latitude_count - 1):
            for u in range(longitude_count + 1):
                su = u / longitude_count
                sv = v / (latitude_count - 1)
                a = sv * math.pi
                b = su * math.pi * 2.0
                sina, cosa = math.sin(a), math.cos(a)
                sinb, cosb = math.sin(b), math.cos(b)
                normal = Vector(-sinb * sina, cosa, cosb * sina)
                vertices.append(
                    Vertex(
                        position=center + normal * radius,
                        texcoord=Vector(su, sv),
                        normal=normal * normal_scaler,
                    )
                )
        vertices.append(
            _vertex(center + Vector(0.0, -radius[1], 0.0), (0.5, 1.0), (0.0, -1.0, 0.0))
        )

        stride = longitude_count + 1
        indices = []
        for u in range(longitude_count):
            indices += [0, 2 + u, 1 + u]
        for v in range(1, latitude_count - 2):
            for u in range(longitude_count):
                indices += [
                    stride * v + u + 1,
                    stride * (v - 1) + u + 1,
                    stride * (v - 1) + (u + 1) + 1,
                    stride * (v - 1) + (u + 1) + 1,
                    stride * v + (u + 1) + 1,
                    stride * v + u + 1,
                ]
        index_offset = 1 + (latitude_count - 3) * stride
        last_index = len(vertices) - 1
        for _ in range(longitude_count):
            indices += [index_offset, index_offset + 1, last_index]
            index_offset += 1

        self._data.vertices = vertices
        self._data.indices = indices

    def load_pmx(self, filename):
        """Replace the model with the contents of a PMX file.

        Raises :class:`~democollection.pmxloader.PmxError` when the file cannot be loaded.
        """
        load_pmx(filename, self._data)

    def clear(self):
        """Drop vertices and indices."""
        self._data.clear()

    def transform(self, matrix):
        """Apply a 4x4 matrix to every position and the matching normal matrix to normals."""
        normal_mat = transpose(inverse(matrix.resized(3, 3)))
        normal_mat = normal_mat / determinant(normal_mat)
        for v in self._data.vertices:
            v.position = transform(matrix, v.position)
            v.normal = normal_mat * v.normal

    def vertices(self):
        return self._data.vertices

    def indices(self):
        return self._data.indices

    def materials(self):
        return self._data.materials

    def skeleton(self):
        return self._data.skeleton