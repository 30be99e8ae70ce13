"""Plain data types that describe a loaded model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .linalg import Matrix, Vector, identity


def _zeros(size: int) -> Vector:
    return Vector.filled(size, 0.0)


@dataclass
class Vertex:
    """One mesh vertex with up to four bone influences."""

    position: Vector = field(default_factory=lambda: _zeros(3))
    texcoord: Vector = field(default_factory=lambda: _zeros(2))
    normal: Vector = field(default_factory=lambda: _zeros(3))
    bone_weights: list = field(default_factory=lambda: [0.0] * 4)
    bone_indices: list = field(default_factory=lambda: [0] * 4)


@dataclass
class Bone:
    """A skeleton bone with its bind-pose transforms."""

    to_local_transform: Matrix = field(default_factory=lambda: identity(4))
    bone_transform: Matrix = field(default_factory=lambda: identity(4))
    to_global_transform: Matrix = field(default_factory=lambda: identity(4))
    parent: Optional["Bone"] = None


@dataclass
class ModelBufferFs:
    """Per-material shading parameters."""

    diffuse_color: Vector = field(default_factory=lambda: _zeros(4))
    specular_color: Vector = field(default_factory=lambda: _zeros(3))
    specular_power: float = 0.0


@dataclass
class MaterialData:
    """A range of indices drawn with one material and texture."""

    first_index: int = 0
    index_count: int = 0
    data: ModelBufferFs = field(default_factory=ModelBufferFs)
    texture_name: str = ""


@dataclass
class ModelData:
    """Geometry, materials and skeleton of a model."""

    vertices: list = field(default_factory=list)
    indices: list = field(default_factory=list)
    materials: list = field(default_factory=list)
    skeleton: list = field(default_factory=list)

    def clear(self):
        """Drop the geometry: vertices and indices."""
        self.vertices.clear()
        self.indices.clear()