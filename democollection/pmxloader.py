"""Reader for PMX 2.0 model files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional

from .common import get_folder_name
from .linalg import Vector, translation4x4, translation_inv4x4
from .modeltypes import Bone, MaterialData, ModelBufferFs, ModelData, Vertex


class PmxStatus(Enum):
    OK = "ok"
    FILE_NOT_FOUND = "file not found"
    SIGNATURE_ERROR = "not a PMX file"
    UNSUPPORTED_VERSION = "unsupported PMX version"
    HEADER_ERROR = "invalid header"
    VERTEX_ERROR = "invalid vertex data"
    MATERIAL_ERROR = "invalid material data"
    DATA_ERROR = "malformed or truncated data"


class PmxError(Exception):
    """Raised when a PMX file cannot be loaded; ``status`` tells why."""

    def __init__(self, status: PmxStatus, message: Optional[str] = None):
        super().__init__(message or status.value)
        self.status = status


_SIGNATURE = b"PMX "
_SUPPORTED_VERSION = 2.0

_TEXT_ENCODING = 0
_ADDITIONAL_VEC4_COUNT = 1
_VERTEX_INDEX_SIZE = 2
_TEXTURE_INDEX_SIZE = 3
_MATERIAL_INDEX_SIZE = 4
_BONE_INDEX_SIZE = 5
_MORPH_INDEX_SIZE = 6
_RIGID_BODY_INDEX_SIZE = 7
_DEFAULT_SETTINGS = (0, 0, 4, 4, 4, 4, 4, 4)

_BLEND_MODE_COUNT = 4
_TOON_TEXTURE_REFERENCE = 0
_TOON_INTERNAL_REFERENCE = 1

_INDEXED_TAIL_POSITION = 1 << 0
_INVERSE_KINEMATICS = 1 << 5
_INHERIT_ROTATION = 1 << 8
_INHERIT_TRANSLATION = 1 << 9
_FIXED_AXIS = 1 << 10
_LOCAL_COORDINATE = 1 << 11
_EXTERNAL_PARENT_DEFORM = 1 << 13


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise PmxError(PmxStatus.DATA_ERROR, "unexpected end of file")
    return data


def _unpack(stream: BinaryIO, fmt: str) -> tuple:
    layout = struct.Struct("<" + fmt)
    return layout.unpack(_read_exact(stream, layout.size))


def _u8(stream):
    return _unpack(stream, "B")[0]


def _u16(stream):
    return _unpack(stream, "H")[0]


def _i32(stream):
    return _unpack(stream, "i")[0]


def _u32(stream):
    return _unpack(stream, "I")[0]


def _f32(stream):
    return _unpack(stream, "f")[0]


def _vec(stream, size):
    return Vector(_unpack(stream, f"{size}f"))


@dataclass
class PmxHeader:
    """File settings and model names; reads the variable-size fields that depend on them."""

    settings: tuple = _DEFAULT_SETTINGS
    jp_model_name: str = ""
    en_model_name: str = ""
    jp_comments: str = ""
    en_comments: str = ""

    @classmethod
    def read(cls, stream):
        if stream.read(len(_SIGNATURE)) != _SIGNATURE:
            raise PmxError(PmxStatus.SIGNATURE_ERROR)
        if _f32(stream) != _SUPPORTED_VERSION:
            raise PmxError(PmxStatus.UNSUPPORTED_VERSION)

        count = _u8(stream)
        values = list(_DEFAULT_SETTINGS)
        given = _read_exact(stream, min(len(values), count))
        values[: len(given)] = given
        if values[_TEXT_ENCODING] > 1 or values[_ADDITIONAL_VEC4_COUNT] > 4:
            raise PmxError(PmxStatus.HEADER_ERROR)
        if any(size not in (1, 2, 4) for size in values[_VERTEX_INDEX_SIZE:]):
            raise PmxError(PmxStatus.HEADER_ERROR)

        header = cls(settings=tuple(values))
        header.jp_model_name = header.read_text(stream)
        header.en_model_name = header.read_text(stream)
        header.jp_comments = header.read_text(stream)
        header.en_comments = header.read_text(stream)
        return header

    @property
    def additional_vec4_count(self):
        return self.settings[_ADDITIONAL_VEC4_COUNT]

    @property
    def bone_index_size(self):
        return self.settings[_BONE_INDEX_SIZE]

    def read_text(self, stream):
        """A length-prefixed string in the file's text encoding."""
        length = _i32(stream)
        if length < 0:
            raise PmxError(PmxStatus.DATA_ERROR, "negative text length")
        data = _read_exact(stream, length)
        encoding = "utf-16-le" if self.settings[_TEXT_ENCODING] == 0 else "utf-8"
        return data.decode(encoding, errors="replace")

    def _read_index(self, stream, slot, signed=None):
        size = self.settings[slot]
        if signed is None:
            signed = size == 4
        return int.from_bytes(_read_exact(stream, size), "little", signed=signed)

    def read_vertex_index(self, stream):
        return self._read_index(stream, _VERTEX_INDEX_SIZE)

    def read_texture_index(self, stream):
        return self._read_index(stream, _TEXTURE_INDEX_SIZE)

    def read_material_index(self, stream):
        return self._read_index(stream, _MATERIAL_INDEX_SIZE)

    def read_bone_index(self, stream):
        """Bone indices are signed at every size, so -1 means "none"."""
        return self._read_index(stream, _BONE_INDEX_SIZE, signed=True)

    def read_morph_index(self, stream):
        return self._read_index(stream, _MORPH_INDEX_SIZE)

    def read_rigid_body_index(self, stream):
        return self._read_index(stream, _RIGID_BODY_INDEX_SIZE)


@dataclass
class PmxMaterial:
    jp_name: str = ""
    en_name: str = ""
    diffuse_color: Vector = field(default_factory=lambda: Vector.filled(4, 0.0))
    specular_color: Vector = field(default_factory=lambda: Vector.filled(3, 0.0))
    specular_strength: float = 0.0
    ambient_color: Vector = field(default_factory=lambda: Vector.filled(3, 0.0))
    drawing_flags: int = 0
    edge_color: Vector = field(default_factory=lambda: Vector.filled(4, 0.0))
    edge_scale: float = 0.0
    texture_index: int = 0
    environment_index: int = 0
    environment_blend_mode: int = 0
    toon_reference: int = 0
    toon_value: int = 0
    meta_data: str = ""
    surface_count: int = 0

    @classmethod
    def read(cls, stream, header):
        m = cls()
        m.jp_name = header.read_text(stream)
        m.en_name = header.read_text(stream)
        m.diffuse_color = _vec(stream, 4)
        m.specular_color = _vec(stream, 3)
        m.specular_strength = _f32(stream)
        m.ambient_color = _vec(stream, 3)
        m.drawing_flags = _u8(stream)
        m.edge_color = _vec(stream, 4)
        m.edge_scale = _f32(stream)
        m.texture_index = header.read_texture_index(stream)
        m.environment_index = header.read_texture_index(stream)
        m.environment_blend_mode = _u8(stream)
        if m.environment_blend_mode >= _BLEND_MODE_COUNT:
            raise PmxError(PmxStatus.MATERIAL_ERROR, "unknown environment blend mode")
        m.toon_reference = _u8(stream)
        if m.toon_reference == _TOON_TEXTURE_REFERENCE:
            m.toon_value = header.read_texture_index(stream)
        elif m.toon_reference == _TOON_INTERNAL_REFERENCE:
            m.toon_value = _u8(stream)
        else:
            raise PmxError(PmxStatus.MATERIAL_ERROR, "unknown toon reference")
        m.meta_data = header.read_text(stream)
        m.surface_count = _i32(stream)
        return m


@dataclass
class PmxBone:
    """A bone record; optional parts are None when the flags leave them out.

    ``ik_links`` holds ``(bone_index, limits)`` pairs where ``limits`` is
    ``(min_angle, max_angle)`` or None.
    """

    jp_name: str = ""
    en_name: str = ""
    position: Vector = field(default_factory=lambda: Vector.filled(3, 0.0))
    parent_index: int = -1
    layer: int = 0
    flags: int = 0
    tail_position: Optional[Vector] = None
    tail_bone_index: Optional[int] = None
    inherit_parent_index: Optional[int] = None
    inherit_weight: Optional[float] = None
    fixed_axis: Optional[Vector] = None
    local_x: Optional[Vector] = None
    local_z: Optional[Vector] = None
    external_parent_index: Optional[int] = None
    ik_target_index: Optional[int] = None
    ik_loop_count: Optional[int] = None
    ik_limit_radian: Optional[float] = None
    ik_links: list = field(default_factory=list)

    @classmethod
    def read(cls, stream, header):
        b = cls()
        b.jp_name = header.read_text(stream)
        b.en_name = header.read_text(stream)
        b.position = _vec(stream, 3)
        b.parent_index = header.read_bone_index(stream)
        b.layer = _i32(stream)
        b.flags = _u16(stream)
        if b.flags & _INDEXED_TAIL_POSITION:
            b.tail_bone_index = header.read_bone_index(stream)
        else:
            b.tail_position = _vec(stream, 3)
        if b.flags & (_INHERIT_ROTATION | _INHERIT_TRANSLATION):
            b.inherit_parent_index = header.read_bone_index(stream)
            b.inherit_weight = _f32(stream)
        if b.flags & _FIXED_AXIS:
            b.fixed_axis = _vec(stream, 3)
        if b.flags & _LOCAL_COORDINATE:
            b.local_x = _vec(stream, 3)
            b.local_z = _vec(stream, 3)
        if b.flags & _EXTERNAL_PARENT_DEFORM:
            b.external_parent_index = header.read_bone_index(stream)
        if b.flags & _INVERSE_KINEMATICS:
            b.ik_target_index = header.read_bone_index(stream)
            b.ik_loop_count = _i32(stream)
            b.ik_limit_radian = _f32(stream)
            for _ in range(_u32(stream)):
                bone_index = header.read_bone_index(stream)
                limits = (_vec(stream, 3), _vec(stream, 3)) if _u8(stream) else None
                b.ik_links.append((bone_index, limits))
        return b


def _read_vertex_bones(stream, header, vertex):
    size = header.bone_index_size

    def ids(count):
        return [int.from_bytes(_read_exact(stream, size), "little") for _ in range(count)]

    deform = _u8(stream)
    if deform == 0:
        indices, weights = ids(1), [1.0]
    elif deform in (1, 3):
        indices = ids(2)
        w0 = _f32(stream)
        weights = [w0, 1.0 - w0]
        if deform == 3:
            _read_exact(stream, 3 * 3 * 4)  # SDEF C, R0, R1
    elif deform in (2, 4):
        indices = ids(4)
        weights = list(_unpack(stream, "4f"))
    else:
        raise PmxError(PmxStatus.VERTEX_ERROR, f"unknown deform type {deform}")
    vertex.bone_indices = indices + [0] * (4 - len(indices))
    vertex.bone_weights = weights + [0.0] * (4 - len(weights))


def _read_vertices(stream, header):
    vertices = []
    for _ in range(_u32(stream)):
        v = Vertex(position=_vec(stream, 3), normal=_vec(stream, 3), texcoord=_vec(stream, 2))
        _read_exact(stream, 16 * header.additional_vec4_count)
        _read_vertex_bones(stream, header, v)
        _read_exact(stream, 4)  # edge scale
        vertices.append(v)
    return vertices


def _read_texture_names(stream, header, base_folder):
    return [
        (base_folder + header.read_text(stream)).replace("\\", "/")
        for _ in range(_u32(stream))
    ]


def _read_materials(stream, header, texture_names):
    materials = []
    running_index = 0
    for _ in range(_u32(stream)):
        m = PmxMaterial.read(stream, header)
        idx = m.texture_index
        materials.append(
            MaterialData(
                first_index=running_index,
                index_count=m.surface_count,
                data=ModelBufferFs(
                    diffuse_color=m.diffuse_color,
                    specular_color=m.specular_color,
                    specular_power=m.specular_strength,
                ),
                texture_name=texture_names[idx] if 0 <= idx < len(texture_names) else "",
            )
        )
        running_index += m.surface_count
    return materials


def _read_skeleton(stream, header):
    records = [PmxBone.read(stream, header) for _ in range(_u32(stream))]
    order = sorted(range(len(records)), key=lambda i: records[i].parent_index)
    skeleton = [Bone() for _ in order]
    slot_of = {original: slot for slot, original in enumerate(order)}
    done = set()

    def build(original, chain):
        bone = skeleton[slot_of[original]]
        if original in done:
            return bone
        if original in chain:
            raise PmxError(PmxStatus.DATA_ERROR, "bone hierarchy contains a cycle")
        record = records[original]
        bone.to_local_transform = translation_inv4x4(record.position)
        bone.to_global_transform = translation4x4(record.position)
        if 0 <= record.parent_index < len(records):
            parent = build(record.parent_index, chain | {original})
            bone.parent = parent
            bone.to_local_transform = parent.to_local_transform * bone.to_local_transform
            bone.to_global_transform = bone.to_global_transform * parent.to_global_transform
        done.add(original)
        return bone

    for original in order:
        build(original, frozenset())
    return skeleton


def load_pmx(filename, model_data=None):
    """Load a PMX file into ``model_data`` (a new one if None) and return it."""
    try:
        stream = open(filename, "rb")
    except OSError as exc:
        raise PmxError(PmxStatus.FILE_NOT_FOUND, f"cannot open {filename}") from exc
    with stream:
        header = PmxHeader.read(stream)
        vertices = _read_vertices(stream, header)
        indices = [header.read_vertex_index(stream) for _ in range(_u32(stream))]
        texture_names = _read_texture_names(stream, header, get_folder_name(str(filename)))
        materials = _read_materials(stream, header, texture_names)
        skeleton = _read_skeleton(stream, header)

    target = ModelData() if model_data is None else model_data
    target.vertices = vertices
    target.indices = indices
    target.materials = materials
    target.skeleton = skeleton
    return target