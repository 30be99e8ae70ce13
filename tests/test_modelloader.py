import math
import struct

import pytest

from democollection.linalg import Vector, identity, length, rotation_y4x4, translation4x4
from democollection.modelloader import ModelLoader
from democollection.pmxloader import PmxError, PmxStatus

TOL = 1e-9


def _text(s):
    data = s.encode("utf-16-le")
    return struct.pack("<i", len(data)) + data


def _minimal_pmx(with_bone=True):
    out = b"PMX " + struct.pack("<f", 2.0) + bytes([8, 0, 0, 4, 4, 4, 4, 4, 4])
    out += _text("model") + _text("model") + _text("") + _text("")
    out += struct.pack("<I", 1)
    out += struct.pack("<3f3f2f", 1.0, 2.0, 3.0, 0.0, 1.0, 0.0, 0.25, 0.75)
    out += bytes([0]) + struct.pack("<i", 0) + struct.pack("<f", 1.0)
    out += struct.pack("<I", 3) + struct.pack("<3i", 0, 0, 0)
    out += struct.pack("<I", 0)  # textures
    out += struct.pack("<I", 0)  # materials
    if with_bone:
        out += struct.pack("<I", 1)
        out += _text("root") + _text("root")
        out += struct.pack("<3f", 1.0, 2.0, 3.0)
        out += struct.pack("<i", -1) + struct.pack("<i", 0) + struct.pack("<H", 0)
        out += struct.pack("<3f", 0.0, 0.0, 0.0)
    else:
        out += struct.pack("<I", 0)
    return out


def test_cube_counts_and_first_indices():
    ml = ModelLoader()
    ml.make_cube((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
    assert len(ml.vertices()) == 24
    assert len(ml.indices()) == 36
    assert ml.indices()[:6] == [0, 1, 2, 2, 3, 0]
    assert ml.indices()[-6:] == [20, 21, 22, 22, 23, 20]


def test_cube_positions_lie_on_face_of_normal():
    ml = ModelLoader()
    c1, c2 = (-1.0, -2.0, -3.0), (1.0, 2.0, 3.0)
    ml.make_cube(c1, c2)
    for v in ml.vertices():
        assert math.isclose(length(v.normal), 1.0)
        axis = next(i for i in range(3) if v.normal[i] != 0)
        expected = c2[axis] if v.normal[axis] > 0 else c1[axis]
        assert v.position[axis] == expected


def test_cube_top_vertex_values():
    ml = ModelLoader()
    ml.make_cube((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    top = ml.vertices()[0]
    assert top.position == Vector(0.0, 1.0, 0.0)
    assert top.texcoord == Vector(0.0, 0.0)
    assert top.normal == Vector(0.0, 1.0, 0.0)


def test_clear_empties_geometry():
    ml = ModelLoader()
    ml.make_cube((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    ml.clear()
    assert ml.vertices() == []
    assert ml.indices() == []


def test_plain_counts_and_corners():
    ml = ModelLoader()
    ml.make_plain((-2.0, -4.0), (2.0, 4.0), 1.5, (3, 2))
    verts = ml.vertices()
    assert len(verts) == (3 + 1) * (2 + 1)
    assert len(ml.indices()) == 6 * 3 * 2
    assert verts[0].position == Vector(-2.0, 1.5, -4.0)
    assert verts[-1].position == Vector(2.0, 1.5, 4.0)
    assert verts[-1].texcoord == Vector(1.0, 1.0)
    assert all(0 <= i < len(verts) for i in ml.indices())
    assert all(v.normal == Vector(0.0, 1.0, 0.0) for v in verts)


def test_plain_rejects_zero_subdivisions():
    ml = ModelLoader()
    with pytest.raises(ValueError):
        ml.make_plain((0.0, 0.0), (1.0, 1.0), 0.0, (0, 2))


@pytest.mark.parametrize("lat,lon", [(3, 2), (5, 8), (10, 12)])
def test_sphere_counts_and_index_range(lat, lon):
    ml = ModelLoader()
    ml.make_uv_sphere((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), lat, lon)
    verts = ml.vertices()
    assert len(verts) == (lat - 2) * (lon + 1) + 2
    assert len(ml.indices()) == (lat - 2) * lon * 6
    assert all(0 <= i < len(verts) for i in ml.indices())
    assert set(ml.indices()) == set(range(len(verts)))


@pytest.mark.parametrize("lat,lon", [(2, 5), (5, 1)])
def test_sphere_too_few_segments_clears(lat, lon):
    ml = ModelLoader()
    ml.make_cube((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    ml.make_uv_sphere((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), lat, lon)
    assert ml.vertices() == []
    assert ml.indices() == []


def test_transform_translation_moves_positions_keeps_normals():
    ml = ModelLoader()
    ml.make_cube((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    before = [(list(v.position), list(v.normal)) for v in ml.vertices()]
    offset = (5.0, -1.0, 2.0)
    ml.transform(translation4x4(Vector(*offset)))
    after = ml.vertices()
    assert len(after) == len(before)
    for (pos, normal), v in zip(before, after):
        assert list(v.position) == pytest.approx([p + o for p, o in zip(pos, offset)], abs=TOL)
        assert list(v.normal) == pytest.approx(normal, abs=TOL)


def test_transform_rotation_rotates_normals():
    ml = ModelLoader()
    ml.make_cube((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
    rot = rotation_y4x4(math.pi / 3)
    ml.transform(rot)
    for v in ml.vertices():
        assert math.isclose(length(v.normal), 1.0, rel_tol=1e-9)
        # each position lies on the plane of its face at distance 1 from the centre
        assert math.isclose(sum(a * b for a, b in zip(v.position, v.normal)), 1.0, rel_tol=1e-9)


def test_transform_identity_is_noop():
    ml = ModelLoader()
    ml.make_uv_sphere((0.0, 0.0, 0.0), (1.0, 2.0, 3.0), 4, 4)
    before = [(list(v.position), list(v.normal)) for v in ml.vertices()]
    ml.transform(identity(4))
    after = ml.vertices()
    assert len(after) == len(before)
    for (pos, normal), v in zip(before, after):
        assert list(v.position) == pytest.approx(pos, abs=TOL)
        assert list(v.normal) == pytest.approx(normal, abs=TOL)


def test_load_pmx_reads_file(tmp_path):
    path = tmp_path / "model.pmx"
    path.write_bytes(_minimal_pmx())
    ml = ModelLoader()
    ml.load_pmx(str(path))
    assert len(ml.vertices()) == 1
    assert ml.vertices()[0].position == Vector(1.0, 2.0, 3.0)
    assert ml.vertices()[0].texcoord == Vector(0.25, 0.75)
    assert ml.indices() == [0, 0, 0]
    assert ml.materials() == []
    assert len(ml.skeleton()) == 1
    assert ml.skeleton()[0].to_global_transform == translation4x4(Vector(1.0, 2.0, 3.0))
    assert ml.skeleton()[0].parent is None


def test_load_pmx_missing_file_raises(tmp_path):
    ml = ModelLoader()
    with pytest.raises(PmxError) as info:
        ml.load_pmx(str(tmp_path / "absent.pmx"))
    assert info.value.status is PmxStatus.FILE_NOT_FOUND


def test_load_pmx_bad_signature_raises(tmp_path):
    path = tmp_path / "bad.pmx"
    path.write_bytes(b"XYZ " + _minimal_pmx()[4:])
    ml = ModelLoader()
    with pytest.raises(PmxError) as info:
        ml.load_pmx(str(path))
    assert info.value.status is PmxStatus.SIGNATURE_ERROR