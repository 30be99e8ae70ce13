from democollection.linalg import Vector, identity
from democollection.modeltypes import (
    Bone,
    MaterialData,
    ModelBufferFs,
    ModelData,
    Vertex,
)


def test_vertices_do_not_share_default_lists():
    first, second = Vertex(), Vertex()
    first.bone_weights[0] = 1.0
    first.position[0] = 5.0
    assert second.bone_weights == [0.0, 0.0, 0.0, 0.0]
    assert second.position == Vector(0.0, 0.0, 0.0)


def test_vertex_has_four_bone_slots():
    v = Vertex()
    assert len(v.bone_weights) == len(v.bone_indices) == 4
    assert len(v.texcoord) == 2


def test_bone_starts_as_identity_without_parent():
    bone = Bone()
    assert bone.to_local_transform == identity(4)
    assert bone.to_global_transform == identity(4)
    assert bone.parent is None


def test_bone_matrices_are_independent():
    first, second = Bone(), Bone()
    first.bone_transform[3, 0] = 2.0
    assert second.bone_transform == identity(4)


def test_material_data_default_buffer_is_fresh():
    first, second = MaterialData(), MaterialData()
    first.data.diffuse_color[0] = 1.0
    assert second.data.diffuse_color == Vector(0.0, 0.0, 0.0, 0.0)
    assert second.data == ModelBufferFs()


def test_clear_drops_geometry_only():
    data = ModelData(
        vertices=[Vertex()],
        indices=[0, 0, 0],
        materials=[MaterialData(index_count=3)],
        skeleton=[Bone()],
    )
    data.clear()
    assert data.vertices == []
    assert data.indices == []
    assert data.materials == [MaterialData(index_count=3)]
    assert len(data.skeleton) == 1