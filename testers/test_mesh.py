# -*- coding: utf-8 -*-
import numpy as np

from wavefront3d import GPU_LOAD_OPTIONS, LoadOptions, load_from_buffers
from wavefront3d.mesh import NO_MATERIAL, Mesh, merge_corners, reorder_by_material
from wavefront3d.mesh.reorder import material_permutation
from wavefront3d.parser.faces import CornerIndex


def make_polygon_mesh():
    # треугольник, квад, треугольник
    return Mesh(
        np.zeros((10, 3), dtype=np.float32),
        indices=np.arange(10),
        face_arities=[3, 4, 3],
        material_ids=[1, 0, 1],
        smoothing_groups=[5, 6, 7],
        position_indices=np.arange(10) + 100,
    )


def test_merge_corners_shares_identical_triples():
    a, b = CornerIndex(0, 1, None), CornerIndex(1, 1, None)
    indices, unique = merge_corners([a, b, a, CornerIndex(0, None, None)])
    assert indices == [0, 1, 0, 2]
    assert unique == [a, b, CornerIndex(0)]


def test_single_index_merges_and_per_corner_keeps_separate(two_quads_obj):
    merged = load_from_buffers(two_quads_obj, options=GPU_LOAD_OPTIONS.with_changes(granularity="object"))
    mesh = merged.meshes[0]
    assert mesh.num_vertices == 8
    assert mesh.indices.tolist() == [0, 1, 2, 0, 2, 3, 4, 5, 6, 4, 6, 7]
    assert mesh.normals.shape == (8, 3)
    assert mesh.position_indices.size == 0

    separate = load_from_buffers(two_quads_obj, options=LoadOptions(triangulate=True, granularity="object"))
    mesh = separate.meshes[0]
    assert mesh.num_vertices == 12
    assert mesh.indices.tolist() == list(range(12))
    assert mesh.position_indices.tolist() == [0, 1, 2, 0, 2, 3, 1, 4, 5, 1, 5, 2]


def test_buffers_stay_parallel(two_quads_obj):
    for options in (LoadOptions(), GPU_LOAD_OPTIONS):
        for mesh in load_from_buffers(two_quads_obj, options=options).meshes:
            n = mesh.num_vertices
            assert mesh.normals.shape[0] == n
            assert mesh.texcoords.shape[0] == n
            assert int(mesh.indices.max()) < n


def test_arity_invariants(two_quads_obj):
    polygons = load_from_buffers(two_quads_obj).meshes[0]
    assert int(polygons.face_arities.sum()) == polygons.indices.size
    triangles = load_from_buffers(two_quads_obj, options=LoadOptions(triangulate=True)).meshes[0]
    assert triangles.indices.size % 3 == 0
    assert triangles.num_primitives == 2


def test_reorder_variable_arity():
    mesh = reorder_by_material(make_polygon_mesh())
    assert mesh.indices.tolist() == [3, 4, 5, 6, 0, 1, 2, 7, 8, 9]
    assert mesh.position_indices.tolist() == [103, 104, 105, 106, 100, 101, 102, 107, 108, 109]
    assert mesh.face_arities.tolist() == [4, 3, 3]
    assert mesh.material_ids.tolist() == [0, 1, 1]
    assert mesh.smoothing_groups.tolist() == [6, 5, 7]


def test_reorder_triangles_no_material_first():
    mesh = Mesh(np.zeros((9, 3)), indices=np.arange(9), material_ids=[2, NO_MATERIAL, 2],
                triangulated=True)
    reorder_by_material(mesh)
    assert mesh.indices.tolist() == [3, 4, 5, 0, 1, 2, 6, 7, 8]
    assert mesh.material_ids.tolist() == [NO_MATERIAL, 2, 2]


def test_reorder_is_stable():
    order = material_permutation(np.array([1, 0, 1, 0, 1], dtype=np.int32))
    assert order.tolist() == [1, 3, 0, 2, 4]


def test_reorder_through_loader(dict_resolver, basic_mtl):
    text = ("mtllib basic.mtl\nv 0 0 0\nv 1 0 0\nv 0 1 0\n"
            "usemtl green\nf 2 3 1\nusemtl red\nf 1 2 3\nusemtl green\nf 3 2 1\n")
    options = LoadOptions(reorder_by_material=True, granularity="single")
    result = load_from_buffers(text, dict_resolver({"basic.mtl": basic_mtl}), options)
    mesh = result.meshes[0]
    assert mesh.material_ids.tolist() == [0, 1, 1]
    assert mesh.position_indices.tolist() == [0, 1, 2, 1, 2, 0, 2, 1, 0]
    assert mesh.material_name is None
    assert mesh.material_id is None


def test_primitive_iteration_and_bounds():
    mesh = make_polygon_mesh()
    assert mesh.primitive_offsets().tolist() == [0, 3, 7]
    assert [p.tolist() for p in mesh.iter_primitives()][1] == [3, 4, 5, 6]
    assert mesh.primitive_arity is None

    unit = Mesh([[1, 0, 0], [-1, 0, 0]], indices=[0, 1], face_arities=[2], material_ids=[0])
    centre, radius = unit.bounding_sphere
    np.testing.assert_allclose(centre, [0, 0, 0])
    assert radius == 1.0
    assert unit.material_id == 0
    assert Mesh(None).bounding_sphere[1] == 0.0


SHARED_CORNERS_OBJ = """\
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vt 0 0
vn 0 0 1
f 1/1/1 2/1/1 3/1/1
f 1/1/1 3/1/1 4/1/1
"""


def test_faces_reusing_corners_share_vertices_only_when_merging():
    merged = load_from_buffers(SHARED_CORNERS_OBJ, options=LoadOptions(single_index=True)).meshes[0]
    assert merged.num_vertices == 4
    assert merged.indices.tolist() == [0, 1, 2, 0, 2, 3]
    assert merged.normals.shape == (4, 3)

    separate = load_from_buffers(SHARED_CORNERS_OBJ).meshes[0]
    assert separate.num_vertices == 6
    assert separate.indices.tolist() == list(range(6))
    assert separate.position_indices.tolist() == [0, 1, 2, 0, 2, 3]
