import math

import pytest

from rastergrid.objfile import ObjMesh, load_obj, parse_obj

TRIANGLE = [
    "# a single triangle",
    "v 0 0 0",
    "v 1 0 0",
    "v 0 1 0",
    "",
    "f 1 2 3",
]


def test_parse_triangle():
    mesh = parse_obj(TRIANGLE)
    assert mesh.vertices == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert mesh.indices == [(0, 1, 2)]
    assert mesh.normals == [(0.0, 0.0, 1.0)] * 3


def test_face_with_slashes_uses_vertex_index():
    mesh = parse_obj(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1/4/7 2/5/8 3/6/9"])
    assert mesh.indices == [(0, 1, 2)]


def test_non_triangle_faces_skipped():
    mesh = parse_obj(TRIANGLE + ["v 1 1 0", "f 1 2 4 3"])
    assert mesh.indices == [(0, 1, 2)]
    assert len(mesh.vertices) == 4


def test_normals_are_unit_or_zero():
    mesh = parse_obj(
        ["v 0 0 0", "v 2 0 0", "v 0 3 1", "v 5 5 5", "f 1 2 3", "vn 0 0 1"]
    )
    assert len(mesh.normals) == len(mesh.vertices)
    for n in mesh.normals[:3]:
        assert math.isclose(math.sqrt(sum(c * c for c in n)), 1.0)
    assert mesh.normals[3] == (0.0, 0.0, 0.0)


def test_normalize_scales_to_unit_extent():
    mesh = parse_obj(["v 0 0 0", "v 4 2 0", "v 2 4 1", "f 1 2 3"], normalize=True)
    for axis in range(3):
        values = [v[axis] for v in mesh.vertices]
        assert math.isclose(max(values) + min(values), 0.0, abs_tol=1e-12)
    extents = [max(v[a] for v in mesh.vertices) - min(v[a] for v in mesh.vertices) for a in range(3)]
    assert math.isclose(max(extents), 1.0)


def test_invalid_face_index_rejected():
    with pytest.raises(ValueError):
        parse_obj(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 0 1 2"])


def test_face_referring_to_missing_vertex():
    with pytest.raises(IndexError):
        parse_obj(["v 0 0 0", "f 1 2 3"])


def test_load_obj_matches_parse(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text("\n".join(TRIANGLE) + "\n", encoding="utf-8")
    loaded = load_obj(path)
    assert loaded == parse_obj(TRIANGLE)
    assert isinstance(loaded, ObjMesh) and loaded.indices == [(0, 1, 2)]


def test_empty_input_gives_empty_mesh():
    mesh = parse_obj([])
    assert (mesh.indices, mesh.vertices, mesh.normals) == ([], [], [])