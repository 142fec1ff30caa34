import pytest

from terrainwalk.objloader import ObjData, ObjError, load_obj, parse_obj

QUAD = """\
# a quad
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vt 0 0
vt 1 0
vt 1 1
vt 0 1
vn 0 0 1
f 1/1/1 2/2/1 3/3/1 4/4/1
"""

TRIANGLE = """\
v 0.5 1.5 2.5
v 3 4 5
v -1 -2 -3
vt 0.25 0.75
vn 0 1 0
f 1/1/1 2/1/1 3/1/1
"""


def test_triangle_is_dereferenced():
    data = parse_obj(TRIANGLE.splitlines())
    assert data.vertices == [(0.5, 1.5, 2.5), (3.0, 4.0, 5.0), (-1.0, -2.0, -3.0)]
    assert data.uvs == [(0.25, 0.75)] * 3
    assert data.normals == [(0.0, 1.0, 0.0)] * 3
    assert len(data) == 3


def test_quad_is_fan_triangulated():
    data = parse_obj(QUAD.splitlines())
    assert len(data) == 6
    v = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    assert data.vertices == [v[0], v[1], v[2], v[0], v[2], v[3]]
    assert data.uvs[3] == (0.0, 0.0)
    assert data.uvs[5] == (0.0, 1.0)


def test_outputs_have_equal_lengths():
    data = parse_obj(QUAD.splitlines())
    assert len(data.vertices) == len(data.uvs) == len(data.normals)


def test_face_without_texture_index_is_invalid():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 1\nf 1//1 2//1 3//1\n"
    with pytest.raises(ObjError, match="Invalid face format"):
        parse_obj(text.splitlines(), "mesh.obj")


def test_non_numeric_face_is_invalid():
    with pytest.raises(ObjError, match="Invalid face format"):
        parse_obj(["f a/b/c 1/1/1 1/1/1"])


def test_out_of_range_index_raises():
    text = TRIANGLE.replace("3/1/1", "9/1/1")
    with pytest.raises(ObjError, match="Invalid index"):
        parse_obj(text.splitlines(), "bad.obj")


def test_zero_index_is_invalid():
    text = TRIANGLE.replace("1/1/1 2", "0/1/1 2")
    with pytest.raises(ObjError, match="Invalid index"):
        parse_obj(text.splitlines())


def test_short_face_is_skipped():
    text = TRIANGLE + "f 1/1/1 2/1/1\n"
    data = parse_obj(text.splitlines())
    assert len(data) == 3


def test_unknown_lines_are_ignored():
    text = "o thing\ns off\nusemtl stone\n" + TRIANGLE
    assert parse_obj(text.splitlines()).vertices == parse_obj(TRIANGLE.splitlines()).vertices


def test_empty_input_gives_empty_data():
    data = parse_obj([])
    assert data == ObjData()


def test_load_obj_reads_file(tmp_path):
    path = tmp_path / "quad.obj"
    path.write_text(QUAD)
    assert load_obj(path) == parse_obj(QUAD.splitlines())


def test_load_obj_missing_file(tmp_path):
    with pytest.raises(ObjError, match="Impossible to open"):
        load_obj(tmp_path / "missing.obj")