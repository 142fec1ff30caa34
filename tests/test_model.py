import math

import numpy as np
import pytest

from terrainwalk.geometry import rotate, translate
from terrainwalk.mesh import Primitive
from terrainwalk.model import Model
from terrainwalk.objloader import ObjError

QUAD_OBJ = """\
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


@pytest.fixture
def quad_path(tmp_path):
    path = tmp_path / "quad.obj"
    path.write_text(QUAD_OBJ)
    return path


def test_from_obj_builds_single_triangle_mesh(quad_path):
    model = Model.from_obj(quad_path)
    assert model.name == "quad"
    assert len(model.meshes) == 1
    mesh = model.meshes[0]
    assert mesh.primitive is Primitive.TRIANGLES
    assert len(mesh.vertices) == 6
    assert mesh.indices == list(range(6))


def test_from_obj_carries_vertex_attributes(quad_path):
    mesh = Model.from_obj(quad_path).meshes[0]
    assert mesh.vertices[0].position == (0.0, 0.0, 0.0)
    assert mesh.vertices[2].tex_coord == (1.0, 1.0)
    assert all(v.normal == (0.0, 0.0, 1.0) for v in mesh.vertices)


def test_from_obj_empty_path_gives_empty_model():
    model = Model.from_obj("")
    assert model.meshes == []
    assert model.name == ""


def test_from_obj_missing_file_raises(tmp_path):
    with pytest.raises(ObjError, match="Failed to load OBJ file"):
        Model.from_obj(tmp_path / "absent.obj")


def test_default_model_matrix_is_identity():
    assert np.allclose(Model().model_matrix(), np.identity(4))


def test_model_matrix_without_rotation_or_scale_is_translation():
    model = Model(origin=(4.0, -2.0, 7.5))
    assert np.allclose(model.model_matrix(), translate((4.0, -2.0, 7.5)))


def test_model_matrix_yaw_only_equals_y_rotation():
    model = Model(orientation=(0.0, math.pi, 0.0))
    assert np.allclose(model.model_matrix(), rotate(math.pi, (0.0, 1.0, 0.0)))


def test_local_matrix_is_applied_first():
    local = translate((1.0, 1.0, 1.0))
    model = Model(origin=(2.0, 0.0, 0.0), local_model_matrix=local)
    assert np.allclose(model.model_matrix(), local @ translate((2.0, 0.0, 0.0)))


def test_update_without_angular_velocity_keeps_orientation():
    model = Model(orientation=(0.1, 0.2, 0.3))
    model.update(5.0)
    assert np.allclose(model.orientation, (0.1, 0.2, 0.3))


def test_update_integrates_angular_velocity():
    model = Model(angular_velocity=(0.0, 1.0, 0.0))
    model.update(0.5)
    model.update(0.5)
    assert np.allclose(model.orientation, (0.0, 1.0, 0.0))


def test_bad_origin_rejected():
    with pytest.raises(ValueError):
        Model(origin=(1.0, 2.0))