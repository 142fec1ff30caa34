import math

import numpy as np
import pytest

from terrainwalk.geometry import (
    Vertex,
    look_at,
    normalize,
    perspective,
    rotate,
    scale_matrix,
    translate,
)


def test_vertex_defaults_are_zero():
    v = Vertex()
    assert v.position == (0.0, 0.0, 0.0)
    assert v.normal == (0.0, 0.0, 0.0)
    assert v.tex_coord == (0.0, 0.0)


def test_vertex_converts_sequences_to_float_tuples():
    v = Vertex(position=[1, 2, 3], normal=np.array([0, 1, 0]), tex_coord=[0.5, 0.25])
    assert v.position == (1.0, 2.0, 3.0)
    assert v.normal == (0.0, 1.0, 0.0)
    assert v.tex_coord == (0.5, 0.25)


def test_vertex_rejects_wrong_size():
    with pytest.raises(ValueError):
        Vertex(position=(1.0, 2.0))
    v = Vertex()
    with pytest.raises(ValueError):
        v.tex_coord = (1.0, 2.0, 3.0)


def test_vertex_normal_can_be_reassigned():
    v = Vertex()
    v.normal = [0, 0, 1]
    assert v.normal == (0.0, 0.0, 1.0)


def test_normalize_gives_unit_length_same_direction():
    vec = np.array([3.0, -4.0, 12.0])
    n = normalize(vec)
    assert np.linalg.norm(n) == pytest.approx(1.0)
    assert np.allclose(np.cross(n, vec), 0.0)
    assert np.dot(n, vec) > 0


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        normalize([0.0, 0.0, 0.0])


def test_translate_moves_points_not_directions():
    offset = np.array([1.5, -2.0, 7.0])
    m = translate(offset)
    point = np.array([0.25, 0.5, 0.75, 1.0])
    direction = np.array([0.25, 0.5, 0.75, 0.0])
    assert np.allclose((m @ point)[:3], point[:3] + offset)
    assert np.allclose(m @ direction, direction)


def test_scale_matrix_scales_components():
    factors = np.array([2.0, 0.5, 3.0])
    p = np.array([1.0, 4.0, -1.0, 1.0])
    assert np.allclose((scale_matrix(factors) @ p)[:3], p[:3] * factors)


def test_rotate_is_orthonormal_and_keeps_axis():
    axis = np.array([1.0, 2.0, 3.0])
    m = rotate(0.7, axis)
    r = m[:3, :3]
    assert np.allclose(r @ r.T, np.identity(3))
    assert np.linalg.det(r) == pytest.approx(1.0)
    assert np.allclose(r @ normalize(axis), normalize(axis))


def test_rotate_quarter_turn_about_z_maps_x_to_y():
    m = rotate(math.pi / 2, [0.0, 0.0, 1.0])
    assert np.allclose(m @ np.array([1.0, 0.0, 0.0, 0.0]), [0.0, 1.0, 0.0, 0.0])


def test_rotate_inverse_angle_undoes_rotation():
    axis = [0.3, -1.0, 0.2]
    m = rotate(1.1, axis) @ rotate(-1.1, axis)
    assert np.allclose(m, np.identity(4))


def test_look_at_places_eye_at_origin_and_target_ahead():
    eye = np.array([4.0, 2.0, 9.0])
    center = np.array([1.0, 0.0, -3.0])
    view = look_at(eye, center, [0.0, 1.0, 0.0])
    assert np.allclose(view @ np.append(eye, 1.0), [0.0, 0.0, 0.0, 1.0])
    target = view @ np.append(center, 1.0)
    assert np.allclose(target[:2], 0.0)
    assert target[2] == pytest.approx(-np.linalg.norm(center - eye))


def test_perspective_maps_near_and_far_planes_to_ndc_bounds():
    near, far = 0.1, 20000.0
    proj = perspective(math.radians(60.0), 4 / 3, near, far)
    at_near = proj @ np.array([0.0, 0.0, -near, 1.0])
    at_far = proj @ np.array([0.0, 0.0, -far, 1.0])
    assert at_near[2] / at_near[3] == pytest.approx(-1.0)
    assert at_far[2] / at_far[3] == pytest.approx(1.0)


def test_perspective_aspect_scales_x():
    wide = perspective(1.0, 2.0, 1.0, 10.0)
    square = perspective(1.0, 1.0, 1.0, 10.0)
    assert wide[0, 0] * 2.0 == pytest.approx(square[0, 0])
    assert wide[1, 1] == pytest.approx(square[1, 1])


def test_perspective_rejects_degenerate_input():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)
    with pytest.raises(ValueError):
        perspective(1.0, 1.0, 5.0, 5.0)