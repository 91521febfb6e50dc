import math

import pytest
from bpy_extras.object_utils import world_to_camera_view
from mathutils import Matrix, Vector

from tests.fakes import make_camera
from viewport_positioner.camera import CameraView

TOL = 1e-4


def test_center_of_view_straight_ahead():
    view = CameraView(None, make_camera())

    vp = view.world_to_viewport(Vector((0.0, 0.0, -5.0)))

    assert tuple(vp) == pytest.approx((0.5, 0.5, 5.0), abs=TOL)


def test_frame_corners_map_to_unit_square():
    view = CameraView(None, make_camera(half_width=0.5, half_height=0.25))

    assert tuple(view.world_to_viewport(Vector((1.0, 0.5, -2.0)))) == pytest.approx((1.0, 1.0, 2.0), abs=TOL)
    assert tuple(view.world_to_viewport(Vector((-1.0, -0.5, -2.0)))) == pytest.approx((0.0, 0.0, 2.0), abs=TOL)


def test_perspective_spreads_with_depth():
    view = CameraView(None, make_camera())

    near = view.viewport_to_world(1.0, 0.5, 1.0)
    far = view.viewport_to_world(1.0, 0.5, 4.0)

    assert near.x == pytest.approx(0.5, abs=TOL)
    assert far.x == pytest.approx(2.0, abs=TOL)


def test_orthographic_ignores_depth_for_xy():
    view = CameraView(None, make_camera(type="ORTHO", half_width=3.0, half_height=2.0))

    near = view.viewport_to_world(0.0, 1.0, 1.0)
    far = view.viewport_to_world(0.0, 1.0, 9.0)

    assert (near.x, near.y) == pytest.approx((-3.0, 2.0), abs=TOL)
    assert (far.x, far.y) == pytest.approx((-3.0, 2.0), abs=TOL)
    assert far.z == pytest.approx(-9.0, abs=TOL)


def test_zero_depth_perspective():
    mw = Matrix.Translation((2.0, 3.0, 4.0))
    view = CameraView(None, make_camera(mw))

    assert tuple(view.viewport_to_world(0.1, 0.9, 0.0)) == pytest.approx((2.0, 3.0, 4.0), abs=TOL)
    assert tuple(view.world_to_viewport(Vector((5.0, 3.0, 4.0)))) == pytest.approx((0.5, 0.5, 0.0), abs=TOL)


def test_negative_depth_lands_behind_camera(front_camera):
    view = CameraView(None, front_camera)

    world = view.viewport_to_world(0.5, 0.5, -2.0)

    assert tuple(world) == pytest.approx((0.0, 0.0, -2.0), abs=TOL)
    assert view.world_to_viewport(world).z == pytest.approx(-2.0, abs=TOL)


def test_scaled_camera_uses_normalized_matrix():
    mw = Matrix.Diagonal((3.0, 3.0, 3.0, 1.0)) @ Matrix.Rotation(math.pi, 4, "Y")
    view = CameraView(None, make_camera(mw))

    assert tuple(view.viewport_to_world(0.5, 0.5, 3.0)) == pytest.approx((0.0, 0.0, 3.0), abs=TOL)


def test_view_frame_gets_scene():
    camera = make_camera()
    scene = object()
    CameraView(scene, camera).world_to_viewport(Vector((0.0, 0.0, -1.0)))

    assert camera.data.frame_calls == [scene]


def test_location_is_camera_translation():
    view = CameraView(None, make_camera(Matrix.Translation((1.0, -1.0, 2.0))))

    assert tuple(view.location) == pytest.approx((1.0, -1.0, 2.0))


def test_world_to_viewport_is_blenders_camera_view(tilted_camera):
    scene = object()
    view = CameraView(scene, tilted_camera)
    co = Vector((0.7, -1.2, 2.5))

    expected = world_to_camera_view(scene, tilted_camera, co)

    assert tuple(view.world_to_viewport(co)) == pytest.approx(tuple(expected), abs=TOL)
