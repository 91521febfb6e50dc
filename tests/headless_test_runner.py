"""
Viewport Positioner headless test runner for Blender.

Usage:
  blender --background --factory-startup --python tests/headless_test_runner.py
  blender --background --factory-startup --python tests/headless_test_runner.py -- --case one_shot
"""

import argparse
import os
import sys
import traceback

import bpy
from mathutils import Matrix, Vector


ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

import viewport_positioner  # noqa: E402
from viewport_positioner import handlers  # noqa: E402
from viewport_positioner.camera import CameraView  # noqa: E402
from viewport_positioner.placement import update_scene  # noqa: E402

TOL = 1e-4


def _ensure_addon_enabled():
    if not hasattr(bpy.types.Object, "viewport_positioner"):
        try:
            viewport_positioner.register()
        except ValueError:
            # Already registered in this process.
            pass


def _clear_scene():
    bpy.ops.object.select_all(action="SELECT")
    bpy.ops.object.delete(use_global=False, confirm=False)

    for mesh in list(bpy.data.meshes):
        if mesh.users == 0:
            bpy.data.meshes.remove(mesh)
    for cam in list(bpy.data.cameras):
        if cam.users == 0:
            bpy.data.cameras.remove(cam)


def _add_camera(name="VP_Camera", location=(0.0, 0.0, 10.0)):
    data = bpy.data.cameras.new(f"{name}_Data")
    obj = bpy.data.objects.new(name, data)
    bpy.context.scene.collection.objects.link(obj)
    obj.location = location
    bpy.context.scene.camera = obj
    bpy.context.view_layer.update()
    return obj


def _add_cube(name, location=(0.0, 0.0, 0.0), mesh_offset=None):
    bpy.ops.mesh.primitive_cube_add(size=2.0, location=location)
    obj = bpy.context.active_object
    obj.name = name
    if mesh_offset is not None:
        obj.data.transform(Matrix.Translation(mesh_offset))
        obj.data.update()
    bpy.context.view_layer.update()
    return obj


def _select_only(obj):
    bpy.ops.object.select_all(action="DESELECT")
    obj.select_set(True)
    bpy.context.view_layer.objects.active = obj


def _enable(obj, **values):
    settings = obj.viewport_positioner
    settings.enabled = True
    for key, value in values.items():
        setattr(settings, key, value)
    return settings


def _world_location(obj):
    bpy.context.view_layer.update()
    return obj.matrix_world.translation.copy()


def _assert_close(actual, expected, tol=TOL):
    diff = (Vector(actual) - Vector(expected)).length
    assert diff <= tol, f"{tuple(actual)} != {tuple(expected)}"


def _expected(cam, anchor, depth, extent=(0.0, 0.0, 0.0)):
    view = CameraView(bpy.context.scene, cam)
    return view.viewport_to_world(anchor[0], anchor[1], depth) - Vector((extent[0], extent[1], 0.0))


def case_properties_registered():
    assert hasattr(bpy.types.Object, "viewport_positioner")
    assert hasattr(bpy.ops.viewport_positioner, "place")
    assert hasattr(bpy.ops.viewport_positioner, "drag_handle")


def case_one_shot_operator():
    _clear_scene()
    cam = _add_camera()
    cube = _add_cube("OneShot")
    _enable(cube, depth=3.0)
    _select_only(cube)

    result = bpy.ops.viewport_positioner.place()

    assert result == {"FINISHED"}
    _assert_close(_world_location(cube), _expected(cam, (0.5, 0.5), 3.0))
    _assert_close(_world_location(cube), (0.0, 0.0, 7.0))


def case_programmatic_anchor_unclamped():
    _clear_scene()
    cube = _add_cube("Unclamped")
    settings = _enable(cube)
    settings.anchor_x = 1.3
    settings.anchor_y = -0.25

    assert abs(settings.anchor_x - 1.3) < TOL
    assert abs(settings.anchor_y + 0.25) < TOL


def case_renderer_bounds():
    _clear_scene()
    cam = _add_camera()
    bounds = _add_cube("Bounds", mesh_offset=(0.5, 0.0, 0.0))
    target = _add_cube("RendererTarget")
    _enable(target, camera=cam, bounds_object=bounds, anchor_x=0.25, anchor_y=0.75)
    _select_only(target)

    bpy.ops.viewport_positioner.place()

    _assert_close(_world_location(target), _expected(cam, (0.25, 0.75), 3.0, (0.5, 0.0, 0.0)))


def case_collider_bounds():
    _clear_scene()
    cam = _add_camera()
    bounds = _add_cube("Collider", mesh_offset=(0.0, -0.5, 0.0))
    _select_only(bounds)
    bpy.ops.rigidbody.object_add()
    bounds.rigid_body.collision_shape = "BOX"
    target = _add_cube("ColliderTarget")
    _enable(target, camera=cam, bounds_object=bounds, use_collider_bounds=True)
    _select_only(target)

    bpy.ops.viewport_positioner.place()

    _assert_close(_world_location(target), _expected(cam, (0.5, 0.5), 3.0, (0.0, -0.5, 0.0)))


def case_live_edit_follows_camera():
    _clear_scene()
    cam = _add_camera()
    live = _add_cube("Live")
    frozen = _add_cube("Frozen", location=(9.0, 9.0, 9.0))
    _enable(live, live_edit=True)
    _enable(frozen, live_edit=False)

    cam.location = (2.0, 0.0, 10.0)
    bpy.context.view_layer.update()
    placed = update_scene(bpy.context.scene, is_running=False)

    assert placed == 1
    _assert_close(_world_location(live), (2.0, 0.0, 7.0))
    _assert_close(_world_location(frozen), (9.0, 9.0, 9.0))


def case_live_timer_skips_frozen():
    _clear_scene()
    _add_camera(location=(1.0, 0.0, 10.0))
    live = _add_cube("TimerLive")
    frozen = _add_cube("TimerFrozen", location=(9.0, 9.0, 9.0))
    _enable(live, live_edit=True)
    _enable(frozen, live_edit=False)
    bpy.context.view_layer.update()

    handlers._live_tick()

    _assert_close(_world_location(live), (1.0, 0.0, 7.0))
    _assert_close(_world_location(frozen), (9.0, 9.0, 9.0))


def case_frame_change_places_all():
    _clear_scene()
    _add_camera(location=(0.0, 1.0, 10.0))
    cube = _add_cube("FrameChange", location=(9.0, 9.0, 9.0))
    _enable(cube, live_edit=False, depth=4.0)

    scene = bpy.context.scene
    scene.frame_set(scene.frame_current + 1)

    _assert_close(_world_location(cube), (0.0, 1.0, 6.0))


def case_parented_target():
    _clear_scene()
    cam = _add_camera()
    parent = _add_cube("Parent", location=(3.0, -2.0, 1.0))
    child = _add_cube("Child")
    child.parent = parent
    _enable(child, anchor_x=0.1, anchor_y=0.2, depth=5.0)
    _select_only(child)

    bpy.ops.viewport_positioner.place()

    _assert_close(_world_location(child), _expected(cam, (0.1, 0.2), 5.0))


CASES = {
    "props": case_properties_registered,
    "one_shot": case_one_shot_operator,
    "anchor_unclamped": case_programmatic_anchor_unclamped,
    "renderer_bounds": case_renderer_bounds,
    "collider_bounds": case_collider_bounds,
    "live_edit": case_live_edit_follows_camera,
    "live_timer": case_live_timer_skips_frozen,
    "frame_change": case_frame_change_places_all,
    "parented": case_parented_target,
}


def _parse_args():
    argv = sys.argv
    if "--" in argv:
        argv = argv[argv.index("--") + 1 :]
    else:
        argv = []
    parser = argparse.ArgumentParser()
    parser.add_argument("--case", choices=sorted(CASES.keys()), default=None)
    return parser.parse_args(argv)


def main():
    _ensure_addon_enabled()
    args = _parse_args()
    selected = [args.case] if args.case else list(CASES.keys())

    failures = 0
    print("[viewport_positioner:test] running cases:", ", ".join(selected))
    for name in selected:
        fn = CASES[name]
        try:
            fn()
            print(f"[PASS] {name}")
        except Exception as exc:
            failures += 1
            print(f"[FAIL] {name}: {exc}")
            traceback.print_exc()

    print(f"[viewport_positioner:test] summary: passed={len(selected) - failures} failed={failures}")
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
