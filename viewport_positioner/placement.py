"""Placement controller: writes viewport-derived positions into targets.

The host decides *when* to place.  Handlers pass ``is_running`` (frame
advanced / animation playing) and each positioner's ``live_edit`` flag decides
whether it follows while editing; otherwise placement stays frozen.
"""

import logging

from .camera import CameraView
from .extents import ShapeDescriptor, resolve_extent, shape_from_object
from .projection import anchor_from_handle, to_world

logger = logging.getLogger(__name__)

SETTINGS_ATTR = "viewport_positioner"

# Names of positioners already warned about a missing camera.
_warned_no_camera = set()


def should_place(is_running: bool, live_edit: bool) -> bool:
    return bool(is_running or live_edit)


def set_world_location(target, co) -> None:
    """Replace the translation of *target*'s world matrix in one write."""
    mw = target.matrix_world.copy()
    mw.translation = co
    target.matrix_world = mw


def apply_placement(view, anchor, depth: float, target, bounds_source=None,
                    use_collider_bounds: bool = False) -> bool:
    """Move *target* so *bounds_source*'s center lands on *anchor* at *depth*.

    *bounds_source* is a :class:`ShapeDescriptor` or a Blender object; objects
    are described with :func:`shape_from_object` using *use_collider_bounds*.
    Returns ``False`` (and logs a warning) without writing anything when the
    target or the camera view is missing.
    """
    if target is None:
        logger.warning("Placement skipped: target is missing")
        return False
    if view is None:
        logger.warning("Placement skipped: camera is missing for %s", getattr(target, "name", target))
        return False

    if bounds_source is not None and not isinstance(bounds_source, ShapeDescriptor):
        bounds_source = shape_from_object(bounds_source, use_collider_bounds)
    extent = resolve_extent(bounds_source)
    world = to_world(view, anchor, depth, extent)
    set_world_location(target, world)
    logger.debug("Placed %s at %s", getattr(target, "name", target), tuple(world))
    return True


# ---------------------------------------------------------------------------
# Settings-driven placement
# ---------------------------------------------------------------------------

def get_settings(obj):
    return getattr(obj, SETTINGS_ATTR, None)


def resolve_camera(scene, settings):
    """Positioner camera, or the scene camera when none is set."""
    if settings.camera is not None:
        return settings.camera
    return getattr(scene, "camera", None)


def camera_view(scene, settings) -> "CameraView | None":
    camera = resolve_camera(scene, settings)
    if camera is None:
        return None
    return CameraView(scene, camera)


def settings_extent(settings):
    """Extent of the positioner's bounds object (zero when unset)."""
    return resolve_extent(shape_from_object(settings.bounds_object, settings.use_collider_bounds))


def place_object(scene, obj, is_running: bool = True) -> bool:
    """Place *obj* from its own positioner settings if it should this tick."""
    settings = get_settings(obj)
    if settings is None or not settings.enabled:
        return False
    if not should_place(is_running, settings.live_edit):
        return False

    return apply_placement(
        camera_view(scene, settings),
        (settings.anchor_x, settings.anchor_y),
        settings.depth,
        obj,
        settings.bounds_object,
        settings.use_collider_bounds,
    )


def update_scene(scene, is_running: bool) -> int:
    """Run one placement tick over every enabled positioner in *scene*.

    A positioner without a camera is skipped with one warning, repeated only
    after a camera has resolved for it again.
    """
    placed = 0
    for obj in scene.objects:
        settings = get_settings(obj)
        if settings is None or not settings.enabled:
            continue
        if resolve_camera(scene, settings) is None:
            if obj.name not in _warned_no_camera:
                _warned_no_camera.add(obj.name)
                logger.warning("No camera for %s, skipping placement", obj.name)
            continue
        _warned_no_camera.discard(obj.name)
        if place_object(scene, obj, is_running=is_running):
            placed += 1
    return placed


def set_viewport_anchor(settings, anchor, depth: float) -> None:
    """Store an anchor / depth pair as given (no clamping)."""
    settings.anchor_x = anchor[0]
    settings.anchor_y = anchor[1]
    settings.depth = depth


def drag_to_anchor(settings, view, handle_world, extent):
    """Store the anchor recovered from a dragged handle (clamped) and its depth."""
    anchor, depth = anchor_from_handle(view, handle_world, extent)
    set_viewport_anchor(settings, anchor, depth)
    return anchor, depth
