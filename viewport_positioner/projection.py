"""Viewport <-> world projection with a bounds extent.

*view* is any camera collaborator exposing ``viewport_to_world(x, y, depth)``
and ``world_to_viewport(co)`` (see :class:`~.camera.CameraView`).  The extent
only shifts X and Y; its Z component is ignored here.
"""

from mathutils import Vector

from .utils import clamp01, planar


def to_world(view, anchor, depth: float, extent) -> Vector:
    """World position whose visual center projects to *anchor* at *depth*."""
    world = Vector(view.viewport_to_world(anchor[0], anchor[1], depth))
    return world - planar(extent)


def to_viewport(view, world_position, extent) -> Vector:
    """Inverse of :func:`to_world`: ``Vector((x, y, depth))``."""
    adjusted = Vector(world_position) + planar(extent)
    return Vector(view.world_to_viewport(adjusted))


# ---------------------------------------------------------------------------
# Interactive handle
# ---------------------------------------------------------------------------

def handle_position(view, anchor, depth: float, extent) -> Vector:
    """Where the drag handle sits: the visual center, not the origin."""
    return to_world(view, anchor, depth, extent) + Vector(extent)


def anchor_from_handle(view, handle_world, extent):
    """Recover ``((x, y), depth)`` from a dragged handle point.

    X and Y are clamped to [0, 1]; depth is left as projected.
    """
    pivot = Vector(handle_world) - Vector(extent)
    vp = to_viewport(view, pivot, extent)
    return (clamp01(vp.x), clamp01(vp.y)), vp.z
