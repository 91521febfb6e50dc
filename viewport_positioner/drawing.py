"""GPU overlay drawing for placement handles, camera lines and the drag HUD."""

import blf
import bpy
import gpu
from gpu_extras.batch import batch_for_shader

from .placement import camera_view, get_settings, settings_extent
from .prefs import get_addon_prefs
from .projection import handle_position

_DEFAULT_HANDLE_COLOR = (1.0, 0.0, 0.0, 1.0)
_DEFAULT_LINE_COLOR = (1.0, 1.0, 0.0, 1.0)


def _collect_handles(context):
    """Return (handle points, camera line) for the enabled positioners in view."""
    scene = context.scene
    active = context.active_object
    points = []
    line = []

    for obj in scene.objects:
        settings = get_settings(obj)
        if settings is None or not settings.enabled:
            continue
        view = camera_view(scene, settings)
        if view is None:
            continue
        extent = settings_extent(settings)
        handle = handle_position(view, (settings.anchor_x, settings.anchor_y), settings.depth, extent)
        points.append(handle)
        if obj is active:
            line = [view.location, handle]

    return points, line


# ------------------------------------------------------------------
# 3-D overlay (POST_VIEW)
# ------------------------------------------------------------------

def draw_3d():
    """Draw a handle point per positioner and a line from camera to the active one."""
    context = bpy.context
    if context.scene is None:
        return

    prefs = get_addon_prefs(context)
    if prefs is not None and not prefs.show_gizmos:
        return
    handle_color = tuple(prefs.color_handle) if prefs else _DEFAULT_HANDLE_COLOR
    line_color = tuple(prefs.color_line) if prefs else _DEFAULT_LINE_COLOR
    size = prefs.gizmo_size if prefs else 10.0

    points, line = _collect_handles(context)
    if not points:
        return

    shader = gpu.shader.from_builtin("UNIFORM_COLOR")
    gpu.state.blend_set("ALPHA")
    gpu.state.depth_test_set("NONE")

    if line:
        batch = batch_for_shader(shader, "LINES", {"pos": line})
        shader.bind()
        shader.uniform_float("color", line_color)
        gpu.state.line_width_set(1.5)
        batch.draw(shader)

    batch = batch_for_shader(shader, "POINTS", {"pos": points})
    shader.bind()
    shader.uniform_float("color", handle_color)
    gpu.state.point_size_set(size)
    batch.draw(shader)

    # Restore defaults
    gpu.state.point_size_set(1.0)
    gpu.state.line_width_set(1.0)
    gpu.state.depth_test_set("LESS_EQUAL")
    gpu.state.blend_set("NONE")


# ------------------------------------------------------------------
# 2-D HUD (POST_PIXEL)
# ------------------------------------------------------------------

def draw_2d(op, _context):
    """Draw the lower-left HUD text while a handle drag is running."""
    if not getattr(op, "draw_enabled", False):
        return

    text = getattr(op, "hud_text", "")
    if not text:
        return

    color = op.color_handle
    font_id = 0

    blf.position(font_id, 20, 20, 0)
    blf.size(font_id, 14.0)
    blf.color(font_id, color[0], color[1], color[2], color[3])
    blf.draw(font_id, text)
