"""Per-frame and live-edit placement triggers, plus the persistent overlay.

frame_change_post -- every simulated / rendered frame places all positioners.
live timer        -- only positioners with Move in Editor follow; playback is
                     left to the frame handler.
"""

import logging

import bpy
from bpy.app.handlers import persistent

from . import drawing
from .placement import update_scene
from .prefs import get_addon_prefs

logger = logging.getLogger(__name__)

_DEFAULT_INTERVAL = 1.0 / 30.0

_draw_handle = None


@persistent
def on_frame_change(scene, *_args):
    update_scene(scene, is_running=True)


def _live_tick():
    context = bpy.context
    scene = getattr(context, "scene", None)
    if scene is not None:
        update_scene(scene, is_running=False)

    prefs = get_addon_prefs(context)
    return prefs.live_interval if prefs else _DEFAULT_INTERVAL


def register():
    global _draw_handle

    if on_frame_change not in bpy.app.handlers.frame_change_post:
        bpy.app.handlers.frame_change_post.append(on_frame_change)
    if not bpy.app.timers.is_registered(_live_tick):
        bpy.app.timers.register(_live_tick, first_interval=_DEFAULT_INTERVAL, persistent=True)
    if _draw_handle is None:
        _draw_handle = bpy.types.SpaceView3D.draw_handler_add(
            drawing.draw_3d, (), "WINDOW", "POST_VIEW",
        )
    logger.debug("Placement handlers registered")


def unregister():
    global _draw_handle

    if _draw_handle is not None:
        bpy.types.SpaceView3D.draw_handler_remove(_draw_handle, "WINDOW")
        _draw_handle = None
    if bpy.app.timers.is_registered(_live_tick):
        bpy.app.timers.unregister(_live_tick)
    if on_frame_change in bpy.app.handlers.frame_change_post:
        bpy.app.handlers.frame_change_post.remove(on_frame_change)
