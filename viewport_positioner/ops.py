"""Operators: one-shot placement and the interactive handle drag.

Handle drag lifecycle
---------------------
invoke  -- resolve camera and region, snapshot anchor / depth / location,
           register the HUD draw handler.
modal   -- mouse moves the handle, the handle is projected back into an anchor
           and depth, the object is re-placed.
finish  -- remove the draw handler, optionally restore the initial state.
"""

import bpy
from bpy_extras.view3d_utils import region_2d_to_location_3d
from mathutils import Vector

from . import drawing
from .placement import (
    camera_view,
    drag_to_anchor,
    get_settings,
    place_object,
    set_viewport_anchor,
    settings_extent,
)
from .prefs import get_addon_prefs
from .projection import handle_position


def _poll_positioner(context):
    obj = context.active_object
    if obj is None:
        return False
    settings = get_settings(obj)
    return settings is not None and settings.enabled


class VIEWPORTPOS_OT_place(bpy.types.Operator):
    bl_idname = "viewport_positioner.place"
    bl_label = "Place Now"
    bl_description = "Move the active object to its viewport anchor and depth once"
    bl_options = {"REGISTER", "UNDO"}

    @classmethod
    def poll(cls, context):
        return _poll_positioner(context)

    def execute(self, context):
        obj = context.active_object
        if not place_object(context.scene, obj, is_running=True):
            self.report({"WARNING"}, f"Could not place {obj.name}: no camera")
            return {"CANCELLED"}
        return {"FINISHED"}


class VIEWPORTPOS_OT_drag_handle(bpy.types.Operator):
    bl_idname = "viewport_positioner.drag_handle"
    bl_label = "Drag Viewport Handle"
    bl_description = "Drag the placement handle; the anchor is clamped to the viewport"
    bl_options = {"REGISTER", "UNDO", "BLOCKING"}

    # ------------------------------------------------------------------ poll
    @classmethod
    def poll(cls, context):
        if not (context.area and context.area.type == "VIEW_3D"):
            return False
        return _poll_positioner(context)

    # -------------------------------------------------------------- invoke
    def invoke(self, context, event):
        self._init_state()

        self._obj = context.active_object
        self._settings = get_settings(self._obj)
        self._view = camera_view(context.scene, self._settings)
        if self._view is None:
            self.report({"WARNING"}, "Positioner has no camera and the scene has none")
            return {"CANCELLED"}

        prefs = get_addon_prefs(context)
        if prefs:
            self.color_handle = tuple(prefs.color_handle)

        self._region, self._rv3d = _resolve_region(context)
        if not self._region or not self._rv3d:
            self.report({"WARNING"}, "Could not resolve 3D View region")
            return {"CANCELLED"}

        # Snapshot for ESC
        settings = self._settings
        self._init_anchor = (settings.anchor_x, settings.anchor_y)
        self._init_depth = settings.depth
        self._init_matrix = self._obj.matrix_world.copy()

        self._extent = settings_extent(settings)
        self._start_handle = handle_position(
            self._view, self._init_anchor, self._init_depth, self._extent,
        )
        self.handle_world = self._start_handle.copy()

        # Depth reference for mouse unprojection
        start_mouse = _event_to_region(event, self._region)
        self._start_mouse_world = region_2d_to_location_3d(
            self._region, self._rv3d, start_mouse, self._start_handle,
        )

        self._add_draw_handler()
        self._update_hud()

        context.window_manager.modal_handler_add(self)
        return {"RUNNING_MODAL"}

    # --------------------------------------------------------------- modal
    def modal(self, context, event):
        if event.type in {"ESC", "RIGHTMOUSE"} and event.value == "PRESS":
            self._restore()
            self._finish(context)
            return {"CANCELLED"}

        if event.type in {"LEFTMOUSE", "RET", "NUMPAD_ENTER"} and event.value == "PRESS":
            self._finish(context)
            return {"FINISHED"}

        # Pass through viewport navigation (orbit / pan / zoom)
        if event.type in {"MIDDLEMOUSE", "WHEELUPMOUSE", "WHEELDOWNMOUSE"}:
            return {"PASS_THROUGH"}

        if event.type == "MOUSEMOVE":
            self._drag(context, _event_to_region(event, self._region))
            return {"RUNNING_MODAL"}

        if event.type in {"X", "Y", "Z"} and event.value == "PRESS":
            self.constraint_mode = None if self.constraint_mode == event.type else event.type
            self._update_hud()
            if context.area:
                context.area.tag_redraw()
            return {"RUNNING_MODAL"}

        return {"RUNNING_MODAL"}

    # ------------------------------------------------- internal helpers
    def _init_state(self):
        self._obj = None
        self._settings = None
        self._view = None
        self._region = None
        self._rv3d = None
        self._extent = Vector((0.0, 0.0, 0.0))

        self._start_handle = Vector((0.0, 0.0, 0.0))
        self._start_mouse_world = Vector((0.0, 0.0, 0.0))

        self._init_anchor = (0.5, 0.5)
        self._init_depth = 0.0
        self._init_matrix = None

        # None = free, "X"/"Y"/"Z" = world axis
        self.constraint_mode = None

        # Exposed to drawing callbacks
        self.handle_world = None
        self.hud_text = ""
        self.draw_enabled = False
        self.color_handle = (1.0, 0.0, 0.0, 1.0)

        self._handle_2d = None

    def _apply_constraint(self, movement: Vector) -> Vector:
        if not self.constraint_mode:
            return movement
        axis = "XYZ".index(self.constraint_mode)
        m = Vector((0.0, 0.0, 0.0))
        m[axis] = movement[axis]
        return m

    def _drag(self, context, mouse_xy):
        mouse_world = region_2d_to_location_3d(
            self._region, self._rv3d, mouse_xy, self._start_handle,
        )
        movement = self._apply_constraint(mouse_world - self._start_mouse_world)
        self.handle_world = self._start_handle + movement

        drag_to_anchor(self._settings, self._view, self.handle_world, self._extent)
        place_object(context.scene, self._obj, is_running=True)
        self._update_hud()

        if context.area:
            context.area.tag_redraw()

    def _restore(self):
        set_viewport_anchor(self._settings, self._init_anchor, self._init_depth)
        if self._init_matrix is not None:
            self._obj.matrix_world = self._init_matrix

    def _update_hud(self):
        s = self._settings
        parts = [f"Anchor: {s.anchor_x:.3f}, {s.anchor_y:.3f}", f"Depth: {s.depth:.3f}"]
        if self.constraint_mode:
            parts.insert(0, f"Axis: {self.constraint_mode}")
        self.hud_text = " | ".join(parts)

    # ----------------------------------------------- draw handler mgmt
    def _add_draw_handler(self):
        if self._handle_2d is None:
            self._handle_2d = bpy.types.SpaceView3D.draw_handler_add(
                drawing.draw_2d, (self, None), "WINDOW", "POST_PIXEL",
            )
        self.draw_enabled = True

    def _remove_draw_handler(self):
        self.draw_enabled = False
        if self._handle_2d is not None:
            bpy.types.SpaceView3D.draw_handler_remove(self._handle_2d, "WINDOW")
            self._handle_2d = None

    def _finish(self, context):
        self._remove_draw_handler()
        if context.area:
            context.area.tag_redraw()


# ------------------------------------------------------------------
# Helpers (module-level)
# ------------------------------------------------------------------

def _resolve_region(context):
    """Return (region, rv3d) for the active 3-D viewport."""
    if context.region and context.region.type == "WINDOW" and context.region_data:
        return context.region, context.region_data

    area = context.area
    if area and area.type == "VIEW_3D":
        for r in area.regions:
            if r.type == "WINDOW":
                sd = context.space_data
                if sd and sd.type == "VIEW_3D":
                    return r, sd.region_3d
    return None, None


def _event_to_region(event, region) -> Vector:
    """Convert an absolute mouse event to region-local coordinates."""
    if region:
        return Vector((float(event.mouse_x - region.x),
                        float(event.mouse_y - region.y)))
    return Vector((float(event.mouse_region_x),
                    float(event.mouse_region_y)))
