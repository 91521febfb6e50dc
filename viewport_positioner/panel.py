import bpy

from .ops import VIEWPORTPOS_OT_drag_handle, VIEWPORTPOS_OT_place
from .placement import get_settings


class VIEWPORTPOS_PT_panel(bpy.types.Panel):
    bl_label = "Viewport Positioner"
    bl_idname = "VIEWPORTPOS_PT_panel"
    bl_space_type = "VIEW_3D"
    bl_region_type = "UI"
    bl_category = "Viewport"

    @classmethod
    def poll(cls, context):
        return context.active_object is not None

    def draw_header(self, context):
        settings = get_settings(context.active_object)
        self.layout.prop(settings, "enabled", text="")

    def draw(self, context):
        layout = self.layout
        obj = context.active_object
        settings = get_settings(obj)
        layout.active = settings.enabled

        col = layout.column(align=True)
        col.label(text="Camera:")
        col.prop(settings, "camera", text="")
        if settings.camera is None:
            scene_cam = context.scene.camera
            col.label(text=f"Using scene camera: {scene_cam.name if scene_cam else 'None'}")

        layout.separator()
        box = layout.box()
        box.label(text="Bounds:")
        box.prop(settings, "bounds_object", text="")
        box.prop(settings, "use_collider_bounds")

        layout.separator()
        box = layout.box()
        box.label(text="Viewport Anchor:")
        row = box.row(align=True)
        row.prop(settings, "anchor_x", text="X")
        row.prop(settings, "anchor_y", text="Y")
        box.prop(settings, "depth")

        layout.separator()
        layout.prop(settings, "live_edit")

        layout.separator()
        col = layout.column(align=True)
        col.operator(VIEWPORTPOS_OT_place.bl_idname, icon="PIVOT_CURSOR")
        col.operator(VIEWPORTPOS_OT_drag_handle.bl_idname, icon="VIEW_PAN")
