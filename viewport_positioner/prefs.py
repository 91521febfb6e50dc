import logging

from bpy.props import BoolProperty, FloatProperty, FloatVectorProperty
from bpy.types import AddonPreferences

from .logging_config import setup_logging

ADDON_MODULE_NAME = __package__


def get_addon_prefs(context) -> "VIEWPORTPOS_AddonPreferences | None":
    addon = context.preferences.addons.get(ADDON_MODULE_NAME)
    if addon:
        return addon.preferences
    return None


def _on_debug_logging_update(self, _context):
    setup_logging(logging.DEBUG if self.debug_logging else logging.INFO)


class VIEWPORTPOS_AddonPreferences(AddonPreferences):
    bl_idname = ADDON_MODULE_NAME

    show_gizmos: BoolProperty(
        name="Show Handles",
        description="Draw placement handles for enabled positioners",
        default=True,
    )

    gizmo_size: FloatProperty(
        name="Handle Size (px)",
        description="Screen size of the placement handle point",
        default=10.0,
        min=1.0,
        max=100.0,
    )

    color_handle: FloatVectorProperty(
        name="Handle Color",
        subtype="COLOR",
        size=4,
        min=0.0,
        max=1.0,
        default=(1.0, 0.0, 0.0, 1.0),
    )

    color_line: FloatVectorProperty(
        name="Camera Line Color",
        subtype="COLOR",
        size=4,
        min=0.0,
        max=1.0,
        default=(1.0, 1.0, 0.0, 1.0),
    )

    live_interval: FloatProperty(
        name="Live Update Interval (s)",
        description="How often positioners with Move in Editor follow their camera",
        default=1.0 / 30.0,
        min=0.005,
        max=2.0,
    )

    debug_logging: BoolProperty(
        name="Debug Logging",
        description="Log every placement to the system console",
        default=False,
        update=_on_debug_logging_update,
    )

    def draw(self, context):
        layout = self.layout
        col = layout.column(align=True)
        col.prop(self, "show_gizmos")
        col.prop(self, "gizmo_size")
        col.separator()
        col.prop(self, "color_handle")
        col.prop(self, "color_line")

        layout.separator()
        col = layout.column(align=True)
        col.prop(self, "live_interval")
        col.prop(self, "debug_logging")

        layout.separator()
        box = layout.box()
        box.label(text="Handle Drag Controls")
        col = box.column(align=True)
        col.label(text="Left Click / Enter: Confirm")
        col.label(text="ESC / Right Click: Cancel")
        col.label(text="X / Y / Z: Axis Constraint")
