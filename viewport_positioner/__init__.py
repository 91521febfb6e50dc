bl_info = {
    "name": "Viewport Positioner",
    "author": "marc2825",
    "version": (1, 0, 0),
    "blender": (4, 0, 0),
    "location": "View3D > Sidebar > Viewport > Viewport Positioner",
    "description": "Place objects at a camera viewport anchor and depth, centered on their bounds",
    "category": "3D View",
}

# UI, operator and handler modules are imported on registration.


def _classes():
    from .ops import VIEWPORTPOS_OT_drag_handle, VIEWPORTPOS_OT_place
    from .panel import VIEWPORTPOS_PT_panel
    from .prefs import VIEWPORTPOS_AddonPreferences
    from .props import VIEWPORTPOS_PG_settings

    return (
        VIEWPORTPOS_AddonPreferences,
        VIEWPORTPOS_PG_settings,
        VIEWPORTPOS_OT_place,
        VIEWPORTPOS_OT_drag_handle,
        VIEWPORTPOS_PT_panel,
    )


def register():
    import logging

    import bpy
    from bpy.props import PointerProperty

    from . import handlers
    from .logging_config import setup_logging
    from .prefs import get_addon_prefs
    from .props import VIEWPORTPOS_PG_settings

    for cls in _classes():
        bpy.utils.register_class(cls)

    bpy.types.Object.viewport_positioner = PointerProperty(type=VIEWPORTPOS_PG_settings)

    prefs = get_addon_prefs(bpy.context)
    setup_logging(logging.DEBUG if prefs and prefs.debug_logging else logging.INFO)

    handlers.register()


def unregister():
    import bpy

    from . import handlers

    handlers.unregister()

    if hasattr(bpy.types.Object, "viewport_positioner"):
        del bpy.types.Object.viewport_positioner

    for cls in reversed(_classes()):
        bpy.utils.unregister_class(cls)
