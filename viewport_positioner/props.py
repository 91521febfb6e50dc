import bpy
from bpy.props import BoolProperty, FloatProperty, PointerProperty
from bpy.types import PropertyGroup


def _poll_camera(_self, obj):
    return obj.type == "CAMERA"


class VIEWPORTPOS_PG_settings(PropertyGroup):
    """Per-object viewport placement: anchor, depth and bounds source."""

    enabled: BoolProperty(
        name="Viewport Positioner",
        description="Place this object relative to a camera viewport",
        default=False,
    )
    camera: PointerProperty(
        name="Camera",
        description="Camera whose viewport is used (scene camera when empty)",
        type=bpy.types.Object,
        poll=_poll_camera,
    )
    bounds_object: PointerProperty(
        name="Bounds Object",
        description="Optional: center the placement on this object's bounds",
        type=bpy.types.Object,
    )
    use_collider_bounds: BoolProperty(
        name="Use Collider Bounds",
        description="Use the bounds object's rigid body collision shape instead of its render bounds",
        default=False,
    )
    live_edit: BoolProperty(
        name="Move in Editor",
        description="Keep following the camera while not playing",
        default=False,
    )
    depth: FloatProperty(
        name="Depth",
        description="Distance along the camera's viewing axis",
        default=3.0,
        subtype="DISTANCE",
    )
    # Soft limits only: values set from scripts are stored as given.
    anchor_x: FloatProperty(
        name="Anchor X",
        default=0.5,
        soft_min=0.0,
        soft_max=1.0,
    )
    anchor_y: FloatProperty(
        name="Anchor Y",
        default=0.5,
        soft_min=0.0,
        soft_max=1.0,
    )
