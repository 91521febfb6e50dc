"""Camera-space conversions for Blender camera objects.

``world_to_viewport`` is Blender's ``world_to_camera_view``: X/Y are normalized
across the camera frame (0,0 bottom-left, 1,1 top-right) and Z is the distance
in front of the camera.  ``viewport_to_world`` is its inverse.
"""

from bpy_extras.object_utils import world_to_camera_view
from mathutils import Vector


class CameraView:
    """Viewport <-> world conversion for one camera object in one scene."""

    def __init__(self, scene, camera_obj):
        self.scene = scene
        self.camera = camera_obj

    @property
    def is_ortho(self) -> bool:
        return self.camera.data.type == "ORTHO"

    def world_to_viewport(self, co) -> Vector:
        return world_to_camera_view(self.scene, self.camera, Vector(co))

    def viewport_to_world(self, x: float, y: float, depth: float) -> Vector:
        if not self.is_ortho and depth == 0.0:
            # Every perspective ray starts at the camera origin.
            return self.camera.matrix_world.translation.copy()

        # view_frame corners: top-right, bottom-right, bottom-left, top-left
        frame = [Vector(v) for v in self.camera.data.view_frame(scene=self.scene)[:3]]
        if not self.is_ortho:
            # Scale the frame out to the plane at *depth*.
            frame = [v * (depth / -v.z) for v in frame]

        min_x, max_x = frame[2].x, frame[1].x
        min_y, max_y = frame[1].y, frame[0].y
        co_local = Vector((
            min_x + x * (max_x - min_x),
            min_y + y * (max_y - min_y),
            -depth,
        ))
        return self.camera.matrix_world.normalized() @ co_local

    @property
    def location(self) -> Vector:
        return self.camera.matrix_world.translation.copy()
