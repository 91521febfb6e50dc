"""Bounds extent resolution: the offset from an object's origin to its visual center.

A shape is described by a :class:`ShapeDescriptor` tagged with a closed
:class:`ShapeKind`.  Resolution never fails; kinds without a dedicated rule
use the world-space bounding-box center.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from mathutils import Matrix, Vector

from .utils import bounds_center_local, bounds_center_world, vertex_bounds_center


class ShapeKind(Enum):
    NONE = "NONE"
    RENDERER = "RENDERER"
    BOX = "BOX"
    SPHERE = "SPHERE"
    CAPSULE = "CAPSULE"
    MESH = "MESH"
    OTHER = "OTHER"


_LOCAL_CENTER_KINDS = frozenset({ShapeKind.BOX, ShapeKind.SPHERE, ShapeKind.CAPSULE})

# Rigid body collision shapes -> shape kinds.  Anything missing here is OTHER.
_COLLISION_SHAPE_KINDS = {
    "BOX": ShapeKind.BOX,
    "SPHERE": ShapeKind.SPHERE,
    "CAPSULE": ShapeKind.CAPSULE,
    "MESH": ShapeKind.MESH,
    "CONVEX_HULL": ShapeKind.MESH,
}

# Object types that have renderable bounds.
_GEOMETRY_TYPES = frozenset({
    "MESH", "CURVE", "CURVES", "SURFACE", "META", "FONT",
    "VOLUME", "POINTCLOUD", "GPENCIL", "GREASEPENCIL",
})

# Mesh colliders above this vertex count resolve through the bounding box.
MESH_VERTEX_BUDGET = 50_000


@dataclass
class ShapeDescriptor:
    """Geometry needed to locate a shape's center.

    bound_box     - 8 local-space corners (``Object.bound_box``)
    local_center  - declared local center for BOX / SPHERE / CAPSULE
    mesh_center   - local center of the mesh's vertex bounds for MESH
    """
    kind: ShapeKind
    matrix_world: Matrix = field(default_factory=lambda: Matrix.Identity(4))
    bound_box: List[Vector] = field(default_factory=list)
    local_center: Optional[Vector] = None
    mesh_center: Optional[Vector] = None
    name: str = ""


def bounds_fallback_extent(shape: ShapeDescriptor) -> Vector:
    """World bounding-box center minus origin."""
    origin = shape.matrix_world.translation
    if not shape.bound_box:
        return Vector((0.0, 0.0, 0.0))
    return bounds_center_world(shape.matrix_world, shape.bound_box) - origin


def resolve_extent(shape: "ShapeDescriptor | None") -> Vector:
    """Return the world-space offset from *shape*'s origin to its center."""
    if shape is None or shape.kind is ShapeKind.NONE:
        return Vector((0.0, 0.0, 0.0))

    mw = shape.matrix_world
    origin = mw.translation

    if shape.kind is ShapeKind.RENDERER:
        return bounds_fallback_extent(shape)

    if shape.kind in _LOCAL_CENTER_KINDS:
        local_center = shape.local_center if shape.local_center is not None else Vector()
        return mw @ local_center - origin

    if shape.kind is ShapeKind.MESH and shape.mesh_center is not None:
        return mw @ shape.mesh_center - origin

    return bounds_fallback_extent(shape)


# ---------------------------------------------------------------------------
# Blender objects -> descriptors
# ---------------------------------------------------------------------------

def shape_from_object(obj, use_collider_bounds: bool = False,
                      vertex_budget: int = MESH_VERTEX_BUDGET) -> "ShapeDescriptor | None":
    """Describe *obj* for extent resolution.

    With *use_collider_bounds* the object's rigid body collision shape is used
    when it has one; otherwise its render bounds.  Mesh colliders with more
    than *vertex_budget* vertices fall back to the bounding box.  Objects with
    no geometry produce ``None``.
    """
    if obj is None:
        return None

    rigid_body = getattr(obj, "rigid_body", None)
    if use_collider_bounds and rigid_body is not None:
        return _collider_shape(obj, rigid_body.collision_shape, vertex_budget)

    if obj.type in _GEOMETRY_TYPES:
        return ShapeDescriptor(
            kind=ShapeKind.RENDERER,
            matrix_world=obj.matrix_world.copy(),
            bound_box=[Vector(c) for c in obj.bound_box],
            name=obj.name,
        )
    return None


def _collider_shape(obj, collision_shape: str, vertex_budget: int) -> ShapeDescriptor:
    kind = _COLLISION_SHAPE_KINDS.get(collision_shape, ShapeKind.OTHER)
    corners = [Vector(c) for c in obj.bound_box]
    shape = ShapeDescriptor(
        kind=kind,
        matrix_world=obj.matrix_world.copy(),
        bound_box=corners,
        name=obj.name,
    )
    if kind in _LOCAL_CENTER_KINDS:
        # Primitive collision shapes are fitted to the object's bounds.
        shape.local_center = bounds_center_local(corners)
    elif kind is ShapeKind.MESH and obj.type == "MESH" and obj.data is not None:
        vertices = obj.data.vertices
        if len(vertices) <= vertex_budget:
            shape.mesh_center = vertex_bounds_center(vertices)
    return shape
