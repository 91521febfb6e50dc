from mathutils import Vector


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def bounds_center_local(corners) -> Vector:
    """Return the center of an 8-corner local bounding box."""
    return sum((Vector(c) for c in corners), Vector()) / 8.0


def bounds_center_world(matrix_world, corners) -> Vector:
    """Return the center of the world-space AABB enclosing *corners*."""
    world = [matrix_world @ Vector(c) for c in corners]
    lo = Vector((min(co.x for co in world), min(co.y for co in world), min(co.z for co in world)))
    hi = Vector((max(co.x for co in world), max(co.y for co in world), max(co.z for co in world)))
    return (lo + hi) / 2.0


def vertex_bounds_center(vertices) -> "Vector | None":
    """Center of the local AABB of mesh *vertices* (``None`` for an empty mesh)."""
    count = len(vertices)
    if not count:
        return None
    flat = [0.0] * (count * 3)
    vertices.foreach_get("co", flat)
    xs, ys, zs = flat[0::3], flat[1::3], flat[2::3]
    lo = Vector((min(xs), min(ys), min(zs)))
    hi = Vector((max(xs), max(ys), max(zs)))
    return (lo + hi) / 2.0


def planar(vec) -> Vector:
    """Copy of *vec* with Z dropped; extents only shift placement in X/Y."""
    return Vector((vec[0], vec[1], 0.0))
