"""Surface storage and closest-hit queries over the scene.

The scene is an ordered list of surfaces of mixed kinds. Each entry of the
list is a (kind, slot) pair: the kind selects the variant and the slot
indexes that variant's Structure-of-Arrays storage. Queries walk the list
in insertion order and dispatch on the kind.

Adding a new surface variant means adding its storage, an ``add_*``
function and one branch in ``hit_surface``; ``hit_surface_list`` and the
shading code are unaffected.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.core.vector import vec3
    >>> from normalcast.scene.surface_list import (
    ...     add_sphere, clear_surfaces, hit_surface_list
    ... )
    >>> clear_surfaces()
    >>> add_sphere(vec3(0, 0, -1), 0.5)
    >>> add_sphere(vec3(0, -100.5, -1), 100.0)
    >>> # Use hit_surface_list within a Taichi kernel
"""

import logging
from enum import IntEnum

import taichi as ti

from normalcast.core.ray import Ray
from normalcast.core.vector import vec3
from normalcast.geometry.hittable import HitRecord, make_miss_record
from normalcast.geometry.quad import Quad, hit_quad
from normalcast.geometry.sphere import Sphere, hit_sphere

logger = logging.getLogger(__name__)


class SurfaceKind(IntEnum):
    """Tag selecting the intersection routine for a list entry."""

    SPHERE = 0
    QUAD = 1


# Maximum number of surfaces supported in the scene
MAX_SPHERES = 1024
MAX_QUADS = 1024
MAX_SURFACES = MAX_SPHERES + MAX_QUADS

# Ordered surface table
surface_kinds = ti.field(dtype=ti.i32, shape=MAX_SURFACES)
surface_slots = ti.field(dtype=ti.i32, shape=MAX_SURFACES)
num_surfaces = ti.field(dtype=ti.i32, shape=())

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Quad storage: Structure of Arrays layout
quad_corners = ti.Vector.field(3, dtype=ti.f32, shape=MAX_QUADS)
quad_edge_u = ti.Vector.field(3, dtype=ti.f32, shape=MAX_QUADS)
quad_edge_v = ti.Vector.field(3, dtype=ti.f32, shape=MAX_QUADS)
num_quads = ti.field(dtype=ti.i32, shape=())


def clear_surfaces() -> None:
    """Remove every surface from the scene.

    Resets the counts to zero. The field data is left in place and is
    overwritten as new surfaces are added.
    """
    num_surfaces[None] = 0
    num_spheres[None] = 0
    num_quads[None] = 0


def _append_surface(kind: SurfaceKind, slot: int) -> int:
    handle = num_surfaces[None]
    surface_kinds[handle] = int(kind)
    surface_slots[handle] = slot
    num_surfaces[None] = handle + 1
    logger.debug("Added %s surface (handle %d, slot %d)", kind.name.lower(), handle, slot)
    return handle


def add_sphere(center: vec3, radius: float) -> int:
    """Append a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.

    Returns:
        The handle (position in the surface list) of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    slot = num_spheres[None]
    if slot >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[slot] = center
    sphere_radii[slot] = radius
    num_spheres[None] = slot + 1
    return _append_surface(SurfaceKind.SPHERE, slot)


def add_quad(q: vec3, u: vec3, v: vec3) -> int:
    """Append a quad to the scene.

    The quad represents a parallelogram with vertices at Q, Q+u, Q+v, Q+u+v.

    Args:
        q: The corner point of the quad.
        u: Edge vector from q to adjacent corner.
        v: Edge vector from q to other adjacent corner.

    Returns:
        The handle (position in the surface list) of the added quad.

    Raises:
        RuntimeError: If the maximum number of quads is exceeded.
    """
    slot = num_quads[None]
    if slot >= MAX_QUADS:
        raise RuntimeError(f"Maximum number of quads ({MAX_QUADS}) exceeded")
    quad_corners[slot] = q
    quad_edge_u[slot] = u
    quad_edge_v[slot] = v
    num_quads[None] = slot + 1
    return _append_surface(SurfaceKind.QUAD, slot)


def get_surface_count() -> int:
    """Get the number of surfaces in the scene."""
    return int(num_surfaces[None])


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_quad_count() -> int:
    """Get the number of quads in the scene."""
    return int(num_quads[None])


@ti.func
def hit_surface(ray: Ray, index: ti.i32, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Intersect a ray with the surface at position ``index`` of the list.

    Args:
        ray: The ray to test.
        index: Position of the surface in the list.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        The HitRecord produced by the surface's variant.
    """
    kind = surface_kinds[index]
    slot = surface_slots[index]
    record = make_miss_record()

    if kind == int(SurfaceKind.SPHERE):
        sphere = Sphere(center=sphere_centers[slot], radius=sphere_radii[slot])
        record = hit_sphere(ray, sphere, t_min, t_max)
    elif kind == int(SurfaceKind.QUAD):
        quad = Quad(Q=quad_corners[slot], u=quad_edge_u[slot], v=quad_edge_v[slot])
        record = hit_quad(ray, quad, t_min, t_max)

    return record


@ti.func
def hit_surface_list(ray: Ray, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Find the nearest intersection of a ray with any surface in the list.

    Each successful hit shrinks the upper bound passed to the following
    members, so the record left at the end is the globally nearest one
    regardless of insertion order.

    Args:
        ray: The ray to test.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        The nearest HitRecord, or a miss record if nothing was hit.
    """
    closest_so_far = t_max
    result = make_miss_record()

    for i in range(num_surfaces[None]):
        record = hit_surface(ray, i, t_min, closest_so_far)
        if record.hit == 1:
            closest_so_far = record.t
            result = record

    return result
