"""Hit record and the shared surface-hit helpers.

Every surface variant answers the same query:

    hit_<variant>(ray, shape, t_min, t_max) -> HitRecord

and reports a hit only for an intersection strictly inside (t_min, t_max).
The record is returned by value; ``hit`` tells whether the remaining fields
are meaningful.
"""

import taichi as ti

from normalcast.core.ray import Ray
from normalcast.core.vector import dot, point3, vec3


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: 1 if the ray intersected the surface, 0 on a miss.
        t: The ray parameter at the intersection. 0 on a miss.
        point: The intersection point.
        normal: The surface normal at the intersection, oriented against
            the incoming ray (see set_face_normal).
        front_face: 1 if the ray arrived from the outward-normal side,
            0 if it hit the inside of the surface. 0 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: point3
    normal: vec3
    front_face: ti.i32


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
    )


@ti.func
def set_face_normal(ray: Ray, outward_normal: vec3):
    """Orient a surface normal against the incoming ray.

    Shading expects the normal to face the viewer whichever side of the
    surface was hit, so back-face hits get the negated outward normal.

    Args:
        ray: The incoming ray.
        outward_normal: The normal pointing out of the solid.

    Returns:
        Tuple of (front_face, normal) where front_face is 1 when
        dot(ray.direction, outward_normal) < 0.
    """
    front_face = 0
    normal = -outward_normal
    if dot(ray.direction, outward_normal) < 0.0:
        front_face = 1
        normal = outward_normal
    return front_face, normal
