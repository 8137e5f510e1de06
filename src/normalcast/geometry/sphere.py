"""Sphere primitive with ray-sphere intersection.

The intersection solves |origin + t * direction - center|^2 = radius^2,
which expands to the quadratic

    a*t^2 + 2*h*t + c = 0

with a = |direction|^2, h = dot(oc, direction) (half of the usual b),
c = |oc|^2 - radius^2 and oc = origin - center.

A discriminant h^2 - a*c that is zero (a tangent ray) counts as a miss.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from normalcast.core.ray import Ray, ray_at
from normalcast.core.vector import dot, length_squared, point3
from normalcast.geometry.hittable import HitRecord, make_miss_record, set_face_normal


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Zero or negative radii are not
            rejected: a zero radius divides by zero in the normal, and a
            negative radius flips the outward normal inward.
    """

    center: point3
    radius: ti.f32


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Test for ray-sphere intersection.

    Tests the nearer root first and falls back to the farther one, so a ray
    starting inside the sphere reports the exit point as a back-face hit.

    Args:
        ray: The ray to test. A zero direction divides by zero.
        sphere: The sphere to test intersection against.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        A HitRecord; check the hit field to determine if an intersection
        occurred.
    """
    oc = ray.origin - sphere.center
    a = length_squared(ray.direction)
    half_b = dot(oc, ray.direction)
    c = length_squared(oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    record = make_miss_record()

    if discriminant > 0.0:
        root = ti.sqrt(discriminant)

        t = (-half_b - root) / a
        valid = (t > t_min) and (t < t_max)

        if not valid:
            t = (-half_b + root) / a
            valid = (t > t_min) and (t < t_max)

        if valid:
            point = ray_at(ray, t)
            outward_normal = (point - sphere.center) / sphere.radius
            front_face, normal = set_face_normal(ray, outward_normal)
            record = HitRecord(
                hit=1,
                t=t,
                point=point,
                normal=normal,
                front_face=front_face,
            )

    return record


@ti.func
def make_sphere(center: point3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius inside a Taichi kernel."""
    return Sphere(center=center, radius=radius)
