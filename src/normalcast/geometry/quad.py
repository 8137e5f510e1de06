"""Parallelogram surface, the second variant of the surface list.

The quad has corners Q, Q+u, Q+v and Q+u+v. Its outward normal is the
unit vector along cross(u, v), so swapping u and v turns the quad around.

A ray hits the quad when it meets the quad's plane inside (t_min, t_max)
at a point whose planar coordinates (alpha, beta) along u and v both lie
in [0, 1].

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.geometry.quad import Quad, hit_quad
    >>> # Back wall two units in front of the camera, facing it
    >>> wall = Quad(
    ...     Q=ti.math.vec3(-1, -1, -2),
    ...     u=ti.math.vec3(2, 0, 0),
    ...     v=ti.math.vec3(0, 2, 0),
    ... )
    >>> # hit_quad(ray, wall, t_min, t_max) inside a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from normalcast.core.ray import Ray, ray_at
from normalcast.core.vector import cross, dot, point3, unit_vector, vec3
from normalcast.geometry.hittable import HitRecord, make_miss_record, set_face_normal

# Rays with |dot(normal, direction)| below this are treated as parallel
PARALLEL_EPSILON = 1e-8


@ti.dataclass
class Quad:
    """A parallelogram given by one corner and its two edges.

    Attributes:
        Q: Corner point.
        u: First edge, from Q to Q+u.
        v: Second edge, from Q to Q+v.
    """

    Q: point3
    u: vec3
    v: vec3


@ti.func
def _compute_quad_frame(quad: Quad):
    """Compute the quad's plane and the helpers for planar coordinates.

    A point P on the plane is written P = Q + alpha * u + beta * v, with
    alpha = dot(w_u, P - Q) and beta = dot(w_v, P - Q).

    Args:
        quad: The quad to compute the frame for.

    Returns:
        Tuple of (normal, d, w_u, w_v) where normal is the unit plane
        normal and d the plane constant dot(normal, Q).
    """
    n = cross(quad.u, quad.v)
    normal = unit_vector(n)
    d = dot(normal, quad.Q)

    n_dot_n = dot(n, n)

    # Degenerate quad (u parallel to v): leave the helpers at zero
    w_u = vec3(0.0, 0.0, 0.0)
    w_v = vec3(0.0, 0.0, 0.0)

    if n_dot_n > 1e-10:
        # dot(w_u, u) = 1, dot(w_u, v) = 0, dot(w_v, u) = 0, dot(w_v, v) = 1
        w_u = cross(quad.v, n) / n_dot_n
        w_v = cross(n, quad.u) / n_dot_n

    return normal, d, w_u, w_v


@ti.func
def hit_quad(ray: Ray, quad: Quad, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Test for ray-quad intersection.

    The plane hit is t = (d - dot(normal, origin)) / dot(normal, direction);
    the hit counts when t lies strictly inside (t_min, t_max) and the
    planar coordinates satisfy 0 <= alpha, beta <= 1.

    Args:
        ray: The ray to test.
        quad: The quad to test intersection against.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        A HitRecord; check the hit field to determine if an intersection
        occurred.
    """
    normal, d, w_u, w_v = _compute_quad_frame(quad)
    denom = dot(normal, ray.direction)

    record = make_miss_record()

    if ti.abs(denom) > PARALLEL_EPSILON:
        t = (d - dot(normal, ray.origin)) / denom

        if t > t_min and t < t_max:
            point = ray_at(ray, t)
            p_minus_q = point - quad.Q
            alpha = dot(w_u, p_minus_q)
            beta = dot(w_v, p_minus_q)

            if alpha >= 0.0 and alpha <= 1.0 and beta >= 0.0 and beta <= 1.0:
                front_face, oriented = set_face_normal(ray, normal)
                record = HitRecord(
                    hit=1,
                    t=t,
                    point=point,
                    normal=oriented,
                    front_face=front_face,
                )

    return record


@ti.func
def make_quad(q: point3, u: vec3, v: vec3) -> Quad:
    """Create a quad from corner point and edge vectors inside a kernel."""
    return Quad(Q=q, u=u, v=v)


@ti.func
def quad_normal(quad: Quad) -> vec3:
    """Compute the outward unit normal normalize(cross(u, v)) of a quad."""
    return tm.normalize(cross(quad.u, quad.v))
