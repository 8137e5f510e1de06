"""Geometry module for hit records and surface primitives.

Components:
    hittable: HitRecord and the shared face-normal helper
    sphere: Sphere primitive with ray-sphere intersection
    quad: Parallelogram primitive with ray-quad intersection

All intersection routines are Taichi functions (@ti.func) following the
pattern:
    record = hit_<shape>(ray, shape, t_min, t_max)
"""

from .hittable import HitRecord, make_miss_record, set_face_normal
from .quad import Quad, hit_quad, make_quad, quad_normal
from .sphere import Sphere, hit_sphere, make_sphere

__all__ = [
    "HitRecord",
    "make_miss_record",
    "set_face_normal",
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "Quad",
    "hit_quad",
    "make_quad",
    "quad_normal",
]
