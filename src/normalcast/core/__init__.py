"""Core rendering module.

Components:
    vector: Vector3 aliases and vector operations
    ray: Ray data structure and evaluation
    shading: Color resolution for a single ray
    render: Render target fields and per-pixel kernels
    renderer: Scanline renderer with progress reporting

All per-pixel work runs inside Taichi kernels.
"""

from .ray import Ray, make_ray, ray_at
from .vector import (
    as_vec3,
    color3,
    cross,
    dot,
    length,
    length_squared,
    make_vec3,
    point3,
    unit_vector,
    vec3,
    vec3_to_tuple,
    zero_vec3,
)

# Note: shading, render and renderer are NOT imported here because they
# allocate Taichi fields on import (through scene and camera).

__all__ = [
    "Ray",
    "make_ray",
    "ray_at",
    "vec3",
    "make_vec3",
    "point3",
    "color3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "unit_vector",
    "as_vec3",
    "zero_vec3",
    "vec3_to_tuple",
]
