"""Vector3 type and vector operations for the ray caster.

Vectors are Taichi ``vec3`` values: three 32-bit float components used
interchangeably as points, directions and RGB colors. ``vec3`` already
provides the arithmetic (``+``, ``-``, scalar ``*`` and ``/``, in-place
``+=`` and ``*=``); this module adds the named operations used by the
intersection and shading code, plus a few Python-scope helpers for moving
values between plain Python sequences and Taichi.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.core.vector import as_vec3, unit_vector
    >>> center = as_vec3((0.0, 0.0, -1.0))
    >>> # Use unit_vector within a Taichi kernel
"""

from collections.abc import Sequence
from typing import Any

import numpy as np
import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Semantic aliases: same layout, different meaning
point3 = vec3
color3 = vec3


@ti.func
def make_vec3(x: ti.f32, y: ti.f32 = 0.0, z: ti.f32 = 0.0) -> vec3:
    """Build a vector from up to three scalars.

    Missing trailing components are zero, so make_vec3(x) is (x, 0, 0),
    whereas vec3(x) copies x into every component.
    """
    return vec3(x, y, z)


@ti.func
def dot(u: vec3, v: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        u: First vector.
        v: Second vector.

    Returns:
        The sum of the component-wise products.
    """
    return u.x * v.x + u.y * v.y + u.z * v.z


@ti.func
def cross(u: vec3, v: vec3) -> vec3:
    """Compute the cross product u x v."""
    return tm.cross(u, v)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() since no square root is taken. Only a drop-in
    replacement where the formula is written in terms of squared length,
    such as the quadratic coefficients of the sphere test.

    Args:
        v: The input vector.

    Returns:
        The squared Euclidean length of the vector.
    """
    return dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale a vector to unit length.

    There is no zero-length guard: a zero vector divides by zero and
    yields non-finite components, which then flow through to the caller.

    Args:
        v: The input vector.

    Returns:
        v / length(v).
    """
    return v / length(v)


# =============================================================================
# Python-scope helpers
# =============================================================================


def as_vec3(values: Sequence[float] | Any) -> vec3:
    """Build a vec3 from any 3-element numeric buffer.

    Accepts tuples, lists, NumPy arrays and Taichi vectors.

    Args:
        values: Three numbers (x, y, z).

    Returns:
        A Taichi vec3 holding the values.

    Raises:
        ValueError: If the buffer does not hold exactly three numbers.
    """
    if hasattr(values, "to_numpy"):
        values = values.to_numpy()
    array = np.asarray(values, dtype=np.float64).reshape(-1)
    if array.shape[0] != 3:
        raise ValueError(f"Expected 3 components for a vector, got {array.shape[0]}")
    return vec3(float(array[0]), float(array[1]), float(array[2]))


def zero_vec3() -> vec3:
    """Return the zero vector (0, 0, 0)."""
    return vec3(0.0, 0.0, 0.0)


def vec3_to_tuple(v: Any) -> tuple[float, float, float]:
    """Convert a vec3 (or any 3-element buffer) to a tuple of floats."""
    return (float(v[0]), float(v[1]), float(v[2]))
