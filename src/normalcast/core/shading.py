"""Per-ray color resolution.

A ray that hits the scene is colored by its surface normal, each component
mapped from [-1, 1] to [0, 1]. A ray that escapes gets a vertical gradient
from white (looking straight down) to sky blue (looking straight up).

Resolution is stateless: the same ray against the same scene always
yields the same color.
"""

import taichi as ti

from normalcast.core.ray import Ray
from normalcast.core.vector import color3, unit_vector, vec3
from normalcast.scene.surface_list import hit_surface_list

# Query interval for primary rays
T_MIN = 0.0
T_MAX = float("inf")

# Gradient endpoints (RGB)
WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.5, 0.7, 1.0)


@ti.func
def normal_color(normal: vec3) -> color3:
    """Map a unit normal to an RGB color: 0.5 * (normal + (1, 1, 1))."""
    return 0.5 * (normal + vec3(1.0, 1.0, 1.0))


@ti.func
def background_color(direction: vec3) -> color3:
    """Blend white to sky blue by the vertical component of a direction.

    Args:
        direction: The ray direction. A zero direction has no unit vector
            and produces non-finite components.

    Returns:
        (1 - t) * WHITE + t * SKY_BLUE with t = 0.5 * (unit_y + 1).
    """
    unit_direction = unit_vector(direction)
    t = 0.5 * (unit_direction.y + 1.0)
    white = vec3(WHITE[0], WHITE[1], WHITE[2])
    sky_blue = vec3(SKY_BLUE[0], SKY_BLUE[1], SKY_BLUE[2])
    return (1.0 - t) * white + t * sky_blue


@ti.func
def ray_color(ray: Ray) -> color3:
    """Resolve the color seen along a ray.

    Queries the scene's surface list over (0, +inf).

    Args:
        ray: The primary ray.

    Returns:
        The normal color of the nearest hit, or the background gradient.
    """
    record = hit_surface_list(ray, T_MIN, T_MAX)
    color = vec3(0.0, 0.0, 0.0)
    if record.hit == 1:
        color = normal_color(record.normal)
    else:
        color = background_color(ray.direction)
    return color
