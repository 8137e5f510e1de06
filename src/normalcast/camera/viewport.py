"""Fixed pinhole camera casting rays through a flat viewport.

The camera sits at ``origin`` looking down -Z with +Y up. The viewport is
a rectangle ``focal_length`` in front of it, ``viewport_height`` tall and
``aspect_ratio * viewport_height`` wide. Rays run from the origin through
points of the viewport; their directions are not normalized.

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across the image
    v in [0, 1]: bottom to top across the image

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.camera.viewport import ViewportCamera, setup_camera, get_ray
    >>>
    >>> camera = ViewportCamera(aspect_ratio=16.0 / 9.0)
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through viewport center
"""

import logging
from dataclasses import dataclass

import numpy as np
import taichi as ti

from normalcast.core.ray import Ray, make_ray

logger = logging.getLogger(__name__)

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class ViewportCamera:
    """Configuration for the fixed pinhole camera.

    Attributes:
        aspect_ratio: Viewport width divided by height.
        viewport_height: Height of the viewport in world units.
        focal_length: Distance from the origin to the viewport plane.
        origin: Camera position in world space (x, y, z).
    """

    aspect_ratio: float = 16.0 / 9.0
    viewport_height: float = 2.0
    focal_length: float = 1.0
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)

    @property
    def viewport_width(self) -> float:
        """Width of the viewport in world units."""
        return self.aspect_ratio * self.viewport_height


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full width
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full height
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_camera(camera: ViewportCamera) -> None:
    """Upload the camera's viewport geometry into Taichi fields.

    Must be called from Python before rendering.

    Args:
        camera: The camera configuration.
    """
    origin = np.array(camera.origin, dtype=np.float32)
    horizontal = np.array([camera.viewport_width, 0.0, 0.0], dtype=np.float32)
    vertical = np.array([0.0, camera.viewport_height, 0.0], dtype=np.float32)
    depth = np.array([0.0, 0.0, camera.focal_length], dtype=np.float32)

    lower_left = origin - horizontal / 2.0 - vertical / 2.0 - depth

    _camera_origin[None] = origin.tolist()
    _viewport_horizontal[None] = horizontal.tolist()
    _viewport_vertical[None] = vertical.tolist()
    _lower_left_corner[None] = lower_left.tolist()

    logger.debug(
        "Camera at %s, viewport %.3f x %.3f, focal length %.3f",
        camera.origin,
        camera.viewport_width,
        camera.viewport_height,
        camera.focal_length,
    )


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Generate the ray through normalized viewport coordinates (u, v).

    Args:
        u: Horizontal coordinate in [0, 1] (left to right).
        v: Vertical coordinate in [0, 1] (bottom to top).

    Returns:
        A Ray from the camera origin to the viewport point, with the
        unnormalized direction lower_left + u*horizontal + v*vertical - origin.
    """
    origin = _camera_origin[None]
    point_on_viewport = (
        _lower_left_corner[None] + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    )
    return make_ray(origin, point_on_viewport - origin)


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the current camera state for debugging.

    Returns:
        Dictionary with origin, horizontal, vertical and lower_left vectors.
    """
    info = {}
    for name, f in (
        ("origin", _camera_origin),
        ("horizontal", _viewport_horizontal),
        ("vertical", _viewport_vertical),
        ("lower_left", _lower_left_corner),
    ):
        vec = f[None]
        info[name] = (float(vec[0]), float(vec[1]), float(vec[2]))
    return info
