"""Render target and per-pixel rendering kernels.

Every pixel gets exactly one primary ray from the viewport camera, and its
color is whatever ``ray_color`` resolves for that ray. Pixels are
independent, so the kernels parallelize over the whole band of rows being
rendered.

Pixel (i, j) has i = 0 at the left and j = 0 at the bottom, and maps to the
viewport coordinates u = i / (width - 1), v = j / (height - 1).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.core.render import setup_render_target, render_image
    >>> from normalcast.camera.viewport import ViewportCamera, setup_camera
    >>> from normalcast.scene.default_scene import create_default_scene
    >>>
    >>> world = create_default_scene()
    >>> setup_camera(ViewportCamera(aspect_ratio=16.0 / 9.0))
    >>> setup_render_target(400, 225)
    >>> render_image()
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from normalcast.camera.viewport import get_ray
from normalcast.core.shading import ray_color
from normalcast.core.vector import color3

# =============================================================================
# Render Target
# =============================================================================

# Largest image the preallocated buffer holds; any size up to it reuses the
# same compiled kernels
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Active (width, height)
_image_size = ti.Vector.field(2, dtype=ti.i32, shape=())

# Pixel colors indexed [i, j], j = 0 at the bottom
_pixels = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# 1 once setup_render_target has run
_target_ready = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Make a width x height image the active render target.

    The buffer is cleared to black.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If a dimension is not positive or does not fit the
            preallocated buffer.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image of {width}x{height} does not fit the "
            f"{MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT} render buffer"
        )

    _image_size[None] = (width, height)
    _target_ready[None] = 1
    clear_render_target()


def clear_render_target() -> None:
    """Set every pixel of the buffer to black."""
    _pixels.fill(0.0)


def reset_render_target() -> None:
    """Clear the buffer and forget the active image size."""
    clear_render_target()
    _target_ready[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the active (width, height)."""
    size = _image_size[None]
    return int(size[0]), int(size[1])


def _require_target() -> None:
    if _target_ready[None] == 0:
        raise RuntimeError("No render target; call setup_render_target() first.")


# =============================================================================
# Kernels
# =============================================================================


@ti.func
def shade_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> color3:
    """Cast the primary ray for a pixel and resolve its color.

    A dimension of a single pixel maps to coordinate 0.

    Args:
        pixel_i: Column, 0 at the left.
        pixel_j: Row, 0 at the bottom.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The color seen through the pixel.
    """
    u = 0.0
    v = 0.0
    if width > 1:
        u = ti.cast(pixel_i, ti.f32) / ti.cast(width - 1, ti.f32)
    if height > 1:
        v = ti.cast(pixel_j, ti.f32) / ti.cast(height - 1, ti.f32)
    ray = get_ray(u, v)
    return ray_color(ray)


@ti.kernel
def _shade_band(width: ti.i32, height: ti.i32, row_start: ti.i32, row_count: ti.i32):
    # Parallel over every pixel of rows [row_start, row_start + row_count)
    for i, k in ti.ndrange(width, row_count):
        j = row_start + k
        _pixels[i, j] = shade_pixel(i, j, width, height)


@ti.kernel
def _shade_one(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> color3:
    return shade_pixel(pixel_i, pixel_j, width, height)


# =============================================================================
# Python API
# =============================================================================


def render_rows(row_start: int, row_count: int) -> None:
    """Shade a band of rows into the render target.

    Args:
        row_start: First row of the band (0 = bottom).
        row_count: Number of rows in the band. Zero does nothing.

    Raises:
        RuntimeError: If no render target is set up.
        ValueError: If the band extends outside the image.
    """
    _require_target()

    width, height = get_image_dimensions()
    row_end = row_start + row_count
    if row_start < 0 or row_count < 0 or row_end > height:
        raise ValueError(f"Row band [{row_start}, {row_end}) outside image of height {height}")
    if row_count > 0:
        _shade_band(width, height, row_start, row_count)


def render_image() -> None:
    """Shade the whole image in one kernel launch."""
    _require_target()
    render_rows(0, get_image_dimensions()[1])


def render_pixel(pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
    """Resolve the color of one pixel without writing it to the buffer.

    Meant for tests and debugging.

    Args:
        pixel_i: Column, 0 at the left.
        pixel_j: Row, 0 at the bottom.

    Returns:
        The (r, g, b) color.

    Raises:
        RuntimeError: If no render target is set up.
    """
    _require_target()
    width, height = get_image_dimensions()
    color = _shade_one(pixel_i, pixel_j, width, height)
    return float(color[0]), float(color[1]), float(color[2])


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Copy the active image out of the render target.

    Colors are returned unclamped, with row 0 at the top of the image.

    Returns:
        Float32 array of shape (height, width, 3).

    Raises:
        RuntimeError: If no render target is set up.
    """
    _require_target()
    width, height = get_image_dimensions()

    # Buffer is [column, row from bottom]; images are [row from top, column]
    pixels = _pixels.to_numpy()[:width, :height]
    image = pixels.transpose(1, 0, 2)[::-1]
    return np.ascontiguousarray(image, dtype=np.float32)
