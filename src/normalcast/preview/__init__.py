"""Preview module for image output.

Components:
    export: 8-bit quantization, plain PPM (P3) writer and Pillow export

Example:
    >>> from normalcast.preview import save_image
    >>> save_image(renderer.get_image_numpy(), "spheres.png")
"""

from .export import (
    compute_rmse,
    ppm_header,
    quantize,
    save_image,
    save_png_from_array,
    save_ppm,
    write_ppm,
)

__all__ = [
    "quantize",
    "ppm_header",
    "write_ppm",
    "save_ppm",
    "save_png_from_array",
    "save_image",
    "compute_rmse",
]
