"""Image export utilities for rendered images.

Supported formats:
    - PPM, plain ASCII variant ("P3"): one "r g b" line per pixel
    - PNG and anything else Pillow can write (8-bit RGB)

Colors are quantized as floor(255.999 * c) per component, which maps the
closed range [0, 1] onto the full 0..255 byte range.

Example:
    >>> import sys
    >>> from normalcast.preview.export import write_ppm
    >>> image = renderer.get_image_numpy()
    >>> write_ppm(image, sys.stdout)
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Scale applied before flooring to an 8-bit value
QUANTIZE_SCALE = 255.999

# Maximum color value written in the PPM header
PPM_MAX_VALUE = 255


def quantize(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit values.

    Components are clipped to [0, 1] before scaling. Non-finite components
    (from degenerate zero-length rays) are written as 0 for NaN and as the
    nearest end of the range for infinities.

    Args:
        image: Float image array of shape (H, W, 3), or any array of color
            components.

    Returns:
        Array of the same shape with dtype uint8.
    """
    image = np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    image = np.clip(image, 0.0, 1.0)
    return np.floor(QUANTIZE_SCALE * image).astype(np.uint8)


def ppm_header(width: int, height: int) -> str:
    """Build the header of a plain (P3) PPM file."""
    return f"P3\n{width} {height}\n{PPM_MAX_VALUE}\n"


def write_ppm(image: npt.NDArray[np.floating], stream: TextIO) -> None:
    """Write an image to a text stream as a plain (P3) PPM file.

    Rows are written top-to-bottom and columns left-to-right, one pixel per
    line.

    Args:
        image: Float image array of shape (H, W, 3), row 0 at the top.
        stream: Text stream to write to (e.g. sys.stdout or an open file).

    Raises:
        ValueError: If the image is not an (H, W, 3) array.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    height, width, _ = image.shape
    pixels = quantize(image).reshape(-1, 3)

    stream.write(ppm_header(width, height))
    stream.write("".join(f"{r} {g} {b}\n" for r, g, b in pixels.tolist()))


def save_ppm(image: npt.NDArray[np.floating], filepath: str | PathLike[str]) -> None:
    """Save an image as a plain (P3) PPM file."""
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        write_ppm(image, f)


def save_png_from_array(image: npt.NDArray[np.floating], filepath: str | PathLike[str]) -> None:
    """Save an image as an 8-bit RGB file through Pillow.

    The format follows the file extension (PNG for ".png").

    Args:
        image: Float image array of shape (H, W, 3).
        filepath: Output file path.
    """
    pil_image = PILImage.fromarray(quantize(image))
    pil_image.save(filepath)


def save_image(image: npt.NDArray[np.floating], filepath: str | PathLike[str]) -> Path:
    """Save an image, choosing the writer from the file extension.

    ".ppm" files are written as plain P3 PPM; every other extension goes
    through Pillow.

    Args:
        image: Float image array of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.
    """
    path = Path(filepath)
    if path.suffix.lower() == ".ppm":
        save_ppm(image, path)
    else:
        save_png_from_array(image, path)
    return path


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
