"""Scanline renderer with progress reporting.

This module wraps the render kernels in a small stateful object that:
- Owns the image dimensions
- Renders top-down in bands of rows
- Reports the number of scanlines still to render after each band

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.core.renderer import ScanlineRenderer
    >>> from normalcast.camera.viewport import ViewportCamera, setup_camera
    >>> from normalcast.scene.default_scene import create_default_scene
    >>>
    >>> world = create_default_scene()
    >>> setup_camera(ViewportCamera())
    >>> renderer = ScanlineRenderer(400, 225)
    >>> renderer.render(batch_rows=32)
    >>> image = renderer.get_image_numpy()
"""

import logging
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from normalcast.core.render import (
    clear_render_target,
    get_image_numpy,
    render_rows,
    setup_render_target,
)
from normalcast.preview.export import quantize

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (scanlines_remaining, total_scanlines)
ProgressCallback = Callable[[int, int], None]


class ScanlineRenderer:
    """Renders the scene one band of scanlines at a time.

    The renderer delegates to the global render target (Taichi fields), so
    only one renderer is active at a time.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize the renderer and its render target.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).

        Raises:
            ValueError: If a dimension is not positive or too large.
        """
        self._width = width
        self._height = height
        self._rows_done = 0
        setup_render_target(width, height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def scanlines_remaining(self) -> int:
        """Get the number of rows not yet rendered."""
        return self._height - self._rows_done

    @property
    def is_complete(self) -> bool:
        """Whether every row has been rendered."""
        return self._rows_done >= self._height

    def reset(self) -> None:
        """Clear the image so the next render starts from the top again."""
        clear_render_target()
        self._rows_done = 0

    def render_progressive(self, batch_rows: int = 16) -> Generator[tuple[int, int], None, None]:
        """Render the remaining rows top-down, yielding after each band.

        Args:
            batch_rows: Number of rows per kernel launch.

        Yields:
            Tuple of (scanlines_remaining, total_scanlines).

        Raises:
            ValueError: If batch_rows is not positive.
        """
        if batch_rows < 1:
            raise ValueError(f"batch_rows must be positive, got {batch_rows}")

        while not self.is_complete:
            remaining = self.scanlines_remaining
            band = min(batch_rows, remaining)
            # Top-down: the band ends just below the last rendered row
            render_rows(remaining - band, band)
            self._rows_done += band
            yield (self.scanlines_remaining, self._height)

    def render(self, batch_rows: int = 16, callback: ProgressCallback | None = None) -> None:
        """Render the remaining rows with an optional progress callback.

        Args:
            batch_rows: Number of rows per kernel launch.
            callback: Optional function called after each band with
                (scanlines_remaining, total_scanlines).
        """
        for remaining, total in self.render_progressive(batch_rows):
            if callback is not None:
                callback(remaining, total)
        logger.info("Rendered %dx%d image", self._width, self._height)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the rendered image as a (height, width, 3) float32 array."""
        return get_image_numpy()

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the rendered image quantized to 8 bits per channel."""
        return quantize(self.get_image_numpy())

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ScanlineRenderer(width={self.width}, height={self.height}, "
            f"remaining={self.scanlines_remaining})"
        )
