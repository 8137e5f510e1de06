"""Render configuration.

``RenderConfig`` gathers everything a render needs that is not part of the
scene itself: image size, viewport camera parameters, Taichi backend and
output destination. The command-line entry point builds one from its
arguments.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from normalcast.camera.viewport import ViewportCamera

# Taichi backend selection; "auto" tries the GPU and falls back to the CPU
Arch = Literal["cpu", "gpu", "auto"]

ARCH_CHOICES: tuple[str, ...] = ("cpu", "gpu", "auto")

# Output path meaning "write PPM to standard output"
STDOUT = "-"


@dataclass
class RenderConfig:
    """Configuration for a single render.

    Attributes:
        image_width: Image width in pixels.
        aspect_ratio: Viewport width divided by height. Also derives the
            image height when image_height is not given.
        image_height: Image height in pixels, or None to derive it as
            int(image_width / aspect_ratio) (at least 1).
        viewport_height: Height of the viewport in world units.
        focal_length: Distance from the camera to the viewport.
        arch: Taichi backend ("cpu", "gpu" or "auto").
        batch_rows: Number of scanlines rendered per kernel launch.
        scene_path: JSON scene description, or None for the default scene.
        output: Output file path, or "-" for PPM on standard output.
    """

    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    image_height: int | None = None
    viewport_height: float = 2.0
    focal_length: float = 1.0
    arch: Arch = "auto"
    batch_rows: int = 16
    scene_path: Path | None = None
    output: str = STDOUT

    @property
    def height(self) -> int:
        """The image height in pixels, derived if not set explicitly."""
        if self.image_height is not None:
            return self.image_height
        return max(1, int(self.image_width / self.aspect_ratio))

    @property
    def writes_to_stdout(self) -> bool:
        """Whether the image goes to standard output."""
        return self.output == STDOUT

    def validate(self) -> None:
        """Check the configuration for values that cannot render.

        Raises:
            ValueError: If any value is out of range.
        """
        if self.image_width < 1:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.image_height is not None and self.image_height < 1:
            raise ValueError(f"image_height must be positive, got {self.image_height}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.viewport_height <= 0.0:
            raise ValueError(f"viewport_height must be positive, got {self.viewport_height}")
        if self.focal_length <= 0.0:
            raise ValueError(f"focal_length must be positive, got {self.focal_length}")
        if self.arch not in ARCH_CHOICES:
            raise ValueError(f"arch must be one of {ARCH_CHOICES}, got {self.arch!r}")
        if self.batch_rows < 1:
            raise ValueError(f"batch_rows must be positive, got {self.batch_rows}")

    def camera(self) -> "ViewportCamera":
        """Build the viewport camera described by this configuration."""
        # Imported here: the camera module allocates Taichi fields on import
        from normalcast.camera.viewport import ViewportCamera

        return ViewportCamera(
            aspect_ratio=self.aspect_ratio,
            viewport_height=self.viewport_height,
            focal_length=self.focal_length,
        )
