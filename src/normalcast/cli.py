"""Command-line entry point: render a scene to a PPM or PNG image.

Usage:
    normalcast [options]
    python -m normalcast [options]

Options:
    --width WIDTH               Image width in pixels (default: 400)
    --height HEIGHT             Image height in pixels (default: width / aspect)
    --aspect-ratio RATIO        Viewport aspect ratio (default: 16/9)
    --viewport-height HEIGHT    Viewport height in world units (default: 2.0)
    --focal-length LENGTH       Camera to viewport distance (default: 1.0)
    --scene FILE                JSON scene description (default: two spheres)
    --output FILE               Output path, "-" for PPM on stdout (default: -)
    --arch {cpu,gpu,auto}       Taichi backend (default: auto)
    --batch-rows ROWS           Scanlines per kernel launch (default: 16)
    --quiet                     Only log warnings and errors
    --verbose                   Log debug messages

Example:
    normalcast --width 256 --output spheres.png
    normalcast > image.ppm
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from normalcast.config import ARCH_CHOICES, STDOUT, RenderConfig

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="normalcast",
        description="Render spheres shaded by surface normal over a sky gradient.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: width / aspect ratio)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=16.0 / 9.0,
        help="Viewport aspect ratio (default: 16/9)",
    )
    parser.add_argument(
        "--viewport-height",
        type=float,
        default=2.0,
        help="Viewport height in world units (default: 2.0)",
    )
    parser.add_argument(
        "--focal-length",
        type=float,
        default=1.0,
        help="Distance from camera to viewport (default: 1.0)",
    )
    parser.add_argument(
        "--scene",
        type=Path,
        default=None,
        help="JSON scene description (default: built-in two-sphere scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=STDOUT,
        help='Output file path; ".ppm" writes plain PPM, "-" writes PPM to stdout (default: -)',
    )
    parser.add_argument(
        "--arch",
        choices=ARCH_CHOICES,
        default="auto",
        help="Taichi backend (default: auto)",
    )
    parser.add_argument(
        "--batch-rows",
        type=int,
        default=16,
        help="Scanlines rendered per kernel launch (default: 16)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    verbosity.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Build a validated RenderConfig from parsed arguments.

    Raises:
        ValueError: If an argument value cannot render.
    """
    config = RenderConfig(
        image_width=args.width,
        aspect_ratio=args.aspect_ratio,
        image_height=args.height,
        viewport_height=args.viewport_height,
        focal_length=args.focal_length,
        arch=args.arch,
        batch_rows=args.batch_rows,
        scene_path=args.scene,
        output=args.output,
    )
    config.validate()
    return config


def configure_logging(args: argparse.Namespace) -> None:
    """Send log records to stderr at the level the flags ask for."""
    level = logging.INFO
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def init_taichi(arch: str) -> None:
    """Initialize the Taichi runtime for the requested backend.

    "auto" uses the GPU if one is available and falls back to the CPU.
    """
    # Taichi prints its banner on stdout, which may be carrying the image
    with contextlib.redirect_stdout(sys.stderr):
        import taichi as ti

        if arch == "cpu":
            ti.init(arch=ti.cpu, log_level=ti.WARN)
        elif arch == "gpu":
            ti.init(arch=ti.gpu, log_level=ti.WARN)
        else:
            try:
                ti.init(arch=ti.gpu, log_level=ti.WARN)
                logger.info("Using GPU backend")
            except Exception:
                ti.init(arch=ti.cpu, log_level=ti.WARN)
                logger.info("Using CPU backend")


def render(config: RenderConfig) -> Path | None:
    """Render the configured scene and write the image.

    Taichi must already be initialized.

    Args:
        config: The render configuration.

    Returns:
        Path of the written image, or None when it went to stdout.
    """
    # Lazy imports: these modules allocate Taichi fields on import
    from normalcast.camera.viewport import setup_camera
    from normalcast.core.renderer import ScanlineRenderer
    from normalcast.preview.export import save_image, write_ppm
    from normalcast.scene.default_scene import create_default_scene
    from normalcast.scene.manager import SurfaceList

    width, height = config.image_width, config.height

    if config.scene_path is not None:
        world = SurfaceList.from_json(config.scene_path)
    else:
        world = create_default_scene()
    logger.info("Scene: %r", world)

    setup_camera(config.camera())
    renderer = ScanlineRenderer(width, height)

    logger.info("Rendering %dx%d image...", width, height)
    start_time = time.time()

    def progress_callback(remaining: int, total: int) -> None:
        logger.debug("Scanlines remaining: %d of %d", remaining, total)

    renderer.render(batch_rows=config.batch_rows, callback=progress_callback)
    image = renderer.get_image_numpy()

    output_file: Path | None = None
    if config.writes_to_stdout:
        write_ppm(image, sys.stdout)
        sys.stdout.flush()
    else:
        output_file = save_image(image, config.output)
        logger.info("Saved to: %s", output_file.absolute())

    logger.info("Done in %.2fs", time.time() - start_time)
    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args)

    try:
        config = build_config(args)
        init_taichi(config.arch)
        render(config)
        return 0
    except Exception as e:
        logger.error("Error: %s", e)
        logger.debug("Traceback:", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
