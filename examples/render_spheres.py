#!/usr/bin/env python3
"""Render a row of spheres standing on a floor quad.

This script builds a scene through the Python API instead of a JSON file:
three spheres in front of the camera, a ground sphere, and a quad behind
them as a back wall. Every surface is shaded by its normal.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 640)
    --output OUTPUT     Output file path (default: spheres.png)
    --save-scene FILE   Also write the scene description as JSON
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 320 --output spheres.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti

ASPECT_RATIO = 16.0 / 9.0


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a row of normal-shaded spheres.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Image width in pixels (default: 640)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--save-scene",
        type=str,
        default=None,
        help="Also write the scene description as JSON",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def build_scene():
    """Create the three-sphere scene with a back wall."""
    from normalcast.scene.manager import SurfaceList

    world = SurfaceList()
    world.add_sphere(center=(-1.1, 0.0, -1.5), radius=0.5)
    world.add_sphere(center=(0.0, 0.0, -1.2), radius=0.5)
    world.add_sphere(center=(1.1, 0.0, -1.5), radius=0.5)
    world.add_sphere(center=(0.0, -100.5, -1.0), radius=100.0)
    # Back wall facing the camera
    world.add_quad(corner=(-4.0, -0.5, -4.0), edge_u=(8.0, 0.0, 0.0), edge_v=(0.0, 4.0, 0.0))
    return world


def render_spheres(
    width: int = 640,
    output_path: str = "spheres.png",
    scene_path: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render the scene and save to file.

    Args:
        width: Image width in pixels.
        output_path: Output file path (".ppm" for plain PPM, else Pillow).
        scene_path: Optional path to write the scene JSON to.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from normalcast.camera.viewport import ViewportCamera, setup_camera
    from normalcast.core.renderer import ScanlineRenderer
    from normalcast.preview.export import save_image

    height = max(1, int(width / ASPECT_RATIO))

    world = build_scene()
    if scene_path is not None:
        world.save_json(scene_path)

    setup_camera(ViewportCamera(aspect_ratio=ASPECT_RATIO))
    renderer = ScanlineRenderer(width, height)

    if not quiet:
        print(f"Rendering {world!r} at {width}x{height}...")

    start_time = time.time()

    def progress_callback(remaining: int, total: int) -> None:
        if not quiet:
            print(f"\r  Scanlines remaining: {remaining:4d}/{total}", end="", flush=True)

    renderer.render(batch_rows=32, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = save_image(renderer.get_image_numpy(), output_path)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
    except Exception:
        ti.init(arch=ti.cpu)

    try:
        render_spheres(
            width=args.width,
            output_path=args.output,
            scene_path=args.save_scene,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
