"""Camera module for primary ray generation.

Components:
    viewport: Fixed pinhole camera casting rays through a flat viewport

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image

Importing this package allocates Taichi fields; call ti.init() first.
"""

from .viewport import ViewportCamera, get_camera_info, get_ray, setup_camera

__all__ = [
    "ViewportCamera",
    "setup_camera",
    "get_ray",
    "get_camera_info",
]
