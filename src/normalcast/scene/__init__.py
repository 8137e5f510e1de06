"""Scene module: surface storage and closest-hit queries.

Components:
    surface_list: Taichi storage for surfaces and the hit queries over it
    manager: SurfaceList, the Python-side scene builder and serializer
    default_scene: The reference two-sphere scene

Importing this package allocates Taichi fields; call ti.init() first.
"""

from .default_scene import create_default_scene
from .manager import QuadInfo, SceneConfig, SphereInfo, SurfaceList
from .surface_list import (
    MAX_QUADS,
    MAX_SPHERES,
    MAX_SURFACES,
    SurfaceKind,
    add_quad,
    add_sphere,
    clear_surfaces,
    get_quad_count,
    get_sphere_count,
    get_surface_count,
    hit_surface,
    hit_surface_list,
)

__all__ = [
    # Storage and queries
    "SurfaceKind",
    "add_sphere",
    "add_quad",
    "clear_surfaces",
    "get_surface_count",
    "get_sphere_count",
    "get_quad_count",
    "hit_surface",
    "hit_surface_list",
    "MAX_SPHERES",
    "MAX_QUADS",
    "MAX_SURFACES",
    # Scene builder
    "SurfaceList",
    "SphereInfo",
    "QuadInfo",
    "SceneConfig",
    "create_default_scene",
]
