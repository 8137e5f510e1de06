"""High-level surface list for building scenes from Python.

``SurfaceList`` is the Python-side owner of the scene: it writes surfaces
into the Taichi storage of ``normalcast.scene.surface_list`` and keeps a
plain record of each one for inspection and serialization. Kernels query
the same storage through ``hit_surface_list``.

The storage is global, so there is one live scene per Taichi runtime;
constructing a SurfaceList clears it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from normalcast.scene.manager import SurfaceList
    >>> world = SurfaceList()
    >>> world.add_sphere(center=(0, 0, -1), radius=0.5)
    0
    >>> world.add_sphere(center=(0, -100.5, -1), radius=100.0)
    1
    >>> world.save_json("scene.json")
"""

import json
import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from normalcast.core.vector import as_vec3, vec3_to_tuple
from normalcast.scene.surface_list import (
    MAX_QUADS,
    MAX_SPHERES,
    MAX_SURFACES,
    SurfaceKind,
    add_quad,
    add_sphere,
    clear_surfaces,
    get_surface_count,
)

logger = logging.getLogger(__name__)


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        handle: Position of the sphere in the surface list.
        center: The center of the sphere.
        radius: The radius of the sphere.
    """

    handle: int
    center: tuple[float, float, float]
    radius: float

    kind = SurfaceKind.SPHERE


@dataclass
class QuadInfo:
    """Information about a quad in the scene.

    Attributes:
        handle: Position of the quad in the surface list.
        corner: The corner point (Q) of the quad.
        edge_u: The first edge vector.
        edge_v: The second edge vector.
    """

    handle: int
    corner: tuple[float, float, float]
    edge_u: tuple[float, float, float]
    edge_v: tuple[float, float, float]

    kind = SurfaceKind.QUAD


@dataclass
class SceneConfig:
    """Serializable description of a scene.

    Attributes:
        surfaces: Ordered list of surface configurations, each a dict with
            a "type" key ("sphere" or "quad") and the shape parameters.
    """

    surfaces: list[dict[str, Any]] = field(default_factory=list)


class SurfaceList:
    """Ordered, append-only collection of scene surfaces.

    Attributes:
        surfaces: SphereInfo / QuadInfo records in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene, clearing the Taichi storage."""
        stale = get_surface_count()
        if stale > 0:
            logger.warning(
                "New SurfaceList discards %d surfaces of the previous scene; "
                "older SurfaceList instances no longer match the storage",
                stale,
            )
        self.surfaces: list[SphereInfo | QuadInfo] = []
        self.clear()

    def clear(self) -> None:
        """Remove every surface from the scene."""
        clear_surfaces()
        self.surfaces.clear()

    def __len__(self) -> int:
        return len(self.surfaces)

    def __iter__(self):
        return iter(self.surfaces)

    # =========================================================================
    # Surfaces
    # =========================================================================

    def add_sphere(self, center: Any, radius: float) -> int:
        """Append a sphere to the scene.

        Args:
            center: The center of the sphere as any 3-element buffer.
            radius: The radius of the sphere.

        Returns:
            The handle of the new sphere.

        Raises:
            ValueError: If center does not have three components.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        center_vec = as_vec3(center)
        handle = add_sphere(center_vec, float(radius))
        self.surfaces.append(
            SphereInfo(handle=handle, center=vec3_to_tuple(center_vec), radius=float(radius))
        )
        return handle

    def add_quad(self, corner: Any, edge_u: Any, edge_v: Any) -> int:
        """Append a quad spanning corner, corner+edge_u, corner+edge_v.

        Args:
            corner: The corner point of the quad.
            edge_u: Edge vector from corner to adjacent corner.
            edge_v: Edge vector from corner to other adjacent corner.

        Returns:
            The handle of the new quad.

        Raises:
            ValueError: If a vector does not have three components.
            RuntimeError: If the maximum number of quads is exceeded.
        """
        q = as_vec3(corner)
        u = as_vec3(edge_u)
        v = as_vec3(edge_v)
        handle = add_quad(q, u, v)
        self.surfaces.append(
            QuadInfo(
                handle=handle,
                corner=vec3_to_tuple(q),
                edge_u=vec3_to_tuple(u),
                edge_v=vec3_to_tuple(v),
            )
        )
        return handle

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return sum(1 for info in self.surfaces if info.kind == SurfaceKind.SPHERE)

    def get_quad_count(self) -> int:
        """Get the number of quads in the scene."""
        return sum(1 for info in self.surfaces if info.kind == SurfaceKind.QUAD)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        for info in self.surfaces:
            if isinstance(info, SphereInfo):
                config.surfaces.append(
                    {"type": "sphere", "center": list(info.center), "radius": info.radius}
                )
            else:
                config.surfaces.append(
                    {
                        "type": "quad",
                        "corner": list(info.corner),
                        "edge_u": list(info.edge_u),
                        "edge_v": list(info.edge_v),
                    }
                )
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and appends the configured surfaces in
        order.

        Raises:
            ValueError: If the configuration contains an unknown surface
                type or a malformed vector.
        """
        self.clear()

        for surface in config.surfaces:
            surface_type = str(surface.get("type", "")).lower()
            if surface_type == "sphere":
                self.add_sphere(
                    surface.get("center", [0.0, 0.0, 0.0]),
                    surface.get("radius", 1.0),
                )
            elif surface_type == "quad":
                self.add_quad(
                    surface.get("corner", [0.0, 0.0, 0.0]),
                    surface.get("edge_u", [1.0, 0.0, 0.0]),
                    surface.get("edge_v", [0.0, 1.0, 0.0]),
                )
            else:
                raise ValueError(f"Unknown surface type: {surface_type!r}")

        logger.info("Loaded scene with %d surfaces", len(self))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {"surfaces": self.to_config().surfaces}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Accepts either an ordered "surfaces" list, or separate "spheres" and
        "quads" lists (spheres are appended first).

        Args:
            data: The scene dictionary.
        """
        if "surfaces" in data:
            surfaces = list(data["surfaces"])
        else:
            surfaces = [{"type": "sphere", **s} for s in data.get("spheres", [])]
            surfaces += [{"type": "quad", **q} for q in data.get("quads", [])]
        self.from_config(SceneConfig(surfaces=surfaces))

    def save_json(self, path: str | PathLike[str]) -> None:
        """Write the scene description to a JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def load_json(self, path: str | PathLike[str]) -> None:
        """Replace the scene with the description in a JSON file.

        Raises:
            ValueError: If the file is not valid JSON or describes an
                invalid scene.
        """
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid scene file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid scene file {path}: expected a JSON object")
        logger.debug("Read scene description from %s", path)
        self.from_dict(data)

    @classmethod
    def from_json(cls, path: str | PathLike[str]) -> "SurfaceList":
        """Create a SurfaceList from a JSON scene file."""
        world = cls()
        world.load_json(path)
        return world

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_quads() -> int:
        """Get the maximum number of quads supported."""
        return MAX_QUADS

    @staticmethod
    def get_max_surfaces() -> int:
        """Get the maximum number of surfaces supported."""
        return MAX_SURFACES

    def __repr__(self) -> str:
        return (
            f"SurfaceList(spheres={self.get_sphere_count()}, "
            f"quads={self.get_quad_count()})"
        )
