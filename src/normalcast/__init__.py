"""Taichi ray caster shading spheres by surface normal.

One primary ray is cast per pixel through a fixed pinhole camera into a
scene of surfaces. A pixel whose ray hits a surface is colored by the
surface normal at the nearest hit; every other pixel shows a vertical
white to sky-blue gradient.

Subpackages:
    core: Vector operations, rays, color resolution and the render loop
    geometry: Hit records and surface primitives (spheres, quads)
    scene: Surface storage, closest-hit queries and scene files
    camera: The fixed viewport camera
    preview: Image quantization and PPM/PNG export

Modules that allocate Taichi fields (scene, camera, core.render) must be
imported after ``ti.init()``.
"""

__version__ = "0.1.0"
