"""The reference scene: a small sphere resting on a large ground sphere.

The coordinate system matches the viewport camera: the camera sits at the
origin looking down -Z, with +Y up. The small sphere sits one unit in
front of the camera; the ground sphere is large enough that its top
surface reads as a horizon across the lower half of the image.

Example:
    >>> world = create_default_scene()
    >>> len(world)
    2
"""

from normalcast.scene.manager import SurfaceList

# Small sphere in front of the camera
SMALL_SPHERE_CENTER = (0.0, 0.0, -1.0)
SMALL_SPHERE_RADIUS = 0.5

# Ground sphere, its top touching the bottom of the small sphere
GROUND_SPHERE_CENTER = (0.0, -100.5, -1.0)
GROUND_SPHERE_RADIUS = 100.0


def create_default_scene() -> SurfaceList:
    """Create the two-sphere reference scene.

    Returns:
        A SurfaceList holding the small sphere followed by the ground sphere.
    """
    world = SurfaceList()
    world.add_sphere(SMALL_SPHERE_CENTER, SMALL_SPHERE_RADIUS)
    world.add_sphere(GROUND_SPHERE_CENTER, GROUND_SPHERE_RADIUS)
    return world
