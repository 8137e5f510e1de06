"""Unit tests for per-ray color resolution.

Tests cover:
- Normal-to-color mapping
- Background gradient endpoints and direction-length independence
- ray_color hit and miss paths
- Deterministic results for repeated queries
"""

import numpy as np
import pytest
import taichi as ti


def _eval_background(direction):
    from normalcast.core.shading import background_color
    from normalcast.core.vector import vec3

    result = ti.field(dtype=ti.math.vec3, shape=())
    dx, dy, dz = direction

    @ti.kernel
    def test_kernel():
        result[None] = background_color(vec3(dx, dy, dz))

    test_kernel()
    return result[None]


def _eval_ray_color(direction):
    from normalcast.core.ray import Ray
    from normalcast.core.shading import ray_color
    from normalcast.core.vector import vec3

    result = ti.field(dtype=ti.math.vec3, shape=())
    dx, dy, dz = direction

    @ti.kernel
    def test_kernel():
        result[None] = ray_color(Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(dx, dy, dz)))

    test_kernel()
    return result[None]


class TestNormalColor:
    """Tests for normal_color."""

    @pytest.mark.parametrize(
        "normal, expected",
        [
            ((0.0, 0.0, 1.0), (0.5, 0.5, 1.0)),
            ((-1.0, 0.0, 0.0), (0.0, 0.5, 0.5)),
            ((0.0, 1.0, 0.0), (0.5, 1.0, 0.5)),
        ],
    )
    def test_normal_color(self, normal, expected):
        """Test each component maps from [-1, 1] to [0, 1]."""
        from normalcast.core.shading import normal_color
        from normalcast.core.vector import vec3

        result = ti.field(dtype=ti.math.vec3, shape=())
        nx, ny, nz = normal

        @ti.kernel
        def test_kernel():
            result[None] = normal_color(vec3(nx, ny, nz))

        test_kernel()
        c = result[None]
        for k in range(3):
            assert abs(c[k] - expected[k]) < 1e-6


class TestBackground:
    """Tests for the sky gradient."""

    def test_straight_up_is_sky_blue(self):
        """Test that looking straight up gives (0.5, 0.7, 1.0)."""
        c = _eval_background((0.0, 1.0, 0.0))
        assert abs(c[0] - 0.5) < 1e-6
        assert abs(c[1] - 0.7) < 1e-6
        assert abs(c[2] - 1.0) < 1e-6

    def test_straight_down_is_white(self):
        """Test that looking straight down gives white."""
        c = _eval_background((0.0, -1.0, 0.0))
        for k in range(3):
            assert abs(c[k] - 1.0) < 1e-6

    def test_horizontal_is_midpoint(self):
        """Test that a horizontal direction is halfway along the gradient."""
        c = _eval_background((1.0, 0.0, 0.0))
        assert abs(c[0] - 0.75) < 1e-6
        assert abs(c[1] - 0.85) < 1e-6
        assert abs(c[2] - 1.0) < 1e-6

    def test_direction_length_does_not_matter(self):
        """Test that scaling the direction leaves the color unchanged."""
        short = _eval_background((0.3, 0.4, -1.0))
        long = _eval_background((3.0, 4.0, -10.0))
        for k in range(3):
            assert abs(short[k] - long[k]) < 1e-6


class TestRayColor:
    """Tests for ray_color against the scene."""

    def test_miss_gives_background(self):
        """Test that an empty scene shows the gradient."""
        c = _eval_ray_color((0.0, 1.0, 0.0))
        assert abs(c[0] - 0.5) < 1e-6
        assert abs(c[1] - 0.7) < 1e-6

    def test_hit_gives_normal_color(self):
        """Test that the small sphere seen head-on is (0.5, 0.5, 1.0)."""
        from normalcast.scene.default_scene import create_default_scene

        create_default_scene()

        c = _eval_ray_color((0.0, 0.0, -1.0))
        assert abs(c[0] - 0.5) < 1e-6
        assert abs(c[1] - 0.5) < 1e-6
        assert abs(c[2] - 1.0) < 1e-6

    def test_colors_in_unit_range(self):
        """Test that colors for a spread of directions stay in [0, 1]."""
        from normalcast.scene.default_scene import create_default_scene

        create_default_scene()

        for direction in [(0.0, -0.2, -1.0), (0.3, -0.9, -1.0), (-1.0, 0.5, -1.0), (0.0, -1.0, 0.0)]:
            c = _eval_ray_color(direction)
            for k in range(3):
                assert -1e-6 <= c[k] <= 1.0 + 1e-6

    def test_repeated_queries_identical(self):
        """Test that resolving the same ray twice gives bit-identical colors."""
        from normalcast.core.ray import Ray
        from normalcast.core.shading import ray_color
        from normalcast.core.vector import vec3
        from normalcast.scene.default_scene import create_default_scene

        create_default_scene()
        results = ti.field(dtype=ti.math.vec3, shape=2)

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.1, -0.3, -1.0))
            results[0] = ray_color(ray)
            results[1] = ray_color(ray)

        test_kernel()
        colors = results.to_numpy()
        assert np.array_equal(colors[0], colors[1])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
