"""Unit tests for the sphere module and the shared hit record helpers.

Tests cover:
- HitRecord miss defaults and set_face_normal orientation
- Ray-sphere intersection: front hits, back-face hits from inside
- Offset and tangent rays, spheres behind the ray, exclusive interval bounds
"""

import pytest
import taichi as ti


class TestHitRecord:
    """Tests for HitRecord helpers."""

    def test_miss_record_is_zeroed(self):
        """Test that a miss record reports no hit."""
        from normalcast.geometry.hittable import make_miss_record

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        front_face = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            record = make_miss_record()
            hit[None] = record.hit
            t_val[None] = record.t
            front_face[None] = record.front_face

        test_kernel()
        assert hit[None] == 0
        assert t_val[None] == 0.0
        assert front_face[None] == 0

    def test_set_face_normal_front(self):
        """Test that a ray against the outward normal keeps it."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.hittable import set_face_normal

        front_face = ti.field(dtype=ti.i32, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            ff, n = set_face_normal(ray, vec3(0.0, 0.0, 1.0))
            front_face[None] = ff
            normal[None] = n

        test_kernel()
        assert front_face[None] == 1
        assert abs(normal[None][2] - 1.0) < 1e-6

    def test_set_face_normal_back(self):
        """Test that a ray along the outward normal flips it."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.hittable import set_face_normal

        front_face = ti.field(dtype=ti.i32, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            ff, n = set_face_normal(ray, vec3(0.0, 0.0, -1.0))
            front_face[None] = ff
            normal[None] = n

        test_kernel()
        assert front_face[None] == 0
        assert abs(normal[None][2] - 1.0) < 1e-6


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_front(self):
        """Test a ray from the origin hitting the front of a sphere."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        point = ti.field(dtype=ti.math.vec3, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())
        front_face = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            record = hit_sphere(ray, sphere, 0.0, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t
            point[None] = record.point
            normal[None] = record.normal
            front_face[None] = record.front_face

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 0.5) < 1e-6
        p = point[None]
        assert abs(p[0]) < 1e-6
        assert abs(p[1]) < 1e-6
        assert abs(p[2] + 0.5) < 1e-6
        n = normal[None]
        assert abs(n[2] - 1.0) < 1e-6
        assert front_face[None] == 1

    def test_hit_sphere_tangent_is_miss(self):
        """Test that a ray grazing the sphere (zero discriminant) misses."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.5, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            hit[None] = hit_sphere(ray, sphere, 0.0, 1000.0).hit

        test_kernel()
        assert hit[None] == 0

    def test_hit_sphere_offset_ray_misses(self):
        """Test that a ray passing farther than the radius from the center misses."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=2)
        t_max = float("inf")

        @ti.kernel
        def test_kernel():
            # Passes 0.6 from the center of a radius 0.5 sphere
            ray = Ray(origin=vec3(0.6, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            hit[0] = hit_sphere(ray, sphere, -1000.0, 1000.0).hit
            hit[1] = hit_sphere(ray, sphere, 0.0, t_max).hit

        test_kernel()
        assert hit[0] == 0
        assert hit[1] == 0

    def test_hit_sphere_from_inside(self):
        """Test that a ray starting inside reports the exit as a back face."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())
        front_face = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, -1.0), direction=vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            record = hit_sphere(ray, sphere, 0.0, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t
            normal[None] = record.normal
            front_face[None] = record.front_face

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 0.5) < 1e-6
        assert front_face[None] == 0
        # Outward normal at the exit is -Z, flipped to face the ray
        assert abs(normal[None][2] - 1.0) < 1e-6

    def test_hit_sphere_from_center_scaled_direction(self):
        """Test a ray from the center exits at t = radius / |direction|."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        t_val = ti.field(dtype=ti.f32, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())
        front_face = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            # |d| = 5
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 3.0, 4.0))
            sphere = Sphere(center=vec3(1.0, 2.0, 3.0), radius=2.0)
            record = hit_sphere(ray, sphere, 0.0, 1000.0)
            t_val[None] = record.t
            normal[None] = record.normal
            front_face[None] = record.front_face

        test_kernel()
        assert abs(t_val[None] - 0.4) < 1e-6
        # Outward normal is (0, 0.6, 0.8); the ray leaves along it, so it is flipped
        n = normal[None]
        assert abs(n[1] + 0.6) < 1e-5
        assert abs(n[2] + 0.8) < 1e-5
        assert front_face[None] == 0

    def test_hit_sphere_behind_ray(self):
        """Test that a sphere behind the ray origin is missed."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            hit[None] = hit_sphere(ray, sphere, 0.0, 1000.0).hit

        test_kernel()
        assert hit[None] == 0

    def test_hit_sphere_t_max_is_exclusive(self):
        """Test that a root equal to t_max is rejected."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            # Roots are t=0.5 and t=1.5
            hit[None] = hit_sphere(ray, sphere, 0.0, 0.5).hit

        test_kernel()
        assert hit[None] == 0

    def test_hit_sphere_t_min_is_exclusive(self):
        """Test that a root equal to t_min falls back to the far root."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        front_face = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            record = hit_sphere(ray, sphere, 0.5, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t
            front_face[None] = record.front_face

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 1.5) < 1e-6
        assert front_face[None] == 0

    def test_hit_sphere_oblique_point_on_surface(self):
        """Test that an oblique hit lands on the sphere surface."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        point = ti.field(dtype=ti.math.vec3, shape=())
        normal_length = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, -0.2, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            record = hit_sphere(ray, sphere, 0.0, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t
            point[None] = record.point
            normal_length[None] = record.normal.norm()

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 0.51054) < 1e-4
        p = point[None]
        dist = (p[0] ** 2 + p[1] ** 2 + (p[2] + 1.0) ** 2) ** 0.5
        assert abs(dist - 0.5) < 1e-5
        assert abs(normal_length[None] - 1.0) < 1e-5

    def test_unnormalized_direction_same_point(self):
        """Test that the hit point does not depend on the direction length."""
        from normalcast.core.ray import Ray
        from normalcast.core.vector import vec3
        from normalcast.geometry.sphere import Sphere, hit_sphere

        t_val = ti.field(dtype=ti.f32, shape=())
        point = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -2.0))
            sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
            record = hit_sphere(ray, sphere, 0.0, 1000.0)
            t_val[None] = record.t
            point[None] = record.point

        test_kernel()
        assert abs(t_val[None] - 0.25) < 1e-6
        assert abs(point[None][2] + 0.5) < 1e-6


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
