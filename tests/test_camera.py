"""Unit tests for the thin-lens camera."""

import random

import pytest

from camera.camera import Camera
from core.vector import Point3, Vector3


def pinhole(**overrides):
    params = dict(lookfrom=Point3(0, 0, 0), lookat=Point3(0, 0, -1), vup=Vector3(0, 1, 0),
                  vfov=90.0, aspect_ratio=2.0, aperture=0.0, focus_dist=1.0)
    params.update(overrides)
    return Camera(**params)


class TestCameraBasis:

    def test_orthonormal_basis(self):
        cam = pinhole(lookfrom=Point3(3, 3, 2), lookat=Point3(0, 0, -1))
        for axis in (cam.u, cam.v, cam.w):
            assert axis.length() == pytest.approx(1.0)
        assert cam.u.dot(cam.v) == pytest.approx(0.0, abs=1e-12)
        assert cam.u.dot(cam.w) == pytest.approx(0.0, abs=1e-12)
        assert cam.v.dot(cam.w) == pytest.approx(0.0, abs=1e-12)

    def test_viewport_size_from_fov(self):
        cam = pinhole(vfov=90.0, aspect_ratio=2.0, focus_dist=1.0)
        # tan(45 deg) = 1, so the viewport is 4 x 2 at distance 1
        assert cam.vertical.length() == pytest.approx(2.0)
        assert cam.horizontal.length() == pytest.approx(4.0)
        assert tuple(cam.lower_left_corner) == pytest.approx((-2, -1, -1))

    def test_lens_radius_is_half_aperture(self):
        assert pinhole(aperture=0.5).lens_radius == 0.25


class TestGetRay:

    def test_center_ray_points_at_target(self, rng):
        cam = pinhole(lookfrom=Point3(13, 2, 3), lookat=Point3(0, 0, 0), vfov=20.0,
                      aspect_ratio=1.5, focus_dist=10.0)
        ray = cam.get_ray(0.5, 0.5, rng)
        expected = (Point3(0, 0, 0) - Point3(13, 2, 3)).normalize()
        assert ray.origin == Point3(13, 2, 3)
        assert tuple(ray.direction.normalize()) == pytest.approx(tuple(expected))

    def test_corners(self, rng):
        cam = pinhole()
        assert tuple(cam.get_ray(0.0, 0.0, rng).direction) == pytest.approx((-2, -1, -1))
        assert tuple(cam.get_ray(1.0, 1.0, rng).direction) == pytest.approx((2, 1, -1))

    def test_coordinates_outside_unit_square_extrapolate(self, rng):
        cam = pinhole()
        assert tuple(cam.get_ray(1.5, -0.5, rng).direction) == pytest.approx((4, -2, -1))

    def test_pinhole_is_deterministic(self):
        cam = pinhole()
        a = cam.get_ray(0.3, 0.7, random.Random(1))
        b = cam.get_ray(0.3, 0.7, random.Random(2))
        assert a.origin == b.origin
        assert tuple(a.direction) == pytest.approx(tuple(b.direction))

    def test_aperture_jitters_origin_on_lens(self):
        cam = pinhole(lookfrom=Point3(0, 0, 5), lookat=Point3(0, 0, 0), aperture=1.0,
                      focus_dist=5.0)
        rng = random.Random(4)
        origins = set()
        for _ in range(100):
            ray = cam.get_ray(0.5, 0.5, rng)
            offset = ray.origin - cam.origin
            assert offset.length() < cam.lens_radius
            # The lens lies in the plane perpendicular to the view direction
            assert offset.dot(cam.w) == pytest.approx(0.0, abs=1e-12)
            origins.add((ray.origin.x, ray.origin.y))
        assert len(origins) > 1

    def test_rays_converge_on_focal_plane(self):
        """Every lens sample for a given (s, t) passes through the same focal point."""
        cam = pinhole(lookfrom=Point3(0, 0, 5), lookat=Point3(0, 0, 0), aperture=2.0,
                      focus_dist=5.0)
        rng = random.Random(9)
        focal_point = cam.lower_left_corner + cam.horizontal * 0.25 + cam.vertical * 0.8
        for _ in range(50):
            ray = cam.get_ray(0.25, 0.8, rng)
            hit = ray.at(1.0)
            assert tuple(hit) == pytest.approx(tuple(focal_point))
        assert focal_point.z == pytest.approx(0.0)
