"""Unit tests for the Lambertian material."""

import random

import pytest

from core.ray import Ray
from core.vector import Color, Point3, Vector3
from geometry.hittable import HitRecord
from materials.lambertian import Lambertian


def make_record(normal=Vector3(0, 1, 0), material=None):
    return HitRecord(p=Point3(0, 0, 0), normal=normal, t=1.0, front_face=True,
                     material=material)


class TestLambertianScatter:

    def test_always_scatters_with_albedo(self):
        albedo = Color(0.3, 0.6, 0.9)
        material = Lambertian(albedo)
        rng = random.Random(3)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(200):
            result = material.scatter(ray_in, make_record(material=material), rng)
            assert result is not None
            scattered, attenuation = result
            assert attenuation is albedo
            assert scattered.origin == Point3(0, 0, 0)

    def test_scatter_stays_in_normal_hemisphere(self):
        material = Lambertian(Color(0.5, 0.5, 0.5))
        rng = random.Random(11)
        normal = Vector3(0, 1, 0)
        ray_in = Ray(Point3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(500):
            scattered, _ = material.scatter(ray_in, make_record(normal), rng)
            # normal + unit vector never points below the tangent plane
            assert scattered.direction.dot(normal) >= 0
            assert not scattered.direction.near_zero()

    def test_degenerate_direction_falls_back_to_normal(self, scripted_random):
        """A random unit vector exactly opposite the normal cancels it out."""
        material = Lambertian(Color(0.5, 0.5, 0.5))
        # random_in_unit_sphere -> (0, -0.5, 0), normalised to (0, -1, 0)
        rng = scripted_random(uniforms=[0.0, -0.5, 0.0])
        normal = Vector3(0, 1, 0)
        scattered, _ = material.scatter(Ray(Point3(0, 1, 0), Vector3(0, -1, 0)),
                                        make_record(normal), rng)
        assert scattered.direction == normal
        assert scattered.direction.length() == pytest.approx(1.0)
