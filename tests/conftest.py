"""Pytest configuration for ray tracer tests.

Shared fixtures: a seeded random generator, a scripted generator for
forcing specific random draws, and small scenes.
"""

import random

import pytest

from core.vector import Color, Point3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian


class ScriptedRandom(random.Random):
    """Random generator that replays fixed values.

    uniform() returns the next value from ``uniforms`` and random() the next
    value from ``randoms``; both cycle when exhausted.
    """

    def __init__(self, uniforms=(0.0,), randoms=(0.5,)):
        super().__init__(0)
        self._uniforms = list(uniforms)
        self._randoms = list(randoms)
        self._u = 0
        self._r = 0

    def uniform(self, a, b):
        value = self._uniforms[self._u % len(self._uniforms)]
        self._u += 1
        return value

    def random(self):
        value = self._randoms[self._r % len(self._randoms)]
        self._r += 1
        return value


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def ground_world():
    """Just a large diffuse ground sphere under the origin."""
    world = HittableList()
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, Lambertian(Color(0.5, 0.5, 0.5))))
    return world
