# scene/builtin.py
import random
from typing import Callable, Dict, Optional

from core.vector import Color, Point3, Vector3
from camera.camera import Camera
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.dielectric import Dielectric
from materials.presets import DielectricPresets
from scene.loader import Scene


def cover_scene(rng: Optional[random.Random] = None, aspect_ratio: float = 3.0 / 2.0) -> Scene:
    """
    The classic cover image: a field of small random spheres around three big ones.
    """
    rng = rng or random.Random()
    world = HittableList()

    # Ground
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))))

    # Random small spheres
    glass = DielectricPresets.glass()
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                material = Lambertian(Color.random(rng) * Color.random(rng))
            elif choose_mat < 0.95:
                material = Metal(Color.random(rng, 0.5, 1.0), rng.uniform(0, 0.5))
            else:
                material = glass
            world.add(Sphere(center, 0.2, material))

    # Big spheres
    world.add(Sphere(Point3(0, 1, 0), 1.0, glass))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    camera = Camera(
        lookfrom=Point3(13, 2, 3),
        lookat=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )
    return Scene(world, camera, "cover")


def three_spheres_scene(rng: Optional[random.Random] = None,
                        aspect_ratio: float = 16.0 / 9.0) -> Scene:
    """
    Diffuse, hollow glass and metal spheres on a large ground sphere.
    """
    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    left = Dielectric(1.5)
    right = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world = HittableList()
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, center))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, left))
    # Negative radius makes the inner surface of the bubble
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), -0.45, left))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, right))

    lookfrom = Point3(3, 3, 2)
    lookat = Point3(0, 0, -1)
    camera = Camera(lookfrom, lookat, Vector3(0, 1, 0), 20.0, aspect_ratio,
                    aperture=0.5, focus_dist=(lookfrom - lookat).length())
    return Scene(world, camera, "three_spheres")


BUILTIN_SCENES: Dict[str, Callable[..., Scene]] = {
    "cover": cover_scene,
    "three_spheres": three_spheres_scene,
}
