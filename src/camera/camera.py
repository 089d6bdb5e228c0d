# camera/camera.py
import math
import random
from core.vector import Vector3
from core.ray import Ray
from core.utils import degrees_to_radians, random_in_unit_disk

class Camera:
    """
    Thin-lens camera positioned with look-from / look-at vectors.

    The viewport basis is computed once; the camera is read-only afterwards
    and can be shared between render threads.
    """
    def __init__(self, lookfrom: Vector3, lookat: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0):
        self.vfov = vfov  # Vertical field of view in degrees
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0

        # Compute viewport dimensions based on fov
        theta = degrees_to_radians(vfov)
        viewport_height = 2.0 * math.tan(theta / 2)
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal basis: w points backwards, u right, v up
        self.w = (lookfrom - lookat).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = lookfrom
        # Scale by focus distance so the focal plane is the viewport
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng: random.Random) -> Ray:
        """
        Generates a ray through viewport coordinates (s, t), with the origin
        jittered across the lens for depth of field.
        """
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        return Ray(ray_origin, ray_direction)
