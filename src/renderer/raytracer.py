# renderer/raytracer.py
import random
import sys
import threading
import time
from typing import List, Optional, Tuple

import numpy as np

from core.ray import Ray
from core.utils import INFINITY
from core.vector import Color, Vector3
from geometry.hittable import Hittable
from camera.camera import Camera
from .tone_mapping import gamma_tone_mapping

MAX_BOUNCES = 50
# Lower bound on hit distance; keeps scattered rays from re-hitting their own origin
T_MIN = 0.001

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Vector3:
    """
    Background gradient from white at the horizon-down to sky blue overhead.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng: random.Random) -> Vector3:
    """
    Returns the color seen along the ray. If the ray hits an object, the material
    scatter is computed recursively up to 'depth' bounces.
    """
    if depth <= 0:
        return Color(0.0, 0.0, 0.0)  # Exceeded recursion depth

    rec = world.hit(ray, T_MIN, INFINITY)
    if rec is None:
        return sky_color(ray)

    scatter_result = rec.material.scatter(ray, rec, rng)
    if scatter_result is None:
        return Color(0.0, 0.0, 0.0)
    scattered, attenuation = scatter_result
    return attenuation * ray_color(scattered, world, depth - 1, rng)


class PixelCursor:
    """
    Hands out pixel coordinates to render threads, one at a time.

    Rows are visited from the top (j = height - 1) down to 0, each row
    left to right. claim() returns None once every pixel is taken.
    """
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._lock = threading.Lock()
        self._i = 0
        self._j = height - 1

    def claim(self) -> Optional[Tuple[int, int]]:
        with self._lock:
            if self._j < 0:
                return None
            pixel = (self._i, self._j)
            self._i += 1
            if self._i == self.width:
                self._i = 0
                self._j -= 1
            return pixel

    def close(self):
        """Stop handing out pixels."""
        with self._lock:
            self._j = -1

    def __iter__(self):
        while True:
            pixel = self.claim()
            if pixel is None:
                return
            yield pixel


class Renderer:
    """
    Multi-threaded CPU path tracer.

    Worker threads pull pixels from a shared PixelCursor, trace
    samples_per_pixel jittered camera rays per pixel with their own random
    generator, and store the summed color in the accumulation buffer. The
    world and camera are only read, so they are shared without locking.
    """
    def __init__(self, width: int, height: int, samples_per_pixel: int = 10,
                 max_depth: int = MAX_BOUNCES, threads: int = 1,
                 seed: Optional[int] = None, quiet: bool = False):
        if width < 1 or height < 1:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")
        if threads < 1:
            raise ValueError(f"threads must be at least 1, got {threads}")

        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.threads = threads
        self.seed = seed
        self.quiet = quiet
        self.render_time = 0.0

        # Row 0 is the top of the image
        self.accumulation_buffer = np.zeros((height, width, 3), dtype=np.float64)
        self._buffer_lock = threading.Lock()

        # A single row or column has nothing to interpolate across
        self._s_scale = float(max(width - 1, 1))
        self._t_scale = float(max(height - 1, 1))

    def make_rng(self, worker_index: int) -> random.Random:
        """Random generator owned by one worker thread."""
        if self.seed is None:
            return random.Random()
        return random.Random(self.seed + worker_index)

    def sample_pixel(self, i: int, j: int, world: Hittable, camera: Camera,
                     rng: random.Random) -> Vector3:
        """
        Sum of samples_per_pixel jittered samples for pixel column i,
        row j (counted from the bottom).
        """
        pixel_color = Color(0.0, 0.0, 0.0)
        for _ in range(self.samples_per_pixel):
            s = (i + rng.random()) / self._s_scale
            t = (j + rng.random()) / self._t_scale
            ray = camera.get_ray(s, t, rng)
            pixel_color += ray_color(ray, world, self.max_depth, rng)
        return pixel_color

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        """
        Render the scene and return a (height, width, 3) uint8 RGB image,
        top row first.
        """
        self.accumulation_buffer.fill(0.0)
        cursor = PixelCursor(self.width, self.height)
        errors: List[BaseException] = []

        workers = [
            threading.Thread(target=self._work, name=f"render-{index}",
                             args=(index, cursor, world, camera, errors))
            for index in range(self.threads)
        ]
        start = time.perf_counter()
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()
        self.render_time = time.perf_counter() - start

        if errors:
            raise errors[0]

        if not self.quiet:
            print(f"\nDone in {self.render_time:.2f}s "
                  f"({self.width}x{self.height}, {self.samples_per_pixel} spp, "
                  f"depth {self.max_depth}, {self.threads} threads).", file=sys.stderr)

        return gamma_tone_mapping(self.accumulation_buffer, self.samples_per_pixel)

    def _work(self, index: int, cursor: PixelCursor, world: Hittable,
              camera: Camera, errors: List[BaseException]):
        rng = self.make_rng(index)
        try:
            for i, j in cursor:
                if i == 0:
                    self._report_progress(j)
                color = self.sample_pixel(i, j, world, camera, rng)
                with self._buffer_lock:
                    self.accumulation_buffer[self.height - 1 - j, i] = (color.x, color.y, color.z)
        except Exception as e:
            # Let the other workers drain; render() re-raises after join
            cursor.close()
            errors.append(e)

    def _report_progress(self, j: int):
        if not self.quiet:
            print(f"\rScanlines remaining: {j} ", end="", file=sys.stderr, flush=True)
