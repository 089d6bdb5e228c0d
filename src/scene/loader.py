# scene/loader.py
"""
Load scenes from JSON descriptions.

A scene file has three sections::

    {
      "materials": {"ground": {"type": "lambertian", "albedo": [0.8, 0.8, 0.0]},
                    "glass":  {"type": "dielectric", "ir": 1.5},
                    "steel":  {"type": "metal", "albedo": [0.8, 0.8, 0.8], "fuzz": 0.3},
                    "gold":   {"preset": "gold"}},
      "world":  [{"type": "sphere", "center": [0, -100.5, -1], "radius": 100,
                  "material": "ground"}],
      "camera": {"lookfrom": [3, 3, 2], "lookat": [0, 0, -1], "vup": [0, 1, 0],
                 "vfov": 20, "aspect_ratio": 1.7778, "aperture": 2.0,
                 "focus_dist": 5.2}
    }

Every material is built once and shared by all spheres that name it.
Any problem with the file is reported as a SceneError.
"""
import json
import math
from typing import Any, Dict, Mapping

from core.vector import Vector3
from camera.camera import Camera
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.material import Material
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.dielectric import Dielectric
from materials.presets import MATERIAL_PRESETS, material_preset


class SceneError(ValueError):
    """Raised when a scene description cannot be read or is invalid."""


class Scene:
    """
    A world paired with the camera that views it.
    """
    def __init__(self, world: HittableList, camera: Camera, name: str = "scene"):
        self.world = world
        self.camera = camera
        self.name = name

    def __repr__(self) -> str:
        return f"Scene({self.name!r}, {len(self.world)} objects)"


def _number(value: Any, where: str) -> float:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneError(f"{where}: expected a number, got {value!r}")
    if not math.isfinite(value):
        raise SceneError(f"{where}: expected a finite number, got {value!r}")
    return float(value)


def _vector(value: Any, where: str) -> Vector3:
    if not isinstance(value, list) or len(value) != 3:
        raise SceneError(f"{where}: expected a list of 3 numbers, got {value!r}")
    return Vector3(*(_number(c, where) for c in value))


def _require(section: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in section:
        raise SceneError(f"{where}: missing required key '{key}'")
    return section[key]


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise SceneError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def create_material(desc: Mapping[str, Any], where: str) -> Material:
    """
    Build a material from its description.
    """
    desc = _mapping(desc, where)
    if "preset" in desc:
        name = desc["preset"]
        if name not in MATERIAL_PRESETS:
            known = ", ".join(sorted(MATERIAL_PRESETS))
            raise SceneError(f"{where}: unknown preset {name!r} (known: {known})")
        return material_preset(name)

    kind = _require(desc, "type", where)
    if kind == "lambertian":
        return Lambertian(_vector(_require(desc, "albedo", where), f"{where}.albedo"))
    if kind == "metal":
        albedo = _vector(_require(desc, "albedo", where), f"{where}.albedo")
        fuzz = _number(desc.get("fuzz", 0.0), f"{where}.fuzz")
        return Metal(albedo, fuzz)
    if kind == "dielectric":
        ir = _number(_require(desc, "ir", where), f"{where}.ir")
        if ir <= 0:
            raise SceneError(f"{where}.ir: refractive index must be positive, got {ir}")
        return Dielectric(ir)
    raise SceneError(f"{where}: unknown material type {kind!r}")


def create_object(desc: Mapping[str, Any], materials: Dict[str, Material], where: str) -> Sphere:
    """
    Build a primitive from its description, linking it to a named material.
    """
    desc = _mapping(desc, where)
    kind = desc.get("type", "sphere")
    if kind != "sphere":
        raise SceneError(f"{where}: unknown object type {kind!r}")

    material_name = _require(desc, "material", where)
    if material_name not in materials:
        raise SceneError(f"{where}: material '{material_name}' not defined")

    center = _vector(_require(desc, "center", where), f"{where}.center")
    radius = _number(_require(desc, "radius", where), f"{where}.radius")
    if radius == 0:
        raise SceneError(f"{where}.radius: radius must be non-zero")
    return Sphere(center, radius, materials[material_name])


def create_camera(desc: Mapping[str, Any]) -> Camera:
    where = "camera"
    desc = _mapping(desc, where)
    lookfrom = _vector(_require(desc, "lookfrom", where), "camera.lookfrom")
    lookat = _vector(_require(desc, "lookat", where), "camera.lookat")
    vup = _vector(desc.get("vup", [0, 1, 0]), "camera.vup")
    vfov = _number(_require(desc, "vfov", where), "camera.vfov")
    aspect_ratio = _number(_require(desc, "aspect_ratio", where), "camera.aspect_ratio")
    aperture = _number(desc.get("aperture", 0.0), "camera.aperture")
    if "focus_dist" in desc:
        focus_dist = _number(desc["focus_dist"], "camera.focus_dist")
    else:
        focus_dist = (lookfrom - lookat).length()

    if not 0 < vfov < 180:
        raise SceneError(f"camera.vfov: must be between 0 and 180 degrees, got {vfov}")
    if aspect_ratio <= 0:
        raise SceneError(f"camera.aspect_ratio: must be positive, got {aspect_ratio}")
    if aperture < 0:
        raise SceneError(f"camera.aperture: must not be negative, got {aperture}")
    if focus_dist <= 0:
        raise SceneError(f"camera.focus_dist: must be positive, got {focus_dist}")

    try:
        return Camera(lookfrom, lookat, vup, vfov, aspect_ratio, aperture, focus_dist)
    except ZeroDivisionError:
        raise SceneError("camera: lookfrom and lookat must differ and vup must "
                         "not be parallel to the viewing direction") from None


def scene_from_dict(data: Any, name: str = "scene") -> Scene:
    data = _mapping(data, "scene")

    materials: Dict[str, Material] = {}
    for key, value in _mapping(_require(data, "materials", "scene"), "materials").items():
        materials[key] = create_material(value, f"materials.{key}")

    objects = _require(data, "world", "scene")
    if not isinstance(objects, list):
        raise SceneError(f"world: expected a list, got {type(objects).__name__}")
    world = HittableList()
    for index, obj in enumerate(objects):
        world.add(create_object(obj, materials, f"world[{index}]"))

    camera = create_camera(_require(data, "camera", "scene"))
    return Scene(world, camera, name)


def parse_scene(text: str, name: str = "scene") -> Scene:
    """
    Parse a JSON scene description.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SceneError(f"{name}: invalid JSON: {e}") from e
    return scene_from_dict(data, name)


def load_scene(path: str) -> Scene:
    """
    Read and parse a JSON scene file.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise SceneError(f"Unable to read scene file {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise SceneError(f"Unable to read scene file {path}: {e}") from e
    return parse_scene(text, path)
