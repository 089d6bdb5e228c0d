# materials/presets.py
from typing import Callable, Dict
from core.vector import Vector3
from materials.material import Material
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric

class MetalPresets:
    """Predefined metal materials with realistic properties."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Vector3(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Vector3(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Vector3(0.9, 0.9, 0.9), fuzz=0.0)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Vector3(0.8, 0.8, 0.8), fuzz=0.3)

class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

    @staticmethod
    def ice() -> Dielectric:
        return Dielectric(1.31)

class ColorPresets:
    """Common color presets for materials."""

    RED = Vector3(0.9, 0.2, 0.2)
    BLUE = Vector3(0.2, 0.3, 0.9)
    GREEN = Vector3(0.2, 0.8, 0.2)
    WHITE = Vector3(0.9, 0.9, 0.9)
    GRAY = Vector3(0.5, 0.5, 0.5)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)


# Names accepted by the "preset" key of a scene file material.
MATERIAL_PRESETS: Dict[str, Callable[[], Material]] = {
    "gold": MetalPresets.gold,
    "silver": MetalPresets.silver,
    "copper": MetalPresets.copper,
    "chrome": MetalPresets.chrome,
    "brushed_metal": MetalPresets.brushed_metal,
    "glass": DielectricPresets.glass,
    "water": DielectricPresets.water,
    "diamond": DielectricPresets.diamond,
    "ice": DielectricPresets.ice,
    "red": lambda: ColorPresets.matte(ColorPresets.RED),
    "blue": lambda: ColorPresets.matte(ColorPresets.BLUE),
    "green": lambda: ColorPresets.matte(ColorPresets.GREEN),
    "white": lambda: ColorPresets.matte(ColorPresets.WHITE),
    "gray": lambda: ColorPresets.matte(ColorPresets.GRAY),
}


def material_preset(name: str) -> Material:
    """
    Returns a new material for a preset name. Raises KeyError for unknown names.
    """
    return MATERIAL_PRESETS[name]()
