# renderer/image.py
import os

import numpy as np
from PIL import Image


class ImageWriteError(Exception):
    """Raised when a rendered image cannot be written to disk."""


def write_ppm(pixels: np.ndarray, path: str) -> None:
    """
    Write an (H, W, 3) uint8 buffer as a plain-text P3 PPM file:
    a three line header followed by one "R G B" line per pixel, top row first.
    """
    height, width = pixels.shape[:2]
    try:
        with open(path, "w") as f:
            f.write(f"P3\n{width} {height}\n255\n")
            for row in pixels:
                for r, g, b in row:
                    f.write(f"{r} {g} {b}\n")
    except OSError as e:
        raise ImageWriteError(f"Unable to write {path}: {e}") from e


def save_png(pixels: np.ndarray, path: str) -> None:
    """Save an (H, W, 3) uint8 buffer as a PNG via Pillow."""
    try:
        Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(path)
    except OSError as e:
        raise ImageWriteError(f"Unable to write {path}: {e}") from e


def save_image(pixels: np.ndarray, base_name: str) -> str:
    """
    Save using the writer matching the file extension. A name without an
    extension gets ".ppm". Returns the path that was written.
    """
    root, ext = os.path.splitext(base_name)
    ext = ext.lower()
    if ext == "":
        path = base_name + ".ppm"
        write_ppm(pixels, path)
    elif ext == ".ppm":
        path = base_name
        write_ppm(pixels, path)
    elif ext == ".png":
        path = base_name
        save_png(pixels, path)
    else:
        raise ImageWriteError(f"Unsupported image format '{ext}' (use .ppm or .png)")
    return path
