# renderer/tone_mapping.py
import numpy as np

def gamma_tone_mapping(accumulated: np.ndarray, samples_per_pixel: int) -> np.ndarray:
    """
    Turn a buffer of summed linear samples into 8-bit RGB.

    Each pixel is averaged over its samples, gamma corrected with gamma 2
    (square root), clamped to [0, 0.999] and scaled to 0..255.
    """
    scaled = accumulated / float(samples_per_pixel)
    mapped = np.sqrt(np.maximum(scaled, 0.0))
    return (256.0 * np.clip(mapped, 0.0, 0.999)).astype(np.uint8)
