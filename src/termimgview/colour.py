"""Per-cell colour adjustments.

Every function takes an array-like of shape (..., 3) holding RGB values in
0-255 and returns a new uint8 array of the same shape, so the same code
handles a single colour and a whole grid of cells.
"""

import numpy as np

from termimgview.config import RenderConfig

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.asarray(np.clip(np.rint(values), 0, 255), dtype=np.uint8)


def luma(rgb) -> np.ndarray:
    """Perceptual luminance Y in 0-255 as float64, shape (...)."""
    return np.asarray(rgb, dtype=np.float64) @ LUMA_WEIGHTS


def luminance(rgb) -> np.ndarray:
    """Luminance normalised to [0, 1]."""
    return np.clip(luma(rgb) / 255.0, 0.0, 1.0)


def grayscale(rgb) -> np.ndarray:
    y = _to_uint8(luma(rgb))
    return np.repeat(np.expand_dims(y, -1), 3, axis=-1)


def rgb_to_hsv(rgb) -> np.ndarray:
    """Convert 0-255 RGB to HSV with H in degrees [0, 360) and S, V in [0, 1]."""
    arr = np.asarray(rgb, dtype=np.float64) / 255.0
    r, g, b = arr[..., 0], arr[..., 1], arr[..., 2]
    maxc = arr.max(axis=-1)
    minc = arr.min(axis=-1)
    delta = maxc - minc
    safe_delta = np.where(delta > 0, delta, 1.0)

    s = np.where(maxc > 0, delta / np.where(maxc > 0, maxc, 1.0), 0.0)

    h = np.where(
        maxc == r,
        ((g - b) / safe_delta) % 6.0,
        np.where(maxc == g, (b - r) / safe_delta + 2.0, (r - g) / safe_delta + 4.0),
    )
    h = np.where(delta > 0, h * 60.0, 0.0)
    return np.stack([h, s, maxc], axis=-1)


def hsv_to_rgb(hsv) -> np.ndarray:
    """Inverse of rgb_to_hsv. Returns float64 RGB in 0-255 (unrounded)."""
    arr = np.asarray(hsv, dtype=np.float64)
    h, s, v = arr[..., 0] % 360.0, arr[..., 1], arr[..., 2]
    c = v * s
    hp = h / 60.0
    x = c * (1.0 - np.abs(hp % 2.0 - 1.0))
    m = v - c
    zero = np.zeros_like(c)
    sector = np.floor(hp).astype(np.int64) % 6

    # (r, g, b) before adding m, for each of the six 60 degree sectors
    choices = [
        np.stack([c, x, zero], axis=-1),
        np.stack([x, c, zero], axis=-1),
        np.stack([zero, c, x], axis=-1),
        np.stack([zero, x, c], axis=-1),
        np.stack([x, zero, c], axis=-1),
        np.stack([c, zero, x], axis=-1),
    ]
    rgb = np.choose(np.expand_dims(sector, -1), choices)
    return (rgb + np.expand_dims(m, -1)) * 255.0


def rotate_hue(rgb, degrees: float) -> np.ndarray:
    """Shift the hue by degrees (mod 360). Unsaturated pixels are returned unchanged."""
    arr = np.asarray(rgb, dtype=np.float64)
    hsv = rgb_to_hsv(arr)
    hsv[..., 0] = (hsv[..., 0] + degrees) % 360.0
    rotated = hsv_to_rgb(hsv)
    grey = np.expand_dims(hsv[..., 1] == 0, -1)
    return _to_uint8(np.where(grey, arr, rotated))


def adjust_brightness(rgb, factor: float) -> np.ndarray:
    # Each channel saturates on its own; no rescaling to preserve hue
    return _to_uint8(np.asarray(rgb, dtype=np.float64) * factor)


def invert(rgb) -> np.ndarray:
    return 255 - _to_uint8(np.asarray(rgb, dtype=np.float64))


def transform(rgb, config: RenderConfig) -> np.ndarray:
    """Apply grayscale, hue rotation, brightness and inversion in that fixed order."""
    out = np.asarray(rgb, dtype=np.float64)
    if config.grayscale:
        out = grayscale(out)
    if config.hue_rotation_degrees % 360.0 != 0:
        out = rotate_hue(out, config.hue_rotation_degrees)
    out = adjust_brightness(out, config.brightness)
    if config.invert:
        out = invert(out)
    return out
