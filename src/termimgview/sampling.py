import math

import numpy as np


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def output_size(width: int, height: int, scale: float, aspect_ratio_adjust: float) -> tuple[int, int]:
    """Return (cols, rows) of the character grid, never smaller than 1x1."""
    cols = max(1, round_half_up(width * scale))
    rows = max(1, round_half_up(height * scale * aspect_ratio_adjust))
    return cols, rows


def _region_bounds(source: int, target: int) -> tuple[np.ndarray, np.ndarray]:
    """Half-open source ranges [start, stop) for each of target output positions.

    Downsampling tiles the source exactly. When a range comes out empty
    (upsampling), it is replaced by the single nearest pixel at its centre.
    """
    idx = np.arange(target, dtype=np.int64)
    start = idx * source // target
    stop = (idx + 1) * source // target
    centre = np.minimum((2 * idx + 1) * source // (2 * target), source - 1)
    empty = stop <= start
    start = np.where(empty, centre, start)
    stop = np.where(empty, centre + 1, stop)
    return start, stop


def resample(image: np.ndarray, scale: float, aspect_ratio_adjust: float) -> np.ndarray:
    """Box-filter an (H, W, C) image down (or up) to the output grid.

    Returns float64 array of shape (rows, cols, C) holding the mean of every
    channel over each cell's source region.
    """
    height, width = image.shape[:2]
    cols, rows = output_size(width, height, scale, aspect_ratio_adjust)

    # Summed-area table with a zero row and column in front
    table = np.zeros((height + 1, width + 1, image.shape[2]), dtype=np.float64)
    table[1:, 1:] = image.astype(np.float64).cumsum(axis=0).cumsum(axis=1)

    y0, y1 = _region_bounds(height, rows)
    x0, x1 = _region_bounds(width, cols)

    y0, y1 = y0[:, None], y1[:, None]
    sums = table[y1, x1[None, :]] - table[y0, x1[None, :]] - table[y1, x0[None, :]] + table[y0, x0[None, :]]
    counts = ((y1 - y0) * (x1 - x0)[None, :])[..., None]
    return sums / counts


def premultiply(image: np.ndarray) -> np.ndarray:
    """Scale RGB by alpha so transparent pixels carry no colour. Returns float64 RGBA."""
    out = image.astype(np.float64)
    out[..., :3] *= out[..., 3:4] / 255.0
    return out


def remove_background(image: np.ndarray, colour: tuple[int, int, int], tolerance: float) -> np.ndarray:
    """Make pixels within tolerance of colour fully transparent.

    Distance is Euclidean over the premultiplied RGB, so a half-transparent
    pixel is compared by the colour it shows over black.
    """
    rgb = premultiply(image)[..., :3]
    distance = np.sqrt(((rgb - np.asarray(colour, dtype=np.float64)) ** 2).sum(axis=-1))
    out = image.copy()
    out[distance < tolerance] = 0
    return out


def composite(samples: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Split resampled premultiplied RGBA into colour over black and visibility.

    Returns (rgb, visible) where rgb is float64 (rows, cols, 3) and visible is
    False for cells whose every source pixel was fully transparent.
    """
    return samples[..., :3], samples[..., 3] > 0
