import numpy as np

from termimgview.errors import RenderError


def shade_index(intensity, length: int):
    """Quantise intensity in [0, 1] to a ramp position, rounding halves up.

    Accepts a scalar or an array; returns an int or an int64 array to match.
    """
    if length < 1:
        raise RenderError("glyph ramp is empty")
    index = np.clip(np.floor(np.asarray(intensity, dtype=np.float64) * (length - 1) + 0.5), 0, length - 1)
    index = index.astype(np.int64)
    return int(index) if index.ndim == 0 else index


def shade(intensity: float, ramp: str) -> str:
    return ramp[shade_index(intensity, len(ramp))]


def shade_grid(intensities: np.ndarray, ramp: str) -> list[str]:
    """Map a (rows, cols) intensity grid to one string of glyphs per row."""
    indices = shade_index(intensities, len(ramp))
    glyphs = np.array(list(ramp))
    return ["".join(glyphs[row]) for row in indices]
