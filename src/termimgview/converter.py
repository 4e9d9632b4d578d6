import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from termimgview.ansi import format_grid
from termimgview.config import RenderConfig
from termimgview.engine import render_image
from termimgview.errors import DecodeError

logger = logging.getLogger(__name__)


def decode_image(path: str | Path) -> np.ndarray:
    """Load an image file as an (height, width, 4) uint8 RGBA array."""
    path = Path(path)
    try:
        with Image.open(path) as image:
            arr = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    except FileNotFoundError as exc:
        raise DecodeError(path, "file not found") from exc
    except UnidentifiedImageError as exc:
        raise DecodeError(path, "unrecognised image format") from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(path, f"image too large ({exc})") from exc
    except OSError as exc:
        raise DecodeError(path, f"cannot read image ({exc})") from exc
    logger.debug("decoded %s: %dx%d", path, arr.shape[1], arr.shape[0])
    return arr


def _as_rgba(image: Image.Image | np.ndarray | str | Path) -> np.ndarray:
    if isinstance(image, (str, Path)):
        return decode_image(image)
    if isinstance(image, Image.Image):
        return np.asarray(image.convert("RGBA"), dtype=np.uint8)
    return np.asarray(image)


def image_to_ansi(
    image: Image.Image | np.ndarray | str | Path,
    config: RenderConfig | None = None,
) -> str:
    if config is None:
        config = RenderConfig()
    grid = render_image(_as_rgba(image), config)
    return format_grid(grid, colour=config.colour)
