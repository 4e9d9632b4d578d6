from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, NamedTuple

import numpy as np

from termimgview.colour import luminance, transform
from termimgview.config import RenderConfig
from termimgview.errors import ConfigError, RenderError
from termimgview.sampling import composite, premultiply, remove_background, resample
from termimgview.shading import shade_grid

logger = logging.getLogger(__name__)


class Cell(NamedTuple):
    glyph: str
    colour: tuple[int, int, int] | None  # None for a fully transparent cell


@dataclass
class CellGrid:
    chars: list[str]  # one string per row
    colours: np.ndarray  # (rows, cols, 3) uint8
    visible: np.ndarray  # (rows, cols) bool

    @property
    def shape(self) -> tuple[int, int]:
        return self.colours.shape[0], self.colours.shape[1]

    def rows(self) -> Iterator[list[Cell]]:
        """Yield cells row by row, top to bottom, each row left to right."""
        for r, line in enumerate(self.chars):
            row = []
            for c, glyph in enumerate(line):
                if self.visible[r, c]:
                    row.append(Cell(glyph, tuple(int(v) for v in self.colours[r, c])))
                else:
                    row.append(Cell(" ", None))
            yield row


class RenderState(enum.Enum):
    IDLE = "idle"
    LOADED = "loaded"
    RENDERING = "rendering"
    DONE = "done"


def validate_image(image) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ConfigError("image", f"expected an (height, width, 4) RGBA array, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ConfigError("image", "image has no pixels")
    return arr


class Renderer:
    """Single-use pipeline from an RGBA pixel grid to a CellGrid.

    All validation happens in load(); render() runs the resample, colour
    transform and shading stages with no further checks on the input.
    """

    def __init__(self):
        self.state = RenderState.IDLE
        self.image: np.ndarray | None = None
        self.config: RenderConfig | None = None

    def _advance(self, state: RenderState) -> None:
        logger.debug("renderer %s -> %s", self.state.value, state.value)
        self.state = state

    def load(self, image, config: RenderConfig) -> "Renderer":
        if self.state is not RenderState.IDLE:
            raise RenderError(f"cannot load a renderer in state {self.state.value}")
        config.validate()
        self.image = validate_image(image)
        self.config = config
        self._advance(RenderState.LOADED)
        return self

    def render(self) -> CellGrid:
        if self.state is not RenderState.LOADED:
            raise RenderError(f"cannot render from state {self.state.value}")
        self._advance(RenderState.RENDERING)
        config = self.config

        image = self.image
        if config.remove_background is not None:
            image = remove_background(image, config.remove_background, config.background_tolerance)

        samples = resample(premultiply(image), config.scale, config.aspect_ratio_adjust)
        rgb, visible = composite(samples)
        colours = transform(rgb, config)
        chars = shade_grid(luminance(colours), config.shade_method.ramp)
        logger.debug(
            "rendered %dx%d source into %dx%d cells (%s)",
            image.shape[1],
            image.shape[0],
            colours.shape[1],
            colours.shape[0],
            config.shade_method.name,
        )

        self._advance(RenderState.DONE)
        return CellGrid(chars=chars, colours=colours, visible=visible)


def render_image(image, config: RenderConfig) -> CellGrid:
    return Renderer().load(image, config).render()
