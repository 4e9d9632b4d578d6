import numpy as np
import pytest

from termimgview.config import SHADE_ASCII, SHADE_BLOCKS, RenderConfig, ShadeMethod
from termimgview.engine import Cell, Renderer, RenderState, render_image
from termimgview.errors import ConfigError, RenderError


def test_white_image_fills_with_densest_block(solid_rgba):
    config = RenderConfig(scale=1.0, aspect_ratio_adjust=1.0, shade_method=SHADE_BLOCKS)
    grid = render_image(solid_rgba(2, 2), config)
    assert grid.chars == ["██", "██"]
    assert grid.shape == (2, 2)
    for row in grid.rows():
        assert row == [Cell("█", (255, 255, 255)), Cell("█", (255, 255, 255))]


def test_black_pixel_maps_to_lowest_ascii_glyph(solid_rgba):
    config = RenderConfig(scale=1.0, shade_method=SHADE_ASCII)
    grid = render_image(solid_rgba(1, 1, (0, 0, 0, 255)), config)
    assert list(grid.rows()) == [[Cell(" ", (0, 0, 0))]]


def test_gradient_walks_the_ramp():
    image = np.zeros((1, 4, 4), dtype=np.uint8)
    image[0, :, :3] = np.array([0, 85, 170, 255])[:, None]
    image[..., 3] = 255
    grid = render_image(image, RenderConfig(aspect_ratio_adjust=1.0))
    assert grid.chars == [" ░▓█"]


def test_default_aspect_ratio_squashes_rows(solid_rgba):
    grid = render_image(solid_rgba(10, 20), RenderConfig())
    assert grid.shape == (9, 10)  # round(20 * 0.47058824) = 9


def test_grid_is_rectangular(solid_rgba):
    grid = render_image(solid_rgba(13, 7), RenderConfig(scale=0.4, aspect_ratio_adjust=0.8))
    widths = {len(line) for line in grid.chars}
    assert widths == {5}
    assert len(grid.chars) == 2


def test_colour_adjustments_reach_cells(solid_rgba):
    config = RenderConfig(aspect_ratio_adjust=1.0, invert=True)
    grid = render_image(solid_rgba(1, 1, (255, 255, 255, 255)), config)
    assert list(grid.rows()) == [[Cell(" ", (0, 0, 0))]]


def test_custom_ramp(solid_rgba):
    config = RenderConfig(aspect_ratio_adjust=1.0, shade_method=ShadeMethod.parse("AB"))
    grid = render_image(solid_rgba(3, 1, (255, 255, 255, 255)), config)
    assert grid.chars == ["BBB"]


def test_transparent_cells_are_blank(solid_rgba):
    grid = render_image(solid_rgba(2, 1, (255, 0, 0, 0)), RenderConfig(aspect_ratio_adjust=1.0))
    assert list(grid.rows()) == [[Cell(" ", None), Cell(" ", None)]]


def test_remove_background(solid_rgba):
    image = solid_rgba(2, 1, (0, 0, 0, 255))
    image[0, 1] = (255, 255, 255, 255)
    config = RenderConfig(aspect_ratio_adjust=1.0, remove_background=(0, 0, 0))
    row = next(render_image(image, config).rows())
    assert row == [Cell(" ", None), Cell("█", (255, 255, 255))]


def test_renderer_state_transitions(solid_rgba):
    renderer = Renderer()
    assert renderer.state is RenderState.IDLE
    renderer.load(solid_rgba(1, 1), RenderConfig())
    assert renderer.state is RenderState.LOADED
    renderer.render()
    assert renderer.state is RenderState.DONE


def test_renderer_is_single_use(solid_rgba):
    renderer = Renderer().load(solid_rgba(1, 1), RenderConfig())
    renderer.render()
    with pytest.raises(RenderError):
        renderer.render()
    with pytest.raises(RenderError):
        renderer.load(solid_rgba(1, 1), RenderConfig())


def test_render_before_load_fails():
    with pytest.raises(RenderError):
        Renderer().render()


def test_invalid_config_rejected_on_load(solid_rgba):
    renderer = Renderer()
    with pytest.raises(ConfigError) as excinfo:
        renderer.load(solid_rgba(1, 1), RenderConfig(scale=0))
    assert excinfo.value.option == "scale"
    assert renderer.state is RenderState.IDLE


@pytest.mark.parametrize(
    "image",
    [
        np.zeros((4, 4), dtype=np.uint8),
        np.zeros((4, 4, 3), dtype=np.uint8),
        np.zeros((0, 4, 4), dtype=np.uint8),
    ],
)
def test_invalid_image_rejected_on_load(image):
    with pytest.raises(ConfigError) as excinfo:
        Renderer().load(image, RenderConfig())
    assert excinfo.value.option == "image"


def test_half_transparent_cell_is_not_darkened_twice():
    image = np.array([[(255, 255, 255, 255), (0, 0, 0, 0)]], dtype=np.uint8)
    grid = render_image(image, RenderConfig(scale=0.5, aspect_ratio_adjust=2.0))
    assert list(grid.rows()) == [[Cell("▒", (128, 128, 128))]]


def test_hidden_colour_of_transparent_pixels_does_not_leak():
    image = np.array([[(255, 0, 0, 0), (0, 0, 255, 255)]], dtype=np.uint8)
    grid = render_image(image, RenderConfig(scale=0.5, aspect_ratio_adjust=2.0))
    assert next(grid.rows())[0].colour == (0, 0, 128)


def test_removed_background_does_not_tint_edge_cells(solid_rgba):
    image = solid_rgba(2, 1, (0, 255, 0, 255))
    image[0, 1] = (255, 255, 255, 255)
    config = RenderConfig(scale=0.5, aspect_ratio_adjust=2.0, remove_background=(0, 255, 0))
    assert next(render_image(image, config).rows())[0].colour == (128, 128, 128)
