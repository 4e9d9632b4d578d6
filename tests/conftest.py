import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def solid_rgba():
    """Factory for a uniform (height, width, 4) uint8 RGBA array."""

    def make(width, height, colour=(255, 255, 255, 255)):
        return np.full((height, width, 4), colour, dtype=np.uint8)

    return make


@pytest.fixture
def image_file(tmp_path):
    """Factory that saves a Pillow image to a PNG under tmp_path and returns the path."""

    def make(image: Image.Image, name="image.png"):
        path = tmp_path / name
        image.save(path)
        return path

    return make
