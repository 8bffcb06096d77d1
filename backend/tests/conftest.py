"""
Test configuration and fixtures for outfit analysis tests.
"""
import numpy as np
import pytest
from loguru import logger

from outfit_intel.services.colors.color_model import hsl_to_rgb, rgb_to_hex, get_color_description
from outfit_intel.services.colors.pixels import PixelBuffer
from outfit_intel.services.colors.records import HSL, ColorRecord
from outfit_intel.services.observability import reset_metrics


@pytest.fixture(autouse=True)
def clean_metrics():
    """Reset metrics before each test."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def log_lines():
    """Collect formatted log lines through a sink that is removed afterwards."""
    lines = []
    handler_id = logger.add(lines.append, level="DEBUG", format="{level} | {message} | {extra}")
    yield lines
    logger.remove(handler_id)


def make_color(h, s, l):
    """Color record with an exact HSL triple."""
    hsl = HSL(h, s, l)
    rgb = hsl_to_rgb(h, s, l)
    return ColorRecord(rgb=rgb, hsl=hsl, hex=rgb_to_hex(*rgb), name=get_color_description(hsl))


def solid_image(width, height, rgb, alpha=255):
    """(height, width, 4) RGBA array filled with one color."""
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[:, :, :3] = rgb
    img[:, :, 3] = alpha
    return img


def outfit_image(width=120, height=200,
                 background=(245, 245, 245),
                 top=(200, 30, 30),
                 bottom=(20, 30, 90),
                 shoes=(10, 10, 10)):
    """White backdrop with a centered body column split into three garments."""
    img = solid_image(width, height, background)
    x0, x1 = int(width * 0.35), int(width * 0.65)
    img[int(height * 0.05):int(height * 0.42), x0:x1, :3] = top
    img[int(height * 0.42):int(height * 0.78), x0:x1, :3] = bottom
    img[int(height * 0.78):int(height * 0.97), x0:x1, :3] = shoes
    return img


@pytest.fixture
def outfit_buffer():
    return PixelBuffer(outfit_image())


@pytest.fixture
def uniform_buffer():
    return PixelBuffer(solid_image(100, 100, (90, 140, 60)))


@pytest.fixture
def transparent_buffer():
    return PixelBuffer(solid_image(40, 40, (200, 0, 0), alpha=0))
