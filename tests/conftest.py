import numpy as np
import pytest

from ppm_filters.models.image import Image
from ppm_filters.repositories.image_repository import ImageRepository
from ppm_filters.services.convolution_service import ConvolutionService
from ppm_filters.services.filter_service import FilterService
from ppm_filters.services.ppm_codec_service import PpmCodecService


@pytest.fixture
def codec():
    return PpmCodecService()


@pytest.fixture
def image_repository():
    return ImageRepository()


@pytest.fixture
def convolution_service():
    return ConvolutionService()


@pytest.fixture
def filter_service():
    return FilterService()


@pytest.fixture
def corners_image(image_repository):
    """2x2: red, green / blue, white."""
    return image_repository.from_rgb_triples(
        2, 2, [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255)]
    )


@pytest.fixture
def random_image():
    rng = np.random.default_rng(1234)
    return Image(rng.integers(0, 256, size=(9, 13, 3), dtype=np.uint8))


def solid(width, height, rgb):
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = rgb
    return Image(pixels)


def reference_correlate(plane, weights):
    """Per-pixel, per-tap loop with explicit clamped coordinates."""
    plane = np.asarray(plane, dtype=np.float64)
    weights = np.asarray(weights, dtype=np.float64)
    height, width = plane.shape
    r = weights.shape[0] // 2
    out = np.zeros_like(plane)
    for y in range(height):
        for x in range(width):
            acc = 0.0
            for dy in range(-r, r + 1):
                for dx in range(-r, r + 1):
                    sy = min(max(y + dy, 0), height - 1)
                    sx = min(max(x + dx, 0), width - 1)
                    acc += weights[dy + r, dx + r] * plane[sy, sx]
            out[y, x] = acc
    return out
