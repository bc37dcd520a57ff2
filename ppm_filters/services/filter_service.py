import logging
import numpy as np

from ..models.image import Image
from ..models.kernel import SOBEL_X, SOBEL_Y, gaussian_kernel
from ..models.operation import DEFAULT_GAUSS_RADIUS, DEFAULT_GAUSS_SIGMA
from .convolution_service import ConvolutionService

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


class FilterService:
    """
    The three raster filters. Each one reads an Image and returns a new one
    with the same width and height; the input is never touched.
    """

    def __init__(self, convolution_service: ConvolutionService = None):
        self.convolution_service = convolution_service or ConvolutionService()

    def luminance(self, image: Image) -> np.ndarray:
        """
        Returns:
            (np.ndarray): (H, W) uint8 array, round(0.299 R + 0.587 G + 0.114 B).
        """
        rgb = image.pixels.astype(np.float64)
        y = LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]
        return self.convolution_service.to_uint8(y)

    @staticmethod
    def _gray_to_rgb(gray: np.ndarray) -> np.ndarray:
        return np.repeat(gray[:, :, np.newaxis], 3, axis=2)

    def grayscale(self, image: Image) -> Image:
        return Image(pixels=self._gray_to_rgb(self.luminance(image)), path=image.path)

    def gaussian_blur(
        self,
        image: Image,
        radius: int = DEFAULT_GAUSS_RADIUS,
        sigma: float = DEFAULT_GAUSS_SIGMA,
    ) -> Image:
        return self.convolution_service.apply(image, gaussian_kernel(radius, sigma))

    def gradient_magnitude(self, image: Image) -> np.ndarray:
        """
        Sobel edge strength on the luminance channel.

        Returns:
            (np.ndarray): (H, W) uint8 array, round(sqrt(Gx² + Gy²)) clipped.
        """
        intensity = self.luminance(image)
        gx = self.convolution_service.correlate(intensity, SOBEL_X)
        gy = self.convolution_service.correlate(intensity, SOBEL_Y)
        return self.convolution_service.to_uint8(np.sqrt(gx ** 2 + gy ** 2))

    def sobel(self, image: Image) -> Image:
        return Image(pixels=self._gray_to_rgb(self.gradient_magnitude(image)), path=image.path)
