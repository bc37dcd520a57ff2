import logging
import numpy as np

from ..models.image import Image
from ..models.kernel import Kernel

logger = logging.getLogger(__name__)


class ConvolutionService:
    """
    Applies a 2D kernel around every pixel.
    Out-of-range neighbours are clamped to the nearest edge row/column,
    so a 1x1 image uses its single pixel at every kernel tap.
    """

    @staticmethod
    def correlate(channels: np.ndarray, kernel: Kernel) -> np.ndarray:
        """
        Weighted neighbourhood sum for every pixel, computed in float64.

        Args:
            channels (np.ndarray): (H, W) or (H, W, C) array. Each channel is
                handled independently.
            kernel (Kernel): weights; tap (dy, dx) reads the neighbour at
                (y + dy - r, x + dx - r).

        Returns:
            (np.ndarray): float64 array with the same shape as `channels`.
        """
        source = np.asarray(channels, dtype=np.float64)
        if source.ndim not in (2, 3):
            raise ValueError(f"Expected a (H, W) or (H, W, C) array, got shape {source.shape}")

        r = kernel.radius
        height, width = source.shape[:2]
        pad = ((r, r), (r, r)) + (((0, 0),) if source.ndim == 3 else ())
        padded = np.pad(source, pad, mode="edge")

        # Shift-and-add rather than cv2.filter2D so rounding and edge replication stay exact.
        out = np.zeros(source.shape, dtype=np.float64)
        for dy in range(kernel.size):
            for dx in range(kernel.size):
                weight = kernel.weights[dy, dx]
                if weight == 0.0:
                    continue
                out += weight * padded[dy:dy + height, dx:dx + width]
        return out

    @staticmethod
    def to_uint8(values: np.ndarray) -> np.ndarray:
        """Round to nearest, then saturate into [0, 255]."""
        return np.clip(np.rint(values), 0, 255).astype(np.uint8)

    def apply(self, image: Image, kernel: Kernel) -> Image:
        """Convolve every colour channel and return a *new* Image."""
        logger.debug(f"Applying {kernel.size}x{kernel.size} kernel to {image.width}x{image.height} image")
        acc = self.correlate(image.pixels, kernel)
        return Image(pixels=self.to_uint8(acc), path=image.path)
