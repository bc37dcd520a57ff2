import logging
import numpy as np
from tqdm import trange

from ..models.image import Image
from ..errors import InvalidDimensions
from .filter_service import FilterService

logger = logging.getLogger(__name__)

# Parent column offsets in tie-break order: straight up, up-right, up-left
_PARENT_OFFSETS = np.array([0, 1, -1])


class SeamCarvingService:
    """
    Content-aware width reduction.
    Repeatedly removes the connected top-to-bottom path of pixels with the
    lowest total edge energy.
    """

    def __init__(self, filter_service: FilterService = None):
        self.filter_service = filter_service or FilterService()

    def energy(self, image: Image) -> np.ndarray:
        """
        Edge energy map: grayscale -> Gaussian blur -> Sobel magnitude.

        Returns:
            (np.ndarray): (H, W) int64 array in [0, 255].
        """
        smoothed = self.filter_service.gaussian_blur(self.filter_service.grayscale(image))
        return self.filter_service.gradient_magnitude(smoothed).astype(np.int64)

    @staticmethod
    def find_vertical_seam(energy: np.ndarray) -> np.ndarray:
        """
        Minimum-energy vertical seam by dynamic programming.
        Ties prefer the straight-up parent, then up-right, then up-left.

        Args:
            energy (np.ndarray): (H, W) non-negative energies.

        Returns:
            (np.ndarray): length-H array, seam[y] is the column removed from row y.
        """
        height, width = energy.shape
        cost = energy.astype(np.int64)
        parent = np.zeros((height, width), dtype=np.int64)
        columns = np.arange(width)
        blocked = np.iinfo(np.int64).max

        for y in range(1, height):
            prev = cost[y - 1]
            up_left = np.concatenate(([blocked], prev[:-1]))
            up_right = np.concatenate((prev[1:], [blocked]))
            candidates = np.stack([prev, up_right, up_left])
            choice = np.argmin(candidates, axis=0)  # first minimum wins
            cost[y] = cost[y] + candidates[choice, columns]
            parent[y] = columns + _PARENT_OFFSETS[choice]

        seam = np.empty(height, dtype=np.int64)
        seam[-1] = int(np.argmin(cost[-1]))
        for y in range(height - 1, 0, -1):
            seam[y - 1] = parent[y, seam[y]]
        return seam

    @staticmethod
    def remove_seam(image: Image, seam: np.ndarray) -> Image:
        height, width = image.height, image.width
        keep = np.ones((height, width), dtype=bool)
        keep[np.arange(height), seam] = False
        return Image(pixels=image.pixels[keep].reshape(height, width - 1, 3), path=image.path)

    def remove_columns(self, image: Image, columns: int) -> Image:
        """
        Shrink *image* by `columns` pixels horizontally and return a new Image.

        Raises:
            InvalidDimensions: if that would leave fewer than one column.
        """
        if columns < 0:
            raise ValueError(f"Column count must be >= 0, got {columns}")
        if columns >= image.width:
            raise InvalidDimensions(f"Cannot remove {columns} columns from an image {image.width} pixels wide")

        logger.info(f"Carving {columns} seams from {image.width}x{image.height} image")
        current = image
        for _ in trange(columns, desc="Carving seams", unit="seam", disable=None, leave=False):
            seam = self.find_vertical_seam(self.energy(current))
            current = self.remove_seam(current, seam)
        return current
