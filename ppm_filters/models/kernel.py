from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True, eq=False)
class Kernel:
    """
    Square matrix of weights applied around every pixel.
    Side length is always odd: 2 * radius + 1.
    """
    weights: np.ndarray

    def __post_init__(self):
        weights = np.array(self.weights, dtype=np.float64, copy=True)
        if weights.ndim != 2 or weights.shape[0] != weights.shape[1] or weights.shape[0] % 2 == 0:
            raise ValueError(f"Kernel must be square with odd side, got {weights.shape}")
        weights.flags.writeable = False
        object.__setattr__(self, "weights", weights)

    @property
    def radius(self) -> int:
        return self.weights.shape[0] // 2

    @property
    def size(self) -> int:
        return self.weights.shape[0]


def gaussian_kernel(radius: int, sigma: float) -> Kernel:
    """
    Normalized 2D Gaussian: w(i, j) = exp(-(i² + j²) / (2σ²)) for i, j in
    [-radius, radius], scaled so the weights sum to 1.
    """
    if radius < 1:
        raise ValueError(f"Gaussian radius must be >= 1, got {radius}")
    if sigma <= 0:
        raise ValueError(f"Gaussian sigma must be > 0, got {sigma}")
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    ii, jj = np.meshgrid(offsets, offsets, indexing="ij")
    weights = np.exp(-(ii ** 2 + jj ** 2) / (2.0 * sigma ** 2))
    return Kernel(weights / weights.sum())


# Fixed Sobel operators (not normalized)
SOBEL_X = Kernel(np.array([[-1, 0, 1],
                           [-2, 0, 2],
                           [-1, 0, 1]]))

SOBEL_Y = Kernel(np.array([[-1, -2, -1],
                           [ 0,  0,  0],
                           [ 1,  2,  1]]))
