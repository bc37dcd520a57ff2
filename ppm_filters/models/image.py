from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np

from ..errors import InvalidDimensions


@dataclass(frozen=True, eq=False)
class Image:
    """
    Simple data object: RGB pixels (+ optional path for bookkeeping).
    The pixel array is copied on construction and made read-only, so an
    Image never changes after it is built. Filters return new Images.
    """
    pixels: np.ndarray # Shape (H, W, 3), dtype uint8, RGB order.
    path: Path | None = None # Source or destination of the image.

    def __post_init__(self):
        source = np.asarray(self.pixels)
        if source.dtype != np.uint8 and source.size and (source.min() < 0 or source.max() > 255):
            raise ValueError("Channel values must lie in [0, 255]")
        pixels = np.array(source, dtype=np.uint8, copy=True)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected pixels of shape (H, W, 3), got {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise InvalidDimensions(f"Image must be at least 1x1, got {pixels.shape[1]}x{pixels.shape[0]}")
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)
        if self.path is not None:
            object.__setattr__(self, "path", Path(self.path))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)
