from pathlib import Path
from typing import Union, Iterable, List, Tuple
import os
import tempfile
import logging
import numpy as np

from ..models.image import Image
from ..services.ppm_codec_service import PpmCodecService

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class ImageRepository:
    """
    Handles file I/O and pixel access for Image entities.
    """
    def __init__(self, codec: PpmCodecService = None):
        self.codec = codec or PpmCodecService()

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    @staticmethod
    def from_rgb_triples(width: int, height: int, triples: Iterable[RGB]) -> Image:
        """Build an Image from row-major (r, g, b) triples."""
        triples = list(triples)
        if len(triples) != width * height:
            raise ValueError(f"Expected {width * height} pixels for {width}x{height}, got {len(triples)}")
        arr = np.asarray(triples, dtype=np.int64).reshape(height, width, 3)
        if arr.min() < 0 or arr.max() > 255:
            raise ValueError("Channel values must lie in [0, 255]")
        return Image(arr.astype(np.uint8))

    @staticmethod
    def to_rgb_triples(image: Image) -> List[RGB]:
        return [tuple(int(c) for c in px) for px in image.pixels.reshape(-1, 3)]

    @staticmethod
    def _check_bounds(image: Image, x: int, y: int) -> None:
        if not (0 <= x < image.width and 0 <= y < image.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {image.width}x{image.height} image")

    def retrieve_pixel(self, image: Image, x: int, y: int) -> RGB:
        self._check_bounds(image, x, y)
        r, g, b = image.pixels[y, x]
        return int(r), int(g), int(b)

    def with_pixel(self, image: Image, x: int, y: int, rgb: RGB) -> Image:
        """Bounds-checked write. Returns a *new* Image, the input is unchanged."""
        self._check_bounds(image, x, y)
        if len(rgb) != 3 or any(not 0 <= int(c) <= 255 for c in rgb):
            raise ValueError(f"Invalid RGB value: {rgb!r}")
        pixels = image.pixels.copy()
        pixels[y, x] = rgb
        return Image(pixels=pixels, path=image.path)

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        data = path.read_bytes()
        image = self.codec.decode(data)
        logger.debug(f"Loaded {path} ({len(data)} bytes)")
        return self.create_image(image.pixels, path)

    def save(self, image: Image) -> None:
        """
        Encode and write to image.path.
        Bytes go to a temporary file in the target directory first and are
        moved into place only once fully written.
        """
        if image.path is None:
            raise ValueError("Image has no path to save to")
        data = self.codec.encode(image)
        target = Path(image.path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Saved {target} ({len(data)} bytes)")
