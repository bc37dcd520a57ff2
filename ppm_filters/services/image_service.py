from pathlib import Path
from typing import Union
import dataclasses
import os
from dotenv import load_dotenv

from ..models.image import Image
from ..repositories.image_repository import ImageRepository

# Load environment variables
load_dotenv()


class ImageService:
    """I/O helpers.  No filter logic here."""
    def __init__(self, image_repository: ImageRepository = None):
        self.OUTPUT_SUFFIX = os.getenv("PPM_OUTPUT_SUFFIX", "_new")
        self.image_repository = image_repository or ImageRepository()

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single P6 image from disk into an Image object."""
        return self.image_repository.load(path)

    def save(self, image: Image) -> None:
        """
        Business-level method to save the image to its path.
        """
        self.image_repository.save(image)

    def default_output_path(self, input_path: Union[str, Path]) -> Path:
        """<stem><suffix>.ppm next to the input file."""
        input_path = Path(input_path)
        return input_path.with_name(f"{input_path.stem}{self.OUTPUT_SUFFIX}.ppm")

    @staticmethod
    def with_path(image: Image, path: Union[str, Path]) -> Image:
        return dataclasses.replace(image, path=Path(path))
