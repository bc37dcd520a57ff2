import os
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from ..errors import PpmError
from ..pipeline.filter_pipeline import run
from ..services.image_service import ImageService

# Load environment variables first
load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    # --- Centralized Logging Configuration ---
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt='%H:%M:%S', force=True)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ppm-filter",
        description="Apply raster filters to a binary PPM (P6) image, in the order given.",
    )
    ap.add_argument("input", type=Path, help="P6 .ppm file to read")
    ap.add_argument("operations", nargs="*", metavar="OPERATION",
                    help="gray | gauss[:radius[:sigma]] | sobel | carve:N")
    ap.add_argument("-o", "--output", type=Path, default=None,
                    help="where to write the result (default: <input stem>_new.ppm)")
    noise = ap.add_mutually_exclusive_group()
    noise.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    noise.add_argument("-q", "--quiet", action="store_true", help="warnings and errors only")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    image_service = ImageService()
    output = args.output or image_service.default_output_path(args.input)

    try:
        image = image_service.load(args.input)
        logger.info(f"Loaded {args.input}: {image.width}x{image.height}")

        result = run(image, args.operations)

        image_service.save(image_service.with_path(result, output))
    except PpmError as err:
        logger.error(f"{args.input}: {type(err).__name__}: {err}")
        return 1
    except OSError as err:
        logger.error(f"File error: {err}")
        return 1

    logger.info(f"Wrote {output} ({result.width}x{result.height})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
