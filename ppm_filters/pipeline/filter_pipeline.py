"""
Filter Pipeline
Runs an ordered list of operations over one image, feeding each step's
output into the next. Everything is validated before the first step runs.
"""

import logging
import time
from typing import Callable, Dict, List, Sequence, Union

from ..models.image import Image
from ..models.operation import Operation, OperationKind, coerce_operation
from ..errors import InvalidDimensions
from ..services.filter_service import FilterService
from ..services.seam_carving_service import SeamCarvingService

logger = logging.getLogger(__name__)


def validate_operations(
    image: Image,
    operations: Sequence[Union[Operation, str]],
) -> List[Operation]:
    """
    Parse every step up front.

    Raises:
        UnknownOperation: for any token that is not a known operation.
        InvalidDimensions: if the carve steps together would remove every column.
    """
    parsed = [coerce_operation(op) for op in operations]
    carved = sum(op.columns for op in parsed if op.kind is OperationKind.SEAM_CARVE)
    if carved and carved >= image.width:
        raise InvalidDimensions(
            f"Carving {carved} columns in total would leave nothing of a {image.width}px wide image"
        )
    return parsed


def run(
    image: Image,
    operations: Sequence[Union[Operation, str]],
    *,
    filter_service: FilterService = None,
    seam_carving_service: SeamCarvingService = None,
) -> Image:
    """
    Apply *operations* to *image* in order and return the final Image.

    An empty list returns *image* itself. The input is never modified, so it
    stays usable if a step (or validation) raises.
    """
    steps = validate_operations(image, operations)
    if not steps:
        return image

    filter_service = filter_service or FilterService()
    seam_carving_service = seam_carving_service or SeamCarvingService(filter_service)

    handlers: Dict[OperationKind, Callable[[Image, Operation], Image]] = {
        OperationKind.GRAYSCALE: lambda img, op: filter_service.grayscale(img),
        OperationKind.GAUSSIAN_BLUR: lambda img, op: filter_service.gaussian_blur(img, op.radius, op.sigma),
        OperationKind.SOBEL: lambda img, op: filter_service.sobel(img),
        OperationKind.SEAM_CARVE: lambda img, op: seam_carving_service.remove_columns(img, op.columns),
    }

    current = image
    for i, op in enumerate(steps, 1):
        started = time.perf_counter()
        current = handlers[op.kind](current, op)
        elapsed = time.perf_counter() - started
        logger.info(f"Step {i}/{len(steps)} {op}: {current.width}x{current.height} in {elapsed:.3f}s")
    return current
