from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import os
from dotenv import load_dotenv

from ..errors import UnknownOperation

# Load environment variables
load_dotenv()

# Blur defaults: 5x5 kernel, σ = 1.0
DEFAULT_GAUSS_RADIUS = int(os.getenv("PPM_GAUSS_RADIUS", "2"))
DEFAULT_GAUSS_SIGMA = float(os.getenv("PPM_GAUSS_SIGMA", "1.0"))


class OperationKind(Enum):
    GRAYSCALE = "gray"
    GAUSSIAN_BLUR = "gauss"
    SOBEL = "sobel"
    SEAM_CARVE = "carve"


@dataclass(frozen=True)
class Operation:
    """
    One pipeline step: which filter to run plus its parameters.
    `radius`/`sigma` only matter for GAUSSIAN_BLUR, `columns` only for SEAM_CARVE.
    """
    kind: OperationKind
    radius: int = DEFAULT_GAUSS_RADIUS
    sigma: float = DEFAULT_GAUSS_SIGMA
    columns: int = 0

    def __post_init__(self):
        if not isinstance(self.kind, OperationKind):
            raise UnknownOperation(f"Unknown operation kind: {self.kind!r}")
        if self.kind is OperationKind.GAUSSIAN_BLUR:
            if self.radius < 1:
                raise UnknownOperation(f"Gaussian radius must be >= 1, got {self.radius}")
            if not self.sigma > 0:
                raise UnknownOperation(f"Gaussian sigma must be > 0, got {self.sigma}")
        if self.kind is OperationKind.SEAM_CARVE and self.columns < 1:
            raise UnknownOperation(f"Carve needs at least 1 column, got {self.columns}")

    def __str__(self):
        if self.kind is OperationKind.GAUSSIAN_BLUR:
            return f"gauss:{self.radius}:{self.sigma:g}"
        if self.kind is OperationKind.SEAM_CARVE:
            return f"carve:{self.columns}"
        return self.kind.value


def _parse_int(token: str, value: str, minimum: int) -> int:
    try:
        number = int(value)
    except ValueError:
        raise UnknownOperation(f"Bad integer parameter in operation '{token}'") from None
    if number < minimum:
        raise UnknownOperation(f"Parameter in operation '{token}' must be >= {minimum}")
    return number


def parse_operation(token: str) -> Operation:
    """
    Turn a CLI token into an Operation.

    Accepted forms:
        gray | sobel
        gauss | gauss:<radius> | gauss:<radius>:<sigma>
        carve:<columns>
    """
    name, *params = token.strip().lower().split(":")
    try:
        kind = OperationKind(name)
    except ValueError:
        raise UnknownOperation(f"Unknown operation '{token}' (expected gray, gauss, sobel or carve:N)") from None

    if kind in (OperationKind.GRAYSCALE, OperationKind.SOBEL):
        if params:
            raise UnknownOperation(f"Operation '{name}' takes no parameters: '{token}'")
        return Operation(kind)

    if kind is OperationKind.GAUSSIAN_BLUR:
        if not params:
            return Operation(kind)
        if len(params) > 2:
            raise UnknownOperation(f"Too many parameters in '{token}' (expected gauss[:radius[:sigma]])")
        radius = _parse_int(token, params[0], 1)
        sigma = radius / 2.0
        if len(params) == 2:
            try:
                sigma = float(params[1])
            except ValueError:
                raise UnknownOperation(f"Bad sigma in operation '{token}'") from None
        return Operation(kind, radius=radius, sigma=sigma)

    # SEAM_CARVE
    if len(params) != 1:
        raise UnknownOperation(f"Operation '{token}' needs a column count (carve:N)")
    return Operation(kind, columns=_parse_int(token, params[0], 1))


def coerce_operation(op: Operation | str) -> Operation:
    if isinstance(op, Operation):
        return op
    if isinstance(op, str):
        return parse_operation(op)
    raise UnknownOperation(f"Unsupported operation value: {op!r}")
