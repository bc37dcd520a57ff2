import pytest

from ppm_filters.errors import UnknownOperation
from ppm_filters.models.operation import (
    DEFAULT_GAUSS_RADIUS,
    DEFAULT_GAUSS_SIGMA,
    Operation,
    OperationKind,
    coerce_operation,
    parse_operation,
)


@pytest.mark.parametrize("token, kind", [
    ("gray", OperationKind.GRAYSCALE),
    ("gauss", OperationKind.GAUSSIAN_BLUR),
    ("sobel", OperationKind.SOBEL),
    ("SOBEL", OperationKind.SOBEL),
])
def test_plain_tokens(token, kind):
    assert parse_operation(token).kind is kind


def test_gauss_defaults():
    op = parse_operation("gauss")
    assert (op.radius, op.sigma) == (DEFAULT_GAUSS_RADIUS, DEFAULT_GAUSS_SIGMA)


def test_gauss_parameters():
    assert parse_operation("gauss:3") == Operation(OperationKind.GAUSSIAN_BLUR, radius=3, sigma=1.5)
    assert parse_operation("gauss:1:0.8") == Operation(OperationKind.GAUSSIAN_BLUR, radius=1, sigma=0.8)


def test_carve():
    assert parse_operation("carve:12") == Operation(OperationKind.SEAM_CARVE, columns=12)


@pytest.mark.parametrize("token", [
    "sharpen", "", "gray:1", "sobel:x", "gauss:0", "gauss:x", "gauss:2:-1",
    "gauss:2:abc", "gauss:1:2:3", "carve", "carve:0", "carve:two",
])
def test_rejected_tokens(token):
    with pytest.raises(UnknownOperation):
        parse_operation(token)


def test_str_round_trips():
    for token in ["gray", "sobel", "gauss:2:1", "carve:4"]:
        assert str(parse_operation(token)) == token


def test_coerce():
    op = Operation(OperationKind.SOBEL)
    assert coerce_operation(op) is op
    assert coerce_operation("gray").kind is OperationKind.GRAYSCALE
    with pytest.raises(UnknownOperation):
        coerce_operation(42)


@pytest.mark.parametrize("kwargs", [
    dict(kind=OperationKind.GAUSSIAN_BLUR, radius=0),
    dict(kind=OperationKind.GAUSSIAN_BLUR, sigma=0.0),
    dict(kind=OperationKind.GAUSSIAN_BLUR, sigma=float("nan")),
    dict(kind=OperationKind.SEAM_CARVE, columns=0),
    dict(kind="gauss"),
])
def test_invalid_operation_objects(kwargs):
    with pytest.raises(UnknownOperation):
        Operation(**kwargs)
