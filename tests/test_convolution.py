import numpy as np
import pytest

from ppm_filters.models.image import Image
from ppm_filters.models.kernel import Kernel, SOBEL_X, SOBEL_Y, gaussian_kernel
from tests.conftest import reference_correlate, solid


def test_gaussian_kernel_is_normalized_and_symmetric():
    kernel = gaussian_kernel(2, 1.0)
    w = kernel.weights

    assert kernel.size == 5 and kernel.radius == 2
    assert w.sum() == pytest.approx(1.0)
    np.testing.assert_allclose(w, w.T)
    np.testing.assert_allclose(w, w[::-1, ::-1])
    assert w[2, 2] == w.max()
    # w(-2, -1) / w(-2, -2) = exp(-5/2) / exp(-8/2)
    assert w[0, 1] / w[0, 0] == pytest.approx(np.exp(1.5))


def test_gaussian_kernel_rejects_bad_parameters():
    with pytest.raises(ValueError):
        gaussian_kernel(0, 1.0)
    with pytest.raises(ValueError):
        gaussian_kernel(2, 0.0)


def test_kernel_must_be_square_and_odd():
    with pytest.raises(ValueError):
        Kernel(np.ones((2, 2)))
    with pytest.raises(ValueError):
        Kernel(np.ones((3, 5)))


def test_sobel_constants_are_read_only():
    assert SOBEL_X.weights.tolist() == [[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]]
    assert SOBEL_Y.weights.tolist() == [[-1, -2, -1], [0, 0, 0], [1, 2, 1]]
    with pytest.raises(ValueError):
        SOBEL_X.weights[0, 0] = 5


def test_tap_orientation(convolution_service):
    weights = np.zeros((3, 3))
    weights[0, 2] = 1.0  # neighbour one row up, one column right
    plane = np.arange(9, dtype=np.float64).reshape(3, 3)

    out = convolution_service.correlate(plane, Kernel(weights))

    assert out[1, 1] == plane[0, 2]
    assert out[2, 0] == plane[1, 1]


def test_edges_are_clamped(convolution_service):
    plane = np.array([[10.0, 20.0]])
    box = Kernel(np.ones((3, 3)))

    out = convolution_service.correlate(plane, box)

    # x=0 sees columns (0, 0, 1) on all three (clamped) rows
    assert out[0, 0] == 3 * (10 + 10 + 20)
    assert out[0, 1] == 3 * (10 + 20 + 20)


def test_matches_reference_per_channel(convolution_service, random_image):
    kernel = gaussian_kernel(2, 1.0)
    out = convolution_service.correlate(random_image.pixels, kernel)

    for c in range(3):
        expected = reference_correlate(random_image.pixels[..., c], kernel.weights)
        np.testing.assert_allclose(out[..., c], expected, rtol=0, atol=1e-9)


def test_to_uint8_rounds_and_saturates(convolution_service):
    values = np.array([-40.0, 0.4, 0.6, 127.5, 254.6, 300.0, 1e9])
    assert convolution_service.to_uint8(values).tolist() == [0, 0, 1, 128, 255, 255, 255]


def test_apply_returns_new_image(convolution_service, random_image):
    before = random_image.pixels.copy()
    out = convolution_service.apply(random_image, gaussian_kernel(1, 0.5))

    assert out is not random_image
    assert out.pixels.shape == random_image.pixels.shape
    np.testing.assert_array_equal(random_image.pixels, before)


def test_one_by_one_uses_itself_everywhere(convolution_service):
    img = solid(1, 1, (12, 200, 99))
    out = convolution_service.apply(img, gaussian_kernel(3, 2.0))
    assert out == img


def test_rejects_flat_input(convolution_service):
    with pytest.raises(ValueError):
        convolution_service.correlate(np.zeros(5), SOBEL_X)


def test_images_are_never_written(convolution_service):
    img = Image(np.full((3, 3, 3), 50, dtype=np.uint8))
    convolution_service.correlate(img.pixels, SOBEL_Y)
    assert not img.pixels.flags.writeable
