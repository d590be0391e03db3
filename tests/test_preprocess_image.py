import numpy as np
import pytest

from result_sheet.core.errors import ImageError
from result_sheet.ocr.preprocess_image import normalize

from tests.conftest import png_bytes


def test_normalize_stretches_then_thresholds():
    img = np.array([[40, 60], [100, 140]], dtype=np.uint8)
    bw = normalize(png_bytes(img))

    assert bw.shape == (2, 2)
    assert bw.dtype == np.uint8
    # stretched to roughly 0, 50, 154, 255 before the cut at 128
    assert bw.tolist() == [[0, 0], [255, 255]]


def test_normalize_color_input_is_two_level():
    rng = np.random.default_rng(7)
    img = rng.integers(0, 256, size=(30, 40, 3), dtype=np.uint8)
    bw = normalize(png_bytes(img))

    assert bw.ndim == 2
    assert set(np.unique(bw).tolist()) <= {0, 255}


def test_normalize_custom_threshold():
    img = np.array([[0, 100], [200, 255]], dtype=np.uint8)
    bw = normalize(png_bytes(img), threshold=220)
    assert bw.tolist() == [[0, 0], [0, 255]]


@pytest.mark.parametrize("value,expected", [(200, 255), (50, 0)])
def test_normalize_flat_image(value, expected):
    img = np.full((5, 5), value, dtype=np.uint8)
    bw = normalize(png_bytes(img))
    assert np.all(bw == expected)


@pytest.mark.parametrize("data", [b"", b"definitely not an image"])
def test_normalize_rejects_bad_input(data):
    with pytest.raises(ImageError):
        normalize(data)


def test_normalize_ignores_single_specks():
    # dim gray page: left half 60, right half 110, one black and one white speck
    img = np.full((20, 20), 60, dtype=np.uint8)
    img[:, 10:] = 110
    img[0, 0] = 0
    img[0, 19] = 255
    bw = normalize(png_bytes(img))

    assert np.all(bw[1:, :10] == 0)
    assert np.all(bw[1:, 10:] == 255)
