import numpy as np
import pytest
from PIL import Image

from ansipic.errors import UnknownFilter
from ansipic.filters import FILTERS, FilterKind, _gaussian_taps, _resample_axis, gaussian_resize, get_filter, resize


def test_filter_names_in_fixed_order():
    assert FILTERS == ("nearest", "triangle", "catmullrom", "gaussian", "lanczos3")


def test_each_name_resolves_to_distinct_kind():
    kinds = [get_filter(name) for name in FILTERS]
    assert len(set(kinds)) == 5
    assert get_filter("lanczos3") is FilterKind.LANCZOS3
    assert get_filter("nearest") is get_filter("nearest")


@pytest.mark.parametrize("name", ["", "Nearest", "bicubic", "lanczos"])
def test_unknown_filter(name):
    with pytest.raises(UnknownFilter, match="Unknown filter"):
        get_filter(name)


@pytest.mark.parametrize("kind", list(FilterKind))
def test_resize_gives_exact_size(kind):
    img = Image.new("RGB", (7, 5), (10, 20, 30))
    assert resize(img, (21, 5), kind).size == (21, 5)
    assert resize(img, (3, 2), kind).size == (3, 2)


@pytest.mark.parametrize("src, dst", [(10, 30), (30, 7), (1, 4), (5, 5)])
def test_gaussian_weights_are_normalized(src, dst):
    index, weights = _gaussian_taps(src, dst)
    assert index.shape == weights.shape
    assert index.min() >= 0
    assert index.max() < src
    np.testing.assert_allclose(weights.sum(axis=1), 1.0)


def test_gaussian_keeps_solid_colour():
    img = Image.new("RGB", (9, 4), (200, 100, 50))
    result = gaussian_resize(img, (27, 4))
    assert result.mode == "RGB"
    assert set(result.getdata()) == {(200, 100, 50)}


def test_gaussian_downscale_keeps_halves_apart():
    img = Image.new("RGB", (20, 4), (0, 0, 0))
    img.paste((255, 255, 255), (10, 0, 20, 4))
    result = gaussian_resize(img, (4, 2))
    left = result.getpixel((0, 0))
    right = result.getpixel((3, 0))
    assert left[0] < 50
    assert right[0] > 200


def test_gaussian_axis_resample_stays_float32():
    arr = np.full((6, 4, 3), 100.0, dtype=np.float32)
    result = _resample_axis(arr, 18, axis=1)
    assert result.dtype == np.float32
    assert result.shape == (6, 18, 3)
    np.testing.assert_allclose(result, 100.0, rtol=1e-5)
