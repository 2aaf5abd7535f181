from enum import Enum

import numpy as np
from PIL import Image

from ansipic.errors import UnknownFilter


class FilterKind(Enum):
    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULLROM = "catmullrom"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"


FILTERS = tuple(kind.value for kind in FilterKind)

# Pillow equivalents of the kernels; GAUSSIAN has none and is resampled with numpy
RESAMPLING = {
    FilterKind.NEAREST: Image.Resampling.NEAREST,
    FilterKind.TRIANGLE: Image.Resampling.BILINEAR,
    FilterKind.CATMULLROM: Image.Resampling.BICUBIC,
    FilterKind.LANCZOS3: Image.Resampling.LANCZOS,
}

GAUSSIAN_SIGMA = 0.5
GAUSSIAN_SUPPORT = 3.0


def get_filter(name: str) -> FilterKind:
    try:
        return FilterKind(name)
    except ValueError:
        raise UnknownFilter(f"Unknown filter: {name!r} (expected one of {', '.join(FILTERS)})") from None


def _gaussian_taps(src: int, dst: int) -> tuple[np.ndarray, np.ndarray]:
    """Source indices and normalized weights for each output sample, shape (dst, taps)."""
    scale = src / dst
    # Widen the kernel when shrinking so every source pixel contributes
    stretch = max(scale, 1.0)
    support = GAUSSIAN_SUPPORT * stretch
    centers = (np.arange(dst) + 0.5) * scale

    left = np.clip(np.floor(centers - support).astype(np.int64), 0, src - 1)
    right = np.ceil(centers + support)[:, None]
    taps = int(np.ceil(2 * support)) + 2
    index = left[:, None] + np.arange(taps)[None, :]

    x = (index - centers[:, None] + 0.5) / stretch
    weights = np.exp(-(x**2) / (2 * GAUSSIAN_SIGMA**2))
    weights = np.where((index < src) & (index < right), weights, 0.0)
    weights /= weights.sum(axis=1, keepdims=True)
    return np.minimum(index, src - 1), weights


def _resample_axis(arr: np.ndarray, dst: int, axis: int) -> np.ndarray:
    index, weights = _gaussian_taps(arr.shape[axis], dst)
    moved = np.moveaxis(arr, axis, 0)
    out = np.zeros((dst,) + moved.shape[1:], dtype=np.float32)
    tap = np.empty_like(out)
    broadcast = (dst,) + (1,) * (moved.ndim - 1)
    # One reusable buffer per tap keeps peak memory near two output-sized arrays
    for k in range(index.shape[1]):
        np.take(moved, index[:, k], axis=0, out=tap, mode="clip")
        np.multiply(tap, weights[:, k].astype(np.float32).reshape(broadcast), out=tap)
        out += tap
    return np.moveaxis(out, 0, axis)


def gaussian_resize(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Separable Gaussian resample of an RGB image to exactly ``size``."""
    width, height = size
    arr = np.asarray(image.convert("RGB"), dtype=np.float32)
    arr = _resample_axis(arr, height, axis=0)
    arr = _resample_axis(arr, width, axis=1)
    return Image.fromarray(np.clip(np.rint(arr), 0, 255).astype(np.uint8))


def resize(image: Image.Image, size: tuple[int, int], kind: FilterKind) -> Image.Image:
    """Resize to exactly ``size`` using the given filter."""
    if kind is FilterKind.GAUSSIAN:
        return gaussian_resize(image, size)
    return image.resize(size, RESAMPLING[kind])
