import logging

from PIL import Image

from ansipic.filters import FilterKind, resize
from ansipic.size import Explicit, TargetSize

log = logging.getLogger(__name__)

# Terminal cells are roughly 2.5 times taller than wide; each pixel becomes
# one cell, so stretch horizontally before fitting to the grid
ASPECT_CORRECTION = 3


def fit_dimensions(width: int, height: int, box_width: int, box_height: int) -> tuple[int, int]:
    """Largest size with the aspect ratio of (width, height) that fits in the box.

    Each side is at least one pixel.
    """
    ratio = min(box_width / width, box_height / height)
    return (max(round(width * ratio), 1), max(round(height * ratio), 1))


def transform_image(image: Image.Image, kind: FilterKind, target: TargetSize) -> Image.Image:
    """Aspect-correct the image, then fit it to an explicit target if one is given."""
    if image.width == 0 or image.height == 0:
        return image

    corrected = (image.width * ASPECT_CORRECTION, image.height)
    log.debug("aspect correction %dx%d -> %dx%d (%s)", *image.size, *corrected, kind.value)
    image = resize(image, corrected, kind)

    if isinstance(target, Explicit):
        fitted = fit_dimensions(image.width, image.height, target.width, target.height)
        log.debug("fit to %dx%d -> %dx%d", target.width, target.height, *fitted)
        image = resize(image, fitted, kind)
    return image
