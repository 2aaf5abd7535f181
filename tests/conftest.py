import pytest
from PIL import Image


@pytest.fixture
def image_file(tmp_path):
    """Save an RGB image built from rows of pixels and return its path."""

    def _make(rows, name="input.png"):
        height = len(rows)
        width = len(rows[0])
        img = Image.new("RGB", (width, height))
        img.putdata([pixel for row in rows for pixel in row])
        path = tmp_path / name
        img.save(path, format="PNG")
        return path

    return _make
