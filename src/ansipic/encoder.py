import io
from collections.abc import Iterator
from typing import BinaryIO

import numpy as np
from PIL import Image

CELL = b"\033[48;2;%d;%d;%dm \033[0m"


def iter_rows(image: Image.Image) -> Iterator[bytes]:
    """Yield each pixel row as truecolor background cells, without newlines."""
    if image.width == 0 or image.height == 0:
        return
    pixels = np.asarray(image.convert("RGB"))
    for row in pixels:
        yield b"".join(CELL % (r, g, b) for r, g, b in row.tolist())


def write_image(image: Image.Image, out: BinaryIO) -> None:
    """Stream the encoded image to ``out`` one row at a time, ending with a newline."""
    for y, row in enumerate(iter_rows(image)):
        if y:
            out.write(b"\n")
        out.write(row)
    out.write(b"\n")


def encode_image(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    write_image(image, buf)
    return buf.getvalue()
