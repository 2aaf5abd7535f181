import argparse
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from ansipic.encoder import write_image
from ansipic.errors import AnsipicError, DecodeFailure, InvalidSizeFormat, OutputOpenFailure, OutputWriteFailure
from ansipic.filters import FILTERS, FilterKind, get_filter
from ansipic.size import TargetSize, parse_size, resolve_size
from ansipic.transform import transform_image

VERSION = "1.0.0"

log = logging.getLogger("ansipic")


def _size_arg(spec: str) -> TargetSize:
    try:
        return parse_size(spec)
    except InvalidSizeFormat as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ansipic",
        description="Render an image in the terminal as truecolor background cells",
        allow_abbrev=False,
    )
    parser.add_argument("--filters", action="store_true", help="List all resizing filters and exit")
    parser.add_argument(
        "-f", "--filter", default="nearest", choices=FILTERS, help="Filter to use to resize image (default: nearest)"
    )
    parser.add_argument(
        "-s",
        "--size",
        type=_size_arg,
        default="term",
        metavar="WxH|term|original",
        help="Size of output image: WIDTHxHEIGHT, term (fit the terminal) or original (default: term)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug information to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("input", nargs="?", help="Input image")
    parser.add_argument("output", nargs="?", default="-", help='Output file; "-" writes to stdout (default: -)')
    return parser


def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)
    log.propagate = False


def load_image(path: str | Path) -> Image.Image:
    """Decode an image file by content into an RGB image."""
    path = Path(path)
    if not path.exists():
        raise DecodeFailure(f"File not found: {path}")
    try:
        with Image.open(path) as image:
            image.load()
            log.debug("decoded %s: %s %dx%d", path, image.format, *image.size)
            return image.convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeFailure(f"Could not decode {path}: {exc}") from exc


@contextmanager
def open_output(path: str) -> Iterator[BinaryIO]:
    """Binary sink for ``path``; ``-`` is stdout, which is flushed but left open."""
    if path == "-":
        sys.stdout.flush()
        out = sys.stdout.buffer
        try:
            yield out
        finally:
            out.flush()
        return

    try:
        f = open(path, "wb")
    except OSError as exc:
        raise OutputOpenFailure(f"Could not open {path} for writing: {exc}") from exc
    with f:
        yield f


def render(input_path: str | Path, output: str, kind: FilterKind, target: TargetSize) -> None:
    target = resolve_size(target)
    log.debug("target size: %s", target)
    image = transform_image(load_image(input_path), kind, target)
    try:
        with open_output(output) as out:
            write_image(image, out)
    except OSError as exc:
        raise OutputWriteFailure(f"Error writing {output}: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()

    if not argv:
        parser.print_help(sys.stderr)
        return 2

    # Listing filters wins over every other argument, valid or not; tokens after "--" are positionals
    options = argv[: argv.index("--")] if "--" in argv else argv
    if "--filters" in options:
        for name in FILTERS:
            print(name)
        return 0

    args = parser.parse_args(argv)
    if args.input is None:
        parser.error("the following arguments are required: input")
    setup_logging(args.verbose)

    try:
        render(args.input, args.output, get_filter(args.filter), args.size)
    except AnsipicError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0
