import re
from collections.abc import Callable
from dataclasses import dataclass

from ansipic.errors import InvalidSizeFormat
from ansipic.terminal import get_terminal_size

EXPLICIT_SIZE = re.compile(r"(\d+)[xX](\d+)")


@dataclass(frozen=True)
class Explicit:
    width: int
    height: int


@dataclass(frozen=True)
class FitTerminal:
    pass


@dataclass(frozen=True)
class NoResize:
    pass


TargetSize = Explicit | FitTerminal | NoResize


def parse_size(spec: str) -> TargetSize:
    """Parse ``WIDTHxHEIGHT``, ``term`` or ``original``."""
    if spec == "original":
        return NoResize()
    if spec == "term":
        return FitTerminal()
    match = EXPLICIT_SIZE.fullmatch(spec)
    if match is None:
        raise InvalidSizeFormat(f"Size is not in a valid format: {spec!r} (expected WIDTHxHEIGHT, term or original)")
    width, height = int(match.group(1)), int(match.group(2))
    if width == 0 or height == 0:
        raise InvalidSizeFormat(f"Size dimensions must be positive: {spec!r}")
    return Explicit(width, height)


def resolve_size(
    target: TargetSize,
    query: Callable[[], tuple[int, int] | None] = get_terminal_size,
) -> Explicit | NoResize:
    """Replace FitTerminal with the current terminal size, or NoResize when there is none."""
    if not isinstance(target, FitTerminal):
        return target
    size = query()
    if size is None:
        return NoResize()
    return Explicit(*size)


def get_size(spec: str) -> Explicit | NoResize:
    return resolve_size(parse_size(spec))
