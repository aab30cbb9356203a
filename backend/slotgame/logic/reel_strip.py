"""Reel strip construction and visible window extraction."""
from collections.abc import Mapping, Sequence

from slotgame.errors import ErrorCode, GameError
from slotgame.logic.models import Symbol
from slotgame.logic.rng import RNGBase

ReelStrip = list[Symbol]


def build_reel_strip(weights: Mapping[Symbol, int]) -> ReelStrip:
    """
    Build a strip holding each symbol `weight` times, in mapping order.

    Symbols with weight <= 0 are skipped. Raises EMPTY_STRIP if nothing
    is left.
    """
    strip: ReelStrip = []
    for symbol, weight in weights.items():
        if weight <= 0:
            continue
        strip.extend([symbol] * weight)

    if not strip:
        raise GameError(ErrorCode.EMPTY_STRIP, "ReelStrip cannot be empty")
    return strip


def shuffle_strip(strip: Sequence[Symbol], rng: RNGBase) -> ReelStrip:
    """Return a Fisher-Yates permutation of strip; the input is untouched."""
    shuffled = list(strip)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randbelow(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def extract_visible(
    strip: Sequence[Symbol], start_index: int, visible_rows: int
) -> list[Symbol]:
    """Return visible_rows symbols from start_index, wrapping around the strip."""
    if not strip:
        raise GameError(ErrorCode.EMPTY_STRIP, "Strip cannot be empty")
    if visible_rows <= 0:
        raise GameError(
            ErrorCode.INVALID_ARGUMENT,
            f"visible_rows must be greater than 0, got {visible_rows}",
        )

    length = len(strip)
    return [strip[(start_index + i) % length] for i in range(visible_rows)]
