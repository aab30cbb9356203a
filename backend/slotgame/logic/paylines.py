"""Payline table for the 5x4 machine."""
from collections.abc import Sequence

from slotgame.errors import ErrorCode, GameError
from slotgame.logic.models import Symbol

# Row index per reel, top row is 0
Payline = tuple[int, ...]

PAYLINES_10: tuple[Payline, ...] = (
    (0, 0, 0, 0, 0),
    (1, 1, 1, 1, 1),
    (2, 2, 2, 2, 2),
    (3, 3, 3, 3, 3),
    (0, 1, 2, 1, 0),
    (2, 1, 0, 1, 2),
    (1, 2, 1, 2, 1),
    (2, 1, 2, 1, 2),
    (0, 1, 0, 1, 0),
    (3, 2, 3, 2, 3),
)


def symbols_on_payline(
    matrix: Sequence[Sequence[Symbol]], payline: Payline
) -> list[Symbol]:
    """Read the symbol under the payline on every reel."""
    if len(payline) != len(matrix):
        raise GameError(
            ErrorCode.DIMENSION_MISMATCH,
            f"Payline length {len(payline)} must match reel count {len(matrix)}",
        )

    symbols: list[Symbol] = []
    for reel_index, row_index in enumerate(payline):
        reel = matrix[reel_index]
        if not 0 <= row_index < len(reel):
            raise GameError(
                ErrorCode.DIMENSION_MISMATCH,
                f"Row {row_index} outside reel {reel_index} with {len(reel)} rows",
            )
        symbols.append(reel[row_index])
    return symbols


def select_paylines(
    paylines: Sequence[Payline], reel_count: int, visible_rows: int
) -> list[Payline]:
    """
    Keep the paylines that fit a reel_count x visible_rows window.

    Raises INVALID_CONFIG when none fits, so a misconfigured machine fails
    once with a clear message instead of on every build.
    """
    fitting = [
        payline
        for payline in paylines
        if len(payline) == reel_count and all(0 <= row < visible_rows for row in payline)
    ]
    if not fitting:
        raise GameError(
            ErrorCode.INVALID_CONFIG,
            f"No payline fits {reel_count} reels x {visible_rows} rows",
        )
    return fitting
