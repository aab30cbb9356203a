"""Spin evaluator: reel stops, visible matrix and payline wins."""
from collections.abc import Sequence

from slotgame.errors import ErrorCode, GameError
from slotgame.logic.models import LineWin, Matrix, ReelSpinInfo, SpinOutcome, Symbol
from slotgame.logic.paylines import Payline, symbols_on_payline
from slotgame.logic.paytable import MIN_MATCH, Paytable, payout_for
from slotgame.logic.reel_strip import ReelStrip, extract_visible
from slotgame.logic.rng import RNGBase


def leading_run(symbols: Sequence[Symbol]) -> tuple[Symbol | None, int]:
    """
    Count consecutive matches of the first symbol from the leftmost reel.

    Only the leading run counts; a later run of the same symbol after an
    interruption does not extend it.
    """
    if not symbols:
        return None, 0

    first_symbol = symbols[0]
    count = 1
    for symbol in symbols[1:]:
        if symbol != first_symbol:
            break
        count += 1
    return first_symbol, count


class SlotMachine:
    """
    Reel slot evaluator.

    Implements:
    - One RNG draw per reel, in reel order, for the stop position
    - Visible window extraction with wrap-around
    - Leading-run payline evaluation against the paytable

    Exact symbol equality only: WILD pays as a plain symbol.
    """

    def __init__(
        self,
        reels: Sequence[ReelStrip],
        paylines: Sequence[Payline],
        paytable: Paytable,
        rng: RNGBase,
        visible_rows: int,
    ):
        if not reels:
            raise GameError(ErrorCode.INVALID_CONFIG, "At least one reel is required")
        if not paylines:
            raise GameError(ErrorCode.INVALID_CONFIG, "At least one payline is required")
        if visible_rows <= 0:
            raise GameError(
                ErrorCode.INVALID_CONFIG,
                f"visible_rows must be greater than 0, got {visible_rows}",
            )
        for reel_index, strip in enumerate(reels):
            if len(strip) < visible_rows:
                raise GameError(
                    ErrorCode.INVALID_CONFIG,
                    f"Reel {reel_index} has {len(strip)} symbols, "
                    f"needs at least {visible_rows}",
                )
        for payline_index, payline in enumerate(paylines):
            if len(payline) != len(reels):
                raise GameError(
                    ErrorCode.DIMENSION_MISMATCH,
                    f"Payline {payline_index} has {len(payline)} rows "
                    f"for {len(reels)} reels",
                )
            if any(not 0 <= row < visible_rows for row in payline):
                raise GameError(
                    ErrorCode.DIMENSION_MISMATCH,
                    f"Payline {payline_index} {tuple(payline)} leaves the "
                    f"{visible_rows} visible rows",
                )

        self._reels = tuple(tuple(strip) for strip in reels)
        self._paylines = tuple(tuple(payline) for payline in paylines)
        self._paytable = paytable
        self.rng = rng
        self._visible_rows = visible_rows

    @property
    def reel_count(self) -> int:
        return len(self._reels)

    @property
    def visible_rows(self) -> int:
        return self._visible_rows

    @property
    def payline_count(self) -> int:
        return len(self._paylines)

    def spin(self, bet: float) -> SpinOutcome:
        """
        Execute a spin and return its outcome.

        Args:
            bet: Line bet; every line payout is multiplier * bet

        Returns:
            SpinOutcome with matrix, line wins, total win and reel stops
        """
        if bet <= 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT, f"Bet must be greater than 0, got {bet}"
            )

        matrix, reels = self._generate_matrix()
        wins = self._evaluate_wins(matrix, bet)
        return SpinOutcome(
            matrix=matrix,
            wins=wins,
            total_win=sum(win.payout for win in wins),
            reels=reels,
        )

    def evaluate_matrix(self, matrix: Matrix, bet: float) -> list[LineWin]:
        """Evaluate every payline against a given matrix, in table order."""
        if bet <= 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT, f"Bet must be greater than 0, got {bet}"
            )
        return self._evaluate_wins(matrix, bet)

    def _generate_matrix(self) -> tuple[Matrix, list[ReelSpinInfo]]:
        """Draw each reel's stop and read its visible window, column by column."""
        matrix: Matrix = []
        reels: list[ReelSpinInfo] = []
        for reel_index, strip in enumerate(self._reels):
            start_index = self.rng.randbelow(len(strip))
            matrix.append(extract_visible(strip, start_index, self._visible_rows))
            reels.append(ReelSpinInfo(reel_index=reel_index, start_index=start_index))
        return matrix, reels

    def _evaluate_wins(self, matrix: Matrix, bet: float) -> list[LineWin]:
        wins: list[LineWin] = []
        for payline_index, payline in enumerate(self._paylines):
            symbols = symbols_on_payline(matrix, payline)
            win = self._evaluate_payline(symbols, payline_index, bet)
            if win is not None:
                wins.append(win)
        return wins

    def _evaluate_payline(
        self, symbols: list[Symbol], payline_index: int, bet: float
    ) -> LineWin | None:
        symbol, count = leading_run(symbols)
        if symbol is None or count < MIN_MATCH:
            return None

        multiplier = payout_for(self._paytable, symbol, count)
        if multiplier == 0:
            return None

        return LineWin(
            payline_index=payline_index,
            symbol=symbol,
            count=count,
            payout=multiplier * bet,
        )
