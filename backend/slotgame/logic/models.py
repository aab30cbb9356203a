"""Game models: symbols, lifecycle states and spin outcomes."""
import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class Symbol(str, Enum):
    """Reel symbols."""
    ORANGE = "ORANGE"
    GRAPE = "GRAPE"
    BELL = "BELL"
    BAR = "BAR"
    SEVEN = "SEVEN"
    DIAMOND = "DIAMOND"
    WILD = "WILD"
    HANDCUFFS = "HANDCUFFS"
    BANK = "BANK"


class GameStatus(str, Enum):
    """Lifecycle state of a game session."""
    IDLE = "idle"
    SPINNING = "spinning"
    EVALUATING = "evaluating"
    SHOWING_WIN = "showingWin"


# Visible window: matrix[reel][row]
Matrix = list[list[Symbol]]


class LineWin(BaseModel):
    """A single paying payline."""
    model_config = ConfigDict(frozen=True)

    payline_index: int
    symbol: Symbol
    count: int
    payout: float


class ReelSpinInfo(BaseModel):
    """Where a reel stopped; used by renderers to align the strip."""
    model_config = ConfigDict(frozen=True)

    reel_index: int
    start_index: int


class SpinOutcome(BaseModel):
    """
    Result of one spin.

    total_win must equal the sum of the line payouts; an outcome that
    breaks this does not validate.
    """
    model_config = ConfigDict(frozen=True)

    matrix: tuple[tuple[Symbol, ...], ...]
    wins: tuple[LineWin, ...] = ()
    total_win: float = 0.0
    reels: tuple[ReelSpinInfo, ...] = ()

    @model_validator(mode="after")
    def _check_total_win(self) -> "SpinOutcome":
        line_sum = sum(win.payout for win in self.wins)
        if not math.isclose(self.total_win, line_sum, rel_tol=1e-9, abs_tol=1e-9):
            raise ValueError(
                f"total_win {self.total_win} does not match line wins sum {line_sum}"
            )
        return self


class GameSessionData(BaseModel):
    """Read-only snapshot of a game session."""
    model_config = ConfigDict(frozen=True)

    balance: float
    bet: float
    status: GameStatus
