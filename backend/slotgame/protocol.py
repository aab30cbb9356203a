"""HTTP protocol models."""
from pydantic import BaseModel, Field

from slotgame.config import settings
from slotgame.logic.models import GameStatus, Symbol


# === Request Models ===


class BetRequest(BaseModel):
    """POST /bet request body."""

    bet: float = Field(..., description="New bet; must fit the bet limits and step")


# === Response Models ===


class Configuration(BaseModel):
    """Machine configuration in the /init response."""

    reelCount: int
    visibleRows: int
    paylines: list[list[int]]
    paytable: dict[str, dict[str, float]]
    minBet: float = settings.min_bet
    maxBet: float = settings.max_bet
    betStep: float = settings.bet_step
    configHash: str


class Session(BaseModel):
    """Session snapshot returned by every session route."""

    balance: float
    bet: float
    status: GameStatus
    canSpin: bool


class LineWinView(BaseModel):
    """A paying payline in a spin response."""

    paylineIndex: int
    symbol: Symbol
    count: int
    payout: float


class ReelStop(BaseModel):
    """Reel stop position in a spin response."""

    reelIndex: int
    startIndex: int


class Outcome(BaseModel):
    """Outcome object in the spin response; matrix is [reel][row]."""

    matrix: list[list[Symbol]]
    wins: list[LineWinView] = Field(default_factory=list)
    totalWin: float
    reels: list[ReelStop] = Field(default_factory=list)


class InitResponse(BaseModel):
    """GET /init response."""

    protocolVersion: str = settings.protocol_version
    configuration: Configuration
    session: Session


class SpinResponse(BaseModel):
    """POST /spin response."""

    protocolVersion: str = settings.protocol_version
    roundId: str
    outcome: Outcome
    session: Session


class SessionResponse(BaseModel):
    """POST /bet, POST /finish response."""

    protocolVersion: str = settings.protocol_version
    session: Session
