"""Request validators for the HTTP surface."""
import math

from slotgame.config import settings
from slotgame.errors import ErrorCode, GameError
from slotgame.protocol import BetRequest


def validate_bet(request: BetRequest) -> None:
    """
    Validate a bet change.

    Raises INVALID_BET if the bet is outside [min_bet, max_bet] or is not a
    whole number of bet steps. Affordability is checked by the session.
    """
    bet = request.bet
    if bet < settings.min_bet or bet > settings.max_bet:
        raise GameError(
            ErrorCode.INVALID_BET,
            f"Bet {bet} outside allowed range "
            f"[{settings.min_bet}, {settings.max_bet}]",
        )

    steps = bet / settings.bet_step
    if not math.isclose(steps, round(steps)):
        raise GameError(
            ErrorCode.INVALID_BET,
            f"Bet {bet} is not a multiple of {settings.bet_step}",
        )
