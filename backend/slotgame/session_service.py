"""In-memory registry of player sessions, one controller per player."""
import logging
from collections.abc import Callable

from slotgame.config import settings
from slotgame.controller import GameController
from slotgame.errors import ErrorCode, GameError
from slotgame.logic.factory import create_slot_machine
from slotgame.logic.models import GameStatus
from slotgame.logic.paylines import PAYLINES_10, Payline, select_paylines
from slotgame.logic.rng import ProductionRNG, SeededRNG
from slotgame.spin_provider import LocalSpinProvider, SimulatedSpinProvider, SpinProvider


logger = logging.getLogger(__name__)

ControllerFactory = Callable[[str], GameController]


def configured_paylines() -> list[Payline]:
    """Paylines of the 10-line table that fit the configured reel shape."""
    return select_paylines(PAYLINES_10, settings.reel_count, settings.visible_rows)


def build_controller(player_id: str) -> GameController:
    """Create a controller for a new session from settings."""
    rng = SeededRNG(settings.seed) if settings.seed is not None else ProductionRNG()
    machine = create_slot_machine(
        visible_rows=settings.visible_rows,
        reel_count=settings.reel_count,
        paylines=configured_paylines(),
        rng=rng,
    )

    provider: SpinProvider
    if settings.spin_latency_max_ms > 0:
        provider = SimulatedSpinProvider(
            machine,
            rng=ProductionRNG(),
            min_latency_ms=settings.spin_latency_min_ms,
            max_latency_ms=settings.spin_latency_max_ms,
        )
    else:
        provider = LocalSpinProvider(machine)

    return GameController(
        provider=provider,
        initial_balance=settings.initial_balance,
        initial_bet=settings.initial_bet,
        session_id=player_id,
    )


class SessionService:
    """
    Holds the active controller of every player.

    Sessions live only in process memory; closing a session drops its
    balance and bet.
    """

    def __init__(self, controller_factory: ControllerFactory | None = None):
        self._factory = controller_factory or build_controller
        self._sessions: dict[str, GameController] = {}

    def set_factory(self, controller_factory: ControllerFactory) -> None:
        """Set the controller factory (useful for testing)."""
        self._factory = controller_factory

    def open(self, player_id: str) -> GameController:
        """Return the player's session, creating it on first use."""
        controller = self._sessions.get(player_id)
        if controller is None:
            controller = self._factory(player_id)
            self._sessions[player_id] = controller
            logger.info(
                "Session opened for %s (balance=%s, bet=%s)",
                player_id,
                controller.balance,
                controller.bet,
            )
        return controller

    def get(self, player_id: str) -> GameController:
        """Return the player's session or raise SESSION_NOT_FOUND."""
        controller = self._sessions.get(player_id)
        if controller is None:
            raise GameError(
                ErrorCode.SESSION_NOT_FOUND,
                f"No open session for player {player_id}; call /init first.",
            )
        return controller

    def close(self, player_id: str) -> None:
        """End the player's session; a spin in flight is refused."""
        controller = self.get(player_id)
        if controller.status not in (GameStatus.IDLE, GameStatus.SHOWING_WIN):
            raise GameError(
                ErrorCode.ROUND_IN_PROGRESS,
                "Cannot end the session while a spin is in progress.",
            )
        del self._sessions[player_id]
        logger.info("Session closed for %s (balance=%s)", player_id, controller.balance)

    def clear(self) -> None:
        self._sessions.clear()


# Global instance
session_service = SessionService()
