"""Game controller: one bet/spin/settle cycle per call."""
import asyncio
import logging
import math

from slotgame.config import settings
from slotgame.logic.game_state import GameState, GameStateObserver
from slotgame.logic.models import GameSessionData, GameStatus, SpinOutcome
from slotgame.spin_provider import SpinProvider
from slotgame.telemetry import (
    ProviderFailureEvent,
    SpinRejectedEvent,
    SpinSettledEvent,
    TelemetryService,
    telemetry_service,
)


logger = logging.getLogger(__name__)


class GameController:
    """
    Orchestrates a spin end-to-end.

    Implements:
    - Precondition checks (idle, bet affordable) before any mutation
    - Bet debit before the provider call, win credit after it
    - Bet clamp when the balance no longer covers the bet
    - Recovery to idle when the provider fails or the spin is cancelled

    The only suspension point is the provider call. Everything before it runs
    synchronously, so a second spin() issued while one is outstanding sees a
    non-idle state and returns None.
    """

    def __init__(
        self,
        provider: SpinProvider,
        initial_balance: float,
        initial_bet: float,
        bet_step: float | None = None,
        refund_on_provider_failure: bool | None = None,
        telemetry: TelemetryService | None = None,
        session_id: str | None = None,
    ):
        self.provider = provider
        self.session_id = session_id
        self.bet_step = bet_step if bet_step is not None else settings.bet_step
        self.refund_on_provider_failure = (
            refund_on_provider_failure
            if refund_on_provider_failure is not None
            else settings.refund_on_provider_failure
        )
        self._telemetry = telemetry or telemetry_service
        self._state = GameState(initial_balance, initial_bet)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def balance(self) -> float:
        return self._state.balance

    @property
    def bet(self) -> float:
        return self._state.bet

    @property
    def status(self) -> GameStatus:
        return self._state.status

    def snapshot(self) -> GameSessionData:
        return self._state.snapshot()

    def subscribe(self, observer: GameStateObserver) -> None:
        self._state.subscribe(observer)

    def unsubscribe(self, observer: GameStateObserver) -> None:
        self._state.unsubscribe(observer)

    def set_bet(self, amount: float) -> None:
        self._state.set_bet(amount)

    def can_spin(self) -> bool:
        return self._state.status == GameStatus.IDLE and self._state.can_place_bet()

    async def spin(self) -> SpinOutcome | None:
        """
        Run one spin cycle.

        Returns:
            The provider's outcome, or None when the spin was rejected
            (not idle, bet not affordable) or the provider failed.

        Raises:
            asyncio.CancelledError: re-raised after the session is recovered
            the same way as for a provider failure.
        """
        if self._state.status != GameStatus.IDLE:
            logger.warning("Spin already in progress (status=%s)", self._state.status.value)
            self._reject("ROUND_IN_PROGRESS")
            return None

        if not self._state.can_place_bet():
            logger.warning(
                "Insufficient balance for bet (balance=%s, bet=%s)",
                self._state.balance,
                self._state.bet,
            )
            self._reject("INSUFFICIENT_BALANCE")
            return None

        bet = self._state.bet
        self._state.transition_to(GameStatus.SPINNING)
        self._state.decrease_balance(bet)

        try:
            outcome = await self.provider.spin(bet)
        except asyncio.CancelledError as e:
            logger.warning("Spin cancelled while waiting on the provider (bet=%s)", bet)
            self._recover_from_provider_failure(bet, e)
            raise
        except Exception as e:
            logger.exception("Spin provider failed for bet %s", bet)
            self._recover_from_provider_failure(bet, e)
            return None

        self._state.transition_to(GameStatus.EVALUATING)
        if outcome.total_win > 0:
            self._state.increase_balance(outcome.total_win)
            self._state.transition_to(GameStatus.SHOWING_WIN)
        else:
            self._state.transition_to(GameStatus.IDLE)

        bet_clamped = self._clamp_bet_to_balance()

        self._telemetry.emit_spin_settled(
            SpinSettledEvent(
                session_id=self.session_id,
                bet=bet,
                total_win=outcome.total_win,
                line_wins=len(outcome.wins),
                balance_after=self._state.balance,
                status_after=self._state.status.value,
                bet_clamped=bet_clamped,
            )
        )
        return outcome

    def finish_win_presentation(self) -> None:
        """Leave SHOWING_WIN; does nothing in any other state."""
        if self._state.status == GameStatus.SHOWING_WIN:
            self._state.transition_to(GameStatus.IDLE)

    def _recover_from_provider_failure(self, bet: float, error: BaseException) -> None:
        if self.refund_on_provider_failure:
            self._state.increase_balance(bet)
        self._state.force_transition(GameStatus.IDLE)

        self._telemetry.emit_provider_failure(
            ProviderFailureEvent(
                session_id=self.session_id,
                bet=bet,
                error=str(error) or type(error).__name__,
                refunded=self.refund_on_provider_failure,
                balance_after=self._state.balance,
            )
        )

    def _clamp_bet_to_balance(self) -> bool:
        """
        Lower the bet to what the balance covers, in bet_step units.

        A balance below one step becomes the bet itself; a zero balance
        leaves the bet alone since no positive bet fits.
        """
        balance = self._state.balance
        if self._state.bet <= balance or balance <= 0:
            return False

        clamped = math.floor(balance / self.bet_step) * self.bet_step
        if clamped <= 0:
            clamped = balance
        self._state.set_bet(clamped)
        return True

    def _reject(self, reason: str) -> None:
        self._telemetry.emit_spin_rejected(
            SpinRejectedEvent(
                session_id=self.session_id,
                reason=reason,
                status=self._state.status.value,
                balance=self._state.balance,
                bet=self._state.bet,
            )
        )
