"""Game session state: lifecycle, balance and bet."""
from slotgame.errors import ErrorCode, GameError
from slotgame.logic.fsm import FiniteStateMachine
from slotgame.logic.models import GameSessionData, GameStatus

GAME_TRANSITIONS: dict[GameStatus, frozenset[GameStatus]] = {
    GameStatus.IDLE: frozenset({GameStatus.SPINNING}),
    GameStatus.SPINNING: frozenset({GameStatus.EVALUATING}),
    GameStatus.EVALUATING: frozenset({GameStatus.SHOWING_WIN, GameStatus.IDLE}),
    GameStatus.SHOWING_WIN: frozenset({GameStatus.IDLE}),
}


class GameStateObserver:
    """
    Session observer. Override any subset of the hooks.

    Hooks run synchronously inside the mutating call and must not mutate
    the session themselves.
    """

    def on_balance_change(self, balance: float) -> None:
        pass

    def on_bet_change(self, bet: float) -> None:
        pass

    def on_state_change(self, previous: GameStatus, new: GameStatus) -> None:
        pass


class GameState:
    """
    Player session: balance, bet and lifecycle state.

    Tracks:
    - balance (never negative)
    - bet (positive, never set above balance)
    - lifecycle state, moved only along GAME_TRANSITIONS unless forced

    A failed mutation changes nothing and notifies nobody; a successful one
    notifies its own observer category exactly once.
    """

    def __init__(self, initial_balance: float, initial_bet: float):
        if initial_balance < 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT,
                f"Balance cannot be negative, got {initial_balance}",
            )
        if initial_bet <= 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT,
                f"Bet must be greater than zero, got {initial_bet}",
            )

        self._balance = initial_balance
        self._bet = initial_bet
        self._observers: dict[GameStateObserver, None] = {}
        self._fsm: FiniteStateMachine[GameStatus] = FiniteStateMachine(
            GameStatus.IDLE, GAME_TRANSITIONS
        )
        self._fsm.subscribe(self)

    # === Lifecycle ===

    @property
    def status(self) -> GameStatus:
        return self._fsm.state

    def can_transition_to(self, target: GameStatus) -> bool:
        return self._fsm.can_transition_to(target)

    def transition_to(self, target: GameStatus) -> None:
        self._fsm.transition_to(target)

    def force_transition(self, target: GameStatus) -> None:
        self._fsm.force_transition(target)

    def on_state_change(self, previous: GameStatus, new: GameStatus) -> None:
        """Relay FSM transitions to session observers."""
        for observer in list(self._observers):
            observer.on_state_change(previous, new)

    # === Balance ===

    @property
    def balance(self) -> float:
        return self._balance

    def increase_balance(self, amount: float) -> None:
        if amount < 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT, f"Amount must be positive, got {amount}"
            )
        self._apply_balance(self._balance + amount)

    def decrease_balance(self, amount: float) -> None:
        if amount < 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT, f"Amount must be positive, got {amount}"
            )
        if amount > self._balance:
            raise GameError(
                ErrorCode.INSUFFICIENT_BALANCE,
                f"Insufficient balance: {self._balance} < {amount}",
            )
        self._apply_balance(self._balance - amount)

    def set_balance(self, balance: float) -> None:
        if balance < 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT, f"Balance cannot be negative, got {balance}"
            )
        self._apply_balance(balance)

    # === Bet ===

    @property
    def bet(self) -> float:
        return self._bet

    def set_bet(self, bet: float) -> None:
        if bet <= 0:
            raise GameError(
                ErrorCode.INVALID_ARGUMENT, f"Bet must be greater than zero, got {bet}"
            )
        if bet > self._balance:
            raise GameError(
                ErrorCode.INSUFFICIENT_BALANCE,
                f"Bet cannot exceed balance: {bet} > {self._balance}",
            )
        self._bet = bet
        for observer in list(self._observers):
            observer.on_bet_change(bet)

    def can_place_bet(self) -> bool:
        return self.status == GameStatus.IDLE and self._balance >= self._bet

    # === Observers ===

    def subscribe(self, observer: GameStateObserver) -> None:
        self._observers.setdefault(observer, None)

    def unsubscribe(self, observer: GameStateObserver) -> None:
        self._observers.pop(observer, None)

    def snapshot(self) -> GameSessionData:
        return GameSessionData(
            balance=self._balance, bet=self._bet, status=self.status
        )

    def _apply_balance(self, balance: float) -> None:
        self._balance = balance
        for observer in list(self._observers):
            observer.on_balance_change(balance)
