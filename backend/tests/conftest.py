"""Pytest fixtures for backend tests."""
import asyncio
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from slotgame.controller import GameController
from slotgame.logic.factory import create_deterministic_slot_machine
from slotgame.logic.models import LineWin, ReelSpinInfo, SpinOutcome, Symbol
from slotgame.logic.rng import RNGBase
from slotgame.main import app
from slotgame.session_service import build_controller, session_service
from slotgame.spin_provider import LocalSpinProvider
from slotgame.telemetry import TelemetryService


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (long simulations)"
    )


class VirtualClock:
    """Scheduler whose time only moves when the test advances it."""

    def __init__(self):
        self.now = 0.0
        self._sleepers: list[tuple[float, asyncio.Future]] = []

    async def sleep(self, seconds: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self._sleepers.append((self.now + seconds, future))
        await future

    @property
    def pending(self) -> int:
        return len(self._sleepers)

    def advance(self, seconds: float) -> None:
        """Move time forward and wake every sleeper that is due."""
        self.now += seconds
        due = [(deadline, f) for deadline, f in self._sleepers if deadline <= self.now]
        self._sleepers = [(deadline, f) for deadline, f in self._sleepers if deadline > self.now]
        for _, future in due:
            if not future.done():
                future.set_result(None)


class RecordingRNG(RNGBase):
    """Always returns 0 and records every randbelow bound."""

    def __init__(self):
        self.bounds: list[int] = []

    def random(self) -> float:
        return 0.0

    def randbelow(self, bound: int) -> int:
        self.bounds.append(bound)
        return super().randbelow(bound)


class CountingRNG(RNGBase):
    """Wraps another RNG and counts randbelow calls."""

    def __init__(self, inner: RNGBase):
        self.inner = inner
        self.randbelow_calls: list[int] = []

    def random(self) -> float:
        return self.inner.random()

    def randbelow(self, bound: int) -> int:
        self.randbelow_calls.append(bound)
        return self.inner.randbelow(bound)


class FixedOutcomeProvider:
    """Spin provider returning a canned outcome and recording bets."""

    def __init__(self, outcome: SpinOutcome):
        self.outcome = outcome
        self.bets: list[float] = []

    async def spin(self, bet: float) -> SpinOutcome:
        self.bets.append(bet)
        return self.outcome


class FailingProvider:
    """Spin provider that always fails."""

    def __init__(self, error: Exception | None = None):
        self.error = error or RuntimeError("provider unavailable")
        self.bets: list[float] = []

    async def spin(self, bet: float) -> SpinOutcome:
        self.bets.append(bet)
        raise self.error


class RecordingSink:
    """Telemetry sink keeping every event in memory."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        self.events.append((event_name, data))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


def make_outcome(
    symbol: Symbol = Symbol.SEVEN,
    payout: float = 0.0,
    reels: int = 5,
    rows: int = 4,
) -> SpinOutcome:
    """Outcome with a uniform matrix; payout > 0 adds one 5-of-a-kind line win."""
    wins = []
    if payout > 0:
        wins.append(LineWin(payline_index=0, symbol=symbol, count=reels, payout=payout))
    return SpinOutcome(
        matrix=[[symbol] * rows for _ in range(reels)],
        wins=wins,
        total_win=payout,
        reels=[ReelSpinInfo(reel_index=i, start_index=0) for i in range(reels)],
    )


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def telemetry(recording_sink: RecordingSink) -> TelemetryService:
    """TelemetryService writing into a RecordingSink."""
    return TelemetryService(sink=recording_sink)


@pytest.fixture
def virtual_clock() -> VirtualClock:
    return VirtualClock()


def _seeded_controller(player_id: str) -> GameController:
    return GameController(
        provider=LocalSpinProvider(create_deterministic_slot_machine(12345)),
        initial_balance=1000,
        initial_bet=10,
        session_id=player_id,
    )


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient over a fresh session registry with seeded, latency-free machines."""
    session_service.clear()
    session_service.set_factory(_seeded_controller)

    with TestClient(app) as test_client:
        yield test_client

    session_service.clear()
    session_service.set_factory(build_controller)
