"""Spin providers: the async boundary between the controller and the machine."""
import asyncio
import logging
import math
from typing import Protocol

from slotgame.errors import ErrorCode, GameError
from slotgame.logic.engine import SlotMachine
from slotgame.logic.models import SpinOutcome
from slotgame.logic.rng import RNGBase


logger = logging.getLogger(__name__)


class SpinProvider(Protocol):
    """Settles a spin for exactly the bet the controller debited."""

    async def spin(self, bet: float) -> SpinOutcome:
        ...


class Scheduler(Protocol):
    """Source of delays, replaceable by a virtual clock in tests."""

    async def sleep(self, seconds: float) -> None:
        ...


class AsyncioScheduler:
    """Wall-clock scheduler."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class LocalSpinProvider:
    """Evaluates the spin in-process without delay."""

    def __init__(self, machine: SlotMachine):
        self.machine = machine

    async def spin(self, bet: float) -> SpinOutcome:
        return self.machine.spin(bet)


class SimulatedSpinProvider:
    """
    Remote-like provider with random latency.

    Latency is drawn from its own RNG in [min_latency_ms, max_latency_ms)
    before the machine is spun, so the machine's RNG sequence is the same
    as with LocalSpinProvider.
    """

    def __init__(
        self,
        machine: SlotMachine,
        rng: RNGBase,
        min_latency_ms: int = 300,
        max_latency_ms: int = 800,
        scheduler: Scheduler | None = None,
    ):
        if min_latency_ms < 0:
            raise GameError(
                ErrorCode.INVALID_CONFIG,
                f"min_latency_ms cannot be negative, got {min_latency_ms}",
            )
        if max_latency_ms < min_latency_ms:
            raise GameError(
                ErrorCode.INVALID_CONFIG,
                f"max_latency_ms ({max_latency_ms}) must be >= "
                f"min_latency_ms ({min_latency_ms})",
            )

        self.machine = machine
        self.rng = rng
        self.min_latency_ms = min_latency_ms
        self.max_latency_ms = max_latency_ms
        self.scheduler = scheduler or AsyncioScheduler()

    def generate_latency_ms(self) -> int:
        span = self.max_latency_ms - self.min_latency_ms
        return math.floor(self.min_latency_ms + self.rng.random() * span)

    async def spin(self, bet: float) -> SpinOutcome:
        latency_ms = self.generate_latency_ms()
        logger.debug("Simulated spin latency %d ms for bet %s", latency_ms, bet)
        await self.scheduler.sleep(latency_ms / 1000)
        return self.machine.spin(bet)
