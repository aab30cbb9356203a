"""Random sources for reel stops and shuffles."""
import math
import secrets
from abc import ABC, abstractmethod

from slotgame.errors import ErrorCode, GameError


def _check_bound(bound: int) -> None:
    if bound <= 0:
        raise GameError(
            ErrorCode.INVALID_ARGUMENT,
            f"bound must be greater than 0, got {bound}",
        )


class RNGBase(ABC):
    """Abstract RNG interface shared by production and seeded sources."""

    @abstractmethod
    def random(self) -> float:
        """Return random float in [0, 1)."""
        pass

    def randbelow(self, bound: int) -> int:
        """Return random int in [0, bound)."""
        _check_bound(bound)
        return math.floor(self.random() * bound)


class ProductionRNG(RNGBase):
    """
    Production RNG.

    Uses cryptographically secure source, no fixed seed.
    """

    def random(self) -> float:
        return secrets.randbelow(2**32) / (2**32)

    def randbelow(self, bound: int) -> int:
        _check_bound(bound)
        return secrets.randbelow(bound)


class SeededRNG(RNGBase):
    """
    Test/Simulation RNG.

    Linear congruential generator, fully controlled by seed:
    state = (state * 9301 + 49297) % 233280, value = state / 233280.
    """

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed: int):
        self._state = seed
        self.seed = seed

    @property
    def state(self) -> int:
        """Current internal state; assign to replay from a saved point."""
        return self._state

    @state.setter
    def state(self, value: int) -> None:
        self._state = value

    def random(self) -> float:
        self._state = (self._state * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self._state / self.MODULUS
