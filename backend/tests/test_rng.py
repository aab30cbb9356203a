"""Random source tests."""
import pytest

from slotgame.errors import ErrorCode, GameError
from slotgame.logic.rng import ProductionRNG, SeededRNG


class TestProductionRNG:
    """Ambient-entropy source."""

    def test_random_in_unit_interval(self):
        rng = ProductionRNG()
        for _ in range(200):
            value = rng.random()
            assert 0 <= value < 1

    def test_randbelow_in_bounds(self):
        rng = ProductionRNG()
        for _ in range(200):
            value = rng.randbelow(10)
            assert isinstance(value, int)
            assert 0 <= value < 10

    @pytest.mark.parametrize("bound", [0, -5])
    def test_randbelow_rejects_non_positive_bound(self, bound):
        with pytest.raises(GameError) as exc_info:
            ProductionRNG().randbelow(bound)
        assert exc_info.value.code == ErrorCode.INVALID_ARGUMENT


class TestSeededRNG:
    """Linear congruential source."""

    def test_first_values_follow_lcg(self):
        """state = (state * 9301 + 49297) % 233280, value = state / 233280."""
        rng = SeededRNG(0)
        assert rng.random() == 49297 / 233280
        expected_state = (49297 * 9301 + 49297) % 233280
        assert rng.random() == expected_state / 233280
        assert rng.state == expected_state

    def test_same_seed_same_sequence(self):
        rng1 = SeededRNG(12345)
        rng2 = SeededRNG(12345)
        assert [rng1.random() for _ in range(20)] == [rng2.random() for _ in range(20)]
        assert [rng1.randbelow(37) for _ in range(20)] == [rng2.randbelow(37) for _ in range(20)]

    def test_different_seeds_different_sequences(self):
        rng1 = SeededRNG(111)
        rng2 = SeededRNG(222)
        assert [rng1.random() for _ in range(10)] != [rng2.random() for _ in range(10)]

    def test_values_in_range(self):
        rng = SeededRNG(42)
        for _ in range(500):
            assert 0 <= rng.random() < 1
            assert 0 <= rng.randbelow(7) < 7

    def test_randbelow_is_floor_of_fraction(self):
        rng = SeededRNG(7)
        probe = SeededRNG(7)
        for _ in range(50):
            assert rng.randbelow(90) == int(probe.random() * 90)

    def test_state_replay(self):
        """Restoring a saved state replays the same values."""
        rng = SeededRNG(999)
        rng.random()
        saved = rng.state
        first = [rng.random() for _ in range(5)]

        rng.state = saved
        assert [rng.random() for _ in range(5)] == first

    def test_randbelow_rejects_zero(self):
        with pytest.raises(GameError) as exc_info:
            SeededRNG(1).randbelow(0)
        assert exc_info.value.code == ErrorCode.INVALID_ARGUMENT
        assert exc_info.value.recoverable is False
