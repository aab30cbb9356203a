"""Return-to-player simulation over a SlotMachine."""
from dataclasses import dataclass

from slotgame.errors import ErrorCode, GameError
from slotgame.logic.engine import SlotMachine


@dataclass(frozen=True)
class RTPSimulationResult:
    """Statistics accumulated during one simulation run."""
    rtp: float
    total_bet: float
    total_return: float
    spins: int
    wins: int
    hit_rate: float


def simulate_rtp(machine: SlotMachine, spins: int, bet: float) -> RTPSimulationResult:
    """
    Spin `spins` times at `bet` and aggregate the results.

    rtp and hit_rate are percentages.
    """
    if spins <= 0:
        raise GameError(
            ErrorCode.INVALID_ARGUMENT, f"spins must be greater than 0, got {spins}"
        )
    if bet <= 0:
        raise GameError(
            ErrorCode.INVALID_ARGUMENT, f"bet must be greater than 0, got {bet}"
        )

    total_bet = 0.0
    total_return = 0.0
    wins = 0

    for _ in range(spins):
        total_bet += bet
        outcome = machine.spin(bet)
        total_return += outcome.total_win
        if outcome.total_win > 0:
            wins += 1

    return RTPSimulationResult(
        rtp=total_return / total_bet * 100,
        total_bet=total_bet,
        total_return=total_return,
        spins=spins,
        wins=wins,
        hit_rate=wins / spins * 100,
    )


def expected_rtp(
    machine: SlotMachine, iterations: int, spins_per_iteration: int, bet: float
) -> float:
    """Average rtp over `iterations` consecutive simulation runs."""
    if iterations <= 0:
        raise GameError(
            ErrorCode.INVALID_ARGUMENT,
            f"iterations must be greater than 0, got {iterations}",
        )

    total_rtp = 0.0
    for _ in range(iterations):
        total_rtp += simulate_rtp(machine, spins_per_iteration, bet).rtp
    return total_rtp / iterations
