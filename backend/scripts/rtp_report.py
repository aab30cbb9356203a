#!/usr/bin/env python3
"""
RTP report script.

Runs seeded headless simulations of the default machine and writes one CSV
row per iteration, so a reported RTP can be reproduced from its seed and
config hash.

Usage:
    python -m scripts.rtp_report --spins 100000 --iterations 5 --bet 10 --seed AUDIT_2025 --out out/rtp.csv
"""
import argparse
import csv
import hashlib
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from slotgame.config_hash import get_config_hash
from slotgame.logic.factory import create_deterministic_slot_machine
from slotgame.logic.simulator import RTPSimulationResult, simulate_rtp


@dataclass
class ReportStats:
    """Per-iteration simulation results of one report."""
    seed: str
    seed_int: int
    spins: int
    bet: float
    iterations: list[RTPSimulationResult] = field(default_factory=list)

    @property
    def mean_rtp(self) -> float:
        if not self.iterations:
            return 0.0
        return sum(result.rtp for result in self.iterations) / len(self.iterations)

    @property
    def mean_hit_rate(self) -> float:
        if not self.iterations:
            return 0.0
        return sum(result.hit_rate for result in self.iterations) / len(self.iterations)


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically; numeric strings are used as-is."""
    if seed_str.isdigit():
        return int(seed_str)
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def run_report(
    spins: int,
    iterations: int,
    bet: float,
    seed_str: str,
    verbose: bool = False,
) -> ReportStats:
    """
    Run `iterations` consecutive simulations on one seeded machine.

    Args:
        spins: Spins per iteration
        iterations: Number of simulation runs
        bet: Bet per spin
        seed_str: Seed string for reproducibility
        verbose: Print progress

    Returns:
        ReportStats with one RTPSimulationResult per iteration
    """
    seed_int = seed_to_int(seed_str)
    machine = create_deterministic_slot_machine(seed_int)
    stats = ReportStats(seed=seed_str, seed_int=seed_int, spins=spins, bet=bet)

    for index in range(iterations):
        result = simulate_rtp(machine, spins, bet)
        stats.iterations.append(result)
        if verbose:
            print(f"Iteration {index + 1}/{iterations}: RTP {result.rtp:.4f}%")

    return stats


def generate_csv(stats: ReportStats, output_path: str) -> None:
    """Write one row per iteration; config_hash and seed lead every row."""
    timestamp = get_timestamp_iso()
    config_hash = get_config_hash()

    rows = [
        {
            "timestamp": timestamp,
            "config_hash": config_hash,
            "seed": stats.seed,
            "iteration": index,
            "spins": result.spins,
            "bet": f"{stats.bet:.2f}",
            "total_bet": f"{result.total_bet:.2f}",
            "total_return": f"{result.total_return:.2f}",
            "wins": result.wins,
            "rtp": f"{result.rtp:.4f}",
            "hit_rate": f"{result.hit_rate:.4f}",
        }
        for index, result in enumerate(stats.iterations)
    ]

    # Ensure output directory exists
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys())
        writer.writeheader()
        writer.writerows(rows)

    print(f"CSV written to: {output_path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seeded RTP report for the default machine")
    parser.add_argument(
        "--spins",
        type=int,
        required=True,
        help="Spins per iteration",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=1,
        help="Number of simulation runs (default: 1)",
    )
    parser.add_argument(
        "--bet",
        type=float,
        default=10.0,
        help="Bet per spin (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=str,
        required=True,
        help="Seed string for reproducibility",
    )
    parser.add_argument(
        "--out",
        type=str,
        required=True,
        help="Output CSV path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show progress",
    )

    args = parser.parse_args(argv)
    if args.spins <= 0 or args.iterations <= 0 or args.bet <= 0:
        parser.error("--spins, --iterations and --bet must be greater than 0")

    print(f"Running report: spins={args.spins}, iterations={args.iterations}, seed={args.seed}")
    print(f"Config hash: {get_config_hash()}")

    stats = run_report(
        spins=args.spins,
        iterations=args.iterations,
        bet=args.bet,
        seed_str=args.seed,
        verbose=args.verbose,
    )
    generate_csv(stats, args.out)

    print("\nSummary:")
    print(f"  Iterations: {len(stats.iterations)}")
    print(f"  Spins per iteration: {stats.spins}")
    print(f"  Mean RTP: {stats.mean_rtp:.4f}%")
    print(f"  Mean hit rate: {stats.mean_hit_rate:.4f}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())
