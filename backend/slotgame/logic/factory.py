"""Factory for the default 5x4, 10-line machine."""
from collections.abc import Mapping, Sequence

from slotgame.logic.engine import SlotMachine
from slotgame.logic.models import Symbol
from slotgame.logic.paylines import PAYLINES_10, Payline
from slotgame.logic.paytable import DEFAULT_PAYTABLE, Paytable
from slotgame.logic.reel_strip import build_reel_strip, shuffle_strip
from slotgame.logic.rng import ProductionRNG, RNGBase, SeededRNG

DEFAULT_SYMBOL_WEIGHTS: dict[Symbol, int] = {
    Symbol.ORANGE: 14,
    Symbol.GRAPE: 14,
    Symbol.BELL: 14,
    Symbol.BAR: 14,
    Symbol.SEVEN: 14,
    Symbol.DIAMOND: 8,
    Symbol.WILD: 2,
    Symbol.HANDCUFFS: 10,
    Symbol.BANK: 10,
}

DEFAULT_VISIBLE_ROWS = 4
DEFAULT_REEL_COUNT = 5


def create_slot_machine(
    symbol_weights: Mapping[Symbol, int] | None = None,
    visible_rows: int = DEFAULT_VISIBLE_ROWS,
    reel_count: int = DEFAULT_REEL_COUNT,
    paylines: Sequence[Payline] = PAYLINES_10,
    paytable: Paytable = DEFAULT_PAYTABLE,
    rng: RNGBase | None = None,
    seed: int | None = None,
) -> SlotMachine:
    """
    Build a machine whose reels are independent shuffles of one base strip.

    RNG precedence: explicit rng, then seed, then ProductionRNG. The same
    RNG shuffles the strips and later drives the spins.
    """
    if rng is None:
        rng = SeededRNG(seed) if seed is not None else ProductionRNG()

    if symbol_weights is None:
        symbol_weights = DEFAULT_SYMBOL_WEIGHTS

    base_strip = build_reel_strip(symbol_weights)
    reels = [shuffle_strip(base_strip, rng) for _ in range(reel_count)]

    return SlotMachine(
        reels=reels,
        paylines=paylines,
        paytable=paytable,
        rng=rng,
        visible_rows=visible_rows,
    )


def create_deterministic_slot_machine(seed: int) -> SlotMachine:
    """Default machine driven by SeededRNG(seed)."""
    return create_slot_machine(seed=seed)
