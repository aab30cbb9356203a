"""Paytable: symbol and match count to payout multiplier."""
from collections.abc import Mapping

from slotgame.logic.models import Symbol

MIN_MATCH = 3
MAX_MATCH = 5

# count (3..5) -> multiplier of the bet
PaytableEntry = Mapping[int, float]
Paytable = Mapping[Symbol, PaytableEntry]

DEFAULT_PAYTABLE: dict[Symbol, dict[int, float]] = {
    Symbol.ORANGE: {3: 5, 4: 20, 5: 50},
    Symbol.GRAPE: {3: 10, 4: 30, 5: 75},
    Symbol.BELL: {3: 15, 4: 40, 5: 100},
    Symbol.BAR: {3: 20, 4: 60, 5: 150},
    Symbol.SEVEN: {3: 40, 4: 120, 5: 300},
    Symbol.DIAMOND: {3: 50, 4: 150, 5: 500},
    Symbol.WILD: {3: 100, 4: 300, 5: 1000},
    Symbol.HANDCUFFS: {3: 25, 4: 80, 5: 200},
    Symbol.BANK: {3: 30, 4: 100, 5: 250},
}


def payout_for(paytable: Paytable, symbol: Symbol, count: int) -> float:
    """
    Return the multiplier for `count` consecutive `symbol`s.

    Counts outside 3..5 and missing entries pay 0.
    """
    if count < MIN_MATCH or count > MAX_MATCH:
        return 0
    entry = paytable.get(symbol)
    if not entry:
        return 0
    return entry.get(count, 0)
