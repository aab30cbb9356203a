"""Config hash of the machine math.

Shared by:
- scripts/rtp_report.py (CSV audit)
- GET /init (configuration block)

Two runs with the same hash and seed reproduce the same outcomes.
"""
import hashlib
import json
from collections.abc import Mapping, Sequence

from slotgame.logic.factory import (
    DEFAULT_REEL_COUNT,
    DEFAULT_SYMBOL_WEIGHTS,
    DEFAULT_VISIBLE_ROWS,
)
from slotgame.logic.models import Symbol
from slotgame.logic.paylines import PAYLINES_10, Payline
from slotgame.logic.paytable import DEFAULT_PAYTABLE, Paytable


def get_config_hash(
    symbol_weights: Mapping[Symbol, int] = DEFAULT_SYMBOL_WEIGHTS,
    paylines: Sequence[Payline] = PAYLINES_10,
    paytable: Paytable = DEFAULT_PAYTABLE,
    visible_rows: int = DEFAULT_VISIBLE_ROWS,
    reel_count: int = DEFAULT_REEL_COUNT,
) -> str:
    """
    Generate hash of the machine configuration.

    Returns 16-char hex hash of the canonical config snapshot. Weight order
    is kept since it fixes the base strip layout.
    """
    config_snapshot = {
        "symbol_weights": [[symbol.value, weight] for symbol, weight in symbol_weights.items()],
        "paylines": [list(payline) for payline in paylines],
        "paytable": {
            symbol.value: {str(count): mult for count, mult in entry.items()}
            for symbol, entry in paytable.items()
        },
        "visible_rows": visible_rows,
        "reel_count": reel_count,
    }
    canonical = json.dumps(config_snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
