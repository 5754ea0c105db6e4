from decimal import Decimal
from typing import NamedTuple, Optional, Dict, Any
from app.schemas.base import quantize
from app.schemas.trade import PNL_PLACES


class TradeOutcome(NamedTuple):
    pnl: Optional[Decimal]
    status: str


def compute_trade_pnl(trade_type: str, entry_price: Decimal, exit_price: Decimal, size: Decimal) -> Decimal:
    """Realized P&L of a single round trip, rounded half-up to cents.
    buy:  (exit - entry) * size
    sell: (entry - exit) * size
    """
    side = trade_type.lower()
    if side == 'buy':
        raw = (Decimal(exit_price) - Decimal(entry_price)) * Decimal(size)
    elif side == 'sell':
        raw = (Decimal(entry_price) - Decimal(exit_price)) * Decimal(size)
    else:
        raise ValueError(f"unknown trade type: {trade_type!r}")
    return quantize(raw, PNL_PLACES)


def derive_trade_outcome(trade_type: str, entry_price: Optional[Decimal], exit_price: Optional[Decimal],
                         size: Optional[Decimal]) -> TradeOutcome:
    """Status and P&L implied by a trade's prices.
    A trade is closed exactly when it has an exit price; only closed trades carry a pnl.
    """
    if exit_price is None or entry_price is None or size is None:
        return TradeOutcome(pnl=None, status='open')
    return TradeOutcome(pnl=compute_trade_pnl(trade_type, entry_price, exit_price, size), status='closed')


def apply_trade_outcome(values: Dict[str, Any]) -> Dict[str, Any]:
    """Overwrite the derived fields (pnl, status) of a trade field dict in place and return it."""
    outcome = derive_trade_outcome(values['type'], values.get('entry_price'), values.get('exit_price'),
                                   values.get('size'))
    values['pnl'] = outcome.pnl
    values['status'] = outcome.status
    return values
