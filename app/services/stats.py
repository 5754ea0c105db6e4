from collections import defaultdict, OrderedDict
from decimal import Decimal
from typing import Iterable, List
from app.schemas.base import quantize
from app.schemas.stats import DashboardStats, PerformanceStats, InstrumentSummary, EquityPoint
from app.schemas.trade import Trade

ZERO = Decimal('0')


def _closed(trades: Iterable[Trade]) -> List[Trade]:
    return [t for t in trades if t.status == 'closed' and t.pnl is not None]


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return float(quantize(Decimal(part) * 100 / Decimal(whole), 1))


def compute_dashboard_stats(trades: List[Trade], starting_capital: Decimal) -> DashboardStats:
    """Headline numbers for the dashboard.
    winRate is the share of closed trades with positive pnl (0 when nothing is closed);
    currentCapital is the configured starting capital plus realized pnl.
    """
    closed = _closed(trades)
    wins = sum(1 for t in closed if t.pnl > 0)
    total_pnl = quantize(sum((t.pnl for t in closed), ZERO), 2)
    return DashboardStats(
        total_trades=len(trades),
        win_rate=_percent(wins, len(closed)),
        total_pnl=float(total_pnl),
        current_capital=float(quantize(Decimal(starting_capital) + total_pnl, 2)),
    )


def compute_performance(trades: List[Trade]) -> PerformanceStats:
    """Win/loss breakdown over closed trades plus per-instrument totals over all trades.
    averageLoss is reported as a positive magnitude. profitFactor is averageWin / averageLoss
    and left undefined when there are no losses.
    """
    closed = _closed(trades)
    winners = [t.pnl for t in closed if t.pnl > 0]
    losers = [t.pnl for t in closed if t.pnl < 0]

    avg_win = sum(winners, ZERO) / len(winners) if winners else ZERO
    avg_loss = abs(sum(losers, ZERO)) / len(losers) if losers else ZERO
    profit_factor = float(quantize(avg_win / avg_loss, 2)) if avg_loss > 0 else None

    pnls = [t.pnl for t in closed]
    best = max(pnls + [ZERO])
    worst = min(pnls + [ZERO])

    counts = defaultdict(int)
    sums = defaultdict(lambda: ZERO)
    for t in trades:
        counts[t.instrument] += 1
        sums[t.instrument] += t.pnl if t.pnl is not None else ZERO
    by_instrument = [
        InstrumentSummary(instrument=sym, trades=counts[sym], pnl=float(quantize(sums[sym], 2)))
        for sym in sorted(counts, key=lambda s: (-counts[s], s))
    ]

    return PerformanceStats(
        open_trades=sum(1 for t in trades if t.status == 'open'),
        closed_trades=len(closed),
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_percentage=_percent(len(winners), len(closed)),
        loss_percentage=_percent(len(losers), len(closed)),
        average_win=float(quantize(avg_win, 2)),
        average_loss=float(quantize(avg_loss, 2)),
        profit_factor=profit_factor,
        best_trade=float(best),
        worst_trade=float(worst),
        by_instrument=by_instrument,
    )


def compute_equity_curve(trades: List[Trade], starting_capital: Decimal) -> List[EquityPoint]:
    """Capital after each day with realized pnl, oldest first.
    A trade is realized on its exit time, or its entry time when no exit time was recorded.
    """
    closed = sorted(_closed(trades), key=lambda t: t.exit_time or t.entry_time)
    daily = OrderedDict()
    for t in closed:
        day = (t.exit_time or t.entry_time).date().isoformat()
        daily[day] = daily.get(day, ZERO) + t.pnl

    points = []
    capital = Decimal(starting_capital)
    for day, pnl in daily.items():
        capital += pnl
        points.append(EquityPoint(day=day, pnl=float(quantize(pnl, 2)), capital=float(quantize(capital, 2))))
    return points
