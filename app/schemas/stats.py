from typing import List, Optional
from pydantic import Field
from app.schemas.base import CamelModel


class DashboardStats(CamelModel):
    total_trades: int
    win_rate: float
    total_pnl: float = Field(alias="totalPnL")
    current_capital: float


class InstrumentSummary(CamelModel):
    instrument: str
    trades: int
    pnl: float


class PerformanceStats(CamelModel):
    open_trades: int
    closed_trades: int
    winning_trades: int
    losing_trades: int
    win_percentage: float
    loss_percentage: float
    average_win: float
    average_loss: float
    profit_factor: Optional[float] = None  # undefined without losing trades
    best_trade: float
    worst_trade: float
    by_instrument: List[InstrumentSummary]


class EquityPoint(CamelModel):
    day: str
    pnl: float
    capital: float
