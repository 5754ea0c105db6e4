from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from app.config import settings
from app.routes.auth import require_user
from app.schemas.stats import DashboardStats, PerformanceStats, EquityPoint
from app.services.stats import compute_dashboard_stats, compute_performance, compute_equity_curve
from app.services.storage import Storage, get_storage
import logging

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"], dependencies=[Depends(require_user)])


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(storage: Storage = Depends(get_storage)):
    try:
        return compute_dashboard_stats(storage.list_trades(), settings.STARTING_CAPITAL)
    except Exception:
        logging.exception("Failed to compute dashboard stats")
        return JSONResponse({"message": "Failed to fetch dashboard stats"}, status_code=500)


@router.get("/performance", response_model=PerformanceStats)
def performance(storage: Storage = Depends(get_storage)):
    """Win/loss breakdown, averages, profit factor and per-instrument totals."""
    try:
        return compute_performance(storage.list_trades())
    except Exception:
        logging.exception("Failed to compute performance stats")
        return JSONResponse({"message": "Failed to fetch performance stats"}, status_code=500)


@router.get("/equity", response_model=List[EquityPoint])
def equity_curve(storage: Storage = Depends(get_storage)):
    """Daily realized pnl and running capital, oldest day first."""
    try:
        return compute_equity_curve(storage.list_trades(), settings.STARTING_CAPITAL)
    except Exception:
        logging.exception("Failed to compute equity curve")
        return JSONResponse({"message": "Failed to fetch equity curve"}, status_code=500)
