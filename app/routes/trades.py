from typing import List
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from app.routes.auth import require_user
from app.routes.responses import failed
from app.schemas.trade import Trade, TradeCreate, TradePatch
from app.services.storage import Storage, get_storage

router = APIRouter(prefix="/api/trades", tags=["Trades"], dependencies=[Depends(require_user)])

NOT_FOUND = {"message": "Trade not found"}


@router.get("", response_model=List[Trade])
def list_trades(storage: Storage = Depends(get_storage)):
    """All trades, newest entry first."""
    try:
        return storage.list_trades()
    except Exception:
        return failed("fetch trades")


@router.get("/{trade_id}", response_model=Trade)
def get_trade(trade_id: int, storage: Storage = Depends(get_storage)):
    try:
        trade = storage.get_trade(trade_id)
    except Exception:
        return failed("fetch trade")
    if trade is None:
        return JSONResponse(NOT_FOUND, status_code=404)
    return trade


@router.post("", response_model=Trade, status_code=201)
def create_trade(data: TradeCreate, storage: Storage = Depends(get_storage)):
    """Log a trade. pnl and status are computed from the prices; an exit price closes the trade."""
    try:
        return storage.create_trade(data)
    except Exception:
        return failed("create trade")


@router.put("/{trade_id}", response_model=Trade)
def update_trade(trade_id: int, patch: TradePatch, storage: Storage = Depends(get_storage)):
    try:
        trade = storage.update_trade(trade_id, patch)
    except Exception:
        return failed("update trade")
    if trade is None:
        return JSONResponse(NOT_FOUND, status_code=404)
    return trade


@router.delete("/{trade_id}", status_code=204, response_class=Response)
def delete_trade(trade_id: int, storage: Storage = Depends(get_storage)):
    try:
        deleted = storage.delete_trade(trade_id)
    except Exception:
        return failed("delete trade")
    if not deleted:
        return JSONResponse(NOT_FOUND, status_code=404)
    return Response(status_code=204)
