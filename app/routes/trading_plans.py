from typing import List
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from app.routes.auth import require_user
from app.routes.responses import failed
from app.schemas.trading_plan import TradingPlan, TradingPlanCreate, TradingPlanPatch
from app.services.storage import Storage, get_storage

router = APIRouter(prefix="/api/trading-plans", tags=["Trading plans"], dependencies=[Depends(require_user)])

NOT_FOUND = {"message": "Trading plan not found"}


@router.get("", response_model=List[TradingPlan])
def list_trading_plans(storage: Storage = Depends(get_storage)):
    try:
        return storage.list_trading_plans()
    except Exception:
        return failed("fetch trading plans")


@router.get("/{plan_id}", response_model=TradingPlan)
def get_trading_plan(plan_id: int, storage: Storage = Depends(get_storage)):
    try:
        plan = storage.get_trading_plan(plan_id)
    except Exception:
        return failed("fetch trading plan")
    if plan is None:
        return JSONResponse(NOT_FOUND, status_code=404)
    return plan


@router.post("", response_model=TradingPlan, status_code=201)
def create_trading_plan(data: TradingPlanCreate, storage: Storage = Depends(get_storage)):
    try:
        return storage.create_trading_plan(data)
    except Exception:
        return failed("create trading plan")


@router.put("/{plan_id}", response_model=TradingPlan)
def update_trading_plan(plan_id: int, patch: TradingPlanPatch, storage: Storage = Depends(get_storage)):
    try:
        plan = storage.update_trading_plan(plan_id, patch)
    except Exception:
        return failed("update trading plan")
    if plan is None:
        return JSONResponse(NOT_FOUND, status_code=404)
    return plan


@router.delete("/{plan_id}", status_code=204, response_class=Response)
def delete_trading_plan(plan_id: int, storage: Storage = Depends(get_storage)):
    try:
        deleted = storage.delete_trading_plan(plan_id)
    except Exception:
        return failed("delete trading plan")
    if not deleted:
        return JSONResponse(NOT_FOUND, status_code=404)
    return Response(status_code=204)
