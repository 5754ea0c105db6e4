"""Persistence for trades, trading plans and users.

Two interchangeable stores implement the same contract: `MemoryStorage` keeps
everything in dicts on the instance, `DatabaseStorage` goes through a
SQLAlchemy session. Derived trade fields (pnl, status) are recomputed on every
write by `apply_trade_outcome`, so callers can never set them directly.

Lookups of a missing id return None (reads, updates) or False (deletes);
storage failures propagate as exceptions.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.database import SessionLocal
from app.models.trade import Trade as TradeRow
from app.models.trading_plan import TradingPlan as TradingPlanRow
from app.models.user import User as UserRow, utcnow
from app.schemas.trade import Trade, TradeCreate, TradePatch
from app.schemas.trading_plan import TradingPlan, TradingPlanCreate, TradingPlanPatch
from app.schemas.user import User, UserClaims
from app.services.pnl import apply_trade_outcome

logger = logging.getLogger(__name__)

TRADE_FIELDS = ('instrument', 'type', 'entry_price', 'exit_price', 'size', 'pnl', 'status',
                'entry_time', 'exit_time', 'notes')


class Storage(ABC):

    # Trades
    @abstractmethod
    def list_trades(self) -> List[Trade]:
        """All trades, most recent entry time first."""

    @abstractmethod
    def get_trade(self, trade_id: int) -> Optional[Trade]: ...

    @abstractmethod
    def create_trade(self, data: TradeCreate) -> Trade: ...

    @abstractmethod
    def update_trade(self, trade_id: int, patch: TradePatch) -> Optional[Trade]: ...

    @abstractmethod
    def delete_trade(self, trade_id: int) -> bool: ...

    # Trading plans
    @abstractmethod
    def list_trading_plans(self) -> List[TradingPlan]:
        """All plans, newest first."""

    @abstractmethod
    def get_trading_plan(self, plan_id: int) -> Optional[TradingPlan]: ...

    @abstractmethod
    def create_trading_plan(self, data: TradingPlanCreate) -> TradingPlan: ...

    @abstractmethod
    def update_trading_plan(self, plan_id: int, patch: TradingPlanPatch) -> Optional[TradingPlan]: ...

    @abstractmethod
    def delete_trading_plan(self, plan_id: int) -> bool: ...

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    def upsert_user(self, claims: UserClaims) -> User: ...


class MemoryStorage(Storage):
    def __init__(self):
        self._trades: Dict[int, Trade] = {}
        self._plans: Dict[int, TradingPlan] = {}
        self._users: Dict[str, User] = {}
        self._next_trade_id = 1
        self._next_plan_id = 1

    def list_trades(self) -> List[Trade]:
        rows = sorted(self._trades.values(), key=lambda t: (t.entry_time, t.id), reverse=True)
        return [t.model_copy() for t in rows]

    def get_trade(self, trade_id: int) -> Optional[Trade]:
        trade = self._trades.get(trade_id)
        return trade.model_copy() if trade else None

    def create_trade(self, data: TradeCreate) -> Trade:
        values = apply_trade_outcome(data.model_dump())
        values['id'] = self._next_trade_id
        self._next_trade_id += 1
        trade = Trade(**values)
        self._trades[trade.id] = trade
        logger.info("Trade created id=%s status=%s pnl=%s", trade.id, trade.status, trade.pnl)
        return trade.model_copy()

    def update_trade(self, trade_id: int, patch: TradePatch) -> Optional[Trade]:
        current = self._trades.get(trade_id)
        if current is None:
            return None
        values = current.model_dump()
        values.update(patch.changes())
        trade = Trade(**apply_trade_outcome(values))
        self._trades[trade_id] = trade
        logger.info("Trade updated id=%s status=%s pnl=%s", trade_id, trade.status, trade.pnl)
        return trade.model_copy()

    def delete_trade(self, trade_id: int) -> bool:
        existed = self._trades.pop(trade_id, None) is not None
        if existed:
            logger.info("Trade deleted id=%s", trade_id)
        return existed

    def list_trading_plans(self) -> List[TradingPlan]:
        rows = sorted(self._plans.values(), key=lambda p: (p.created_at, p.id), reverse=True)
        return [p.model_copy() for p in rows]

    def get_trading_plan(self, plan_id: int) -> Optional[TradingPlan]:
        plan = self._plans.get(plan_id)
        return plan.model_copy() if plan else None

    def create_trading_plan(self, data: TradingPlanCreate) -> TradingPlan:
        plan = TradingPlan(id=self._next_plan_id, created_at=utcnow(), **data.model_dump())
        self._next_plan_id += 1
        self._plans[plan.id] = plan
        logger.info("Trading plan created id=%s", plan.id)
        return plan.model_copy()

    def update_trading_plan(self, plan_id: int, patch: TradingPlanPatch) -> Optional[TradingPlan]:
        current = self._plans.get(plan_id)
        if current is None:
            return None
        plan = current.model_copy(update=patch.changes())
        self._plans[plan_id] = plan
        logger.info("Trading plan updated id=%s", plan_id)
        return plan.model_copy()

    def delete_trading_plan(self, plan_id: int) -> bool:
        existed = self._plans.pop(plan_id, None) is not None
        if existed:
            logger.info("Trading plan deleted id=%s", plan_id)
        return existed

    def get_user(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def upsert_user(self, claims: UserClaims) -> User:
        now = utcnow()
        existing = self._users.get(claims.id)
        created_at = existing.created_at if existing else now
        user = User(created_at=created_at, updated_at=now, **claims.model_dump())
        self._users[user.id] = user
        return user.model_copy()


class DatabaseStorage(Storage):
    """Store backed by one SQLAlchemy session; every write commits a single row."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("DB commit failed")
            raise

    def list_trades(self) -> List[Trade]:
        rows = self.db.query(TradeRow).order_by(TradeRow.entry_time.desc(), TradeRow.id.desc()).all()
        return [Trade.model_validate(r) for r in rows]

    def get_trade(self, trade_id: int) -> Optional[Trade]:
        row = self.db.get(TradeRow, trade_id)
        return Trade.model_validate(row) if row else None

    def create_trade(self, data: TradeCreate) -> Trade:
        row = TradeRow(**apply_trade_outcome(data.model_dump()))
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        logger.info("Trade saved (id=%s) with status: %s", row.id, row.status)
        return Trade.model_validate(row)

    def update_trade(self, trade_id: int, patch: TradePatch) -> Optional[Trade]:
        row = self.db.get(TradeRow, trade_id)
        if row is None:
            return None
        values = {name: getattr(row, name) for name in TRADE_FIELDS}
        values.update(patch.changes())
        for name, value in apply_trade_outcome(values).items():
            setattr(row, name, value)
        self._commit()
        self.db.refresh(row)
        logger.info("Trade updated (id=%s) with status: %s", row.id, row.status)
        return Trade.model_validate(row)

    def delete_trade(self, trade_id: int) -> bool:
        row = self.db.get(TradeRow, trade_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        logger.info("Trade deleted (id=%s)", trade_id)
        return True

    def list_trading_plans(self) -> List[TradingPlan]:
        rows = self.db.query(TradingPlanRow).order_by(TradingPlanRow.created_at.desc(),
                                                      TradingPlanRow.id.desc()).all()
        return [TradingPlan.model_validate(r) for r in rows]

    def get_trading_plan(self, plan_id: int) -> Optional[TradingPlan]:
        row = self.db.get(TradingPlanRow, plan_id)
        return TradingPlan.model_validate(row) if row else None

    def create_trading_plan(self, data: TradingPlanCreate) -> TradingPlan:
        row = TradingPlanRow(created_at=utcnow(), **data.model_dump())
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        logger.info("Trading plan saved (id=%s)", row.id)
        return TradingPlan.model_validate(row)

    def update_trading_plan(self, plan_id: int, patch: TradingPlanPatch) -> Optional[TradingPlan]:
        row = self.db.get(TradingPlanRow, plan_id)
        if row is None:
            return None
        for name, value in patch.changes().items():
            setattr(row, name, value)
        self._commit()
        self.db.refresh(row)
        logger.info("Trading plan updated (id=%s)", row.id)
        return TradingPlan.model_validate(row)

    def delete_trading_plan(self, plan_id: int) -> bool:
        row = self.db.get(TradingPlanRow, plan_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        logger.info("Trading plan deleted (id=%s)", plan_id)
        return True

    def get_user(self, user_id: str) -> Optional[User]:
        row = self.db.get(UserRow, user_id)
        return User.model_validate(row) if row else None

    def upsert_user(self, claims: UserClaims) -> User:
        row = self.db.get(UserRow, claims.id)
        if row is None:
            row = UserRow(id=claims.id)
            self.db.add(row)
        for name, value in claims.model_dump(exclude={'id'}).items():
            setattr(row, name, value)
        self._commit()
        self.db.refresh(row)
        return User.model_validate(row)


_memory_storage: Optional[MemoryStorage] = None


def get_storage():
    """FastAPI dependency yielding the configured store."""
    global _memory_storage
    if settings.STORAGE_BACKEND == 'memory':
        if _memory_storage is None:
            _memory_storage = MemoryStorage()
        yield _memory_storage
        return
    db = SessionLocal()
    try:
        yield DatabaseStorage(db)
    finally:
        db.close()
