from datetime import datetime
from decimal import Decimal
import pytest
from pydantic import ValidationError
from app.schemas.trade import TradeCreate, TradePatch
from app.schemas.trading_plan import TradingPlanCreate, TradingPlanPatch
from app.schemas.user import UserClaims


def new_trade(**overrides):
    data = {
        'instrument': 'EUR/USD', 'type': 'buy', 'entryPrice': '1.1000', 'size': '1000',
        'entryTime': '2025-03-01T09:00:00',
    }
    data.update(overrides)
    return TradeCreate.model_validate(data)


def test_create_closed_trade_derives_pnl(any_storage):
    trade = any_storage.create_trade(new_trade(exitPrice='1.1050', exitTime='2025-03-01T12:00:00'))
    assert trade.id is not None
    assert trade.pnl == Decimal('5.00')
    assert trade.status == 'closed'
    assert trade.exit_time == datetime(2025, 3, 1, 12)


def test_create_open_trade(any_storage):
    trade = any_storage.create_trade(new_trade())
    assert trade.pnl is None
    assert trade.status == 'open'
    assert trade.exit_price is None


def test_ids_are_distinct_and_increasing(any_storage):
    a = any_storage.create_trade(new_trade())
    b = any_storage.create_trade(new_trade())
    assert b.id > a.id


def test_list_trades_newest_entry_first(any_storage):
    older = any_storage.create_trade(new_trade(entryTime='2025-01-01T00:00:00'))
    newest = any_storage.create_trade(new_trade(entryTime='2025-06-01T00:00:00'))
    middle = any_storage.create_trade(new_trade(entryTime='2025-03-01T00:00:00'))
    assert [t.id for t in any_storage.list_trades()] == [newest.id, middle.id, older.id]


def test_get_missing_trade_returns_none(any_storage):
    assert any_storage.get_trade(999) is None


def test_update_with_exit_price_closes_trade(any_storage):
    trade = any_storage.create_trade(new_trade(type='sell', size='2000'))
    updated = any_storage.update_trade(trade.id, TradePatch.model_validate({'exitPrice': '1.0950'}))
    assert updated.status == 'closed'
    assert updated.pnl == Decimal('10.00')
    assert any_storage.get_trade(trade.id).pnl == Decimal('10.00')


def test_update_recomputes_pnl_when_size_changes(any_storage):
    trade = any_storage.create_trade(new_trade(exitPrice='1.1050'))
    updated = any_storage.update_trade(trade.id, TradePatch.model_validate({'size': '2000'}))
    assert updated.pnl == Decimal('10.00')


def test_update_only_touches_supplied_fields(any_storage):
    trade = any_storage.create_trade(new_trade(notes='first'))
    updated = any_storage.update_trade(trade.id, TradePatch.model_validate({'notes': 'second'}))
    assert updated.notes == 'second'
    assert updated.instrument == 'EUR/USD'
    assert updated.entry_price == trade.entry_price
    assert updated.status == 'open'


def test_removing_exit_price_reopens_trade(any_storage):
    trade = any_storage.create_trade(new_trade(exitPrice='1.1050', exitTime='2025-03-01T12:00:00'))
    reopened = any_storage.update_trade(trade.id, TradePatch.model_validate({'exitPrice': None}))
    assert reopened.status == 'open'
    assert reopened.pnl is None
    assert reopened.exit_time is None


def test_update_missing_trade_returns_none(any_storage):
    assert any_storage.update_trade(42, TradePatch.model_validate({'notes': 'x'})) is None


def test_delete_trade(any_storage):
    trade = any_storage.create_trade(new_trade())
    assert any_storage.delete_trade(trade.id) is True
    assert any_storage.get_trade(trade.id) is None
    assert any_storage.delete_trade(trade.id) is False


def test_plan_lifecycle(any_storage):
    plan = any_storage.create_trading_plan(TradingPlanCreate.model_validate(
        {'name': 'London breakout', 'riskPercentage': '1.5', 'targetReturn': 10}))
    assert plan.is_active is True
    assert plan.risk_percentage == Decimal('1.50')
    assert plan.created_at is not None

    updated = any_storage.update_trading_plan(plan.id, TradingPlanPatch.model_validate(
        {'isActive': False, 'strategy': 'Fade the Asian range'}))
    assert updated.is_active is False
    assert updated.strategy == 'Fade the Asian range'
    assert updated.name == 'London breakout'
    assert updated.created_at == plan.created_at

    assert any_storage.delete_trading_plan(plan.id) is True
    assert any_storage.get_trading_plan(plan.id) is None
    assert any_storage.delete_trading_plan(plan.id) is False


def test_plans_listed_newest_first(any_storage):
    first = any_storage.create_trading_plan(TradingPlanCreate(name='first'))
    second = any_storage.create_trading_plan(TradingPlanCreate(name='second'))
    assert [p.id for p in any_storage.list_trading_plans()] == [second.id, first.id]


def test_update_missing_plan_returns_none(any_storage):
    assert any_storage.update_trading_plan(7, TradingPlanPatch(name='x')) is None


def test_upsert_user_creates_then_updates(any_storage):
    created = any_storage.upsert_user(UserClaims(id='sub-1', email='a@example.com'))
    assert created.email == 'a@example.com'
    updated = any_storage.upsert_user(UserClaims(id='sub-1', email='b@example.com', first_name='Bea'))
    assert updated.email == 'b@example.com'
    assert updated.first_name == 'Bea'
    assert updated.created_at == created.created_at
    assert any_storage.get_user('sub-1').email == 'b@example.com'
    assert any_storage.get_user('nobody') is None


def test_patch_rejects_unknown_and_derived_keys():
    with pytest.raises(ValidationError):
        TradePatch.model_validate({'pnl': '100.00'})
    with pytest.raises(ValidationError):
        TradePatch.model_validate({'status': 'closed'})
    with pytest.raises(ValidationError):
        TradingPlanPatch.model_validate({'createdAt': '2025-01-01T00:00:00'})


def test_patch_rejects_null_for_required_fields():
    with pytest.raises(ValidationError):
        TradePatch.model_validate({'entryPrice': None})
    with pytest.raises(ValidationError):
        TradingPlanPatch.model_validate({'name': None})


def test_create_normalizes_values():
    trade = TradeCreate.model_validate({
        'instrument': '  BTC/USD ', 'type': 'SELL', 'entryPrice': 64000.123456, 'size': '0.12345',
        'entryTime': '2025-03-01T10:00:00+02:00',
    })
    assert trade.instrument == 'BTC/USD'
    assert trade.type == 'sell'
    assert trade.entry_price == Decimal('64000.12346')
    assert trade.size == Decimal('0.1235')
    assert trade.entry_time == datetime(2025, 3, 1, 8, 0)


def test_open_trade_keeps_exit_time(any_storage):
    trade = any_storage.create_trade(new_trade(exitTime='2025-03-02T10:00:00'))
    assert trade.status == 'open'
    assert trade.exit_time == datetime(2025, 3, 2, 10)
    updated = any_storage.update_trade(trade.id, TradePatch.model_validate({'notes': 'still open'}))
    assert updated.exit_time == datetime(2025, 3, 2, 10)


def test_values_rounding_to_zero_are_rejected():
    with pytest.raises(ValidationError):
        new_trade(entryPrice='0.000004')
    with pytest.raises(ValidationError):
        new_trade(size='0.00004')
    with pytest.raises(ValidationError):
        TradePatch.model_validate({'exitPrice': '0.000001'})
    with pytest.raises(ValidationError):
        TradePatch.model_validate({'instrument': '   '})


def test_reopen_patch_clears_exit_time_unless_given():
    assert TradePatch.model_validate({'exitPrice': None}).changes() == {'exit_price': None, 'exit_time': None}
    changes = TradePatch.model_validate({'exitPrice': None, 'exitTime': '2025-03-04T09:00:00'}).changes()
    assert changes['exit_time'] == datetime(2025, 3, 4, 9)
    assert TradePatch.model_validate({'notes': 'x'}).changes() == {'notes': 'x'}
