from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional
from pydantic import ConfigDict, Field, field_validator
from app.schemas.base import CamelModel, positive_places, naive_utc

TradeType = Literal["buy", "sell"]
TradeStatus = Literal["open", "closed"]

PRICE_PLACES = 5
SIZE_PLACES = 4
PNL_PLACES = 2


class TradeCreate(CamelModel):
    """Fields a client may send when logging a trade. pnl and status are derived."""
    instrument: str = Field(min_length=1)
    type: TradeType
    entry_price: Decimal = Field(gt=0)
    exit_price: Optional[Decimal] = Field(default=None, gt=0)
    size: Decimal = Field(gt=0)
    entry_time: datetime
    exit_time: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def lower_type(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("instrument")
    @classmethod
    def strip_instrument(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("instrument must not be blank")
        return v

    @field_validator("entry_price", "exit_price")
    @classmethod
    def price_places(cls, v):
        return positive_places(v, PRICE_PLACES)

    @field_validator("size")
    @classmethod
    def size_places(cls, v):
        return positive_places(v, SIZE_PLACES)

    @field_validator("entry_time", "exit_time")
    @classmethod
    def utc(cls, v):
        return naive_utc(v)


class TradePatch(CamelModel):
    """Partial update. Only keys present in the request are applied; unknown keys are rejected.

    Sending ``exitPrice: null`` reopens a closed trade.
    """
    model_config = ConfigDict(extra="forbid")

    instrument: Optional[str] = Field(default=None, min_length=1)
    type: Optional[TradeType] = None
    entry_price: Optional[Decimal] = Field(default=None, gt=0)
    exit_price: Optional[Decimal] = Field(default=None, gt=0)
    size: Optional[Decimal] = Field(default=None, gt=0)
    entry_time: Optional[datetime] = None
    exit_time: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def lower_type(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("instrument", "type", "entry_price", "size", "entry_time")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("field is required and cannot be null")
        return v

    @field_validator("instrument")
    @classmethod
    def strip_instrument(cls, v):
        if v is None or not v.strip():
            raise ValueError("instrument must not be blank")
        return v.strip()

    @field_validator("entry_price", "exit_price")
    @classmethod
    def price_places(cls, v):
        return positive_places(v, PRICE_PLACES)

    @field_validator("size")
    @classmethod
    def size_places(cls, v):
        return positive_places(v, SIZE_PLACES)

    @field_validator("entry_time", "exit_time")
    @classmethod
    def utc(cls, v):
        return naive_utc(v)

    def changes(self) -> dict:
        values = self.model_dump(exclude_unset=True)
        # reopening drops the exit time unless the request sets one
        if "exit_price" in values and values["exit_price"] is None:
            values.setdefault("exit_time", None)
        return values


class Trade(CamelModel):
    id: int
    instrument: str
    type: TradeType
    entry_price: Decimal
    exit_price: Optional[Decimal] = None
    size: Decimal
    pnl: Optional[Decimal] = None
    status: TradeStatus = "open"
    entry_time: datetime
    exit_time: Optional[datetime] = None
    notes: Optional[str] = None
