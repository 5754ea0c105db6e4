from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import ConfigDict, Field, field_validator
from app.schemas.base import CamelModel, quantize


class TradingPlanCreate(CamelModel):
    name: str
    description: Optional[str] = None
    objectives: Optional[str] = None
    strategy: Optional[str] = None
    risk_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    target_return: Optional[Decimal] = Field(default=None, ge=0)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("risk_percentage", "target_return")
    @classmethod
    def two_places(cls, v):
        return quantize(v, 2)


class TradingPlanPatch(CamelModel):
    """Partial update of a plan. id and createdAt are not writable."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    description: Optional[str] = None
    objectives: Optional[str] = None
    strategy: Optional[str] = None
    risk_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    target_return: Optional[Decimal] = Field(default=None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if v is None or not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()

    @field_validator("is_active")
    @classmethod
    def active_not_null(cls, v):
        if v is None:
            raise ValueError("isActive cannot be null")
        return v

    @field_validator("risk_percentage", "target_return")
    @classmethod
    def two_places(cls, v):
        return quantize(v, 2)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TradingPlan(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    objectives: Optional[str] = None
    strategy: Optional[str] = None
    risk_percentage: Optional[Decimal] = None
    target_return: Optional[Decimal] = None
    is_active: bool = True
    created_at: datetime
