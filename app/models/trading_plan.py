from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, Text
from app.database import Base
from app.models.user import utcnow


class TradingPlan(Base):
    """A user-authored strategy document with optional risk/target parameters."""
    __tablename__ = "trading_plans"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    objectives = Column(Text, nullable=True)
    strategy = Column(Text, nullable=True)
    risk_percentage = Column(Numeric(5, 2), nullable=True, doc="Percent of capital risked per trade (0-100)")
    target_return = Column(Numeric(10, 2), nullable=True, doc="Target return, percent")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
