from sqlalchemy import Column, Integer, String, Numeric, DateTime, Text
from app.database import Base

class Trade(Base):
    __tablename__ = "trades"

    id = Column(Integer, primary_key=True, index=True)
    instrument = Column(String, nullable=False)
    type = Column(String, nullable=False)  # buy or sell
    entry_price = Column(Numeric(10, 5), nullable=False)
    exit_price = Column(Numeric(10, 5), nullable=True)
    size = Column(Numeric(10, 4), nullable=False)
    pnl = Column(Numeric(10, 2), nullable=True)  # derived from prices, never client input
    status = Column(String, nullable=False, default="open")  # open or closed
    entry_time = Column(DateTime, nullable=False, index=True)
    exit_time = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
