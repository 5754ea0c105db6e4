from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from app.database import Base


def utcnow():
    # naive UTC, matching how SQLite hands timestamps back
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """Profile mirrored from the identity provider on login."""
    __tablename__ = "users"

    id = Column(String, primary_key=True, doc="Identity provider subject")
    email = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
