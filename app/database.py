from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def init_db(bind=None):
    """Create all tables. Models must be imported before this runs."""
    import app.models.trade  # noqa: F401
    import app.models.trading_plan  # noqa: F401
    import app.models.user  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
