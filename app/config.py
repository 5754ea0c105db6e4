import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    APP_NAME = os.getenv("APP_NAME", "Trading Journal")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./journal.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # "database" (SQLAlchemy) or "memory"
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "database")

    # Baseline added to realized P&L for the dashboard capital figure
    STARTING_CAPITAL = Decimal(os.getenv("STARTING_CAPITAL", "50000"))

    # Identity claims forwarded by the authenticating proxy
    AUTH_ENABLED = _flag("AUTH_ENABLED", "true")
    AUTH_USER_HEADER = os.getenv("AUTH_USER_HEADER", "X-Auth-User-Id")
    AUTH_EMAIL_HEADER = os.getenv("AUTH_EMAIL_HEADER", "X-Auth-Email")
    AUTH_FIRST_NAME_HEADER = os.getenv("AUTH_FIRST_NAME_HEADER", "X-Auth-First-Name")
    AUTH_LAST_NAME_HEADER = os.getenv("AUTH_LAST_NAME_HEADER", "X-Auth-Last-Name")
    AUTH_PROFILE_IMAGE_HEADER = os.getenv("AUTH_PROFILE_IMAGE_HEADER", "X-Auth-Profile-Image")

settings = Settings()
