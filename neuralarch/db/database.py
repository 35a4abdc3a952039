from sqlalchemy.orm import declarative_base
import os
from typing import Optional
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)

load_dotenv()

Base = declarative_base()


def get_database_url() -> Optional[str]:
    """DATABASE_URL as configured, or None when persistence is disabled"""
    url = os.getenv("DATABASE_URL", "").strip()
    return url or None


def to_async_url(database_url: str) -> str:
    """
    Convert a synchronous URL to its async driver scheme
    "postgresql://..." -> "postgresql+asyncpg://..."
    "sqlite://..." -> "sqlite+aiosqlite://..."
    """
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    # already carries a driver, e.g. postgresql+asyncpg://
    return database_url


def redact_url(database_url: str) -> str:
    """Hide the password part of a URL for logs and status output"""
    if "@" not in database_url or "://" not in database_url:
        return database_url
    scheme, rest = database_url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"
