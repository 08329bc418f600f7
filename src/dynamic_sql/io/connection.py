"""Engine creation from settings."""

from typing import Optional

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from dynamic_sql.config import Settings, get_settings


def create_engine_from_settings(settings: Optional[Settings] = None) -> Engine:
    """
    Create a SQLAlchemy engine for DATABASE_URL.

    Args:
        settings: Settings to use (defaults to the cached settings)

    Returns:
        SQLAlchemy Engine; connections and transactions are opened by the caller
    """
    settings = settings or get_settings()
    return sa.create_engine(settings.DATABASE_URL, echo=settings.sql_echo)
