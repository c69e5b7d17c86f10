from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure models register with metadata
from .config import get_settings


def create_engine_for_url(database_url: str) -> Engine:
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        # Sessions move between request threads.
        connect_args = {"check_same_thread": False}
    return create_engine(database_url, echo=False, connect_args=connect_args)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Process-wide engine for the configured ``database_url``."""
    return create_engine_for_url(get_settings().database_url)


def init_db(engine: Optional[Engine] = None) -> None:
    SQLModel.metadata.create_all(engine or get_engine())


def reset_engine() -> None:
    """Dispose the cached engine so the next call rebuilds it from settings."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
