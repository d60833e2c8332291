"""Engine and session helpers shared by the CLI and services."""

from __future__ import annotations

from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from choreplan.config import ChoreConfig

from .models import Base

DEFAULT_DB_URL = ChoreConfig.db_url

# One engine per URL for the life of the process
_engines: Dict[str, Engine] = {}


def get_engine(db_url: str = DEFAULT_DB_URL) -> Engine:
    """Return the engine for ``db_url``, creating it on first use."""
    engine = _engines.get(db_url)
    if engine is None:
        engine = create_engine(db_url, echo=False)
        _engines[db_url] = engine
    return engine


def init_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(get_engine(db_url))
    print(f"[INFO] Database initialized: {db_url}")


def reset_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Drop every table and recreate the empty schema. All households are lost."""
    engine = get_engine(db_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    print(f"[WARN] Database reset: {db_url}")


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    return sessionmaker(bind=get_engine(db_url))()


def dispose_engines() -> None:
    """Close pooled connections and forget cached engines."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
