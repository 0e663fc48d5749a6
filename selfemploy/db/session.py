"""Database engine setup.

Test runs (ENV=test) use an in-memory SQLite database shared across
connections; tests/conftest.py rebinds the session factory to its own engine.
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from selfemploy.core.config import settings

raw_url = settings.DATABASE_URL or "sqlite:///./storage/dev.db"

if raw_url.startswith("sqlite") and ":memory:" in raw_url:
    engine = create_engine(
        raw_url,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
elif raw_url.startswith("sqlite"):
    # sqlite won't create the parent directory of a file database
    db_path = raw_url.split("///", 1)[-1]
    Path(os.path.dirname(db_path) or ".").mkdir(parents=True, exist_ok=True)
    engine = create_engine(raw_url, future=True, connect_args={"check_same_thread": False})
else:
    engine = create_engine(
        raw_url,
        future=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True,
    )
SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
