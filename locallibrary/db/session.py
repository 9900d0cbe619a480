from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from locallibrary.core.settings import get_settings

DATABASE_URL = get_settings().database_url

# SQLite connections are handed across FastAPI's threadpool workers.
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=False, future=True, connect_args=connect_args)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def get_session() -> Generator[Session, None, None]:
    """Yield a database session for request-scoped operations."""
    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
