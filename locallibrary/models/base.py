from __future__ import annotations

import uuid
from datetime import date
from typing import Optional

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base declarative class for SQLAlchemy models."""


def new_identity() -> str:
    return str(uuid.uuid4())


def format_medium_date(value: Optional[date]) -> str:
    """Render a date the way list and detail pages show it, e.g. ``Jan 5, 1920``."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"
