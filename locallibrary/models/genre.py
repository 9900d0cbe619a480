from __future__ import annotations

import unicodedata

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, validates

from locallibrary.models.base import Base, new_identity


def genre_name_key(name: str) -> str:
    """Comparison key under which two genre names count as the same genre."""
    return unicodedata.normalize("NFKC", name).casefold()


class Genre(Base):
    """SQLAlchemy model representing a book genre."""

    __tablename__ = "genres"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_identity,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)

    @validates("name")
    def _sync_name_key(self, _key: str, value: str) -> str:
        self.name_key = genre_name_key(value)
        return value

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Genre(id={self.id!r}, name={self.name!r})"
