from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from locallibrary.models.base import Base, format_medium_date, new_identity


class Author(Base):
    """SQLAlchemy model representing a book author.

    ``name``, ``lifespan`` and ``url`` are derived on read and never stored.
    """

    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_identity,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    family_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    date_of_death: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    @property
    def name(self) -> str:
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        born = format_medium_date(self.date_of_birth) or "unknown"
        died = format_medium_date(self.date_of_death)
        if born == "unknown" and not died:
            return ""
        return f"({born} - {died})"

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"

    @property
    def date_of_birth_yyyy_mm_dd(self) -> str:
        return self.date_of_birth.isoformat() if self.date_of_birth else ""

    @property
    def date_of_death_yyyy_mm_dd(self) -> str:
        return self.date_of_death.isoformat() if self.date_of_death else ""

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Author(id={self.id!r}, name={self.name!r})"
