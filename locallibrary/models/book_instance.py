from __future__ import annotations

import enum
from datetime import date
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Date, Enum as SAEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locallibrary.models.base import Base, format_medium_date, new_identity

if TYPE_CHECKING:
    from locallibrary.models.book import Book


class BookInstanceStatus(str, enum.Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(Base):
    """A physical copy of a book held by the library."""

    __tablename__ = "book_instances"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_identity,
    )
    book_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("books.id"),
        nullable=False,
        index=True,
    )
    imprint: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[BookInstanceStatus] = mapped_column(
        SAEnum(
            BookInstanceStatus,
            name="book_instance_status",
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=BookInstanceStatus.MAINTENANCE,
        server_default=BookInstanceStatus.MAINTENANCE.value,
        index=True,
    )
    due_back: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    book: Mapped["Book"] = relationship("Book")

    @property
    def due_back_formatted(self) -> str:
        return format_medium_date(self.due_back)

    @property
    def due_back_yyyy_mm_dd(self) -> str:
        return self.due_back.isoformat() if self.due_back else ""

    @property
    def url(self) -> str:
        return f"/catalog/bookinstance/{self.id}"

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"BookInstance(id={self.id!r}, book_id={self.book_id!r}, status={self.status.value!r})"
