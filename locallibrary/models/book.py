from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locallibrary.models.base import Base, new_identity

if TYPE_CHECKING:
    from locallibrary.models.author import Author
    from locallibrary.models.genre import Genre


book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", String(36), ForeignKey("books.id"), primary_key=True),
    Column("genre_id", String(36), ForeignKey("genres.id"), primary_key=True, index=True),
)


class Book(Base):
    """SQLAlchemy model representing a catalogued title."""

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_identity,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(String(32), nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("authors.id"),
        nullable=False,
        index=True,
    )

    author: Mapped["Author"] = relationship("Author")
    genres: Mapped[list["Genre"]] = relationship("Genre", secondary=book_genres)

    @property
    def genre_ids(self) -> list[str]:
        return [genre.id for genre in self.genres]

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Book(id={self.id!r}, title={self.title!r}, author_id={self.author_id!r})"
