from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, load_only

from locallibrary.core.logging import get_logger
from locallibrary.crud.store import EntityStore, parse_identity
from locallibrary.models import Author, Book, BookInstance, Genre
from locallibrary.models.genre import genre_name_key
from locallibrary.schemas.validation import FieldError

logger = get_logger(__name__)


@dataclass
class DeleteOutcome:
    """Result of a guarded delete.

    When ``deleted`` is false the store was left untouched and ``dependents``
    lists the records that still reference the target. Deleting a record that
    is already gone counts as deleted.
    """

    deleted: bool
    dependents: list[Any] = field(default_factory=list)


class IntegrityService:
    """Reference checks between authors, genres, books and book instances."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.authors = EntityStore(session, Author)
        self.genres = EntityStore(session, Genre)
        self.books = EntityStore(session, Book)
        self.instances = EntityStore(session, BookInstance)

    # ------------------------------------------------------------------ #
    # Dependents
    # ------------------------------------------------------------------ #
    def author_dependents(self, author_id: str) -> list[Book]:
        return self.books.find_all(
            where=[Book.author_id == author_id],
            order_by=[Book.title.asc()],
            options=[load_only(Book.id, Book.title, Book.summary)],
        )

    def genre_dependents(self, genre_id: str) -> list[Book]:
        return self.books.find_all(
            where=[Book.genres.any(Genre.id == genre_id)],
            order_by=[Book.title.asc()],
            options=[load_only(Book.id, Book.title, Book.summary)],
        )

    def book_dependents(self, book_id: str) -> list[BookInstance]:
        return self.instances.find_all(
            where=[BookInstance.book_id == book_id],
            order_by=[BookInstance.imprint.asc()],
            options=[load_only(BookInstance.id, BookInstance.imprint, BookInstance.status)],
        )

    def can_delete_author(self, author_id: str) -> bool:
        return self.books.count(Book.author_id == author_id) == 0

    def can_delete_genre(self, genre_id: str) -> bool:
        return self.books.count(Book.genres.any(Genre.id == genre_id)) == 0

    def can_delete_book(self, book_id: str) -> bool:
        return self.instances.count(BookInstance.book_id == book_id) == 0

    # ------------------------------------------------------------------ #
    # Guarded deletes
    # ------------------------------------------------------------------ #
    def delete_author(self, author_id: str) -> DeleteOutcome:
        author = self.authors.get(author_id)
        if author is None:
            return self._already_absent(self.authors, author_id)
        dependents = self.author_dependents(author.id)
        if dependents:
            logger.info("Author %s not deleted: %d book(s) reference it", author.id, len(dependents))
            return DeleteOutcome(deleted=False, dependents=dependents)
        self.authors.delete(author.id)
        return DeleteOutcome(deleted=True)

    def delete_genre(self, genre_id: str) -> DeleteOutcome:
        genre = self.genres.get(genre_id)
        if genre is None:
            return self._already_absent(self.genres, genre_id)
        dependents = self.genre_dependents(genre.id)
        if dependents:
            logger.info("Genre %s not deleted: %d book(s) reference it", genre.id, len(dependents))
            return DeleteOutcome(deleted=False, dependents=dependents)
        self.genres.delete(genre.id)
        return DeleteOutcome(deleted=True)

    def delete_book(self, book_id: str) -> DeleteOutcome:
        book = self.books.get(book_id)
        if book is None:
            return self._already_absent(self.books, book_id)
        dependents = self.book_dependents(book.id)
        if dependents:
            logger.info("Book %s not deleted: %d instance(s) reference it", book.id, len(dependents))
            return DeleteOutcome(deleted=False, dependents=dependents)
        self.books.delete(book.id)
        return DeleteOutcome(deleted=True)

    def delete_book_instance(self, instance_id: str) -> DeleteOutcome:
        instance = self.instances.get(instance_id)
        if instance is None:
            return self._already_absent(self.instances, instance_id)
        self.instances.delete(instance.id)
        return DeleteOutcome(deleted=True)

    @staticmethod
    def _already_absent(store: EntityStore, entity_id: str) -> DeleteOutcome:
        logger.debug("%s %s already absent; nothing to delete", store.label, entity_id)
        return DeleteOutcome(deleted=True)

    # ------------------------------------------------------------------ #
    # Write-time reference checks
    # ------------------------------------------------------------------ #
    def find_duplicate_genre(self, name: str, exclude_id: Optional[str] = None) -> Optional[Genre]:
        stmt = select(Genre).where(Genre.name_key == genre_name_key(name))
        if exclude_id is not None:
            stmt = stmt.where(Genre.id != exclude_id)
        return self.session.execute(stmt).scalars().first()

    def resolve_author(self, author_id: str) -> tuple[Optional[Author], list[FieldError]]:
        author = self.authors.get(author_id)
        if author is None:
            return None, [FieldError(field="author", message="Author not found.")]
        return author, []

    def resolve_genres(self, genre_ids: Sequence[str]) -> tuple[list[Genre], list[FieldError]]:
        identities = [parse_identity(genre_id) for genre_id in genre_ids]
        if any(identity is None for identity in identities):
            return [], [FieldError(field="genre", message="Genre not found.")]
        if not identities:
            return [], []
        genres = self.genres.find_all(where=[Genre.id.in_(identities)], order_by=[Genre.name.asc()])
        if len(genres) != len(set(identities)):
            return [], [FieldError(field="genre", message="Genre not found.")]
        return genres, []

    def resolve_book(self, book_id: str) -> tuple[Optional[Book], list[FieldError]]:
        book = self.books.get(book_id)
        if book is None:
            return None, [FieldError(field="book", message="Book not found.")]
        return book, []
