from __future__ import annotations

from collections.abc import Mapping

from fastapi import Depends
from sqlalchemy.orm import Session, selectinload

from locallibrary.crud.store import EntityStore
from locallibrary.db.session import get_session
from locallibrary.models import Author, Book, Genre
from locallibrary.schemas.book import BookForm
from locallibrary.schemas.validation import FormValidationError, RawValue, validate_form
from locallibrary.services.integrity import DeleteOutcome, IntegrityService


class BookService:
    """Write workflows for books.

    The author and every genre a submission names must exist when the book is
    written; a dangling reference is reported against its form field.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.store = EntityStore(session, Book)
        self.integrity = IntegrityService(session)

    def get_book(self, book_id: str) -> Book:
        return self.store.find_by_id(book_id, options=[selectinload(Book.genres)])

    def _resolve_references(self, form: BookForm) -> tuple[Author, list[Genre]]:
        author, author_errors = self.integrity.resolve_author(form.author)
        genres, genre_errors = self.integrity.resolve_genres(form.genre)
        errors = author_errors + genre_errors
        if errors:
            raise FormValidationError(values=form.model_dump(), errors=errors)
        return author, genres

    def create_book(self, raw: Mapping[str, RawValue]) -> Book:
        form = validate_form(BookForm, raw)
        author, genres = self._resolve_references(form)
        book = Book(
            title=form.title,
            summary=form.summary,
            isbn=form.isbn,
            author_id=author.id,
            genres=genres,
        )
        return self.store.create(book)

    def update_book(self, book_id: str, raw: Mapping[str, RawValue]) -> Book:
        book = self.get_book(book_id)
        form = validate_form(BookForm, raw)
        author, genres = self._resolve_references(form)
        return self.store.update(
            book.id,
            {
                "title": form.title,
                "summary": form.summary,
                "isbn": form.isbn,
                "author_id": author.id,
                "genres": genres,
            },
        )

    def delete_book(self, book_id: str) -> DeleteOutcome:
        return self.integrity.delete_book(book_id)


def get_book_service(session: Session = Depends(get_session)) -> BookService:
    return BookService(session)
