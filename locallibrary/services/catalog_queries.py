from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session, contains_eager, joinedload, load_only, selectinload

from locallibrary.core.logging import get_logger
from locallibrary.crud.store import EntityStore
from locallibrary.db.session import get_session
from locallibrary.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from locallibrary.services.integrity import IntegrityService

logger = get_logger(__name__)


@dataclass
class AuthorWithBooks:
    author: Author
    books: list[Book]


@dataclass
class GenreWithBooks:
    genre: Genre
    books: list[Book]


@dataclass
class BookWithInstances:
    book: Book
    instances: list[BookInstance]


@dataclass(frozen=True)
class CatalogSummary:
    book_count: int
    instance_count: int
    available_instance_count: int
    author_count: int
    genre_count: int


class CatalogQueries:
    """Composite reads backing the list and detail pages."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.integrity = IntegrityService(session)
        self.authors = EntityStore(session, Author)
        self.genres = EntityStore(session, Genre)
        self.books = EntityStore(session, Book)
        self.instances = EntityStore(session, BookInstance)

    def catalog_summary(self) -> CatalogSummary:
        # One statement, so every count comes from the same snapshot.
        def count_of(model, *where):
            stmt = select(func.count()).select_from(model)
            for criterion in where:
                stmt = stmt.where(criterion)
            return stmt.scalar_subquery()

        stmt = select(
            count_of(Book),
            count_of(BookInstance),
            count_of(BookInstance, BookInstance.status == BookInstanceStatus.AVAILABLE),
            count_of(Author),
            count_of(Genre),
        )
        book_count, instance_count, available_count, author_count, genre_count = self.session.execute(stmt).one()
        return CatalogSummary(
            book_count=book_count,
            instance_count=instance_count,
            available_instance_count=available_count,
            author_count=author_count,
            genre_count=genre_count,
        )

    def author_with_books(self, author_id: str) -> AuthorWithBooks:
        author = self.authors.find_by_id(author_id)
        return AuthorWithBooks(author=author, books=self.integrity.author_dependents(author.id))

    def genre_with_books(self, genre_id: str) -> GenreWithBooks:
        genre = self.genres.find_by_id(genre_id)
        return GenreWithBooks(genre=genre, books=self.integrity.genre_dependents(genre.id))

    def book_with_instances_and_refs(self, book_id: str) -> BookWithInstances:
        book = self.books.find_by_id(
            book_id,
            options=[joinedload(Book.author), selectinload(Book.genres)],
        )
        instances = self.instances.find_all(
            where=[BookInstance.book_id == book.id],
            order_by=[BookInstance.imprint.asc()],
        )
        return BookWithInstances(book=book, instances=instances)

    def list_authors(self) -> list[Author]:
        logger.debug("Fetching author list")
        return self.authors.find_all(order_by=[Author.family_name.asc(), Author.first_name.asc()])

    def list_genres(self) -> list[Genre]:
        logger.debug("Fetching genre list")
        return self.genres.find_all(order_by=[Genre.name.asc()])

    def list_books(self) -> list[Book]:
        logger.debug("Fetching book list")
        return self.books.find_all(
            order_by=[Book.title.asc()],
            options=[load_only(Book.id, Book.title, Book.author_id), joinedload(Book.author)],
        )

    def list_book_instances(self) -> list[BookInstance]:
        logger.debug("Fetching book instance list")
        return self.instances.find_all(
            joins=[BookInstance.book],
            order_by=[Book.title.asc(), BookInstance.imprint.asc()],
            options=[contains_eager(BookInstance.book)],
        )

    def book_choices(self) -> list[Book]:
        return self.books.find_all(
            order_by=[Book.title.asc()],
            options=[load_only(Book.id, Book.title)],
        )


def get_catalog_queries(session: Session = Depends(get_session)) -> CatalogQueries:
    return CatalogQueries(session=session)
