from .base import Base
from .author import Author
from .genre import Genre
from .book import Book, book_genres
from .book_instance import BookInstance, BookInstanceStatus

__all__ = ["Base", "Author", "Genre", "Book", "book_genres", "BookInstance", "BookInstanceStatus"]
