from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from factories import add_author, add_book, add_genre, add_instance
from locallibrary.core.settings import get_settings
from locallibrary.main import app
from locallibrary.models import Author, Book, BookInstanceStatus, Genre
from locallibrary.services.catalog_queries import get_catalog_queries


def test_home_page_shows_counts(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        author = add_author(session)
        book = add_book(session, author)
        add_instance(session, book, status=BookInstanceStatus.AVAILABLE)
        add_instance(session, book, status=BookInstanceStatus.RESERVED)

    response = client.get("/")

    assert response.status_code == 200
    assert '<span id="book-count">1</span>' in response.text
    assert '<span id="book-instance-count">2</span>' in response.text
    assert '<span id="book-instance-available-count">1</span>' in response.text
    assert '<span id="author-count">1</span>' in response.text
    assert '<span id="genre-count">0</span>' in response.text


def test_malformed_identity_is_404(client: TestClient):
    response = client.get("/catalog/author/not-a-valid-id")

    assert response.status_code == 404
    assert "Invalid Author identity: not-a-valid-id" in response.text


@pytest.mark.parametrize(
    ("path", "detail"),
    [
        ("/catalog/book/123", "Invalid Book identity: 123"),
        ("/catalog/genre/xyz/update", "Invalid Genre identity: xyz"),
        ("/catalog/bookinstance/zzz/delete", "Invalid Book Instance identity: zzz"),
    ],
)
def test_malformed_identity_names_the_entity_kind(client: TestClient, path: str, detail: str):
    response = client.get(path)

    assert response.status_code == 404
    assert detail in response.text


def test_malformed_identity_on_delete_post_is_404(client: TestClient):
    response = client.post("/catalog/book/123/delete")

    assert response.status_code == 404
    assert "Invalid Book identity: 123" in response.text


def test_unknown_identity_names_the_entity_kind(client: TestClient):
    response = client.get(f"/catalog/bookinstance/{uuid.uuid4()}")

    assert response.status_code == 404
    assert "Book Instance not found." in response.text


def test_author_create_redirects_to_new_author(client: TestClient, session_factory: sessionmaker):
    response = client.post(
        "/catalog/author/create",
        data={"first_name": "Ursula", "family_name": "LeGuin", "date_of_birth": "1929-10-21"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    with session_factory() as session:
        author = session.execute(select(Author)).scalar_one()
    assert response.headers["location"] == author.url

    detail = client.get(author.url)
    assert "LeGuin, Ursula" in detail.text
    assert "(Oct 21, 1929 - )" in detail.text


def test_author_create_echoes_values_with_errors(client: TestClient, session_factory: sessionmaker):
    response = client.post(
        "/catalog/author/create",
        data={"first_name": "John2", "family_name": "Smith"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert 'value="John2"' in response.text
    assert "First name has non-alphanumeric characters." in response.text
    with session_factory() as session:
        assert session.execute(select(func.count()).select_from(Author)).scalar_one() == 0


def test_genre_create_with_existing_name_redirects_to_existing(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        genre = add_genre(session, "Science Fiction")

    response = client.post("/catalog/genre/create", data={"name": "science FICTION"}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == genre.url
    with session_factory() as session:
        assert session.execute(select(func.count()).select_from(Genre)).scalar_one() == 1


def test_author_delete_blocked_renders_dependents(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        author = add_author(session)
        add_book(session, author, title="The Slow Regard of Silent Things")

    response = client.post(f"{author.url}/delete", follow_redirects=False)

    assert response.status_code == 200
    assert "Delete the following books before attempting to delete this author." in response.text
    assert "The Slow Regard of Silent Things" in response.text
    with session_factory() as session:
        assert session.get(Author, author.id) is not None


def test_author_delete_redirects_to_list(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        author = add_author(session)

    response = client.post(f"{author.url}/delete", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/authors"


def test_delete_page_for_missing_entity_redirects_to_list(client: TestClient):
    response = client.get(f"/catalog/genre/{uuid.uuid4()}/delete", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/genres"


def test_book_create_with_single_genre_checkbox(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        author = add_author(session)
        genre = add_genre(session)

    response = client.post(
        "/catalog/book/create",
        data={"title": "Dune", "author": author.id, "summary": "Spice", "isbn": "9780441013593", "genre": genre.id},
        follow_redirects=False,
    )

    assert response.status_code == 303
    detail = client.get(response.headers["location"])
    assert "Rothfuss, Patrick" in detail.text
    assert "Fantasy" in detail.text
    assert "There are no copies of this book in the library." in detail.text


def test_book_form_rerender_keeps_checked_genres(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        author = add_author(session)
        fantasy = add_genre(session, "Fantasy")
        epic = add_genre(session, "Epic")

    response = client.post(
        "/catalog/book/create",
        data={"title": "", "author": author.id, "summary": "S", "isbn": "1", "genre": [fantasy.id, epic.id]},
    )

    assert response.status_code == 200
    assert "Title must not be empty" in response.text
    assert response.text.count(" checked>") == 2


def test_lists_are_sorted(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        add_author(session, first_name="Zed", family_name="Zimmer")
        add_author(session, first_name="Amy", family_name="Adams")
        add_genre(session, "Poetry")
        add_genre(session, "Biography")

    authors = client.get("/catalog/authors").text
    genres = client.get("/catalog/genres").text

    assert authors.index("Adams, Amy") < authors.index("Zimmer, Zed")
    assert genres.index("Biography") < genres.index("Poetry")


def test_book_instance_lifecycle(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        author = add_author(session)
        book = add_book(session, author, title="Kingkiller")

    created = client.post(
        "/catalog/bookinstance/create",
        data={"book": book.id, "imprint": "DAW, 2007", "status": "Loaned", "due_back": "2030-01-15"},
        follow_redirects=False,
    )
    assert created.status_code == 303
    instance_url = created.headers["location"]

    listing = client.get("/catalog/bookinstances").text
    assert "Kingkiller : DAW, 2007" in listing
    assert "(Due: Jan 15, 2030)" in listing

    blocked = client.post(f"{book.url}/delete", follow_redirects=False)
    assert blocked.status_code == 200
    assert "DAW, 2007" in blocked.text

    deleted = client.post(f"{instance_url}/delete", follow_redirects=False)
    assert deleted.status_code == 303
    assert client.get(instance_url).status_code == 404

    with session_factory() as session:
        assert session.get(Book, book.id) is not None


def _failing_queries():
    raise RuntimeError("database unreachable")


@pytest.mark.parametrize(
    ("environment", "shows_detail"),
    [("production", False), ("development", True)],
)
def test_unexpected_error_renders_error_page(monkeypatch, client: TestClient, environment, shows_detail):
    monkeypatch.setenv("APP_ENV", environment)
    get_settings.cache_clear()
    app.dependency_overrides[get_catalog_queries] = _failing_queries
    try:
        with TestClient(app, raise_server_exceptions=False) as failing_client:
            response = failing_client.get("/catalog/authors")
    finally:
        get_settings.cache_clear()

    assert response.status_code == 500
    assert "Internal Server Error" in response.text
    assert ("database unreachable" in response.text) is shows_detail


def test_identity_is_canonicalized(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        genre = add_genre(session, "Horror")

    response = client.get(f"/catalog/genre/{genre.id.upper()}")

    assert response.status_code == 200
    assert "Horror" in response.text


@pytest.mark.parametrize("kind", ["author", "genre", "book", "bookinstance"])
def test_delete_post_for_absent_record_redirects_to_list(client: TestClient, kind: str):
    response = client.post(f"/catalog/{kind}/{uuid.uuid4()}/delete", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == f"/catalog/{kind}s"


def test_page_title_shows_stored_text_once_escaped(client: TestClient, session_factory: sessionmaker):
    with session_factory() as session:
        author = add_author(session)

    created = client.post(
        "/catalog/book/create",
        data={"title": "Salt & Sea", "author": author.id, "summary": "S", "isbn": "1"},
        follow_redirects=False,
    )
    detail = client.get(created.headers["location"])

    assert "<title>Salt &amp; Sea | Local Library</title>" in detail.text
    assert "&amp;amp;" not in detail.text
