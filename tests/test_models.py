from __future__ import annotations

from datetime import date

from locallibrary.models import Author, BookInstance, Genre
from locallibrary.models.genre import genre_name_key


def test_author_name_and_url_are_derived():
    author = Author(id="2f1c6f9e-3c1a-4c0b-9d44-0e7a2a6f1b11", first_name="Jim", family_name="Jones")

    assert author.name == "Jones, Jim"
    assert author.url == "/catalog/author/2f1c6f9e-3c1a-4c0b-9d44-0e7a2a6f1b11"


def test_author_name_is_empty_when_a_part_is_missing():
    assert Author(first_name="Jim", family_name="").name == ""


def test_author_lifespan_variants():
    both = Author(first_name="A", family_name="B", date_of_birth=date(1920, 1, 2), date_of_death=date(1992, 4, 6))
    living = Author(first_name="A", family_name="B", date_of_birth=date(1971, 11, 30))
    only_death = Author(first_name="A", family_name="B", date_of_death=date(1850, 7, 4))
    unknown = Author(first_name="A", family_name="B")

    assert both.lifespan == "(Jan 2, 1920 - Apr 6, 1992)"
    assert living.lifespan == "(Nov 30, 1971 - )"
    assert only_death.lifespan == "(unknown - Jul 4, 1850)"
    assert unknown.lifespan == ""


def test_author_iso_date_helpers():
    author = Author(first_name="A", family_name="B", date_of_birth=date(1920, 1, 2))

    assert author.date_of_birth_yyyy_mm_dd == "1920-01-02"
    assert author.date_of_death_yyyy_mm_dd == ""


def test_genre_name_key_tracks_name():
    genre = Genre(name="Science Fiction")
    assert genre.name_key == "science fiction"

    genre.name = "FANTASY"
    assert genre.name_key == "fantasy"


def test_genre_name_key_ignores_case_and_compatibility_forms():
    assert genre_name_key("STRASSE") == genre_name_key("straße")
    assert genre_name_key("ｆａｎｔａｓｙ") == genre_name_key("Fantasy")


def test_book_instance_due_back_formatting():
    instance = BookInstance(imprint="x", due_back=date(2024, 3, 9))

    assert instance.due_back_formatted == "Mar 9, 2024"
    assert instance.due_back_yyyy_mm_dd == "2024-03-09"
    assert BookInstance(imprint="x").due_back_formatted == ""
