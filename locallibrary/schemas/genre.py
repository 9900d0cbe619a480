from __future__ import annotations

from pydantic import field_validator

from locallibrary.schemas.validation import FormSchema

GENRE_NAME_MAX_LENGTH = 100


class GenreForm(FormSchema):
    text_fields = ("name",)

    name: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if len(value) < 3:
            raise ValueError("Genre name must contain at least 3 characters")
        if len(value) > GENRE_NAME_MAX_LENGTH:
            raise ValueError(f"Genre name must not exceed {GENRE_NAME_MAX_LENGTH} characters")
        return value


class GenreUpdateForm(FormSchema):
    """Renaming only requires a non-empty name."""

    text_fields = ("name",)

    name: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value:
            raise ValueError("Invalid genre")
        if len(value) > GENRE_NAME_MAX_LENGTH:
            raise ValueError(f"Genre name must not exceed {GENRE_NAME_MAX_LENGTH} characters")
        return value
