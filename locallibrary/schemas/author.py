from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import field_validator

from locallibrary.schemas.validation import FormSchema, parse_optional_date

NAME_MAX_LENGTH = 100


def _check_name(value: str, label: str) -> str:
    if not value:
        raise ValueError(f"{label} must be specified.")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"{label} must not exceed {NAME_MAX_LENGTH} characters.")
    if not (value.isascii() and value.isalpha()):
        raise ValueError(f"{label} has non-alphanumeric characters.")
    return value


class AuthorForm(FormSchema):
    """Create and update submissions for an author."""

    text_fields = ("first_name", "family_name")

    first_name: str = ""
    family_name: str = ""
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        return _check_name(value, "First name")

    @field_validator("family_name")
    @classmethod
    def validate_family_name(cls, value: str) -> str:
        return _check_name(value, "Family name")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def validate_date_of_birth(cls, value: Any) -> Optional[date]:
        return parse_optional_date(value, "Invalid date of birth")

    @field_validator("date_of_death", mode="before")
    @classmethod
    def validate_date_of_death(cls, value: Any) -> Optional[date]:
        return parse_optional_date(value, "Invalid date of death")
