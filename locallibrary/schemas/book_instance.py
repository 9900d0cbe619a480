from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import field_validator

from locallibrary.models.book_instance import BookInstanceStatus
from locallibrary.schemas.validation import FormSchema, parse_optional_date


class BookInstanceForm(FormSchema):
    text_fields = ("book", "imprint", "status")

    book: str = ""
    imprint: str = ""
    status: BookInstanceStatus = BookInstanceStatus.MAINTENANCE
    due_back: Optional[date] = None

    @field_validator("book")
    @classmethod
    def validate_book(cls, value: str) -> str:
        if not value:
            raise ValueError("Book must be specified")
        return value

    @field_validator("imprint")
    @classmethod
    def validate_imprint(cls, value: str) -> str:
        if not value:
            raise ValueError("Imprint must be specified")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> BookInstanceStatus:
        if isinstance(value, BookInstanceStatus):
            return value
        if not value:
            return BookInstanceStatus.MAINTENANCE
        try:
            return BookInstanceStatus(value)
        except ValueError as exc:
            raise ValueError("Invalid status") from exc

    @field_validator("due_back", mode="before")
    @classmethod
    def validate_due_back(cls, value: Any) -> Optional[date]:
        return parse_optional_date(value, "Invalid date")
