from __future__ import annotations

from pydantic import Field, ValidationInfo, field_validator

from locallibrary.schemas.validation import FormSchema

_REQUIRED_MESSAGES = {
    "title": "Title must not be empty",
    "author": "Author must not be empty",
    "summary": "Summary must not be empty",
    "isbn": "ISBN must not be empty",
}


class BookForm(FormSchema):
    """Create and update submissions for a book.

    ``genre`` arrives as a single identity when one box is ticked and as a list
    otherwise; sanitization collapses both shapes into one list.
    """

    text_fields = ("title", "author", "summary", "isbn")
    list_fields = ("genre",)

    title: str = ""
    author: str = ""
    summary: str = ""
    isbn: str = ""
    genre: list[str] = Field(default_factory=list)

    @field_validator("title", "author", "summary", "isbn")
    @classmethod
    def validate_required(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            raise ValueError(_REQUIRED_MESSAGES[info.field_name])
        return value
