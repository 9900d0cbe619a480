from __future__ import annotations

from collections.abc import Mapping

from fastapi import Depends
from sqlalchemy.orm import Session

from locallibrary.crud.store import EntityStore
from locallibrary.db.session import get_session
from locallibrary.models import Author
from locallibrary.schemas.author import AuthorForm
from locallibrary.schemas.validation import RawValue, validate_form
from locallibrary.services.integrity import DeleteOutcome, IntegrityService


class AuthorService:
    """Write workflows for authors."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.store = EntityStore(session, Author)
        self.integrity = IntegrityService(session)

    def get_author(self, author_id: str) -> Author:
        return self.store.find_by_id(author_id)

    def create_author(self, raw: Mapping[str, RawValue]) -> Author:
        form = validate_form(AuthorForm, raw)
        return self.store.create(Author(**form.model_dump()))

    def update_author(self, author_id: str, raw: Mapping[str, RawValue]) -> Author:
        author = self.store.find_by_id(author_id)
        form = validate_form(AuthorForm, raw)
        return self.store.update(author.id, form.model_dump())

    def delete_author(self, author_id: str) -> DeleteOutcome:
        return self.integrity.delete_author(author_id)


def get_author_service(session: Session = Depends(get_session)) -> AuthorService:
    return AuthorService(session)
