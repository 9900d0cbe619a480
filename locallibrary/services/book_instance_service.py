from __future__ import annotations

from collections.abc import Mapping

from fastapi import Depends
from sqlalchemy.orm import Session, joinedload

from locallibrary.crud.store import EntityStore
from locallibrary.db.session import get_session
from locallibrary.models import Book, BookInstance
from locallibrary.schemas.book_instance import BookInstanceForm
from locallibrary.schemas.validation import FormValidationError, RawValue, validate_form
from locallibrary.services.integrity import DeleteOutcome, IntegrityService


class BookInstanceService:
    """Write workflows for book instances."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.store = EntityStore(session, BookInstance)
        self.integrity = IntegrityService(session)

    def get_instance(self, instance_id: str) -> BookInstance:
        return self.store.find_by_id(instance_id, options=[joinedload(BookInstance.book)])

    def _resolve_book(self, form: BookInstanceForm) -> Book:
        book, errors = self.integrity.resolve_book(form.book)
        if errors:
            raise FormValidationError(values=form.model_dump(mode="json"), errors=errors)
        return book

    def create_instance(self, raw: Mapping[str, RawValue]) -> BookInstance:
        form = validate_form(BookInstanceForm, raw)
        book = self._resolve_book(form)
        instance = BookInstance(
            book_id=book.id,
            imprint=form.imprint,
            status=form.status,
            due_back=form.due_back,
        )
        return self.store.create(instance)

    def update_instance(self, instance_id: str, raw: Mapping[str, RawValue]) -> BookInstance:
        instance = self.store.find_by_id(instance_id)
        form = validate_form(BookInstanceForm, raw)
        book = self._resolve_book(form)
        return self.store.update(
            instance.id,
            {
                "book_id": book.id,
                "imprint": form.imprint,
                "status": form.status,
                "due_back": form.due_back,
            },
        )

    def delete_instance(self, instance_id: str) -> DeleteOutcome:
        return self.integrity.delete_book_instance(instance_id)


def get_book_instance_service(session: Session = Depends(get_session)) -> BookInstanceService:
    return BookInstanceService(session)
