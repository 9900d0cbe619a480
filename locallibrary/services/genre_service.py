from __future__ import annotations

from collections.abc import Mapping

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from locallibrary.core.logging import get_logger
from locallibrary.crud.store import EntityStore
from locallibrary.db.session import get_session
from locallibrary.models import Genre
from locallibrary.schemas.genre import GenreForm, GenreUpdateForm
from locallibrary.schemas.validation import FieldError, FormValidationError, RawValue, validate_form
from locallibrary.services.integrity import DeleteOutcome, IntegrityService

logger = get_logger(__name__)


class GenreService:
    """Write workflows for genres, including the duplicate-name check."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.store = EntityStore(session, Genre)
        self.integrity = IntegrityService(session)

    def get_genre(self, genre_id: str) -> Genre:
        return self.store.find_by_id(genre_id)

    def create_genre(self, raw: Mapping[str, RawValue]) -> tuple[Genre, bool]:
        """Create a genre, or return the existing one with the same name.

        The second element is ``False`` when no new genre was inserted.
        """
        form = validate_form(GenreForm, raw)
        existing = self.integrity.find_duplicate_genre(form.name)
        if existing is not None:
            logger.info("Genre %r already exists as %s", form.name, existing.id)
            return existing, False
        try:
            genre = self.store.create(Genre(name=form.name))
        except IntegrityError:
            # Another request stored the same name after the lookup above.
            existing = self.integrity.find_duplicate_genre(form.name)
            if existing is None:
                raise
            logger.info("Genre %r was created concurrently as %s", form.name, existing.id)
            return existing, False
        return genre, True

    def update_genre(self, genre_id: str, raw: Mapping[str, RawValue]) -> Genre:
        genre = self.store.find_by_id(genre_id)
        form = validate_form(GenreUpdateForm, raw)
        if self.integrity.find_duplicate_genre(form.name, exclude_id=genre.id) is not None:
            raise self._duplicate_name(form)
        try:
            return self.store.update(genre.id, {"name": form.name})
        except IntegrityError as exc:
            raise self._duplicate_name(form) from exc

    def delete_genre(self, genre_id: str) -> DeleteOutcome:
        return self.integrity.delete_genre(genre_id)

    @staticmethod
    def _duplicate_name(form: GenreUpdateForm) -> FormValidationError:
        return FormValidationError(
            values=form.model_dump(),
            errors=[FieldError(field="name", message="A genre with this name already exists.")],
        )


def get_genre_service(session: Session = Depends(get_session)) -> GenreService:
    return GenreService(session)
