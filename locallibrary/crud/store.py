from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Generic, Optional, TypeVar

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from locallibrary.core.logging import get_logger
from locallibrary.models import Author, Base, Book, BookInstance, Genre

ModelT = TypeVar("ModelT", bound=Base)

logger = get_logger(__name__)

ENTITY_LABELS: dict[type[Base], str] = {
    Author: "Author",
    Genre: "Genre",
    Book: "Book",
    BookInstance: "Book Instance",
}


def parse_identity(value: str) -> Optional[str]:
    """Return the canonical identity string, or ``None`` when ``value`` is not one."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return None


def not_found(label: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{label} not found.",
    )


class EntityStore(Generic[ModelT]):
    """Persistence operations for one collection of catalog entities."""

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model
        self.label = ENTITY_LABELS.get(model, model.__name__)

    def get(self, entity_id: str, options: Iterable[Any] = ()) -> Optional[ModelT]:
        identity = parse_identity(entity_id)
        if identity is None:
            return None
        stmt = select(self.model).where(self.model.id == identity)
        for option in options:
            stmt = stmt.options(option)
        return self.session.execute(stmt).unique().scalar_one_or_none()

    def find_by_id(self, entity_id: str, options: Iterable[Any] = ()) -> ModelT:
        entity = self.get(entity_id, options=options)
        if entity is None:
            logger.debug("%s lookup missed: %s", self.label, entity_id)
            raise not_found(self.label)
        return entity

    def find_all(
        self,
        *,
        where: Iterable[Any] = (),
        order_by: Iterable[Any] = (),
        options: Iterable[Any] = (),
        joins: Iterable[Any] = (),
    ) -> list[ModelT]:
        stmt = select(self.model)
        for target in joins:
            stmt = stmt.join(target)
        for criterion in where:
            stmt = stmt.where(criterion)
        for option in options:
            stmt = stmt.options(option)
        stmt = stmt.order_by(*order_by)
        return list(self.session.execute(stmt).unique().scalars().all())

    def count(self, *where: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        for criterion in where:
            stmt = stmt.where(criterion)
        return self.session.execute(stmt).scalar_one()

    def create(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        logger.info("Created %s %s", self.label, entity.id)
        return entity

    def update(self, entity_id: str, fields: Mapping[str, Any]) -> ModelT:
        entity = self.find_by_id(entity_id)
        for field, value in fields.items():
            if field == "id":
                continue
            setattr(entity, field, value)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        logger.info("Updated %s %s", self.label, entity.id)
        return entity

    def delete(self, entity_id: str) -> None:
        entity = self.find_by_id(entity_id)
        self.session.delete(entity)
        self._commit()
        logger.info("Deleted %s %s", self.label, entity_id)

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.warning("%s write rejected by a database constraint", self.label)
            raise
