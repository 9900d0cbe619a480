from __future__ import annotations

from collections.abc import Callable

from fastapi import HTTPException, status

from locallibrary.crud.store import ENTITY_LABELS, parse_identity
from locallibrary.models import Author, Book, BookInstance, Genre


def require_identity_for(label: str) -> Callable[[str], str]:
    """Build a guard for ``{entity_id}`` path segments of one entity kind.

    Every identity-bearing route depends on such a guard, so a malformed id
    becomes a 404 naming the kind before any handler or store lookup runs.
    """

    def require_identity(entity_id: str) -> str:
        identity = parse_identity(entity_id)
        if identity is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Invalid {label} identity: {entity_id}",
            )
        return identity

    return require_identity


author_identity = require_identity_for(ENTITY_LABELS[Author])
genre_identity = require_identity_for(ENTITY_LABELS[Genre])
book_identity = require_identity_for(ENTITY_LABELS[Book])
book_instance_identity = require_identity_for(ENTITY_LABELS[BookInstance])
