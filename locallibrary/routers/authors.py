from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.routers.common import form_payload, render, see_other
from locallibrary.schemas.validation import FormValidationError, RawValue
from locallibrary.security.identity import author_identity
from locallibrary.services.author_service import AuthorService, get_author_service
from locallibrary.services.catalog_queries import CatalogQueries, get_catalog_queries

router = APIRouter(prefix="/catalog", tags=["authors"], default_response_class=HTMLResponse)


@router.get("/authors")
def author_list(request: Request, queries: CatalogQueries = Depends(get_catalog_queries)):
    """List every author, ordered by family name."""
    return render(request, "author_list.html", {"title": "Author List", "author_list": queries.list_authors()})


@router.get("/author/create")
def author_create_get(request: Request):
    return render(request, "author_form.html", {"title": "Create Author"})


@router.post("/author/create")
def author_create_post(
    request: Request,
    payload: dict[str, RawValue] = Depends(form_payload),
    service: AuthorService = Depends(get_author_service),
):
    """Create an author, or show the form again with the errors."""
    try:
        author = service.create_author(payload)
    except FormValidationError as exc:
        return render(
            request,
            "author_form.html",
            {"title": "Create Author", "author": exc.values, "errors": exc.errors},
        )
    return see_other(author.url)


@router.get("/author/{entity_id}")
def author_detail(
    request: Request,
    author_id: str = Depends(author_identity),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    """Show an author together with their books."""
    detail = queries.author_with_books(author_id)
    return render(
        request,
        "author_detail.html",
        {"title": "Author Detail", "author": detail.author, "author_books": detail.books},
    )


@router.get("/author/{entity_id}/delete")
def author_delete_get(
    request: Request,
    author_id: str = Depends(author_identity),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    author = queries.authors.get(author_id)
    if author is None:
        return see_other("/catalog/authors")
    return render(
        request,
        "author_delete.html",
        {"title": "Delete Author", "author": author, "author_books": queries.integrity.author_dependents(author.id)},
    )


@router.post("/author/{entity_id}/delete")
def author_delete_post(
    request: Request,
    author_id: str = Depends(author_identity),
    service: AuthorService = Depends(get_author_service),
):
    """Delete an author unless books still reference them."""
    outcome = service.delete_author(author_id)
    if outcome.deleted:
        return see_other("/catalog/authors")
    return render(
        request,
        "author_delete.html",
        {"title": "Delete Author", "author": service.get_author(author_id), "author_books": outcome.dependents},
    )


@router.get("/author/{entity_id}/update")
def author_update_get(
    request: Request,
    author_id: str = Depends(author_identity),
    service: AuthorService = Depends(get_author_service),
):
    return render(request, "author_form.html", {"title": "Update Author", "author": service.get_author(author_id)})


@router.post("/author/{entity_id}/update")
def author_update_post(
    request: Request,
    author_id: str = Depends(author_identity),
    payload: dict[str, RawValue] = Depends(form_payload),
    service: AuthorService = Depends(get_author_service),
):
    try:
        author = service.update_author(author_id, payload)
    except FormValidationError as exc:
        return render(
            request,
            "author_form.html",
            {"title": "Update Author", "author": exc.values, "errors": exc.errors},
        )
    return see_other(author.url)
