from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.routers.common import form_payload, render, see_other
from locallibrary.schemas.validation import FormValidationError, RawValue
from locallibrary.security.identity import book_identity
from locallibrary.services.book_service import BookService, get_book_service
from locallibrary.services.catalog_queries import CatalogQueries, get_catalog_queries

router = APIRouter(prefix="/catalog", tags=["books"], default_response_class=HTMLResponse)


def _form_context(queries: CatalogQueries, title: str, **extra: Any) -> dict[str, Any]:
    context: dict[str, Any] = {
        "title": title,
        "authors": queries.list_authors(),
        "genres": queries.list_genres(),
        "selected_genres": [],
    }
    context.update(extra)
    return context


@router.get("/books")
def book_list(request: Request, queries: CatalogQueries = Depends(get_catalog_queries)):
    return render(request, "book_list.html", {"title": "Book List", "book_list": queries.list_books()})


@router.get("/book/create")
def book_create_get(request: Request, queries: CatalogQueries = Depends(get_catalog_queries)):
    return render(request, "book_form.html", _form_context(queries, "Create Book"))


@router.post("/book/create")
def book_create_post(
    request: Request,
    payload: dict[str, RawValue] = Depends(form_payload),
    service: BookService = Depends(get_book_service),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    try:
        book = service.create_book(payload)
    except FormValidationError as exc:
        context = _form_context(
            queries,
            "Create Book",
            book=exc.values,
            selected_genres=exc.values.get("genre", []),
            selected_author=exc.values.get("author"),
            errors=exc.errors,
        )
        return render(request, "book_form.html", context)
    return see_other(book.url)


@router.get("/book/{entity_id}")
def book_detail(
    request: Request,
    book_id: str = Depends(book_identity),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    """Show a book with its author, genres and copies resolved."""
    detail = queries.book_with_instances_and_refs(book_id)
    return render(
        request,
        "book_detail.html",
        {"title": detail.book.title, "book": detail.book, "book_instances": detail.instances},
    )


@router.get("/book/{entity_id}/delete")
def book_delete_get(
    request: Request,
    book_id: str = Depends(book_identity),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    book = queries.books.get(book_id)
    if book is None:
        return see_other("/catalog/books")
    return render(
        request,
        "book_delete.html",
        {"title": "Delete Book", "book": book, "book_instances": queries.integrity.book_dependents(book.id)},
    )


@router.post("/book/{entity_id}/delete")
def book_delete_post(
    request: Request,
    book_id: str = Depends(book_identity),
    service: BookService = Depends(get_book_service),
):
    outcome = service.delete_book(book_id)
    if outcome.deleted:
        return see_other("/catalog/books")
    return render(
        request,
        "book_delete.html",
        {"title": "Delete Book", "book": service.get_book(book_id), "book_instances": outcome.dependents},
    )


@router.get("/book/{entity_id}/update")
def book_update_get(
    request: Request,
    book_id: str = Depends(book_identity),
    service: BookService = Depends(get_book_service),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    book = service.get_book(book_id)
    context = _form_context(
        queries,
        "Update Book",
        book=book,
        selected_genres=book.genre_ids,
        selected_author=book.author_id,
    )
    return render(request, "book_form.html", context)


@router.post("/book/{entity_id}/update")
def book_update_post(
    request: Request,
    book_id: str = Depends(book_identity),
    payload: dict[str, RawValue] = Depends(form_payload),
    service: BookService = Depends(get_book_service),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    try:
        book = service.update_book(book_id, payload)
    except FormValidationError as exc:
        context = _form_context(
            queries,
            "Update Book",
            book=exc.values,
            selected_genres=exc.values.get("genre", []),
            selected_author=exc.values.get("author"),
            errors=exc.errors,
        )
        return render(request, "book_form.html", context)
    return see_other(book.url)
