from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.routers.common import form_payload, render, see_other
from locallibrary.schemas.validation import FormValidationError, RawValue
from locallibrary.security.identity import genre_identity
from locallibrary.services.catalog_queries import CatalogQueries, get_catalog_queries
from locallibrary.services.genre_service import GenreService, get_genre_service

router = APIRouter(prefix="/catalog", tags=["genres"], default_response_class=HTMLResponse)


@router.get("/genres")
def genre_list(request: Request, queries: CatalogQueries = Depends(get_catalog_queries)):
    return render(request, "genre_list.html", {"title": "Genre List", "genre_list": queries.list_genres()})


@router.get("/genre/create")
def genre_create_get(request: Request):
    return render(request, "genre_form.html", {"title": "Create Genre"})


@router.post("/genre/create")
def genre_create_post(
    request: Request,
    payload: dict[str, RawValue] = Depends(form_payload),
    service: GenreService = Depends(get_genre_service),
):
    """Create a genre; an existing genre with the same name is reused."""
    try:
        genre, _created = service.create_genre(payload)
    except FormValidationError as exc:
        return render(
            request,
            "genre_form.html",
            {"title": "Create Genre", "genre": exc.values, "errors": exc.errors},
        )
    return see_other(genre.url)


@router.get("/genre/{entity_id}")
def genre_detail(
    request: Request,
    genre_id: str = Depends(genre_identity),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    detail = queries.genre_with_books(genre_id)
    return render(
        request,
        "genre_detail.html",
        {"title": "Genre Detail", "genre": detail.genre, "genre_books": detail.books},
    )


@router.get("/genre/{entity_id}/delete")
def genre_delete_get(
    request: Request,
    genre_id: str = Depends(genre_identity),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    genre = queries.genres.get(genre_id)
    if genre is None:
        return see_other("/catalog/genres")
    return render(
        request,
        "genre_delete.html",
        {"title": "Delete Genre", "genre": genre, "genre_books": queries.integrity.genre_dependents(genre.id)},
    )


@router.post("/genre/{entity_id}/delete")
def genre_delete_post(
    request: Request,
    genre_id: str = Depends(genre_identity),
    service: GenreService = Depends(get_genre_service),
):
    """Delete the genre named by the path; the form body is not consulted."""
    outcome = service.delete_genre(genre_id)
    if outcome.deleted:
        return see_other("/catalog/genres")
    return render(
        request,
        "genre_delete.html",
        {"title": "Delete Genre", "genre": service.get_genre(genre_id), "genre_books": outcome.dependents},
    )


@router.get("/genre/{entity_id}/update")
def genre_update_get(
    request: Request,
    genre_id: str = Depends(genre_identity),
    service: GenreService = Depends(get_genre_service),
):
    return render(request, "genre_form.html", {"title": "Update Genre", "genre": service.get_genre(genre_id)})


@router.post("/genre/{entity_id}/update")
def genre_update_post(
    request: Request,
    genre_id: str = Depends(genre_identity),
    payload: dict[str, RawValue] = Depends(form_payload),
    service: GenreService = Depends(get_genre_service),
):
    try:
        genre = service.update_genre(genre_id, payload)
    except FormValidationError as exc:
        return render(
            request,
            "genre_form.html",
            {"title": "Update Genre", "genre": exc.values, "errors": exc.errors},
        )
    return see_other(genre.url)
