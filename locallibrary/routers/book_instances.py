from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.models import BookInstanceStatus
from locallibrary.routers.common import form_payload, render, see_other
from locallibrary.schemas.validation import FormValidationError, RawValue
from locallibrary.security.identity import book_instance_identity
from locallibrary.services.book_instance_service import BookInstanceService, get_book_instance_service
from locallibrary.services.catalog_queries import CatalogQueries, get_catalog_queries

router = APIRouter(prefix="/catalog", tags=["book instances"], default_response_class=HTMLResponse)


def _form_context(queries: CatalogQueries, title: str, **extra: Any) -> dict[str, Any]:
    context: dict[str, Any] = {
        "title": title,
        "book_list": queries.book_choices(),
        "statuses": [status.value for status in BookInstanceStatus],
    }
    context.update(extra)
    return context


@router.get("/bookinstances")
def bookinstance_list(request: Request, queries: CatalogQueries = Depends(get_catalog_queries)):
    return render(
        request,
        "bookinstance_list.html",
        {"title": "Book Instance List", "bookinstance_list": queries.list_book_instances()},
    )


@router.get("/bookinstance/create")
def bookinstance_create_get(request: Request, queries: CatalogQueries = Depends(get_catalog_queries)):
    return render(request, "bookinstance_form.html", _form_context(queries, "Create BookInstance"))


@router.post("/bookinstance/create")
def bookinstance_create_post(
    request: Request,
    payload: dict[str, RawValue] = Depends(form_payload),
    service: BookInstanceService = Depends(get_book_instance_service),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    try:
        instance = service.create_instance(payload)
    except FormValidationError as exc:
        context = _form_context(
            queries,
            "Create BookInstance",
            bookinstance=exc.values,
            selected_book=exc.values.get("book"),
            errors=exc.errors,
        )
        return render(request, "bookinstance_form.html", context)
    return see_other(instance.url)


@router.get("/bookinstance/{entity_id}")
def bookinstance_detail(
    request: Request,
    instance_id: str = Depends(book_instance_identity),
    service: BookInstanceService = Depends(get_book_instance_service),
):
    instance = service.get_instance(instance_id)
    return render(request, "bookinstance_detail.html", {"title": "Book:", "bookinstance": instance})


@router.get("/bookinstance/{entity_id}/delete")
def bookinstance_delete_get(
    request: Request,
    instance_id: str = Depends(book_instance_identity),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    instance = queries.instances.get(instance_id)
    if instance is None:
        return see_other("/catalog/bookinstances")
    return render(request, "bookinstance_delete.html", {"title": "Delete Book Instance", "bookinstance": instance})


@router.post("/bookinstance/{entity_id}/delete")
def bookinstance_delete_post(
    instance_id: str = Depends(book_instance_identity),
    service: BookInstanceService = Depends(get_book_instance_service),
):
    service.delete_instance(instance_id)
    return see_other("/catalog/bookinstances")


@router.get("/bookinstance/{entity_id}/update")
def bookinstance_update_get(
    request: Request,
    instance_id: str = Depends(book_instance_identity),
    service: BookInstanceService = Depends(get_book_instance_service),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    instance = service.get_instance(instance_id)
    context = _form_context(
        queries,
        "Update Book Instance",
        bookinstance=instance,
        selected_book=instance.book_id,
    )
    return render(request, "bookinstance_form.html", context)


@router.post("/bookinstance/{entity_id}/update")
def bookinstance_update_post(
    request: Request,
    instance_id: str = Depends(book_instance_identity),
    payload: dict[str, RawValue] = Depends(form_payload),
    service: BookInstanceService = Depends(get_book_instance_service),
    queries: CatalogQueries = Depends(get_catalog_queries),
):
    try:
        instance = service.update_instance(instance_id, payload)
    except FormValidationError as exc:
        context = _form_context(
            queries,
            "Update Book Instance",
            bookinstance=exc.values,
            selected_book=exc.values.get("book"),
            errors=exc.errors,
        )
        return render(request, "bookinstance_form.html", context)
    return see_other(instance.url)
