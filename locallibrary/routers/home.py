from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.routers.common import render
from locallibrary.services.catalog_queries import CatalogQueries, get_catalog_queries

router = APIRouter(tags=["home"], default_response_class=HTMLResponse)


@router.get("/")
@router.get("/catalog")
def index(request: Request, queries: CatalogQueries = Depends(get_catalog_queries)):
    """Catalog summary page."""
    summary = queries.catalog_summary()
    return render(
        request,
        "index.html",
        {
            "title": "Local Library Home",
            "book_count": summary.book_count,
            "book_instance_count": summary.instance_count,
            "book_instance_available_count": summary.available_instance_count,
            "author_count": summary.author_count,
            "genre_count": summary.genre_count,
        },
    )
