from __future__ import annotations

import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException

from locallibrary.core.logging import get_logger
from locallibrary.core.settings import get_settings
from locallibrary.db.session import engine
from locallibrary.models import Base
from locallibrary.routers.authors import router as authors_router
from locallibrary.routers.book_instances import router as book_instances_router
from locallibrary.routers.books import router as books_router
from locallibrary.routers.common import render
from locallibrary.routers.genres import router as genres_router
from locallibrary.routers.home import router as home_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=get_settings().app_title, lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def http_error_page(request: Request, exc: StarletteHTTPException):
    """Render 404s and other HTTP errors through the error view."""
    return render(
        request,
        "error.html",
        {"title": "Error", "message": exc.detail, "status_code": exc.status_code, "error": None},
        status_code=exc.status_code,
    )


@app.exception_handler(Exception)
async def unexpected_error_page(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    settings = get_settings()
    return render(
        request,
        "error.html",
        {
            "title": "Error",
            "message": "Internal Server Error",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "error": "".join(traceback.format_exception(exc)) if settings.is_development else None,
        },
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


app.include_router(home_router)
app.include_router(authors_router)
app.include_router(genres_router)
app.include_router(books_router)
app.include_router(book_instances_router)
