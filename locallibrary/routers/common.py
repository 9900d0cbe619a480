from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from locallibrary.core.settings import get_settings
from locallibrary.schemas.validation import RawValue

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["app_title"] = get_settings().app_title


def render(request: Request, template: str, context: dict[str, Any], status_code: int = status.HTTP_200_OK):
    return templates.TemplateResponse(request, template, context, status_code=status_code)


def see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


async def form_payload(request: Request) -> dict[str, RawValue]:
    """Read an urlencoded or multipart body.

    A field sent once maps to a string and a repeated field to a list of
    strings, so checkbox groups keep both shapes.
    """
    form = await request.form()
    payload: dict[str, RawValue] = {}
    for key in form.keys():
        values = [value for value in form.getlist(key) if isinstance(value, str)]
        payload[key] = values[0] if len(values) == 1 else values
    return payload
