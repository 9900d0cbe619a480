from __future__ import annotations

import enum
import html
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError

RawValue = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(eq=False)
class FormValidationError(Exception):
    """A submission failed one or more field rules.

    ``values`` holds the sanitized submission so the form can be shown again
    pre-filled next to ``errors``.
    """

    values: dict[str, Any]
    errors: list[FieldError] = field(default_factory=list)

    def __str__(self) -> str:
        return "; ".join(f"{error.field}: {error.message}" for error in self.errors)

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]


class FormSchema(BaseModel):
    """Base for HTML form payloads.

    ``text_fields`` are trimmed and ``list_fields`` collapsed to a list before
    validation, so the rules see what the user typed. Both are HTML-escaped
    once the rules pass.
    """

    text_fields: ClassVar[tuple[str, ...]] = ()
    list_fields: ClassVar[tuple[str, ...]] = ()

    model_config = ConfigDict(extra="ignore")


FormT = TypeVar("FormT", bound=FormSchema)


def escape_text(value: str) -> str:
    return html.escape(value, quote=True)


def first_value(value: RawValue) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value[0] if value else ""


def normalize_list(value: RawValue) -> list[str]:
    """Collapse a scalar-or-list form value into a de-duplicated list.

    A bare string and a one-element list produce the same result.
    """
    if value is None:
        return []
    items = [value] if isinstance(value, str) else list(value)
    normalized: list[str] = []
    for item in items:
        item = item.strip()
        if item and item not in normalized:
            normalized.append(item)
    return normalized


def sanitize(schema: type[FormSchema], raw: Mapping[str, RawValue]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name in schema.model_fields:
        if name in schema.list_fields:
            values[name] = normalize_list(raw.get(name))
        else:
            values[name] = first_value(raw.get(name)).strip()
    return values


def escape_fields(schema: type[FormSchema], values: Mapping[str, Any]) -> dict[str, Any]:
    """Escape the text and list fields of ``values``; enum members pass through."""
    escaped: dict[str, Any] = {}
    for name in schema.text_fields:
        value = values.get(name)
        if isinstance(value, str) and not isinstance(value, enum.Enum):
            escaped[name] = escape_text(value)
    for name in schema.list_fields:
        escaped[name] = [escape_text(item) for item in values.get(name) or []]
    return escaped


def parse_optional_date(value: Any, message: str) -> Optional[date]:
    """Accept an ISO-8601 date (or datetime) string; empty input means absent."""
    if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
        return value
    if isinstance(value, datetime):
        return value.date()
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValueError(message) from exc


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "__all__"
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if error["type"] == "value_error" and ctx_error else error["msg"]
        errors.append(FieldError(field=name, message=message))
    return errors


def validate_form(schema: type[FormT], raw: Mapping[str, RawValue]) -> FormT:
    """Trim ``raw``, validate it against ``schema``, then escape the result.

    Length and character rules apply to the unescaped text. Raises
    :class:`FormValidationError` carrying the escaped submission when any rule
    fails.
    """
    values = sanitize(schema, raw)
    try:
        form = schema.model_validate(values)
    except ValidationError as exc:
        echoed = {**values, **escape_fields(schema, values)}
        raise FormValidationError(values=echoed, errors=_field_errors(exc)) from exc
    validated = {name: getattr(form, name) for name in schema.model_fields}
    return form.model_copy(update=escape_fields(schema, validated))
