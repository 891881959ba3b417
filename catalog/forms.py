"""
Form Handling

Turns a submitted HTML form into either validated data or a list of field
errors, keeping the sanitized values so a failed form can be re-rendered
exactly as the user entered it (after trimming).

Sanitization is whitespace trimming only. HTML escaping happens when the
values are rendered: Jinja2 autoescapes every template variable.

Usage:
    form = await request.form()
    result = validate_form(GenreForm, form)
    if not result.is_valid:
        return render(..., form=result.values, errors=result.errors)
    store.create(Genre, result.data.to_record())
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

FormT = TypeVar("FormT", bound=BaseModel)


@dataclass(frozen=True)
class FieldError:
    """One validation message attached to a form field."""

    field: str
    message: str


@dataclass
class FormResult(Generic[FormT]):
    """Sanitized values plus either validated data or field errors."""

    values: dict[str, Any]
    data: FormT | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.data is not None and not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        """Record a check made outside the schema (e.g. a missing reference)."""
        self.errors.append(FieldError(field_name, message))
        self.data = None


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def sanitize(form: Mapping[str, Any], schema: type[BaseModel]) -> dict[str, Any]:
    """
    Trimmed values for every field the schema declares.

    Missing single-value fields become "", missing list fields become [].
    form is a starlette FormData (or any mapping with getlist()).
    """
    list_fields = getattr(schema, "list_fields", ())
    values: dict[str, Any] = {}
    for name in schema.model_fields:
        if name in list_fields:
            raw = form.getlist(name) if hasattr(form, "getlist") else form.get(name, [])
            values[name] = [_strip(item) for item in raw]
        else:
            values[name] = _strip(form.get(name, ""))
    return values


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ValidationError into field errors."""
    return [
        FieldError(str(error["loc"][0]) if error["loc"] else "", error["msg"])
        for error in exc.errors()
    ]


def validate_form(schema: type[FormT], form: Mapping[str, Any]) -> FormResult[FormT]:
    """Sanitize then validate a submitted form against schema."""
    values = sanitize(form, schema)
    try:
        return FormResult(values=values, data=schema.model_validate(values))
    except ValidationError as exc:
        return FormResult(values=values, errors=field_errors(exc))
