"""Problem-details style error responses.

Body shape: {"type", "title", "status", "detail", "errors"?}; "errors" maps a
field name to its messages and is only present for validation failures.
"""

from __future__ import annotations

from typing import Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(
    status_code: int,
    title: str,
    detail: str | None = None,
    errors: dict[str, list[str]] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "status": status_code,
        "detail": detail,
    }
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body, media_type=PROBLEM_MEDIA_TYPE)


def _field_name(loc: tuple[Any, ...]) -> str:
    # ("body", "weightKg") -> "weightKg"; ("query", "page") -> "page"
    parts = [str(part) for part in loc if part not in {"body", "query", "path", "header"}]
    return ".".join(parts) or "body"


def validation_errors_by_field(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        # pydantic prefixes messages raised from validators
        message = message.removeprefix("Value error, ")
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), []).append(message)
    return errors


def validation_problem(exc: RequestValidationError) -> JSONResponse:
    return problem_response(
        status.HTTP_400_BAD_REQUEST,
        "One or more validation errors occurred.",
        "See the errors property for details.",
        errors=validation_errors_by_field(exc),
    )
