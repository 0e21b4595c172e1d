"""Error taxonomy and standardized error responses.

Every error body produced by the API has the same shape::

    {
        "type": "not_found",
        "errors": [{"code": "customer_not_found", "detail": "...", "attr": null}]
    }

Domain exceptions subclass ``DomainError`` and carry an ``ErrorKind``.
Views translate them with ``domain_error_response``; anything that
escapes a view reaches ``api_exception_handler`` (wired through
``REST_FRAMEWORK["EXCEPTION_HANDLER"]``).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = structlog.get_logger(__name__)


class ErrorKind(StrEnum):
    """Outcome categories the API layer maps to HTTP status codes."""

    VALIDATION = "validation_error"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNEXPECTED = "server_error"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_SERVER_ERROR = "A server error occurred."


class DomainError(Exception):
    """Base class for business-rule failures raised by the Service Layer."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    code: str = "error"


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------


def _error(code: str, detail: str, attr: Optional[str] = None) -> Dict[str, Any]:
    return {"code": code, "detail": detail, "attr": attr}


def error_response(
    kind: ErrorKind, errors: List[Dict[str, Any]], status_code: Optional[int] = None
) -> Response:
    """Render a standardized error body for ``kind``."""
    return Response(
        {"type": str(kind), "errors": errors},
        status=status_code or STATUS_BY_KIND[kind],
    )


def domain_error_response(exc: DomainError) -> Response:
    return error_response(exc.kind, [_error(exc.code, str(exc))])


def validation_error_response(exc: PydanticValidationError) -> Response:
    """Flatten Pydantic errors into one entry per offending field."""
    errors = [
        _error(
            err["type"],
            err["msg"],
            ".".join(str(part) for part in err["loc"]) or None,
        )
        for err in exc.errors()
    ]
    return error_response(ErrorKind.VALIDATION, errors)


def _flatten_drf_detail(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            child = key if attr is None else f"{attr}.{key}"
            errors.extend(_flatten_drf_detail(value, None if key == "detail" else child))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten_drf_detail(item, attr))
        return errors
    return [_error(getattr(detail, "code", "error"), str(detail), attr)]


# ---------------------------------------------------------------------------
# DRF exception handler
# ---------------------------------------------------------------------------


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Reshape every error that escapes a view into the standard format.

    Unknown exceptions are logged with their traceback and collapsed to a
    generic 500 so no internal detail reaches the client.
    """
    if isinstance(exc, DomainError):
        return domain_error_response(exc)

    if isinstance(exc, PydanticValidationError):
        return validation_error_response(exc)

    # Handles APIException plus Django's Http404 / PermissionDenied.
    response = exception_handler(exc, context)
    if response is not None:
        if response.status_code == status.HTTP_400_BAD_REQUEST:
            kind = str(ErrorKind.VALIDATION)
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            kind = str(ErrorKind.NOT_FOUND)
        else:
            kind = "client_error"
        response.data = {"type": kind, "errors": _flatten_drf_detail(response.data)}
        return response

    set_rollback()
    view = context.get("view")
    logger.exception(
        "api.unexpected_error",
        view=type(view).__name__ if view is not None else None,
        error_type=type(exc).__name__,
    )
    return error_response(
        ErrorKind.UNEXPECTED, [_error("error", GENERIC_SERVER_ERROR)]
    )
