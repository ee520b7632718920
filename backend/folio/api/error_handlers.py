"""Error Handlers — map every failure to one JSON error envelope.

Invariants:
    - FolioError keeps its own HTTP status and code (404, 409, 401, 413, 502, ...)
    - Malformed request bodies and parameters are 400 VALIDATION_ERROR, with the
      offending fields listed, the same code ContactValidationError uses
    - Anything unmapped is 500 INTERNAL_ERROR; the body carries no exception text

Design Decisions:
    - Kept out of main.py so tests can build a bare app with the same handlers
    - 5xx FolioErrors log at ERROR, client faults at WARNING
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from folio.core.errors import ErrorCategory, ErrorSeverity, FolioError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FolioError, handle_folio_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)


async def handle_folio_error(request: Request, exc: FolioError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        "%s %s failed: %s", request.method, request.url.path, exc.message,
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    fields = [_field_name(err["loc"]) for err in exc.errors()]
    logger.warning(
        "Rejected malformed request to %s", request.url.path,
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path,
               "fields": fields},
    )
    content = _envelope(
        "VALIDATION_ERROR",
        f"invalid fields: {', '.join(fields) or 'body'}",
        ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
    )
    content["error"]["details"] = [
        {"field": name, "message": err["msg"], "type": err["type"]}
        for name, err in zip(fields, exc.errors())
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled %s on %s", type(exc).__name__, request.url.path,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _field_name(loc) -> str:
    # ("body", "slug") -> "slug"; the location prefix is noise for clients
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
        },
    }
