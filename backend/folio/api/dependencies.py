"""Route Dependencies — context lookup, request-scoped sessions, stores, access gate.

Invariants:
    - Every dependency reads collaborators from AppContext (app.state.context)
    - require_admin accepts the token from X-Admin-Pass header, admin_pass body field
      (JSON or form) or admin_pass query parameter, first present wins
    - Read routes never depend on require_admin
    - Create/update bodies may be JSON or form-encoded; parse_body validates either

Design Decisions:
    - Gate as a dependency on mutating routes only: one predicate, no permission classes
    - Body is read through Starlette's cached request.json()/form(), so the gate and
      parse_body see the same payload
"""

import json
import logging
from typing import Any, AsyncGenerator, Awaitable, Callable, TypeVar

from fastapi import Depends, Header, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.context import AppContext
from folio.core.access_gate import is_authorized, pick_token
from folio.core.errors import ErrorContext, UnauthorizedError
from folio.services.record_store import PostStore, ProjectStore

logger = logging.getLogger(__name__)

ADMIN_FIELD = "admin_pass"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context not initialized")
    return context


async def get_db(
    context: AppContext = Depends(get_context),
) -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped database session."""
    async with context.db.session() as session:
        yield session


def get_post_store(db: AsyncSession = Depends(get_db)) -> PostStore:
    return PostStore(db)


def get_project_store(db: AsyncSession = Depends(get_db)) -> ProjectStore:
    return ProjectStore(db)


async def read_payload(request: Request) -> dict[str, Any]:
    """Decode a JSON or form body into a dict; anything else yields {}."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return payload if isinstance(payload, dict) else {}
    if content_type.startswith(
        ("application/x-www-form-urlencoded", "multipart/form-data"),
    ):
        form = await request.form()
        return dict(form)
    return {}


def parse_body(schema: type[SchemaT]) -> Callable[[Request], Awaitable[SchemaT]]:
    """Dependency validating a JSON or form body against ``schema``.

    Only keys present in the payload are set on the model, so update
    schemas keep model_dump(exclude_unset=True) semantics for both encodings.
    """

    async def dependency(request: Request) -> SchemaT:
        payload = await read_payload(request)
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            errors = [
                {**err, "loc": ("body", *err["loc"])}
                for err in e.errors(include_url=False)
            ]
            raise RequestValidationError(errors, body=payload) from e

    return dependency


async def require_admin(
    request: Request,
    x_admin_pass: str | None = Header(None),
    admin_pass: str | None = Query(None),
    context: AppContext = Depends(get_context),
) -> None:
    """Reject the request with 401 unless the shared secret matches exactly."""
    body = await read_payload(request)
    token = pick_token(x_admin_pass, body.get(ADMIN_FIELD), admin_pass)
    if not is_authorized(token, context.admin_secret):
        logger.warning(
            "Rejected admin request",
            extra={"path": request.url.path},
        )
        raise UnauthorizedError(ErrorContext())
