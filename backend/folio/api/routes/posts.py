"""Post Routes — public reads by slug, gated create/update/delete by id.

Invariants:
    - GET routes are open; POST/PUT/DELETE depend on require_admin
    - List responses omit post content; single reads return the full record
    - DELETE of an unknown id answers {"ok": true} (lenient delete policy)
    - Create/update bodies are JSON or form-encoded, validated by parse_body

Design Decisions:
    - Routes only translate HTTP <-> PostStore; NotFound/Conflict travel as FolioError
      to the global handler (404/409)
"""

import logging

from fastapi import APIRouter, Depends, status

from folio.api.dependencies import get_post_store, parse_body, require_admin
from folio.schemas.content import (
    CreatedResponse, OkResponse, PostCreate, PostDetail, PostSummary, PostUpdate,
)
from folio.services.record_store import PostStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=list[PostSummary])
async def list_posts(store: PostStore = Depends(get_post_store)):
    """All posts, newest first, without content."""
    return await store.list_all()


@router.get("/{slug}", response_model=PostDetail)
async def get_post(slug: str, store: PostStore = Depends(get_post_store)):
    return await store.get(slug)


@router.post(
    "", response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_post(
    body: PostCreate = Depends(parse_body(PostCreate)),
    store: PostStore = Depends(get_post_store),
):
    record_id = await store.create(body.model_dump())
    return CreatedResponse(id=record_id)


@router.put(
    "/{record_id}", response_model=OkResponse,
    dependencies=[Depends(require_admin)],
)
async def update_post(
    record_id: int,
    body: PostUpdate = Depends(parse_body(PostUpdate)),
    store: PostStore = Depends(get_post_store),
):
    await store.update(record_id, body.model_dump(exclude_unset=True))
    return OkResponse()


@router.delete(
    "/{record_id}", response_model=OkResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_post(
    record_id: int, store: PostStore = Depends(get_post_store),
):
    await store.delete(record_id)
    return OkResponse()
