"""Project Routes — same contract as posts, with image and link fields.

Invariants:
    - Project slugs live in their own namespace: a post slug never blocks a project
    - GET routes are open; mutations depend on require_admin
"""

import logging

from fastapi import APIRouter, Depends, status

from folio.api.dependencies import get_project_store, parse_body, require_admin
from folio.schemas.content import (
    CreatedResponse, OkResponse, ProjectCreate, ProjectDetail,
    ProjectSummary, ProjectUpdate,
)
from folio.services.record_store import ProjectStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[ProjectSummary])
async def list_projects(store: ProjectStore = Depends(get_project_store)):
    return await store.list_all()


@router.get("/{slug}", response_model=ProjectDetail)
async def get_project(
    slug: str, store: ProjectStore = Depends(get_project_store),
):
    return await store.get(slug)


@router.post(
    "", response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_project(
    body: ProjectCreate = Depends(parse_body(ProjectCreate)),
    store: ProjectStore = Depends(get_project_store),
):
    record_id = await store.create(body.model_dump())
    return CreatedResponse(id=record_id)


@router.put(
    "/{record_id}", response_model=OkResponse,
    dependencies=[Depends(require_admin)],
)
async def update_project(
    record_id: int,
    body: ProjectUpdate = Depends(parse_body(ProjectUpdate)),
    store: ProjectStore = Depends(get_project_store),
):
    await store.update(record_id, body.model_dump(exclude_unset=True))
    return OkResponse()


@router.delete(
    "/{record_id}", response_model=OkResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_project(
    record_id: int, store: ProjectStore = Depends(get_project_store),
):
    await store.delete(record_id)
    return OkResponse()
