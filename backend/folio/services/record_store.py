"""Record Store — durable CRUD for posts and projects, one slug namespace per kind.

Invariants:
    - Slug uniqueness is enforced by the UNIQUE constraint, inside the write's transaction;
      there is no separate "is this slug free?" query before writing
    - id and the creation timestamp are never written by update()
    - Creation timestamps come from the store clock, never from caller fields
    - list_all() is newest-first by creation timestamp, ties broken by id (newest-first)
    - delete() of a missing id succeeds (lenient delete policy)

Design Decisions:
    - One store per AsyncSession (request-scoped), like the other session-bound handlers
    - update() is a single UPDATE ... WHERE id = ? so a concurrent delete cannot leave
      a half-applied write; rowcount == 0 means NotFound
    - On IntegrityError the slug is looked up only to classify the failure, after rollback
"""

import logging
from typing import Any, Generic, NoReturn, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.core.domain_types import EntityKind, RecordId, iso_timestamp
from folio.core.errors import ConflictError, DatabaseError, ErrorContext, NotFoundError
from folio.models.post import Post
from folio.models.project import Project

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Post, Project)


class RecordStore(Generic[RecordT]):
    """Shared CRUD implementation; subclasses bind a model and its fields."""

    model: type[RecordT]
    kind: EntityKind
    timestamp_field: str
    mutable_fields: tuple[str, ...]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[RecordT]:
        """All records, newest first."""
        created = getattr(self.model, self.timestamp_field)
        result = await self.db.execute(
            select(self.model).order_by(created.desc(), self.model.id.desc()),
        )
        return list(result.scalars().all())

    async def get(self, slug: str) -> RecordT:
        """Exact-match lookup by slug."""
        result = await self.db.execute(
            select(self.model).where(self.model.slug == slug),
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(
                self.kind.value, slug,
                ErrorContext(entity=self.kind.value, slug=slug),
            )
        return record

    async def create(self, fields: dict[str, Any]) -> RecordId:
        """Insert a record with a store-assigned id and timestamp."""
        values = self._mutable(fields)
        values[self.timestamp_field] = iso_timestamp()
        record = self.model(**values)
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self._raise_write_conflict(e, values.get("slug"), None)
        logger.info(
            f"{self.kind.value} created",
            extra={
                "entity": self.kind.value,
                "record_id": record.id,
                "slug": record.slug,
            },
        )
        return RecordId(record.id)

    async def update(self, record_id: int, fields: dict[str, Any]) -> None:
        """Overwrite only the supplied mutable fields of an existing record."""
        values = self._mutable(fields)
        if not values:
            if await self.db.get(self.model, record_id) is None:
                raise self._not_found(record_id)
            return
        try:
            result = await self.db.execute(
                update(self.model)
                .where(self.model.id == record_id)
                .values(**values),
            )
            if result.rowcount == 0:
                await self.db.rollback()
                raise self._not_found(record_id)
            await self.db.commit()
        except IntegrityError as e:
            await self._raise_write_conflict(e, values.get("slug"), record_id)
        logger.info(
            f"{self.kind.value} updated",
            extra={
                "entity": self.kind.value,
                "record_id": record_id,
                "fields": sorted(values),
            },
        )

    async def delete(self, record_id: int) -> None:
        """Remove a record permanently. A missing id is not an error."""
        result = await self.db.execute(
            delete(self.model).where(self.model.id == record_id),
        )
        await self.db.commit()
        if result.rowcount == 0:
            logger.info(
                f"{self.kind.value} delete for unknown id ignored",
                extra={"entity": self.kind.value, "record_id": record_id},
            )
            return
        logger.info(
            f"{self.kind.value} deleted",
            extra={"entity": self.kind.value, "record_id": record_id},
        )

    def _mutable(self, fields: dict[str, Any]) -> dict[str, Any]:
        return {
            key: value for key, value in fields.items()
            if key in self.mutable_fields
        }

    def _not_found(self, record_id: int) -> NotFoundError:
        return NotFoundError(
            self.kind.value, record_id,
            ErrorContext(entity=self.kind.value, record_id=record_id),
        )

    async def _raise_write_conflict(
        self, error: IntegrityError, slug: str | None, record_id: int | None,
    ) -> NoReturn:
        """Classify a failed write: slug taken by another record, or a real DB fault."""
        await self.db.rollback()
        if slug is not None:
            holder = select(self.model.id).where(self.model.slug == slug)
            if record_id is not None:
                holder = holder.where(self.model.id != record_id)
            taken = await self.db.scalar(select(holder.exists()))
            if taken:
                logger.warning(
                    f"{self.kind.value} slug conflict",
                    extra={"entity": self.kind.value, "slug": slug},
                )
                raise ConflictError(
                    self.kind.value, slug,
                    ErrorContext(
                        entity=self.kind.value, slug=slug, record_id=record_id,
                    ),
                )
        logger.error(f"{self.kind.value} write rejected: {error}")
        raise DatabaseError("Integrity constraint violated", "commit")


class PostStore(RecordStore[Post]):
    model = Post
    kind = EntityKind.POST
    timestamp_field = "published_at"
    mutable_fields = ("title", "slug", "excerpt", "content")


class ProjectStore(RecordStore[Project]):
    model = Project
    kind = EntityKind.PROJECT
    timestamp_field = "created_at"
    mutable_fields = ("title", "slug", "excerpt", "content", "image", "link")
