"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId wraps the store-assigned integer key, never reused after deletion
    - Slug is the external lookup key, unique per EntityKind
    - Timestamps are fixed-width ISO-8601 UTC strings, so string order == time order

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for EntityKind: serializes to JSON and doubles as the log/error label
"""

from datetime import datetime, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", int)
Slug = NewType("Slug", str)
BlobReference = NewType("BlobReference", str)


# ─── Enums ───────────────────────────────────────────────────────

class EntityKind(str, Enum):
    """Content kinds with independent slug namespaces."""
    POST = "Post"
    PROJECT = "Project"


# ─── Time ────────────────────────────────────────────────────────

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime | None = None) -> str:
    """Render a UTC instant as a fixed-width ISO-8601 string."""
    moment = moment or utc_now()
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")
