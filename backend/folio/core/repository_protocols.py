"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Blob storage and mail delivery are accessed through Protocol types
    - Implementations provided by shell via the AppContext

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Async in Protocol: implementations do IO; core functions that feed them stay sync
"""

from typing import Protocol

from folio.core.contact import OutgoingEmail
from folio.core.domain_types import BlobReference


class BlobStore(Protocol):
    """Contract for blob persistence, implemented by infrastructure/blob_store.py."""
    async def store(self, name: str | None, data: bytes) -> BlobReference: ...


class MailTransport(Protocol):
    """Contract for outbound email, implemented by infrastructure/mailer.py."""
    async def send(self, email: OutgoingEmail) -> None: ...
