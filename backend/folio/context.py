"""Application Context — the process-lifetime owner of store access and secrets.

Invariants:
    - Built once in the FastAPI lifespan and attached to app.state.context
    - Owns the database session manager, the gate secret, the blob store and the relay
    - Core code never reads Settings directly; it receives resolved values from here

Design Decisions:
    - Explicit context object instead of module-level singletons: tests swap a whole
      context in through one dependency override
"""

from dataclasses import dataclass

from folio.config import Settings
from folio.infrastructure.blob_store import DiskBlobStore
from folio.infrastructure.database import DatabaseSessionManager
from folio.infrastructure.mailer import SmtpMailer
from folio.services.contact_relay import ContactRelay


@dataclass
class AppContext:
    db: DatabaseSessionManager
    admin_secret: str
    blobs: DiskBlobStore
    contact: ContactRelay


def build_context(settings: Settings) -> AppContext:
    """Resolve settings into live collaborators."""
    mailer = SmtpMailer(
        host=settings.email_host,
        port=settings.email_port,
        username=settings.email_user,
        password=settings.email_pass,
        starttls=settings.email_starttls,
        timeout_seconds=settings.email_timeout_seconds,
    )
    return AppContext(
        db=DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        ),
        admin_secret=settings.admin_pass,
        blobs=DiskBlobStore(
            settings.upload_dir,
            url_prefix=settings.upload_url_prefix,
            max_bytes=settings.upload_max_bytes,
        ),
        contact=ContactRelay(
            mailer,
            sender=settings.email_sender,
            recipient=settings.contact_receiver,
        ),
    )
