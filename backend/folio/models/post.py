"""Post ORM — a published article addressed externally by slug.

Invariants:
    - id is an AUTOINCREMENT integer (never reused after deletion)
    - slug is UNIQUE across posts; the constraint is the uniqueness check
    - published_at is written once by the store, fixed-width ISO-8601 UTC text

Design Decisions:
    - published_at stored as text: lexicographic order == time order on every backend
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.db.base import Base


class Post(Base):
    """Blog post entity."""
    __tablename__ = "posts"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_at: Mapped[str] = mapped_column(
        String(40), nullable=False, index=True,
    )
