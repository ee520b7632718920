"""Project ORM — a portfolio entry with optional image and external link.

Invariants:
    - slug is UNIQUE across projects, independent of post slugs
    - created_at is written once by the store, same format as Post.published_at
    - image holds a blob reference (/uploads/...) or any external URL
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.db.base import Base


class Project(Base):
    """Portfolio project entity."""
    __tablename__ = "projects"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    link: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(
        String(40), nullable=False, index=True,
    )
