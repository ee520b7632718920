"""ORM Models — SQLAlchemy declarative models for the content tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - posts and projects are independent tables; nothing references across them

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all and Alembic
"""

from folio.models.post import Post  # noqa: F401
from folio.models.project import Project  # noqa: F401
