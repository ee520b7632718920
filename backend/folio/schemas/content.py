"""Content Schemas — Pydantic request/response models for posts and projects.

Invariants:
    - Create schemas require title and a non-blank slug; other fields optional
    - Update schemas are partial: only fields present in the body are applied
      (model_dump(exclude_unset=True)); title/slug may not be set to null
    - No schema accepts id, published_at or created_at; the store owns them
    - Post summaries omit content; detail responses carry every column

Design Decisions:
    - from_attributes: responses validate straight from ORM rows
    - extra fields ignored: admin_pass may travel in the same JSON body
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _SlugMixin(BaseModel):
    @field_validator("slug", check_fields=False)
    @classmethod
    def strip_slug(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("slug cannot be empty or whitespace")
        return v


class _NoNullTitleSlug(BaseModel):
    @field_validator("title", "slug", mode="before", check_fields=False)
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


# --- Posts --------------------------------------------------------------------

class PostCreate(_SlugMixin):
    title: str
    slug: str = Field(min_length=1, max_length=255)
    excerpt: str | None = None
    content: str | None = None


class PostUpdate(_NoNullTitleSlug, _SlugMixin):
    title: str | None = None
    slug: str | None = Field(None, min_length=1, max_length=255)
    excerpt: str | None = None
    content: str | None = None


class PostSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    excerpt: str | None = None
    published_at: str


class PostDetail(PostSummary):
    content: str | None = None


# --- Projects -----------------------------------------------------------------

class ProjectCreate(_SlugMixin):
    title: str
    slug: str = Field(min_length=1, max_length=255)
    excerpt: str | None = None
    content: str | None = None
    image: str | None = None
    link: str | None = None


class ProjectUpdate(_NoNullTitleSlug, _SlugMixin):
    title: str | None = None
    slug: str | None = Field(None, min_length=1, max_length=255)
    excerpt: str | None = None
    content: str | None = None
    image: str | None = None
    link: str | None = None


class ProjectSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    excerpt: str | None = None
    image: str | None = None
    link: str | None = None
    created_at: str


class ProjectDetail(ProjectSummary):
    content: str | None = None


# --- Mutation results ---------------------------------------------------------

class CreatedResponse(BaseModel):
    id: int


class OkResponse(BaseModel):
    ok: bool = True
