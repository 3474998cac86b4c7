"""Content domain models — pure Pydantic v2 data types.

A ``Post`` is either a blog post or a static page, distinguished by its
``type``.  ``SiteSettings`` and ``ThemeConfig`` are singleton records
owned by whichever storage adapter is active.

Field names are snake_case in Python and camelCase on the wire, so the
JSON documents stay compatible with the ones the browser build writes.
"""

from __future__ import annotations

import math
import re
import uuid
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

WORDS_PER_MINUTE = 200


def slugify(title: str) -> str:
    """Derive a URL-safe slug from a title.

    >>> slugify("Hello, World!")
    'hello-world'
    """
    return _NON_ALNUM.sub("-", title.lower()).strip("-")


def new_id() -> str:
    return str(uuid.uuid4())


class PostStatus(StrEnum):
    """Publication status of a content item."""

    DRAFT = "draft"
    PUBLISHED = "published"


class PostType(StrEnum):
    """Kind of content item."""

    POST = "post"
    PAGE = "page"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Dump using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)


class Post(_CamelModel):
    """A blog post or static page.

    ``slug`` is derived from ``title`` when left empty.  Items stored
    before ``type`` existed decode as posts.
    """

    id: str = Field(default_factory=new_id)
    title: str
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    cover_image: str | None = None
    status: PostStatus = PostStatus.DRAFT
    post_type: PostType = Field(default=PostType.POST, alias="type")
    author_id: str = "admin"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Offset-less timestamps are stored as UTC.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @model_validator(mode="after")
    def _derive_slug(self) -> Post:
        if not self.slug:
            self.slug = slugify(self.title)
        return self

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    @property
    def read_time_minutes(self) -> int:
        """Estimated reading time, never less than one minute."""
        return max(1, math.ceil(self.word_count / WORDS_PER_MINUTE))


class SiteSettings(_CamelModel):
    """Site-wide settings singleton."""

    title: str
    description: str = ""
    logo_url: str | None = None
    footer_text: str = ""
    homepage_id: str | None = None


class ThemeColors(_CamelModel):
    background: str
    text: str
    primary: str
    secondary: str


class ThemeFonts(_CamelModel):
    heading: str
    body: str


class ThemeConfig(_CamelModel):
    """Color palette and font pair driving the site's CSS variables."""

    id: str
    name: str
    colors: ThemeColors
    fonts: ThemeFonts
