"""Whole-site document and the list mutations both adapters share.

The static document served to the remote adapter (and exported after
every write) has the shape ``{"posts": [...], "settings": {...},
"theme": {...}}``.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from crabcms.content.models import Post, SiteSettings, ThemeConfig
from crabcms.content.seed import default_settings, default_theme, seed_posts


class SiteSnapshot(BaseModel):
    """Every piece of stored state in one document."""

    posts: list[Post] = Field(default_factory=list)
    settings: SiteSettings = Field(default_factory=default_settings)
    theme: ThemeConfig = Field(default_factory=default_theme)

    @classmethod
    def seeded(cls) -> SiteSnapshot:
        return cls(posts=seed_posts())

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def upsert_post(posts: list[Post], post: Post, now: datetime | None = None) -> Post:
    """Insert or replace *post* in *posts* by id, in place.

    Updates keep their position and get a fresh ``updated_at``.  Inserts
    are prepended with ``created_at == updated_at``.  Returns the record
    as stored.
    """
    now = now or datetime.now(tz=UTC)
    for index, existing in enumerate(posts):
        if existing.id == post.id:
            stored = post.model_copy(update={"updated_at": now}, deep=True)
            posts[index] = stored
            return stored.model_copy(deep=True)
    stored = post.model_copy(update={"created_at": now, "updated_at": now}, deep=True)
    posts.insert(0, stored)
    return stored.model_copy(deep=True)


def remove_post(posts: list[Post], post_id: str) -> bool:
    """Drop the item with *post_id*; return whether anything was removed."""
    before = len(posts)
    posts[:] = [p for p in posts if p.id != post_id]
    return len(posts) != before


def find_post(posts: list[Post], *, id: str | None = None, slug: str | None = None) -> Post | None:
    for post in posts:
        if id is not None and post.id == id:
            return post.model_copy(deep=True)
        if slug is not None and post.slug == slug:
            return post.model_copy(deep=True)
    return None
