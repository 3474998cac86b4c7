"""Content services used by the presentation layer and the CLI.

``ContentService`` wraps an injected :class:`StorageAdapter` and adds the
queries and editor rules the site needs on top of the raw contract:
filtering, homepage selection, dashboard counts, and title validation
before anything reaches storage.  It keeps no copies between calls.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from crabcms.content.models import Post, PostStatus, PostType, SiteSettings, ThemeConfig
from crabcms.content.theme import with_color
from crabcms.storage.base import StorageAdapter

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 150
RECENT_LIMIT = 3
DASHBOARD_RECENT_LIMIT = 5


class InvalidContentError(ValueError):
    """Editor input rejected before it reaches the adapter."""


class DashboardStats(BaseModel):
    """Counts shown on the admin dashboard."""

    posts: int = 0
    pages: int = 0
    drafts: int = 0
    published: int = 0
    recent: list[Post] = Field(default_factory=list)


def default_excerpt(content: str) -> str:
    """First 150 characters of *content* plus ``...``.

    Empty content gives an empty excerpt rather than a bare ``...``.
    """
    if not content:
        return ""
    return content[:EXCERPT_LENGTH] + "..."


class ContentService:
    """Presentation-facing operations over a storage adapter."""

    def __init__(self, adapter: StorageAdapter) -> None:
        self.adapter = adapter

    async def connect(self) -> None:
        await self.adapter.connect()

    # ── Queries ──────────────────────────────────────────────────

    async def list_content(
        self,
        post_type: PostType | None = None,
        status: PostStatus | None = None,
    ) -> list[Post]:
        """Return items, optionally filtered by type and/or status."""
        results = await self.adapter.get_posts()
        if post_type is not None:
            results = [p for p in results if p.post_type == post_type]
        if status is not None:
            results = [p for p in results if p.status == status]
        return results

    async def published_posts(self) -> list[Post]:
        """Published blog posts, newest first."""
        posts = await self.list_content(PostType.POST, PostStatus.PUBLISHED)
        dated = [p for p in posts if p.created_at is not None]
        undated = [p for p in posts if p.created_at is None]
        return sorted(dated, key=lambda p: p.created_at, reverse=True) + undated

    async def recent_posts(self, limit: int = RECENT_LIMIT) -> list[Post]:
        return (await self.published_posts())[:limit]

    async def homepage(self) -> Post | None:
        """Return the item configured as the homepage, if it still exists."""
        settings = await self.adapter.get_settings()
        if not settings.homepage_id:
            return None
        return await self.adapter.get_post(settings.homepage_id)

    async def dashboard_stats(self) -> DashboardStats:
        items = await self.adapter.get_posts()
        posts = [p for p in items if p.post_type == PostType.POST]
        return DashboardStats(
            posts=len(posts),
            pages=sum(1 for p in items if p.post_type == PostType.PAGE),
            drafts=sum(1 for p in items if p.status == PostStatus.DRAFT),
            published=sum(1 for p in items if p.status == PostStatus.PUBLISHED),
            recent=posts[:DASHBOARD_RECENT_LIMIT],
        )

    # ── Editor ───────────────────────────────────────────────────

    async def save_content(
        self,
        title: str,
        content: str = "",
        *,
        post_id: str | None = None,
        slug: str = "",
        excerpt: str = "",
        post_type: PostType = PostType.POST,
        status: PostStatus = PostStatus.DRAFT,
        tags: list[str] | None = None,
        cover_image: str | None = None,
    ) -> Post:
        """Create or update an item the way the editor does.

        Raises:
            InvalidContentError: If *title* is blank.
        """
        if not title or not title.strip():
            raise InvalidContentError("Title is required")

        fields: dict[str, object] = {
            "title": title,
            "slug": slug,
            "content": content,
            "excerpt": excerpt or default_excerpt(content),
            "post_type": post_type,
            "status": status,
            "tags": list(tags or []),
            "cover_image": cover_image,
        }
        if post_id is not None:
            fields["id"] = post_id
            existing = await self.adapter.get_post(post_id)
            if existing is not None:
                fields["created_at"] = existing.created_at
                fields["author_id"] = existing.author_id

        saved = await self.adapter.save_post(Post(**fields))
        logger.info("Saved %s %r (%s)", saved.post_type, saved.title, saved.id)
        return saved

    async def delete(self, post_id: str) -> None:
        await self.adapter.delete_post(post_id)

    async def publish(self, post_id: str) -> Post | None:
        """Flip an item to published; returns None if it does not exist."""
        post = await self.adapter.get_post(post_id)
        if post is None:
            return None
        post.status = PostStatus.PUBLISHED
        return await self.adapter.save_post(post)

    # ── Settings and theme ───────────────────────────────────────

    async def set_homepage(self, post_id: str) -> SiteSettings:
        settings = await self.adapter.get_settings()
        settings.homepage_id = post_id
        return await self.adapter.save_settings(settings)

    async def unset_homepage(self) -> SiteSettings:
        settings = await self.adapter.get_settings()
        settings.homepage_id = None
        return await self.adapter.save_settings(settings)

    async def set_theme_color(self, key: str, value: str) -> ThemeConfig:
        theme = await self.adapter.get_theme()
        return await self.adapter.save_theme(with_color(theme, key, value))
