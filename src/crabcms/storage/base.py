"""Storage adapter contract every persistence backend implements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from crabcms.content.models import Post, SiteSettings, ThemeConfig


class StorageAdapter(ABC):
    """Async capability set the presentation layer talks to.

    Lookups return ``None`` for missing items rather than raising.
    Backend I/O failures raise :class:`~crabcms.storage.errors.StorageError`.
    Adapters hand out copies, so mutating a returned object never
    changes stored state; every change goes back through a ``save_*``
    call.
    """

    name: str = "base"

    @abstractmethod
    async def connect(self) -> None:
        """Make the backend ready (seeding if needed). Safe to call repeatedly."""

    @abstractmethod
    async def get_posts(self) -> list[Post]:
        """Return every post and page in backend order."""

    @abstractmethod
    async def get_post(self, post_id: str) -> Post | None:
        """Return the item with *post_id*, or None."""

    @abstractmethod
    async def get_post_by_slug(self, slug: str) -> Post | None:
        """Return the first item with *slug*, or None."""

    @abstractmethod
    async def save_post(self, post: Post) -> Post:
        """Insert or update by id and return the record as persisted.

        ``updated_at`` is always rewritten to the current time; inserts
        also get ``created_at`` set to the same instant.
        """

    @abstractmethod
    async def delete_post(self, post_id: str) -> None:
        """Remove the item with *post_id*; unknown ids are a no-op."""

    @abstractmethod
    async def get_settings(self) -> SiteSettings:
        """Return the site settings."""

    @abstractmethod
    async def save_settings(self, settings: SiteSettings) -> SiteSettings:
        """Replace the site settings wholesale."""

    @abstractmethod
    async def get_theme(self) -> ThemeConfig:
        """Return the theme configuration."""

    @abstractmethod
    async def save_theme(self, theme: ThemeConfig) -> ThemeConfig:
        """Replace the theme configuration wholesale."""
