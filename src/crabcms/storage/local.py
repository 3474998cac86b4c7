"""Key-value backed adapter (the browser ``localStorage`` mode).

State is three JSON blobs plus a version marker.  Every entry point
first compares the marker with ``SEED_VERSION``; on mismatch the store
is wiped and reseeded.  Reads decode the whole posts blob and search it
in memory, writes re-encode the whole list.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from crabcms.content.models import Post, PostType, SiteSettings, ThemeConfig
from crabcms.content.seed import SEED_VERSION, default_settings, default_theme, seed_posts
from crabcms.storage.base import StorageAdapter
from crabcms.storage.errors import CorruptDataError, StorageUnavailableError
from crabcms.storage.kv import KeyValueStore, MemoryKeyValueStore
from crabcms.storage.latency import LatencyProfile, pause
from crabcms.storage.snapshot import find_post, remove_post, upsert_post

logger = logging.getLogger(__name__)

POSTS_KEY = "crab_cms_posts"
SETTINGS_KEY = "crab_cms_settings"
THEME_KEY = "crab_cms_theme"
VERSION_KEY = "crab_cms_init"

STORAGE_KEYS = (POSTS_KEY, SETTINGS_KEY, THEME_KEY, VERSION_KEY)


def decode_post(item: dict[str, Any]) -> Post:
    """Validate one stored item, treating a missing ``type`` as a post."""
    if not item.get("type"):
        item = {**item, "type": PostType.POST.value}
    return Post.model_validate(item)


class LocalAdapter(StorageAdapter):
    """Adapter over a :class:`KeyValueStore`.

    Args:
        store: Backing store; defaults to a fresh in-memory one.
        latency: Artificial per-operation delays; defaults to none.
        version: Expected seed version marker.
    """

    name = "local"

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        latency: LatencyProfile | None = None,
        version: str = SEED_VERSION,
    ) -> None:
        self.store = store if store is not None else MemoryKeyValueStore()
        self.latency = latency or LatencyProfile.none()
        self.version = version

    # ── Private helpers ──────────────────────────────────────────

    def _get(self, key: str) -> str | None:
        try:
            return self.store.get_item(key)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {key}: {exc}") from exc

    def _set(self, key: str, value: str) -> None:
        try:
            self.store.set_item(key, value)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {key}: {exc}") from exc

    def _remove(self, key: str) -> None:
        try:
            self.store.remove_item(key)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot remove {key}: {exc}") from exc

    def _decode(self, key: str) -> Any:
        data = self._get(key)
        if data is None:
            return None
        try:
            return json.loads(data)
        except json.JSONDecodeError as exc:
            raise CorruptDataError(f"Stored {key} is not valid JSON: {exc}") from exc

    def _ensure_seeded(self) -> None:
        marker = self._get(VERSION_KEY)
        if marker == self.version:
            return
        if marker is None:
            logger.info("Seeding empty store (version %s)", self.version)
        else:
            logger.warning(
                "Store version %s does not match %s, discarding stored content",
                marker,
                self.version,
            )
        for key in (POSTS_KEY, SETTINGS_KEY, THEME_KEY):
            self._remove(key)
        self._write_posts(seed_posts())
        self._set(SETTINGS_KEY, json.dumps(default_settings().to_json_dict()))
        self._set(THEME_KEY, json.dumps(default_theme().to_json_dict()))
        self._set(VERSION_KEY, self.version)

    def _read_posts(self) -> list[Post]:
        raw = self._decode(POSTS_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise CorruptDataError(f"Stored {POSTS_KEY} is not a list")
        try:
            return [decode_post(item) for item in raw]
        except (ValidationError, TypeError, AttributeError) as exc:
            raise CorruptDataError(f"Stored {POSTS_KEY} has an invalid item: {exc}") from exc

    def _write_posts(self, posts: list[Post]) -> None:
        self._set(POSTS_KEY, json.dumps([p.to_json_dict() for p in posts], ensure_ascii=False))

    # ── Adapter contract ─────────────────────────────────────────

    async def connect(self) -> None:
        await pause(self.latency.connect)
        self._ensure_seeded()

    async def get_posts(self) -> list[Post]:
        await pause(self.latency.read)
        self._ensure_seeded()
        return self._read_posts()

    async def get_post(self, post_id: str) -> Post | None:
        return find_post(await self.get_posts(), id=post_id)

    async def get_post_by_slug(self, slug: str) -> Post | None:
        return find_post(await self.get_posts(), slug=slug)

    async def save_post(self, post: Post) -> Post:
        await pause(self.latency.write_post)
        self._ensure_seeded()
        posts = self._read_posts()
        stored = upsert_post(posts, post)
        self._write_posts(posts)
        logger.debug("Saved %s %s", stored.post_type, stored.id)
        return stored

    async def delete_post(self, post_id: str) -> None:
        await pause(self.latency.delete_post)
        self._ensure_seeded()
        posts = self._read_posts()
        if remove_post(posts, post_id):
            logger.debug("Deleted %s", post_id)
        self._write_posts(posts)

    async def get_settings(self) -> SiteSettings:
        self._ensure_seeded()
        raw = self._decode(SETTINGS_KEY)
        if raw is None:
            return default_settings()
        try:
            return SiteSettings.model_validate(raw)
        except ValidationError as exc:
            raise CorruptDataError(f"Stored {SETTINGS_KEY} is invalid: {exc}") from exc

    async def save_settings(self, settings: SiteSettings) -> SiteSettings:
        await pause(self.latency.write_record)
        self._ensure_seeded()
        self._set(SETTINGS_KEY, json.dumps(settings.to_json_dict(), ensure_ascii=False))
        return settings.model_copy(deep=True)

    async def get_theme(self) -> ThemeConfig:
        self._ensure_seeded()
        raw = self._decode(THEME_KEY)
        if raw is None:
            return default_theme()
        try:
            return ThemeConfig.model_validate(raw)
        except ValidationError as exc:
            raise CorruptDataError(f"Stored {THEME_KEY} is invalid: {exc}") from exc

    async def save_theme(self, theme: ThemeConfig) -> ThemeConfig:
        await pause(self.latency.write_record)
        self._ensure_seeded()
        self._set(THEME_KEY, json.dumps(theme.to_json_dict(), ensure_ascii=False))
        return theme.model_copy(deep=True)
