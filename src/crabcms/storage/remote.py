"""Static-JSON adapter with export-on-write publishing.

Reads come from a single JSON document (``{posts, settings, theme}``)
fetched once from a URL or file path and then served from memory.  When
the document cannot be fetched the adapter falls back to the seed data,
so a freshly deployed static site still works.

Writes happen in two explicit phases: the in-memory snapshot is updated,
then the whole snapshot is handed to a :class:`SnapshotExporter`.  The
exported file only becomes the published site once someone commits it
back to the location the adapter reads from.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from crabcms.content.models import Post, SiteSettings, ThemeConfig
from crabcms.storage.base import StorageAdapter
from crabcms.storage.errors import StorageUnavailableError
from crabcms.storage.local import decode_post
from crabcms.storage.snapshot import SiteSnapshot, find_post, remove_post, upsert_post

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "public/db.json"
EXPORT_FILENAME = "db.json"

ExportNotifier = Callable[[Path, str], None]


class SnapshotExporter(ABC):
    """Hands a full snapshot to the user for republishing."""

    @abstractmethod
    def export(self, snapshot: SiteSnapshot) -> Path:
        """Write *snapshot* somewhere the user can pick it up; return where."""


class FileExporter(SnapshotExporter):
    """Writes the snapshot as ``db.json`` into a downloads directory."""

    def __init__(self, export_dir: Path, filename: str = EXPORT_FILENAME) -> None:
        self.export_dir = export_dir
        self.filename = filename

    def export(self, snapshot: SiteSnapshot) -> Path:
        path = self.export_dir / self.filename
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(snapshot.to_json(), encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot export snapshot to {path}: {exc}") from exc
        return path


def log_export(path: Path, source: str) -> None:
    logger.info("Exported site data to %s; commit it as %s to publish", path, source)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_document(source: str, timeout: float = 10.0) -> dict:
    """Fetch and decode the static document from a URL or path.

    Raises:
        OSError: When the source cannot be read (urllib errors included).
        json.JSONDecodeError: When the body is not JSON.
    """
    if _is_url(source):
        req = urllib.request.Request(source, headers={"Accept": "application/json"})
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            if not 200 <= resp.status < 300:
                raise urllib.error.HTTPError(source, resp.status, resp.reason, resp.headers, None)
            return json.loads(resp.read().decode("utf-8"))
    return json.loads(Path(source).read_text(encoding="utf-8"))


def parse_document(raw: object) -> SiteSnapshot:
    """Validate a fetched document, back-filling ``type`` on old items."""
    if not isinstance(raw, dict):
        raise ValueError("Site document must be a JSON object")
    data = dict(raw)
    posts = data.get("posts") or []
    if not isinstance(posts, list):
        raise ValueError("Site document 'posts' must be a list")
    data["posts"] = [decode_post(item) for item in posts]
    return SiteSnapshot.model_validate(data)


class RemoteJSONAdapter(StorageAdapter):
    """Adapter over a static JSON document plus an exporter.

    Args:
        source: URL or filesystem path of the published document.
        exporter: Where writes are exported; defaults to ``./downloads``.
        notify: Called with the export path and *source* after each export.
        timeout: Fetch timeout in seconds.
        fetcher: Replacement for :func:`fetch_document`, mainly for tests.
    """

    name = "remote"

    def __init__(
        self,
        source: str = DEFAULT_SOURCE,
        *,
        exporter: SnapshotExporter | None = None,
        notify: ExportNotifier | None = None,
        timeout: float = 10.0,
        fetcher: Callable[[str, float], dict] | None = None,
    ) -> None:
        self.source = source
        self.exporter = exporter or FileExporter(Path("downloads"))
        self.notify = notify or log_export
        self.timeout = timeout
        self._fetch = fetcher or fetch_document
        self._snapshot: SiteSnapshot | None = None
        self.used_fallback = False
        self.export_count = 0

    # ── Private helpers ──────────────────────────────────────────

    async def _load(self) -> SiteSnapshot:
        if self._snapshot is not None:
            return self._snapshot
        try:
            raw = await asyncio.to_thread(self._fetch, self.source, self.timeout)
            snapshot = parse_document(raw)
            logger.info("Loaded %d item(s) from %s", len(snapshot.posts), self.source)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Could not load %s (%s), using seed data", self.source, exc)
            snapshot = SiteSnapshot.seeded()
            self.used_fallback = True
        # Another coroutine may have finished loading while we awaited.
        if self._snapshot is None:
            self._snapshot = snapshot
        return self._snapshot

    # ── Export ───────────────────────────────────────────────────

    async def export(self) -> Path:
        """Export the current snapshot and notify the user.

        Raises:
            StorageUnavailableError: When the exporter cannot write.
        """
        snapshot = await self._load()
        path = await asyncio.to_thread(self.exporter.export, snapshot.model_copy(deep=True))
        self.export_count += 1
        self.notify(path, self.source)
        return path

    # ── Adapter contract ─────────────────────────────────────────

    async def connect(self) -> None:
        await self._load()

    async def get_posts(self) -> list[Post]:
        snapshot = await self._load()
        return [p.model_copy(deep=True) for p in snapshot.posts]

    async def get_post(self, post_id: str) -> Post | None:
        snapshot = await self._load()
        return find_post(snapshot.posts, id=post_id)

    async def get_post_by_slug(self, slug: str) -> Post | None:
        snapshot = await self._load()
        return find_post(snapshot.posts, slug=slug)

    async def save_post(self, post: Post) -> Post:
        snapshot = await self._load()
        stored = upsert_post(snapshot.posts, post)
        await self.export()
        return stored

    async def delete_post(self, post_id: str) -> None:
        snapshot = await self._load()
        remove_post(snapshot.posts, post_id)
        await self.export()

    async def get_settings(self) -> SiteSettings:
        snapshot = await self._load()
        return snapshot.settings.model_copy(deep=True)

    async def save_settings(self, settings: SiteSettings) -> SiteSettings:
        snapshot = await self._load()
        snapshot.settings = settings.model_copy(deep=True)
        await self.export()
        return settings.model_copy(deep=True)

    async def get_theme(self) -> ThemeConfig:
        snapshot = await self._load()
        return snapshot.theme.model_copy(deep=True)

    async def save_theme(self, theme: ThemeConfig) -> ThemeConfig:
        snapshot = await self._load()
        snapshot.theme = theme.model_copy(deep=True)
        await self.export()
        return theme.model_copy(deep=True)
