"""Storage adapters and the factory that picks one from config."""

from __future__ import annotations

from pathlib import Path

from crabcms.config import CMSConfig
from crabcms.storage.base import StorageAdapter
from crabcms.storage.errors import CorruptDataError, StorageError, StorageUnavailableError
from crabcms.storage.kv import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from crabcms.storage.latency import LatencyProfile
from crabcms.storage.local import LocalAdapter
from crabcms.storage.remote import ExportNotifier, FileExporter, RemoteJSONAdapter


def create_adapter(
    config: CMSConfig | None = None,
    *,
    notify: ExportNotifier | None = None,
) -> StorageAdapter:
    """Build the adapter selected by ``config.storage.backend``.

    Args:
        config: Loaded configuration; defaults are used when omitted.
        notify: Export callback for the remote backend.

    Returns:
        A ready-to-connect StorageAdapter.

    Raises:
        ValueError: If the backend is unknown.
    """
    config = config or CMSConfig()
    backend = config.storage.backend

    if backend == "local":
        store: KeyValueStore
        if config.storage.data_file:
            store = JsonFileKeyValueStore(Path(config.storage.data_file))
        else:
            store = MemoryKeyValueStore()
        latency = LatencyProfile() if config.storage.simulate_latency else LatencyProfile.none()
        return LocalAdapter(store, latency=latency)

    if backend == "remote":
        return RemoteJSONAdapter(
            config.remote.source,
            exporter=FileExporter(Path(config.remote.export_dir)),
            notify=notify,
            timeout=config.remote.timeout,
        )

    raise ValueError(f"Unknown storage backend: {backend!r}")


__all__ = [
    "CorruptDataError",
    "FileExporter",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "LatencyProfile",
    "LocalAdapter",
    "MemoryKeyValueStore",
    "RemoteJSONAdapter",
    "StorageAdapter",
    "StorageError",
    "StorageUnavailableError",
    "create_adapter",
]
