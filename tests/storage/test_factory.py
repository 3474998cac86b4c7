"""Tests for create_adapter."""

from pathlib import Path

import pytest
from crabcms.config import CMSConfig
from crabcms.storage import (
    JsonFileKeyValueStore,
    LocalAdapter,
    MemoryKeyValueStore,
    RemoteJSONAdapter,
    create_adapter,
)


class TestCreateAdapter:
    def test_default_is_local_file(self):
        adapter = create_adapter()
        assert isinstance(adapter, LocalAdapter)
        assert isinstance(adapter.store, JsonFileKeyValueStore)
        assert adapter.latency.connect == 0

    def test_empty_data_file_is_in_memory(self):
        config = CMSConfig.model_validate({"storage": {"data_file": ""}})
        adapter = create_adapter(config)
        assert isinstance(adapter.store, MemoryKeyValueStore)

    def test_simulated_latency(self):
        config = CMSConfig.model_validate({"storage": {"simulate_latency": True}})
        adapter = create_adapter(config)
        assert adapter.latency.write_post == pytest.approx(0.4)

    def test_remote(self, tmp_path: Path):
        config = CMSConfig.model_validate(
            {
                "storage": {"backend": "remote"},
                "remote": {"source": "https://example.com/db.json", "export_dir": str(tmp_path)},
            }
        )
        notify = lambda path, source: None  # noqa: E731
        adapter = create_adapter(config, notify=notify)
        assert isinstance(adapter, RemoteJSONAdapter)
        assert adapter.source == "https://example.com/db.json"
        assert adapter.exporter.export_dir == tmp_path
        assert adapter.notify is notify

    def test_unknown_backend(self):
        config = CMSConfig()
        config.storage.backend = "postgres"  # type: ignore[assignment]
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_adapter(config)
