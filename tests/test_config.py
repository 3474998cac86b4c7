"""Tests for src/crabcms/config.py — CMSConfig, TOML loading, env overrides."""

from pathlib import Path
from unittest.mock import patch

import pytest
from crabcms.config import CMSConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove env vars that _apply_env_vars reads so tests see TOML values."""
    for key in (
        "CRABCMS_BACKEND",
        "CRABCMS_DATA_FILE",
        "CRABCMS_SIMULATE_LATENCY",
        "CRABCMS_REMOTE_SOURCE",
        "CRABCMS_EXPORT_DIR",
    ):
        monkeypatch.delenv(key, raising=False)


class TestDefaults:
    def test_storage(self):
        cfg = CMSConfig()
        assert cfg.storage.backend == "local"
        assert cfg.storage.data_file == ".crabcms-data.json"
        assert cfg.storage.simulate_latency is False

    def test_remote(self):
        cfg = CMSConfig()
        assert cfg.remote.source == "public/db.json"
        assert cfg.remote.export_dir == "./downloads"


class TestLoadConfig:
    def test_explicit_path(self, tmp_path: Path):
        toml_path = tmp_path / ".crabcms.toml"
        toml_path.write_text('[storage]\nbackend = "remote"\n\n[remote]\nsource = "site.json"\n')
        cfg = load_config(toml_path)
        assert cfg.storage.backend == "remote"
        assert cfg.remote.source == "site.json"
        assert cfg.remote.export_dir == "./downloads"

    def test_missing_path_returns_defaults(self, tmp_path: Path):
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg.storage.backend == "local"

    def test_searches_cwd(self, tmp_path: Path):
        (tmp_path / ".crabcms.toml").write_text('[storage]\ndata_file = "mine.json"\n')
        with patch("crabcms.config.CONFIG_SEARCH_PATHS", [tmp_path]):
            cfg = load_config()
        assert cfg.storage.data_file == "mine.json"

    def test_global_config_used_when_no_local(self, tmp_path: Path):
        global_path = tmp_path / "global.toml"
        global_path.write_text("[storage]\nsimulate_latency = true\n")
        with (
            patch("crabcms.config.CONFIG_SEARCH_PATHS", [tmp_path / "empty"]),
            patch("crabcms.config.GLOBAL_CONFIG", global_path),
        ):
            cfg = load_config()
        assert cfg.storage.simulate_latency is True

    def test_invalid_toml_returns_defaults(self, tmp_path: Path):
        toml_path = tmp_path / ".crabcms.toml"
        toml_path.write_text("[storage\nbackend = ")
        assert load_config(toml_path).storage.backend == "local"

    def test_invalid_values_return_defaults(self, tmp_path: Path):
        toml_path = tmp_path / ".crabcms.toml"
        toml_path.write_text('[storage]\nbackend = "postgres"\n')
        assert load_config(toml_path).storage.backend == "local"


class TestEnvOverrides:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        toml_path = tmp_path / ".crabcms.toml"
        toml_path.write_text('[remote]\nsource = "from-toml.json"\n')
        monkeypatch.setenv("CRABCMS_REMOTE_SOURCE", "https://cdn.example/db.json")
        monkeypatch.setenv("CRABCMS_BACKEND", "remote")
        monkeypatch.setenv("CRABCMS_SIMULATE_LATENCY", "true")

        cfg = load_config(toml_path)
        assert cfg.remote.source == "https://cdn.example/db.json"
        assert cfg.storage.backend == "remote"
        assert cfg.storage.simulate_latency is True

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CRABCMS_BACKEND", "mongo")
        cfg = load_config(tmp_path / "none.toml")
        assert cfg.storage.backend == "local"
