"""Tests for configuration management."""

from pathlib import Path

import pytest

from bakery_ledger.utils.config import Config, get_config, get_database_url


class TestConfig:
    """Tests for Config and the singleton accessor."""

    def test_unknown_environment(self):
        with pytest.raises(ValueError):
            Config("staging")

    def test_test_environment_uses_memory(self, clean_config):
        assert Config("test").database_url == "sqlite:///:memory:"

    def test_explicit_data_dir(self, clean_config, tmp_path):
        config = Config("production", data_dir=tmp_path)
        assert config.database_path == tmp_path / "bakery_ledger.db"
        assert config.database_url.endswith("bakery_ledger.db")
        assert config.is_production
        assert not config.database_exists()

    def test_data_dir_from_environment(self, clean_config, monkeypatch, tmp_path):
        monkeypatch.setenv("BAKERY_LEDGER_DATA_DIR", str(tmp_path))
        assert Config("development").database_path.parent == tmp_path

    def test_production_default_location(self, clean_config):
        config = Config("production")
        assert config.database_path.parent == Path.home() / "Documents" / "BakeryLedger"

    def test_ensure_directories(self, clean_config, tmp_path):
        config = Config("production", data_dir=tmp_path / "nested")
        config.ensure_directories()
        assert (tmp_path / "nested").is_dir()

    def test_singleton_reads_environment(self, clean_config, monkeypatch):
        monkeypatch.setenv("BAKERY_LEDGER_ENV", "test")
        config = get_config()
        assert config.environment == "test"
        assert get_config("production") is config
        assert get_database_url() == "sqlite:///:memory:"

    def test_currency_places(self, clean_config):
        assert Config("test").currency_places == 2

    def test_metadata(self, clean_config):
        config = Config("development")
        assert config.app_name == "Bakery Ledger"
        assert config.app_version == "0.1.0"
        assert config.database_version == "1.0"
        assert config.is_development
        assert not config.is_production
