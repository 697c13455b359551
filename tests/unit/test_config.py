"""Unit tests for unique_key.config and unique_key.factory."""

import json
import logging
import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import unique_key
from unique_key import (
    ConfigurationError,
    ElasticsearchStore,
    IndexSettings,
    RegisterFactory,
    Settings,
    StoreConfig,
    load_config,
)
from unique_key.config import configure_logging


@pytest.mark.unit
class TestIndexSettings:
    def test_defaults(self) -> None:
        assert IndexSettings().as_dict() == {"shard_count": 1, "replication": "all-nodes"}

    def test_explicit_keys_only(self) -> None:
        assert IndexSettings(shard_count=2).as_dict() == {"shard_count": 2}

    def test_extra_keys_pass_through(self) -> None:
        settings = IndexSettings.model_validate({"refresh_interval": "1s"})
        assert settings.as_dict() == {"refresh_interval": "1s"}


@pytest.mark.unit
class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            settings = load_config(tmp_path / "nope.json")
        assert settings == Settings()
        assert settings.registry.index == "unique_key"
        assert "not found" in caplog.text

    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "registry": {"index": "users_unique"},
            "store": {"es_uri": "http://es:9200", "refresh": False},
            "log_level": "debug",
        }))
        settings = load_config(path)
        assert settings.registry.index == "users_unique"
        assert settings.store.es_uri == "http://es:9200"
        assert settings.store.refresh is False
        assert settings.log_level == "debug"

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_values(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"registry": {"index": ["a"]}}))
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ConfigurationError):
            configure_logging("loud")


@pytest.mark.unit
class TestRegisterFactory:
    def test_create_with_client(self) -> None:
        client = MagicMock()
        settings = Settings.model_validate({"registry": {"index": "u"}, "store": {"refresh": True}})
        uniq = RegisterFactory.create(settings, client=client)
        assert uniq.index == "u"
        assert isinstance(uniq.store, ElasticsearchStore)
        assert uniq.store.get_connection() is client
        assert uniq.store.refresh is True

    def test_create_builds_client(self) -> None:
        with patch("unique_key.factory.Elasticsearch") as es_cls:
            settings = Settings.model_validate({"store": {"es_uri": "http://es:9200", "request_timeout": 5}})
            uniq = RegisterFactory.create(settings)
        es_cls.assert_called_once_with("http://es:9200", request_timeout=5.0)
        assert uniq.store.get_connection() is es_cls.return_value

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"registry": {"index": "from_file"}}))
        uniq = RegisterFactory.from_file(path, client=MagicMock())
        assert uniq.index == "from_file"


@pytest.mark.unit
class TestStoreConfigRefresh:
    def test_string_false_is_false(self) -> None:
        assert StoreConfig(refresh="false").refresh is False

    def test_wait_for(self) -> None:
        assert StoreConfig().refresh == "wait_for"

    def test_unknown_mode_rejected(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"store": {"refresh": "sometimes"}}))
        with pytest.raises(ConfigurationError):
            load_config(path)


@pytest.mark.unit
def test_import_emits_no_warnings() -> None:
    src = str(Path(unique_key.__file__).resolve().parents[1])
    env = dict(os.environ, PYTHONPATH=os.pathsep.join(filter(None, [src, os.environ.get("PYTHONPATH")])))
    result = subprocess.run(
        [sys.executable, "-W", "error", "-c", "import unique_key"],
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0, result.stderr
