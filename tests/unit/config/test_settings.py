"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from docscout.config.settings import BackendSettings, Settings


class TestSettings:
    def test_defaults(self, settings: Settings) -> None:
        assert settings.backend.hosts == ["http://localhost:9200"]
        assert settings.indexing.document_refresh is True
        assert settings.indexing.chunk_size == 500
        assert settings.indexing.per_page == 15
        assert settings.observability.log_format == "json"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCSCOUT_INDEXING__DOCUMENT_REFRESH", "false")
        monkeypatch.setenv("DOCSCOUT_BACKEND__USERNAME", "scout")
        monkeypatch.setenv("DOCSCOUT_INDEXING__PER_PAGE", "40")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.indexing.document_refresh is False
        assert settings.backend.username == "scout"
        assert settings.indexing.per_page == 40

    def test_from_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "docscout.yaml"
        config.write_text("backend:\n  hosts:\n    - https://search:9200\nindexing:\n  chunk_size: 50\n")
        settings = Settings.from_yaml(config)
        assert settings.backend.hosts == ["https://search:9200"]
        assert settings.indexing.chunk_size == 50

    def test_rejects_non_positive_page_size(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCSCOUT_INDEXING__PER_PAGE", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "missing.yaml")


class TestBackendHosts:
    def test_json_list(self) -> None:
        assert BackendSettings(hosts='["http://a:9200", "http://b:9200"]').hosts == ["http://a:9200", "http://b:9200"]

    def test_plain_string(self) -> None:
        assert BackendSettings(hosts="http://a:9200").hosts == ["http://a:9200"]

    def test_empty_string(self) -> None:
        assert BackendSettings(hosts="").hosts == []
