"""Tests for the backend client factory."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from docscout.backend.client import create_client
from docscout.config.settings import BackendSettings
from docscout.core.exceptions import ConfigurationError


class TestCreateClient:
    def test_passes_connection_options(self) -> None:
        settings = BackendSettings(
            hosts=["https://search:9200"],
            username="scout",
            password="secret",
            verify_certs=False,
            extra={"max_retries": 3},
        )
        with patch("docscout.backend.client.OpenSearch") as opensearch:
            client = create_client(settings)

        assert client is opensearch.return_value
        opensearch.assert_called_once_with(
            hosts=["https://search:9200"],
            verify_certs=False,
            ssl_show_warn=False,
            timeout=10.0,
            http_auth=("scout", "secret"),
            max_retries=3,
        )

    def test_no_auth(self) -> None:
        with patch("docscout.backend.client.OpenSearch") as opensearch:
            create_client(BackendSettings())
        assert "http_auth" not in opensearch.call_args.kwargs

    def test_requires_hosts(self) -> None:
        with pytest.raises(ConfigurationError, match="host"):
            create_client(BackendSettings(hosts=[]))

    def test_requires_complete_auth(self) -> None:
        with pytest.raises(ConfigurationError, match="together"):
            create_client(BackendSettings(username="scout"))
