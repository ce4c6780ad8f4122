"""Tests for logging setup."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from docscout.config.settings import ObservabilitySettings
from docscout.observability.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_stdlib_records_render_as_json(self) -> None:
        stream = io.StringIO()
        setup_logging(ObservabilitySettings(log_level="debug", log_format="json"), stream=stream)

        logging.getLogger("docscout.core.engine").info("Searching index %s", "products")

        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert entry["event"] == "Searching index products"
        assert entry["level"] == "info"
        assert entry["logger"] == "docscout.core.engine"
        assert "timestamp" in entry

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging(ObservabilitySettings(log_level="warning"), stream=stream)
        logging.getLogger("docscout.test").info("hidden")
        assert stream.getvalue() == ""

    def test_console_format(self) -> None:
        stream = io.StringIO()
        setup_logging(ObservabilitySettings(log_format="console"), stream=stream)
        logging.getLogger("docscout.test").warning("visible")
        assert "visible" in stream.getvalue()

    def test_defaults(self) -> None:
        setup_logging()
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("opensearch").level == logging.WARNING
