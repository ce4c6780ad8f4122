"""OpenSearch client factory.

Builds the synchronous ``opensearchpy.OpenSearch`` client the engine and the
index administration tooling share. The client pools connections and is safe
to use from several threads.
"""

from __future__ import annotations

import logging
from typing import Any

from opensearchpy import OpenSearch

from docscout.config.settings import BackendSettings
from docscout.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_client(settings: BackendSettings) -> OpenSearch:
    """Create a backend client from connection settings.

    Args:
        settings: Backend connection settings.

    Returns:
        A configured, not yet contacted, ``OpenSearch`` client.

    Raises:
        ConfigurationError: If no hosts are configured or auth is incomplete.
    """
    if not settings.hosts:
        raise ConfigurationError("At least one backend host must be configured.")
    if bool(settings.username) != bool(settings.password):
        raise ConfigurationError("Backend username and password must be set together.")

    client_kwargs: dict[str, Any] = {
        "hosts": settings.hosts,
        "verify_certs": settings.verify_certs,
        "ssl_show_warn": False,
        "timeout": settings.timeout,
    }
    if settings.username and settings.password:
        client_kwargs["http_auth"] = (settings.username, settings.password)

    client_kwargs.update(settings.extra)

    logger.info("Creating search backend client for %s", ", ".join(settings.hosts))
    return OpenSearch(**client_kwargs)
