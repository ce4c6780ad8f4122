"""Application settings: Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (DOCSCOUT_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class BackendSettings(BaseModel):
    """Search backend connection configuration."""

    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Backend node URLs")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    extra: dict[str, Any] = Field(default_factory=dict, description="Extra keyword arguments for the client")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class IndexingSettings(BaseModel):
    """Index write behaviour."""

    document_refresh: bool = Field(
        default=True,
        description="Refresh affected shards after update/delete/flush so writes are searchable immediately",
    )
    chunk_size: int = Field(default=500, ge=1, description="Records per bulk call during import")
    per_page: int = Field(default=15, ge=1, description="Page size for record types that do not set their own")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the DOCSCOUT_ prefix.
    Nested settings use double underscores.

    Example:
        DOCSCOUT_BACKEND__HOSTS='["https://search-1:9200", "https://search-2:9200"]'
        DOCSCOUT_INDEXING__DOCUMENT_REFRESH=false
        DOCSCOUT_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "DOCSCOUT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    backend: BackendSettings = Field(default_factory=BackendSettings)
    indexing: IndexingSettings = Field(default_factory=IndexingSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
