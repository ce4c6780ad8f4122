"""Configuration."""

from docscout.config.settings import BackendSettings, IndexingSettings, ObservabilitySettings, Settings

__all__ = ["BackendSettings", "IndexingSettings", "ObservabilitySettings", "Settings"]
