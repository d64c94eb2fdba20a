"""Configuration — Settings loaded from env vars and YAML files."""

from appmeta.config.settings import IndexSettings, ObservabilitySettings, ServerSettings, Settings

__all__ = ["IndexSettings", "ObservabilitySettings", "ServerSettings", "Settings"]
