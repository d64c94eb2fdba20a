"""Observability — Logging setup."""

from appmeta.observability.logging import setup_logging

__all__ = ["setup_logging"]
