"""Data models — Metadata documents and API payloads."""

from appmeta.models.metadata import Maintainer, Metadata, load_document, validation_message
from appmeta.models.response import IndexResponse

__all__ = ["IndexResponse", "Maintainer", "Metadata", "load_document", "validation_message"]
