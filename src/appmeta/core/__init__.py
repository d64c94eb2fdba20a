"""Search core — Normalizer, inverted index, and the metadata store."""

from appmeta.core.exceptions import NormalizationError, StoreError, UnknownAttributeError
from appmeta.core.index import Attribute, PostingStore
from appmeta.core.normalizer import normalize
from appmeta.core.store import MetadataStore

__all__ = [
    "Attribute",
    "MetadataStore",
    "NormalizationError",
    "PostingStore",
    "StoreError",
    "UnknownAttributeError",
    "normalize",
]
