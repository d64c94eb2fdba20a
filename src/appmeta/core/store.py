"""Metadata Store — In-memory document store with per-attribute keyword search.

The store owns:
  1. The list of indexed documents, in arrival order
  2. One ``PostingStore`` per searchable attribute
  3. A lock serializing index writes against reads

Writes are all-or-nothing: every field of a document is normalized before
any posting list is touched, and the posting lists are updated under the
lock. A concurrent query therefore never sees a document indexed into only
some of its attributes.

Nothing is persisted. A new store starts empty and is rebuilt by replaying
submissions.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING

from appmeta.core.exceptions import UnknownAttributeError
from appmeta.core.index import Attribute, PostingStore, add_keys, field_keys, match_all_terms
from appmeta.core.normalizer import normalize

if TYPE_CHECKING:
    from appmeta.config.settings import IndexSettings
    from appmeta.models.metadata import Metadata

logger = logging.getLogger(__name__)


def resolve_attribute(name: str | Attribute) -> Attribute:
    """Map an attribute name to its ``Attribute``.

    Raises:
        UnknownAttributeError: If ``name`` is not a searchable attribute.
    """
    try:
        return Attribute(name)
    except ValueError:
        raise UnknownAttributeError(f"cannot retrieve documents by unknown attribute type: {name!r}") from None


class MetadataStore:
    """Stores, indexes, and looks up metadata documents.

    Example:
        >>> store = MetadataStore()
        >>> store.add_metadata(metadata)
        >>> store.retrieve_documents("description", "quick fox")
        >>> store.lookup_metadata({"title": "app title", "company": "smallcorp"})

    Attributes:
        strict_postings: Whether posting lists keep each document at most once
            per key.
    """

    def __init__(self, *, strict_postings: bool = True) -> None:
        self.strict_postings = strict_postings
        self._lock = threading.RLock()
        self._documents: list[Metadata] = []
        self._index: dict[Attribute, PostingStore] = {
            attribute: PostingStore(attribute, strict=strict_postings) for attribute in Attribute
        }

    @classmethod
    def from_settings(cls, settings: IndexSettings) -> MetadataStore:
        return cls(strict_postings=settings.strict_postings)

    # ──────────────────────────────────────────────────────────────────────
    # Indexing
    # ──────────────────────────────────────────────────────────────────────

    def add_metadata(self, metadata: Metadata) -> None:
        """Index ``metadata`` by the value of every attribute.

        Title, maintainer names and emails, company, website, source, license
        and description are tokenized. Version is indexed by its exact value.

        Raises:
            NormalizationError: If any field cannot be normalized. The document
                is then not indexed at all.
        """
        fields: list[tuple[Attribute, str]] = [
            (Attribute.TITLE, metadata.title),
            (Attribute.VERSION, metadata.version),
        ]
        for maintainer in metadata.maintainers:
            fields.append((Attribute.MAINTAINER_NAME, maintainer.name))
            fields.append((Attribute.MAINTAINER_EMAIL, maintainer.email))
        fields.extend(
            [
                (Attribute.COMPANY, metadata.company),
                (Attribute.WEBSITE, metadata.website),
                (Attribute.SOURCE, metadata.source),
                (Attribute.LICENSE, metadata.license),
                (Attribute.DESCRIPTION, metadata.description),
            ]
        )

        planned = [(attribute, field_keys(text, attribute.tokenized)) for attribute, text in fields]

        with self._lock:
            for attribute, keys in planned:
                add_keys(keys, self._index[attribute], metadata, attribute.tokenized)
            self._documents.append(metadata)
            total = len(self._documents)

        logger.debug("Indexed metadata %r (version %s), %d documents in store", metadata.title, metadata.version, total)

    # ──────────────────────────────────────────────────────────────────────
    # Search
    # ──────────────────────────────────────────────────────────────────────

    def retrieve_documents(self, attribute: str | Attribute, query: str) -> list[Metadata]:
        """Return every document matching all search terms in one attribute.

        Version queries are looked up verbatim. Every other attribute is
        normalized like the indexed text and each distinct token must match.

        Args:
            attribute: Attribute name, e.g. ``"description"``.
            query: Raw search phrase.

        Returns:
            Matching documents, possibly empty.

        Raises:
            UnknownAttributeError: If ``attribute`` is not searchable.
            NormalizationError: If the query cannot be normalized.
        """
        attr, keys = self._query_keys(attribute, query)
        with self._lock:
            return self._match(attr, keys)

    def lookup_metadata(self, terms: Mapping[str, str]) -> list[Metadata]:
        """Return documents matching every ``attribute -> query`` pair.

        Each attribute acts as a constraint, so adding attributes can only
        narrow the result. An empty mapping matches nothing.

        Raises:
            UnknownAttributeError: If any attribute is not searchable. No index
                access happens in that case.
            NormalizationError: If any query cannot be normalized.
        """
        queries = [self._query_keys(attribute, query) for attribute, query in terms.items()]
        with self._lock:
            results = [self._match(attr, keys) for attr, keys in queries]
        return match_all_terms(results)

    search = retrieve_documents
    lookup = lookup_metadata

    def _query_keys(self, attribute: str | Attribute, query: str) -> tuple[Attribute, list[str]]:
        attr = resolve_attribute(attribute)
        if not attr.tokenized:
            # do not tokenize version numbers (should include periods)
            return attr, [query]
        return attr, list(dict.fromkeys(normalize(query)))

    def _match(self, attribute: Attribute, keys: list[str]) -> list[Metadata]:
        store = self._index[attribute]
        result = match_all_terms(store.get(key) for key in keys)
        logger.debug("Query on %s with %d terms matched %d documents", attribute.value, len(keys), len(result))
        return result

    # ──────────────────────────────────────────────────────────────────────
    # Bookkeeping
    # ──────────────────────────────────────────────────────────────────────

    @property
    def documents(self) -> tuple[Metadata, ...]:
        """All indexed documents, in arrival order."""
        with self._lock:
            return tuple(self._documents)

    def posting_store(self, attribute: str | Attribute) -> PostingStore:
        """Return the posting store of one attribute (for inspection)."""
        return self._index[resolve_attribute(attribute)]

    def clear(self) -> None:
        """Drop every document and posting list."""
        with self._lock:
            self._documents.clear()
            for store in self._index.values():
                store.clear()
        logger.info("Metadata store cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
