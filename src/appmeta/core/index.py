"""Inverted index — Per-attribute posting stores and AND-intersection helpers.

Each searchable attribute owns one ``PostingStore`` mapping a key (a search
token, or the literal value for exact-match attributes) to the documents
that contain it, in arrival order.

Documents are compared by identity everywhere in this module: two distinct
``Metadata`` objects with equal field values are two distinct results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import TYPE_CHECKING

from appmeta.core.normalizer import normalize

if TYPE_CHECKING:
    from appmeta.models.metadata import Metadata

logger = logging.getLogger(__name__)


class Attribute(str, Enum):
    """Searchable metadata attributes."""

    TITLE = "title"
    VERSION = "version"
    MAINTAINER_NAME = "maintainer_name"
    MAINTAINER_EMAIL = "maintainer_email"
    COMPANY = "company"
    WEBSITE = "website"
    SOURCE = "source"
    LICENSE = "license"
    DESCRIPTION = "description"

    @property
    def tokenized(self) -> bool:
        """Whether values are normalized into tokens before indexing.

        Version strings are matched exactly so their dots survive.
        """
        return self is not Attribute.VERSION


class PostingStore:
    """Inverted index for a single attribute.

    Two duplicate policies are supported:

    - ``strict=True``: a document appears at most once under a key.
    - ``strict=False``: only an immediately repeated insertion of the same
      document is skipped (and only when ``dedupe`` is requested), so a
      document may appear twice under a key if another document was added
      to that key in between.

    Attributes:
        attribute: The attribute this store indexes.
        strict: Whether per-key uniqueness is enforced.
    """

    def __init__(self, attribute: Attribute, *, strict: bool = True) -> None:
        self.attribute = attribute
        self.strict = strict
        self._postings: dict[str, list[Metadata]] = {}
        self._members: dict[str, set[int]] = {}

    def add(self, key: str, document: Metadata, *, dedupe: bool = True) -> bool:
        """Append ``document`` to the posting list of ``key``.

        Args:
            key: Token or exact value.
            document: The document reference to record.
            dedupe: In non-strict mode, skip the append when the list already
                ends with this document. Ignored in strict mode.

        Returns:
            True if the reference was appended.
        """
        postings = self._postings.setdefault(key, [])
        if self.strict:
            members = self._members.setdefault(key, set())
            if id(document) in members:
                return False
            members.add(id(document))
        elif dedupe and postings and postings[-1] is document:
            return False
        postings.append(document)
        return True

    def get(self, key: str) -> list[Metadata]:
        """Return a copy of the posting list for ``key`` (empty if absent)."""
        return list(self._postings.get(key, ()))

    def keys(self) -> list[str]:
        return list(self._postings)

    def clear(self) -> None:
        self._postings.clear()
        self._members.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._postings

    def __len__(self) -> int:
        return len(self._postings)

    def __repr__(self) -> str:
        return f"PostingStore(attribute={self.attribute.value!r}, keys={len(self)}, strict={self.strict})"


def field_keys(text: str, tokenize: bool) -> list[str]:
    """Return the posting keys a field value is indexed under.

    Raises:
        NormalizationError: If ``tokenize`` is set and stemming fails.
    """
    if tokenize:
        return normalize(text)
    return [text]


def add_keys(keys: Iterable[str], store: PostingStore, document: Metadata, tokenize: bool) -> None:
    """Record ``document`` under every key produced by :func:`field_keys`."""
    for key in keys:
        store.add(key, document, dedupe=tokenize)


def index_field(text: str, store: PostingStore, document: Metadata, tokenize: bool) -> None:
    """Index one field value of ``document`` into ``store``.

    When ``tokenize`` is false the whole value is the single key and the
    reference is appended without duplicate suppression (strict stores still
    keep keys unique).

    Raises:
        NormalizationError: If the value cannot be normalized. Nothing is
            written to ``store`` in that case.
    """
    add_keys(field_keys(text, tokenize), store, document, tokenize)


def intersection(left: Sequence[Metadata], right: Sequence[Metadata]) -> list[Metadata]:
    """Return the documents of ``right`` that also appear in ``left``.

    Membership is by identity and the order of ``right`` is preserved.
    """
    seen = {id(document) for document in left}
    return [document for document in right if id(document) in seen]


def match_all_terms(result_sets: Iterable[Sequence[Metadata]]) -> list[Metadata]:
    """Reduce per-term (or per-attribute) results to documents present in all.

    Zero sets yield an empty list and a single set is returned as-is. With
    more, sets are intersected left to right and the reduction stops as
    soon as an intermediate result is empty.
    """
    sets = list(result_sets)
    if not sets:
        return []
    if len(sets) == 1:
        return list(sets[0])

    result = intersection(sets[0], sets[1])
    for documents in sets[2:]:
        if not result:
            break
        result = intersection(result, documents)
    return result
