"""Text normalizer — Turns raw field text into comparable search tokens.

The pipeline runs in a fixed order:
  1. Tokenize: split on every character that is not a letter or a digit
  2. Lowercase
  3. Drop common English words
  4. Stem each remaining token (English Snowball stemmer)

Indexing and querying share this pipeline, so a query token matches an
indexed token exactly when both came from the same stem.
"""

from __future__ import annotations

import logging
import re

from nltk.stem.snowball import SnowballStemmer

from appmeta.core.exceptions import NormalizationError

logger = logging.getLogger(__name__)

# A run of letters and/or digits in any script. ``\w`` minus the underscore.
_TOKEN_PATTERN = re.compile(r"[^\W_]+")

# Top 15 words (OEC rank). Matched after lowercasing, so "I" never matches.
COMMON_WORDS: frozenset[str] = frozenset(
    {
        "the",
        "be",
        "to",
        "of",
        "and",
        "a",
        "in",
        "that",
        "have",
        "I",
        "it",
        "for",
        "not",
        "on",
        "with",
    }
)

_stemmer = SnowballStemmer("english")


def tokenize(text: str) -> list[str]:
    """Split text into runs of letters and digits."""
    return _TOKEN_PATTERN.findall(text)


def to_lowercase(tokens: list[str]) -> list[str]:
    return [token.lower() for token in tokens]


def remove_common_words(tokens: list[str]) -> list[str]:
    return [token for token in tokens if token not in COMMON_WORDS]


def stem(tokens: list[str]) -> list[str]:
    """Reduce every token to its English stem.

    Raises:
        NormalizationError: If any single token cannot be stemmed. No partial
            result is returned.
    """
    stemmed: list[str] = []
    for token in tokens:
        try:
            stemmed.append(_stemmer.stem(token))
        except Exception as e:
            raise NormalizationError(f"unable to stem token: {token!r}: {e}") from e
    return stemmed


def normalize(text: str) -> list[str]:
    """Run the full normalization pipeline over ``text``.

    Duplicates are kept; callers decide how to deduplicate.

    Args:
        text: Raw field value or query string.

    Returns:
        Ordered list of search tokens.

    Raises:
        NormalizationError: If stemming fails for any token.
    """
    tokens = tokenize(text)
    tokens = to_lowercase(tokens)
    tokens = remove_common_words(tokens)
    return stem(tokens)
