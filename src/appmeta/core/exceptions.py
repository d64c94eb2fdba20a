"""Store exceptions."""


class StoreError(Exception):
    """Base exception for metadata store errors."""


class NormalizationError(StoreError):
    """Raised when text cannot be reduced to search tokens."""


class UnknownAttributeError(StoreError):
    """Raised when a search references an attribute that is not indexed."""
