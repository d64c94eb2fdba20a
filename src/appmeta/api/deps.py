"""Store handle for request handlers.

The application lifespan creates one ``MetadataStore`` and registers it here;
endpoints receive it through ``Depends(get_store)``. Tests register their own
store to run handlers without starting the lifespan.
"""

from __future__ import annotations

from appmeta.core.store import MetadataStore

_store: MetadataStore | None = None


def set_store(store: MetadataStore | None) -> None:
    """Register the store served to endpoints, or ``None`` to detach it."""
    global _store
    _store = store


def get_store() -> MetadataStore:
    """Return the registered metadata store.

    Raises:
        RuntimeError: If no store is registered, i.e. outside the app lifespan.
    """
    if _store is None:
        raise RuntimeError("Metadata store not initialized. Is the server running?")
    return _store
