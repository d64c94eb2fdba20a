"""Search endpoint — Keyword search within a single attribute."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from appmeta.api.deps import get_store
from appmeta.core.exceptions import StoreError
from appmeta.core.store import MetadataStore
from appmeta.models.metadata import Metadata

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/search/{attribute}",
    response_model=list[Metadata],
    summary="Single-Attribute Search",
    description=(
        "Return documents whose `attribute` contains every keyword of `q`. "
        "For `version` the phrase must equal the indexed version exactly."
    ),
    responses={
        400: {"description": "Unknown attribute, or a search phrase that cannot be processed"},
    },
)
def search(
    attribute: str,
    q: str = Query(description="Search phrase"),
    store: MetadataStore = Depends(get_store),
) -> list[Metadata]:
    try:
        return store.retrieve_documents(attribute, q)
    except StoreError as e:
        logger.warning("Search rejected on %s: %s", attribute, e)
        raise HTTPException(
            status_code=400,
            detail=f"could not retrieve metadata by provided search terms:\n{e}",
        ) from e
