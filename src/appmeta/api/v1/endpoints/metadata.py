"""Metadata endpoints — Submit YAML metadata documents and look them up.

- ``POST /metadata`` accepts one YAML document, validates it, and indexes it.
- ``GET /metadata`` performs a multi-attribute lookup; every query parameter
  names an attribute and its value is the search phrase. A document must
  match every parameter.
"""

from __future__ import annotations

import logging

import yaml
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from appmeta.api.deps import get_store
from appmeta.core.exceptions import NormalizationError, StoreError
from appmeta.core.store import MetadataStore
from appmeta.models.metadata import Metadata, load_document, validation_message
from appmeta.models.response import IndexResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/metadata",
    response_model=IndexResponse,
    status_code=201,
    summary="Submit Metadata",
    description=(
        "Submit an application metadata document as YAML (JSON is accepted too). "
        "The document is validated and then indexed by every attribute.\n\n"
        "Required fields: `title`, `version` (semantic version), `maintainers` "
        "(each with `name` and `email`), `company`, `website` (URL), `source` (URL), "
        "`license`, `description` (Markdown)."
    ),
    responses={
        400: {"description": "Body is not valid YAML, or the document failed validation"},
        500: {"description": "Document text could not be indexed"},
    },
)
async def add_metadata(
    request: Request,
    store: MetadataStore = Depends(get_store),
) -> IndexResponse:
    """Validate and index a metadata document.

    Args:
        request: The raw HTTP request; its body holds the YAML document.
        store: The metadata store (injected).

    Returns:
        An IndexResponse describing the indexed document.
    """
    body = await request.body()
    try:
        data = load_document(body)
    except yaml.YAMLError as e:
        raise HTTPException(status_code=400, detail=f"request does not contain valid YAML:\n{e}") from e
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="request does not contain valid YAML:\nexpected a mapping")

    try:
        metadata = Metadata.model_validate(data)
    except ValidationError as e:
        message = validation_message(e)
        logger.info("Rejected metadata document: %s", message)
        raise HTTPException(status_code=400, detail=message) from e

    try:
        await run_in_threadpool(store.add_metadata, metadata)
    except NormalizationError as e:
        logger.error("Failed to index metadata %r: %s", metadata.title, e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    total = len(store)
    logger.info("Indexed metadata %r version %s (%d documents)", metadata.title, metadata.version, total)
    return IndexResponse(title=metadata.title, version=metadata.version, total_documents=total)


@router.get(
    "/metadata",
    response_model=list[Metadata],
    summary="Lookup Metadata",
    description=(
        "Search metadata by one or more attributes, e.g. "
        "`/v1/metadata?title=app%20title&company=smallcorp`.\n\n"
        "Recognized attributes: `title`, `version`, `maintainer_name`, "
        "`maintainer_email`, `company`, `website`, `source`, `license`, "
        "`description`. Version matches exactly; every other attribute matches "
        "when all of the phrase's keywords are present. Only the first value of "
        "a repeated parameter is used."
    ),
    responses={
        400: {"description": "Unknown attribute, or a search phrase that cannot be processed"},
    },
)
def lookup_metadata(
    request: Request,
    store: MetadataStore = Depends(get_store),
) -> list[Metadata]:
    """Return every document matching all supplied attribute filters."""
    params = request.query_params
    terms = {key: params.getlist(key)[0] for key in params.keys()}
    try:
        return store.lookup_metadata(terms)
    except StoreError as e:
        logger.warning("Lookup rejected for %s: %s", sorted(terms), e)
        raise HTTPException(
            status_code=400,
            detail=f"could not retrieve metadata by provided search terms:\n{e}",
        ) from e
