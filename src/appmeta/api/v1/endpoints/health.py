"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from appmeta import __version__
from appmeta.api.deps import get_store
from appmeta.core.index import Attribute
from appmeta.core.store import MetadataStore

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="AppMeta server version")
    service: str = Field(description="Service name ('appmeta')")
    total_documents: int = Field(description="Number of indexed metadata documents")
    attributes: list[str] = Field(description="Searchable attribute names")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
    description="Returns overall system health, server version, and the size of the in-memory index.",
)
async def health_check(
    store: MetadataStore = Depends(get_store),
) -> HealthResponse:
    """Basic health check endpoint with index info."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="appmeta",
        total_documents=len(store),
        attributes=[attribute.value for attribute in Attribute],
    )
