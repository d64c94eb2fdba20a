"""Response models for the metadata API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndexResponse(BaseModel):
    """Returned after a metadata document has been validated and indexed."""

    status: str = Field(default="indexed", description="Indexing status")
    title: str = Field(description="Title of the indexed document")
    version: str = Field(description="Version of the indexed document")
    total_documents: int = Field(description="Number of documents in the store after indexing")
