"""API v1 Router — Metadata submission, search, and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from appmeta.api.v1.endpoints.health import router as health_router
from appmeta.api.v1.endpoints.metadata import router as metadata_router
from appmeta.api.v1.endpoints.search import router as search_router

router = APIRouter(tags=["v1"])
router.include_router(metadata_router)
router.include_router(search_router)
router.include_router(health_router)
