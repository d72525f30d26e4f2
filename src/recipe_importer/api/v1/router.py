"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under /api/v1/recipe-import/ via the v1_prefix configuration.
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_importer.api.v1.endpoints import health, recipes


router = APIRouter()

router.include_router(health.router)
router.include_router(recipes.router)
