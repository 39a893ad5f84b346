"""
API v1 package.

Contains versioned API routes for the safe house registry.
"""

from fastapi import APIRouter, Depends

from src.api.limiter import rate_limit
from src.api.v1.alerts import router as alerts_router
from src.api.v1.identities import administrators_router, users_router
from src.api.v1.safe_houses import router as safe_houses_router

router = APIRouter(dependencies=[Depends(rate_limit)])
router.include_router(administrators_router)
router.include_router(users_router)
router.include_router(safe_houses_router)
router.include_router(alerts_router)

__all__ = ["router"]
