"""
API routes split by domain.

Each sub-module defines its own APIRouter which is composed
into the top-level router exposed by this package.
"""
from fastapi import APIRouter

from .health import router as health_router
from .dashboard import router as dashboard_router
from .orders import router as orders_router

router = APIRouter(tags=["api"])

router.include_router(health_router)
router.include_router(dashboard_router)
router.include_router(orders_router)
