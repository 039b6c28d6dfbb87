"""Main API router"""
from fastapi import APIRouter
from . import audits, templates

# Create main router
router = APIRouter()

# Include sub-routers
router.include_router(templates.router, prefix="/templates", tags=["templates"])
router.include_router(audits.router, prefix="/audits", tags=["audits"])
