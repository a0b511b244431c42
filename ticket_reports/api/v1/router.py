"""API v1 main router."""

from fastapi import APIRouter

from ticket_reports.api.v1.admin import router as admin_router
from ticket_reports.api.v1.organizer import router as organizer_router

router = APIRouter(prefix="/v1")

router.include_router(admin_router, prefix="/admin", tags=["Admin"])
router.include_router(organizer_router, prefix="/organizer", tags=["Organizer"])
