"""API v1 routers package."""

from ticket_reports.api.v1.admin import router as admin_router
from ticket_reports.api.v1.organizer import router as organizer_router

__all__ = [
    "admin_router",
    "organizer_router",
]
