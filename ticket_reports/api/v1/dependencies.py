"""API dependencies."""

from typing import Annotated

from fastapi import Depends, Header, Query, Request

from ticket_reports.config import Settings
from ticket_reports.database import SessionFactory
from ticket_reports.services.access import Caller, authorize_admin, authorize_organizer
from ticket_reports.services.admin_report import AdminReportService
from ticket_reports.services.organizer_report import OrganizerReportService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_session_factory(request: Request) -> SessionFactory:
    """Session factory owned by the application lifespan."""
    return request.app.state.session_factory


AppSettings = Annotated[Settings, Depends(get_app_settings)]
SessionFactoryDep = Annotated[SessionFactory, Depends(get_session_factory)]


async def get_admin_caller(
    x_user_role: Annotated[str | None, Header()] = None,
) -> Caller:
    """
    Validate the admin report caller from headers.
    Identity headers are trusted as verified upstream.
    """
    return authorize_admin(x_user_role)


async def get_organizer_caller(
    x_user_role: Annotated[str | None, Header()] = None,
    x_user_id: Annotated[str | None, Header()] = None,
) -> Caller:
    """Validate the organizer report caller from headers."""
    return authorize_organizer(x_user_role, x_user_id)


async def get_organizer_filter(
    organizer_id: Annotated[str | None, Query(alias="organizerId")] = None,
    x_organizer_id: Annotated[str | None, Header()] = None,
) -> str | None:
    """Optional organizer filter, query parameter first, then header."""
    return organizer_id or x_organizer_id


AdminCaller = Annotated[Caller, Depends(get_admin_caller)]
OrganizerCaller = Annotated[Caller, Depends(get_organizer_caller)]
OrganizerFilter = Annotated[str | None, Depends(get_organizer_filter)]


def get_admin_report_service(
    session_factory: SessionFactoryDep,
    settings: AppSettings,
) -> AdminReportService:
    """Get admin report service."""
    return AdminReportService(session_factory, settings)


def get_organizer_report_service(
    session_factory: SessionFactoryDep,
    settings: AppSettings,
) -> OrganizerReportService:
    """Get organizer report service."""
    return OrganizerReportService(session_factory, settings)


# Annotated dependencies
AdminReportServiceDep = Annotated[AdminReportService, Depends(get_admin_report_service)]
OrganizerReportServiceDep = Annotated[
    OrganizerReportService, Depends(get_organizer_report_service)
]
