"""Admin report endpoint."""

import logging

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from ticket_reports.api.v1.dependencies import (
    AdminCaller,
    AdminReportServiceDep,
    OrganizerFilter,
)
from ticket_reports.errors import AggregationError
from ticket_reports.schemas.common import DataResponse, ErrorResponse
from ticket_reports.schemas.report import AdminReport

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/reports",
    response_model=DataResponse[AdminReport],
    summary="Platform-wide report",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def get_admin_reports(
    caller: AdminCaller,
    report_service: AdminReportServiceDep,
    organizer_id: OrganizerFilter,
) -> DataResponse[AdminReport]:
    """
    Get platform-wide statistics.

    `organizerId` (or the `X-Organizer-Id` header) narrows only the
    recent-events feed; totals are always platform-wide.
    """
    try:
        report = await report_service.build(organizer_id=organizer_id)
    except SQLAlchemyError as e:
        logger.error(f"Error in GET admin reports: {e}", exc_info=True)
        raise AggregationError(f"Failed to build admin report: {e}", sensitive=True)

    return DataResponse(data=report, message="Admin reports retrieved successfully")
