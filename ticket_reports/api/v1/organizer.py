"""Organizer report endpoint."""

import logging

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from ticket_reports.api.v1.dependencies import OrganizerCaller, OrganizerReportServiceDep
from ticket_reports.errors import AggregationError
from ticket_reports.schemas.common import DataResponse, ErrorResponse
from ticket_reports.schemas.report import OrganizerReport

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/reports",
    response_model=DataResponse[OrganizerReport],
    summary="Organizer report",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def get_organizer_reports(
    caller: OrganizerCaller,
    report_service: OrganizerReportServiceDep,
) -> DataResponse[OrganizerReport]:
    """Get statistics for the caller's events (every event for admins)."""
    try:
        report = await report_service.build(caller)
    except SQLAlchemyError as e:
        logger.error(f"Error in GET organizer reports: {e}", exc_info=True)
        raise AggregationError(f"Failed to build organizer report: {e}")

    return DataResponse(data=report, message="Organizer reports retrieved successfully")
