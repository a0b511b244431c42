"""Report error types.

Every error maps to an HTTP status and an error kind rendered in the
error envelope. ``sensitive`` errors carry internal detail that is
replaced by a generic message outside debug mode.
"""

GENERIC_ERROR_MESSAGE = "An internal error occurred while generating the report"


class ReportError(Exception):
    """Base report error."""

    kind = "GenericFailure"
    status_code = 500

    def __init__(self, message: str, *, sensitive: bool = False):
        super().__init__(message)
        self.message = message
        self.sensitive = sensitive

    def public_message(self, debug: bool) -> str:
        """Message safe to return to the caller."""
        if self.sensitive and not debug:
            return GENERIC_ERROR_MESSAGE
        return self.message


class UnauthorizedError(ReportError):
    """Caller identity is missing."""

    kind = "Unauthorized"
    status_code = 401


class ForbiddenError(ReportError):
    """Caller role is not allowed for the report."""

    kind = "Forbidden"
    status_code = 403


class DataStoreUnavailableError(ReportError):
    """Connectivity check against the data store failed."""

    kind = "DataStoreUnavailable"
    status_code = 503


class AggregationError(ReportError):
    """A required aggregate query failed."""

    kind = "AggregationFailure"
    status_code = 500
