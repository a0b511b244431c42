"""Caller authorization and report scope."""

from dataclasses import dataclass

from ticket_reports.errors import ForbiddenError, UnauthorizedError
from ticket_reports.models.user import Role

ORGANIZER_REPORT_ROLES = (Role.ADMIN.value, Role.ORGANIZER.value)


@dataclass(frozen=True)
class Caller:
    """Identity and role taken from trusted request headers."""

    user_id: str | None
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class ReportScope:
    """Event ids an aggregate is restricted to.

    ``event_ids=None`` is the global scope (every event, no filter).
    """

    event_ids: tuple[str, ...] | None = None

    @property
    def is_global(self) -> bool:
        return self.event_ids is None

    @property
    def is_empty(self) -> bool:
        return self.event_ids is not None and not self.event_ids


GLOBAL_SCOPE = ReportScope()


def authorize_admin(role: str | None) -> Caller:
    """Validate a caller of the admin report."""
    if not role:
        raise UnauthorizedError("User not authenticated")
    if role != Role.ADMIN.value:
        raise ForbiddenError("Admin access required")
    return Caller(user_id=None, role=Role.ADMIN)


def authorize_organizer(role: str | None, user_id: str | None) -> Caller:
    """Validate a caller of the organizer report."""
    if not role or not user_id:
        raise UnauthorizedError("User not authenticated")
    if role not in ORGANIZER_REPORT_ROLES:
        raise ForbiddenError("Organizer or Admin access required")
    return Caller(user_id=user_id, role=Role(role))
