"""
Domain errors raised by the booking services.

Each error is an HTTPException so routers can let it propagate unchanged,
while callers of the service layer can still tell the kinds apart by
class or by ``code``.
"""

from typing import Any, Optional

from fastapi import HTTPException


class DomainError(HTTPException):
    code = "error"
    status_code = 400

    def __init__(self, message: str, **extra: Any):
        self.message = message
        detail: dict[str, Any] = {"error": self.code, "message": message}
        detail.update(extra)
        super().__init__(status_code=self.status_code, detail=detail)


class NotFound(DomainError):
    """Referenced entity does not exist"""

    code = "not_found"
    status_code = 404


class InvalidStatus(DomainError):
    """Status value outside the enumerated set"""

    code = "invalid_status"
    status_code = 400

    def __init__(self, status: Optional[str], valid_statuses: tuple[str, ...]):
        super().__init__(
            f"Invalid status: {status!r}",
            validStatuses=list(valid_statuses),
        )


class InvalidRange(DomainError):
    code = "invalid_range"
    status_code = 400


class Conflict(DomainError):
    code = "conflict"
    status_code = 409


class ReferentialViolation(DomainError):
    """A foreign key target is missing or belongs to someone else"""

    code = "referential_violation"
    status_code = 400


class Forbidden(DomainError):
    code = "forbidden"
    status_code = 403
