"""Domain error codes and exceptions.

Handlers map these to HTTP responses in ``nightflow.main``; the core
calculator and rebalancer never raise for missing data (they return None).
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
    REPORT_NOT_FOUND = "REPORT_NOT_FOUND"
    INVALID_PARTNER_SPLIT = "INVALID_PARTNER_SPLIT"
    HOUSE_PARTNER_LOCKED = "HOUSE_PARTNER_LOCKED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"


STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: 404,
    ErrorCode.ENTRY_NOT_FOUND: 404,
    ErrorCode.REPORT_NOT_FOUND: 404,
    ErrorCode.INVALID_PARTNER_SPLIT: 400,
    ErrorCode.HOUSE_PARTNER_LOCKED: 400,
    ErrorCode.INVALID_CREDENTIALS: 401,
    ErrorCode.INVALID_TOKEN: 401,
}


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    @property
    def status_code(self) -> int:
        return STATUS_BY_CODE.get(self.code, 400)


class EventNotFoundError(DomainError):
    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class EntryNotFoundError(DomainError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(code=ErrorCode.ENTRY_NOT_FOUND, message="Event entry not found")
        self.entry_id = entry_id


class ReportNotFoundError(DomainError):
    """Raised when an event exists but has no entry to report on."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.REPORT_NOT_FOUND, message="No entries to report for this event")
        self.event_id = event_id


class InvalidPartnerSplitError(DomainError):
    def __init__(self, total: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PARTNER_SPLIT,
            message=f"Partner percentages must add up to 100% (currently {total}%).",
        )
        self.total = total


class HousePartnerLockedError(DomainError):
    def __init__(self, name: str) -> None:
        super().__init__(
            code=ErrorCode.HOUSE_PARTNER_LOCKED,
            message=f"The {name} partner is required and cannot be removed or renamed.",
        )


class InvalidCredentialsError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_CREDENTIALS, message="Invalid username or password")


class InvalidTokenError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_TOKEN, message="Invalid token")
