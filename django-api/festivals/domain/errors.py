"""Domain error codes for the festivals module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    FESTIVAL_NOT_FOUND = "FESTIVAL_NOT_FOUND"
    SET_NOT_FOUND = "SET_NOT_FOUND"
    PLAN_NOT_FOUND = "PLAN_NOT_FOUND"
    INVALID_FESTIVAL_SLUG = "INVALID_FESTIVAL_SLUG"
    INVALID_SET_ID = "INVALID_SET_ID"
    INVALID_PLAN_ID = "INVALID_PLAN_ID"
    INVALID_DAY = "INVALID_DAY"
    SEED_VALIDATION_FAILED = "SEED_VALIDATION_FAILED"
    CALENDAR_EXPORT_FAILED = "CALENDAR_EXPORT_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class FestivalNotFoundError(DomainError):
    """Raised when no festival matches a slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.FESTIVAL_NOT_FOUND,
            message="Festival not found",
        )
        object.__setattr__(self, "slug", slug)


class SetNotFoundError(DomainError):
    """Raised when a set does not exist or belongs to another festival."""

    def __init__(self, set_id: str) -> None:
        super().__init__(
            code=ErrorCode.SET_NOT_FOUND,
            message="Set not found for festival",
        )
        object.__setattr__(self, "set_id", set_id)


class PlanNotFoundError(DomainError):
    """Raised when a plan is not found."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(
            code=ErrorCode.PLAN_NOT_FOUND,
            message="Plan not found",
        )
        object.__setattr__(self, "plan_id", plan_id)


class InvalidFestivalSlugError(DomainError):
    """Raised when a festival slug is malformed."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FESTIVAL_SLUG,
            message="Invalid festival slug",
        )


class InvalidSetIdError(DomainError):
    """Raised when a set ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SET_ID,
            message="Invalid set ID format",
        )


class InvalidPlanIdError(DomainError):
    """Raised when a plan ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PLAN_ID,
            message="Invalid plan ID format",
        )


class InvalidDayError(DomainError):
    """Raised when a requested day is malformed or outside the festival."""

    def __init__(self, day: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DAY,
            message="Day is not part of this festival",
        )
        object.__setattr__(self, "day", day)


class SeedValidationError(DomainError):
    """Raised when a festival seed payload is inconsistent."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.SEED_VALIDATION_FAILED,
            message=detail,
        )


class CalendarExportError(DomainError):
    """Raised when a plan cannot be rendered as a calendar."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CALENDAR_EXPORT_FAILED,
            message="Failed to generate calendar",
        )
