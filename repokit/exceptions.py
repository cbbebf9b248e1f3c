"""Repository error family.

Every failure leaving a repository operation is a
:class:`RepositoryException`. Its message is always prefixed with the owning
model's name and it carries a normalized list of :class:`ErrorDetail`
records built by :func:`extract_error_details`. The subclass (and ``kind``)
tells callers what went wrong: the backend failed, the located record did
not exist, the payload did not validate, or the repository was wired
incorrectly.
"""

import logging
from enum import Enum

import typing as t
from dataclasses import dataclass, field
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError
from typing import Any

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Discriminator for repository failures."""

    BACKEND = "backend"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class ErrorDetail:
    """One structured detail attached to a repository failure."""

    message: str | None = None
    errors: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "errors": list(self.errors)}


def _as_detail(detail: ErrorDetail | t.Mapping[str, Any]) -> ErrorDetail:
    if isinstance(detail, ErrorDetail):
        return detail
    return ErrorDetail(
        message=detail.get("message"),
        errors=list(detail.get("errors") or []),
    )


class BackendFailure(Exception):
    """Failure raised by storage collaborators.

    Backends that can describe a failure in more detail than a message raise
    this type: ``driver_message`` is the low-level database message,
    ``errors`` the field-level errors, and ``details`` a ready-made detail
    list that repositories adopt unchanged. Mapping entries are converted
    to :class:`ErrorDetail`.
    """

    def __init__(
        self,
        message: str,
        driver_message: str | None = None,
        errors: t.Sequence[Any] | None = None,
        details: t.Sequence[ErrorDetail | t.Mapping[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.driver_message = driver_message
        self.errors = list(errors) if errors else []
        self.details = (
            [_as_detail(detail) for detail in details] if details is not None else None
        )


def extract_error_details(error: BaseException | None) -> list[ErrorDetail]:
    """Normalize an arbitrary failure into a list of error details.

    Args:
        error: The failure reported by the backend or validator

    Returns:
        The adopted detail list, or a single synthesized entry
    """
    if error is None:
        return []

    logger.debug(f"Extracting details from {type(error).__name__}: {error}")

    if isinstance(error, RepositoryException):
        return list(error.details)

    if isinstance(error, BackendFailure):
        if error.details is not None:
            return list(error.details)
        return [
            ErrorDetail(
                message=error.driver_message or error.message,
                errors=error.errors,
            ),
        ]

    if isinstance(error, ValidationError):
        return [
            ErrorDetail(
                message=f"{error.error_count()} validation error(s) for {error.title}",
                errors=list(error.errors()),
            ),
        ]

    if isinstance(error, DBAPIError):
        driver_message = str(error.orig) if error.orig is not None else None
        return [ErrorDetail(message=driver_message or str(error))]

    return [ErrorDetail(message=str(error))]


class RepositoryException(Exception):
    """Base exception for repository operations."""

    kind: t.ClassVar[ErrorKind] = ErrorKind.BACKEND

    def __init__(
        self,
        message: str,
        model_name: str,
        error: BaseException | None = None,
    ) -> None:
        self.message = f"[{model_name}] {message}"
        self.model_name = model_name
        self.details: tuple[ErrorDetail, ...] = tuple(extract_error_details(error))
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "details": [detail.to_dict() for detail in self.details],
        }


class BackendError(RepositoryException):
    """Raised when the storage backend fails during an operation."""

    kind = ErrorKind.BACKEND


class RecordNotFoundError(RepositoryException):
    """Raised when an update or delete cannot locate its record."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, model_name: str, criteria: Any = None) -> None:
        super().__init__("Record not found", model_name)
        self.criteria = criteria


class RepositoryValidationError(RepositoryException):
    """Raised when a payload fails the repository's validation schema."""

    kind = ErrorKind.VALIDATION


class RepositoryConfigurationError(RepositoryException):
    """Raised when a repository or the registry is wired incorrectly."""

    kind = ErrorKind.CONFIGURATION
