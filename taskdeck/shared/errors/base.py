# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application error taxonomy.

A single exception type carries a closed ``ErrorKind`` tag instead of a class
hierarchy. Each kind fixes a default status code and message; callers build
errors through :meth:`ApplicationError.of`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any


class ErrorKind(str, Enum):
    APPLICATION = "application"
    AUTHENTICATION = "authentication"
    UNAUTHORIZED = "unauthorized"
    SESSION_EXPIRED = "session_expired"
    VALIDATION = "validation"
    INVALID_INPUT = "invalid_input"
    DATABASE = "database"
    RECORD_NOT_FOUND = "record_not_found"
    DUPLICATE_RECORD = "duplicate_record"
    NETWORK = "network"
    TIMEOUT = "timeout"
    OFFLINE = "offline"
    TASK = "task"
    TASK_NOT_FOUND = "task_not_found"
    TASK_UPDATE = "task_update"
    TASK_DELETE = "task_delete"
    TASK_CREATE = "task_create"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    SERVICE_UNAVAILABLE = "service_unavailable"

    @property
    def label(self) -> str:
        """CamelCase name used in logs, e.g. ``SessionExpiredError``."""
        if self is ErrorKind.APPLICATION:
            return "ApplicationError"
        return "".join(part.capitalize() for part in self.value.split("_")) + "Error"


_DEFAULTS: dict[ErrorKind, tuple[HTTPStatus, str]] = {
    ErrorKind.APPLICATION: (HTTPStatus.INTERNAL_SERVER_ERROR, "An unexpected error occurred"),
    ErrorKind.AUTHENTICATION: (HTTPStatus.UNAUTHORIZED, "Authentication failed"),
    ErrorKind.UNAUTHORIZED: (HTTPStatus.FORBIDDEN, "Unauthorized access"),
    ErrorKind.SESSION_EXPIRED: (
        HTTPStatus.UNAUTHORIZED,
        "Your session has expired. Please sign in again.",
    ),
    ErrorKind.VALIDATION: (HTTPStatus.BAD_REQUEST, "Validation failed"),
    ErrorKind.INVALID_INPUT: (HTTPStatus.BAD_REQUEST, "Invalid input provided"),
    ErrorKind.DATABASE: (HTTPStatus.INTERNAL_SERVER_ERROR, "Database operation failed"),
    ErrorKind.RECORD_NOT_FOUND: (HTTPStatus.NOT_FOUND, "Resource not found"),
    ErrorKind.DUPLICATE_RECORD: (HTTPStatus.CONFLICT, "Record already exists"),
    ErrorKind.NETWORK: (HTTPStatus.SERVICE_UNAVAILABLE, "Network request failed"),
    ErrorKind.TIMEOUT: (HTTPStatus.REQUEST_TIMEOUT, "Request timed out"),
    ErrorKind.OFFLINE: (
        HTTPStatus.SERVICE_UNAVAILABLE,
        "You appear to be offline. Please check your internet connection.",
    ),
    ErrorKind.TASK: (HTTPStatus.BAD_REQUEST, "Task operation failed"),
    ErrorKind.TASK_NOT_FOUND: (HTTPStatus.NOT_FOUND, "Task not found"),
    ErrorKind.TASK_UPDATE: (HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to update task"),
    ErrorKind.TASK_DELETE: (HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to delete task"),
    ErrorKind.TASK_CREATE: (HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to create task"),
    ErrorKind.RATE_LIMIT: (
        HTTPStatus.TOO_MANY_REQUESTS,
        "Too many requests. Please try again later.",
    ),
    ErrorKind.SERVER: (HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error"),
    ErrorKind.SERVICE_UNAVAILABLE: (
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Service temporarily unavailable",
    ),
}

# Kinds whose status code a caller may override.
_CONFIGURABLE_STATUS = frozenset({ErrorKind.APPLICATION, ErrorKind.TASK})


@dataclass(frozen=True, slots=True, eq=False)
class ApplicationError(Exception):
    """Typed failure carried from the point of failure to the dispatcher."""

    kind: ErrorKind
    message: str
    status_code: int
    is_operational: bool = True
    fields: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def of(
        cls,
        kind: ErrorKind,
        message: str | None = None,
        *,
        status_code: int | None = None,
        fields: Mapping[str, str] | None = None,
    ) -> ApplicationError:
        default_status, default_message = _DEFAULTS[kind]
        if status_code is not None and kind not in _CONFIGURABLE_STATUS:
            raise ValueError(f"status code of {kind.label} is fixed at {int(default_status)}")
        return cls(
            kind=kind,
            message=message or default_message,
            status_code=int(status_code if status_code is not None else default_status),
            fields=dict(fields) if fields else None,
        )

    @classmethod
    def record_not_found(cls, resource: str = "Resource") -> ApplicationError:
        return cls.of(ErrorKind.RECORD_NOT_FOUND, f"{resource} not found")

    @property
    def name(self) -> str:
        return self.kind.label

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": self.kind.value,
            "message": self.message,
            "status": self.status_code,
        }
        if self.fields:
            payload["fields"] = dict(self.fields)
        return payload


def is_app_error(error: object) -> bool:
    return isinstance(error, ApplicationError)


def is_operational_error(error: object) -> bool:
    """Whether the error is an expected condition that is safe to show the user."""
    return isinstance(error, ApplicationError) and error.is_operational


__all__ = [
    "ApplicationError",
    "ErrorKind",
    "is_app_error",
    "is_operational_error",
]
