# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from http import HTTPStatus
from typing import Any

from taskdeck.shared.errors import ApplicationError, ErrorKind

from .connectivity import is_online as _is_online

# PostgREST / Postgres codes surfaced by the backend
SESSION_CODES = frozenset({"PGRST301"})
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NO_ROWS = "PGRST116"

DEFAULT_MESSAGE = "Database operation failed"


def _field(raw: Any, name: str) -> Any:
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def _message_of(raw: Any) -> str | None:
    message = _field(raw, "message")
    if message is None and isinstance(raw, BaseException):
        message = str(raw) or None
    return str(message) if message is not None else None


def _name_of(raw: Any) -> str | None:
    if isinstance(raw, BaseException):
        return type(raw).__name__
    name = _field(raw, "name")
    return str(name) if name is not None else None


def classify(raw: Any) -> ApplicationError:
    """Translate a backend error payload (``message``/``code``) into the taxonomy."""

    message = _message_of(raw) or DEFAULT_MESSAGE
    code = _field(raw, "code")
    code = str(code) if code is not None else None

    if code in SESSION_CODES or "JWT" in message:
        return ApplicationError.of(ErrorKind.SESSION_EXPIRED)

    if code == UNIQUE_VIOLATION:
        return ApplicationError.of(ErrorKind.DUPLICATE_RECORD, "This record already exists")

    if code == FOREIGN_KEY_VIOLATION:
        return ApplicationError.of(
            ErrorKind.APPLICATION,
            "Cannot delete: related records exist",
            status_code=HTTPStatus.BAD_REQUEST,
        )

    if code == NO_ROWS:
        return ApplicationError.of(
            ErrorKind.APPLICATION, "Record not found", status_code=HTTPStatus.NOT_FOUND
        )

    if "row-level security" in message:
        return ApplicationError.of(
            ErrorKind.APPLICATION,
            "You do not have permission to perform this action",
            status_code=HTTPStatus.FORBIDDEN,
        )

    if "fetch" in message or "network" in message:
        return ApplicationError.of(ErrorKind.NETWORK)

    return ApplicationError.of(
        ErrorKind.APPLICATION, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR
    )


def classify_network(
    raw: Any, *, is_online: Callable[[], bool] = _is_online
) -> ApplicationError:
    """Translate a transport failure into OFFLINE, TIMEOUT or NETWORK."""

    if not is_online():
        return ApplicationError.of(ErrorKind.OFFLINE)

    message = _message_of(raw) or ""
    if _name_of(raw) == "TimeoutError" or "timeout" in message:
        return ApplicationError.of(ErrorKind.TIMEOUT)

    return ApplicationError.of(ErrorKind.NETWORK)


__all__ = ["classify", "classify_network"]
