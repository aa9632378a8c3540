# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ApplicationError, ErrorKind


def _message_of(error: dict) -> str:
    message = str(error.get("msg", "Invalid value"))
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, str]:
    """Map each failing field to its first message."""
    fields: dict[str, str] = {}

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None) or "unknown"
        fields.setdefault(field_path, _message_of(error))

    return fields


def validation_error(
    message: str | None = None, fields: dict[str, str] | None = None
) -> ApplicationError:
    return ApplicationError.of(ErrorKind.VALIDATION, message, fields=fields)


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    fields = format_pydantic_errors(exc)
    message = next(iter(fields.values()), None)
    raise validation_error(message, fields) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
    "validation_error",
]
