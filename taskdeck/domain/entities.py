# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain entities for the task manager."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from taskdeck.shared.errors import ApplicationError, ErrorKind

TITLE_MAX_LENGTH = 255


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(slots=True, frozen=True)
class Task:
    """A user's task as stored by the backend."""

    id: str
    created_at: datetime
    updated_at: datetime
    title: str
    completed: bool
    user_id: str
    priority: Priority
    deadline_date: date | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Task:
        try:
            return cls(
                id=str(row["id"]),
                created_at=_parse_datetime(row["created_at"]),
                updated_at=_parse_datetime(row.get("updated_at") or row["created_at"]),
                title=str(row["title"]),
                completed=bool(row.get("completed", False)),
                user_id=str(row["user_id"]),
                priority=Priority(row.get("priority") or Priority.MEDIUM),
                deadline_date=_parse_date(row.get("deadline_date")),
            )
        except (KeyError, ValueError) as exc:
            raise ApplicationError.of(
                ErrorKind.DATABASE, f"Malformed task row: {exc}"
            ) from exc

    def is_overdue(self, today: date) -> bool:
        return (
            not self.completed
            and self.deadline_date is not None
            and self.deadline_date < today
        )
