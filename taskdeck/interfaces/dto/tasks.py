from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from taskdeck.domain import TITLE_MAX_LENGTH, Priority
from taskdeck.shared.errors import raise_validation_error, validation_error


def _validate_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("title_required", "Task title is required", {})
    if len(value) > TITLE_MAX_LENGTH:
        raise PydanticCustomError(
            "title_too_long",
            "Task title is too long (max {max_length} characters)",
            {"max_length": TITLE_MAX_LENGTH},
        )
    return value


class TaskInsertDTO(BaseModel):
    title: str = Field(default="", validate_default=True)
    priority: Priority = Priority.MEDIUM
    deadline_date: date | None = None
    completed: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _validate_title(value)

    def to_row(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "priority": self.priority.value,
            "deadline_date": self.deadline_date.isoformat() if self.deadline_date else None,
            "completed": self.completed,
        }


class TaskUpdateDTO(BaseModel):
    title: str | None = None
    priority: Priority | None = None
    deadline_date: date | None = None
    completed: bool | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str:
        # only runs when the field is sent; an explicit null would clear the title
        if value is None:
            raise PydanticCustomError("title_required", "Task title is required", {})
        return _validate_title(value)

    def to_row(self) -> dict[str, Any]:
        row = self.model_dump(exclude_unset=True, mode="json")
        if not row:
            raise validation_error("Nothing to update")
        return row


def parse_insert(payload: dict[str, Any]) -> TaskInsertDTO:
    try:
        return TaskInsertDTO.model_validate(payload)
    except ValidationError as exc:
        raise_validation_error(exc)


def parse_update(payload: dict[str, Any]) -> TaskUpdateDTO:
    try:
        return TaskUpdateDTO.model_validate(payload)
    except ValidationError as exc:
        raise_validation_error(exc)
