# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class Severity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Toast:
    message: str
    severity: Severity = Severity.ERROR
    icon: str | None = None


class Notifier(Protocol):
    def notify(self, toast: Toast) -> None: ...


class Navigator(Protocol):
    def navigate(self, path: str) -> None: ...


class TaskBackend(Protocol):
    async def select_tasks(self, user_id: str) -> Sequence[Mapping[str, Any]]: ...

    async def insert_task(self, user_id: str, values: Mapping[str, Any]) -> Mapping[str, Any]: ...

    async def update_task(
        self, task_id: str, values: Mapping[str, Any]
    ) -> Mapping[str, Any]: ...

    async def delete_task(self, task_id: str) -> None: ...
