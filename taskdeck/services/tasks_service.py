# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, TypeVar

from taskdeck.application.interfaces import Severity, TaskBackend, Toast
from taskdeck.domain import Task
from taskdeck.infrastructure.resilience import RetryOptions, with_retry, with_timeout
from taskdeck.interfaces.dto.tasks import parse_insert, parse_update
from taskdeck.shared.errors import ErrorHandlerConfig, with_error_handling
from taskdeck.shared.logging import logger

T = TypeVar("T")


def _utcnow_iso() -> str:
    return datetime.now(UTC).isoformat()


class TasksService:
    """Task use cases as the dashboard performs them."""

    def __init__(
        self,
        backend: TaskBackend,
        user_id: str,
        *,
        error_config: ErrorHandlerConfig | None = None,
        retry_options: RetryOptions | None = None,
        timeout: float | None = None,
    ) -> None:
        self._backend = backend
        self._user_id = user_id
        self._errors = error_config or ErrorHandlerConfig.from_settings()
        self._retry = retry_options
        self._timeout = timeout

    async def _run(self, context: str, call: Callable[[], Awaitable[T]]) -> T:
        return await with_error_handling(call, context, self._errors)()

    def _notify(self, message: str) -> None:
        # the mutation is already committed; toast failures are only logged
        if not self._errors.show_toast:
            return
        try:
            self._errors.notifier.notify(Toast(message, Severity.SUCCESS))
        except Exception:
            logger.exception("tasks: success notification failed")

    async def list_tasks(self) -> list[Task]:
        async def fetch() -> list[Task]:
            rows = await with_timeout(self._backend.select_tasks(self._user_id), self._timeout)
            return [Task.from_row(row) for row in rows]

        tasks = await self._run("Fetch Tasks", lambda: with_retry(fetch, self._retry))
        logger.debug(f"tasks: fetched {len(tasks)} for user={self._user_id}")
        return tasks

    async def create_task(self, payload: dict[str, Any]) -> Task:
        async def create() -> Task:
            dto = parse_insert(payload)
            row = await with_timeout(
                self._backend.insert_task(self._user_id, dto.to_row()), self._timeout
            )
            return Task.from_row(row)

        task = await self._run("Create Task", create)
        self._notify("Task added successfully!")
        return task

    async def update_task(self, task_id: str, payload: dict[str, Any]) -> Task:
        async def update() -> Task:
            values = parse_update(payload).to_row()
            values["updated_at"] = _utcnow_iso()
            row = await with_timeout(self._backend.update_task(task_id, values), self._timeout)
            return Task.from_row(row)

        task = await self._run("Update Task", update)
        self._notify("Task updated successfully!")
        return task

    async def toggle_complete(self, task: Task) -> Task:
        async def toggle() -> Task:
            row = await with_timeout(
                self._backend.update_task(
                    task.id,
                    {"completed": not task.completed, "updated_at": _utcnow_iso()},
                ),
                self._timeout,
            )
            return Task.from_row(row)

        updated = await self._run("Toggle Task Complete", toggle)
        self._notify("Task completed!" if updated.completed else "Task marked as incomplete")
        return updated

    async def delete_task(self, task_id: str) -> None:
        async def delete() -> None:
            await with_timeout(self._backend.delete_task(task_id), self._timeout)

        await self._run("Delete Task", delete)
        self._notify("Task deleted successfully")


__all__ = ["TasksService"]
