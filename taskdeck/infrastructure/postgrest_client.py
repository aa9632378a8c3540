# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Task storage over a PostgREST-compatible REST API."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from taskdeck.shared.config import BackendConfig, load_config
from taskdeck.shared.errors import ApplicationError, ErrorKind
from taskdeck.shared.logging import logger

from .backend_error_mapper import classify, classify_network


@dataclass(frozen=True, slots=True)
class BackendErrorPayload:
    """Error body returned by the backend (``message``/``code``)."""

    message: str | None
    code: str | None
    status: int
    details: str | None = None
    hint: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> BackendErrorPayload:
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            return cls(message=response.text or None, code=None, status=response.status_code)
        return cls(
            message=body.get("message"),
            code=body.get("code"),
            status=response.status_code,
            details=body.get("details"),
            hint=body.get("hint"),
        )


class PostgrestTaskBackend:
    def __init__(
        self,
        access_token: str | None = None,
        *,
        config: BackendConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or load_config().backend
        headers = {
            "apikey": self._config.anon_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=f"{self._config.url}/rest/v1",
            timeout=self._config.request_timeout,
        )
        self._headers = headers
        self._table = f"/{self._config.tasks_table}"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> PostgrestTaskBackend:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        headers = dict(self._headers)
        if prefer:
            headers["Prefer"] = prefer
        try:
            response = await self._client.request(
                method, self._table, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as exc:
            raise classify_network(
                {"name": "TimeoutError", "message": str(exc) or "timeout"}
            ) from exc
        except httpx.TransportError as exc:
            raise classify_network(exc) from exc

        if response.is_error:
            payload = BackendErrorPayload.from_response(response)
            logger.warning(
                f"backend: {method} {self._table} -> {payload.status} "
                f"code={payload.code} message={payload.message}"
            )
            raise classify(payload)
        return response

    async def select_tasks(self, user_id: str) -> Sequence[Mapping[str, Any]]:
        response = await self._request(
            "GET",
            params={"select": "*", "user_id": f"eq.{user_id}", "order": "created_at.desc"},
        )
        rows = response.json()
        return rows if isinstance(rows, list) else []

    async def insert_task(self, user_id: str, values: Mapping[str, Any]) -> Mapping[str, Any]:
        response = await self._request(
            "POST",
            json={**values, "user_id": user_id},
            prefer="return=representation",
        )
        return self._single(response, ErrorKind.TASK_CREATE)

    async def update_task(self, task_id: str, values: Mapping[str, Any]) -> Mapping[str, Any]:
        response = await self._request(
            "PATCH",
            params={"id": f"eq.{task_id}"},
            json=dict(values),
            prefer="return=representation",
        )
        return self._single(response, ErrorKind.TASK_NOT_FOUND)

    async def delete_task(self, task_id: str) -> None:
        response = await self._request(
            "DELETE",
            params={"id": f"eq.{task_id}"},
            prefer="return=representation",
        )
        self._single(response, ErrorKind.TASK_NOT_FOUND)

    @staticmethod
    def _single(response: httpx.Response, missing: ErrorKind) -> Mapping[str, Any]:
        rows = response.json() if response.content else []
        if isinstance(rows, dict):
            return rows
        if not rows:
            raise ApplicationError.of(missing)
        return rows[0]


__all__ = ["BackendErrorPayload", "PostgrestTaskBackend"]
