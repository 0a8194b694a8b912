"""Thin httpx wrapper over the agent service's thread/message/run resources.

Two URL layouts are in use across deployments:
  project: {endpoint}/openai/agents/v1/projects/{project_id}/threads/...
  flat:    {endpoint}/threads/...
Both take the ``api-version`` query parameter when one is configured.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from mealplanner.agents.schemas import Run
from mealplanner.config import Settings
from mealplanner.errors import UpstreamError

logger = logging.getLogger(__name__)


def _id_from(payload: Any, *keys: str) -> str | None:
    if not isinstance(payload, dict):
        return None
    for key in keys:
        value = payload.get(key)
        if value:
            return str(value)
    return None


class AgentsClient:
    """One instance per plan request; carries that request's auth headers."""

    def __init__(self, settings: Settings, http: httpx.AsyncClient, auth_headers: dict[str, str]) -> None:
        self._settings = settings
        self._http = http
        self._headers = {**auth_headers, "Content-Type": "application/json"}

    @property
    def base_path(self) -> str:
        endpoint = self._settings.project_endpoint
        if self._settings.path_style == "flat":
            return endpoint
        return f"{endpoint}/openai/agents/v1/projects/{self._settings.project_id}"

    def _params(self, **extra: str) -> dict[str, str]:
        params = {}
        if self._settings.api_version:
            params["api-version"] = self._settings.api_version
        params.update({k: v for k, v in extra.items() if v})
        return params

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Send one request; return parsed JSON (or None for a non-JSON body).

        Raises UpstreamError on transport failure or a non-2xx status.
        """
        url = f"{self.base_path}{path}"
        try:
            response = await self._http.request(
                method,
                url,
                headers=self._headers,
                json=json,
                params=params if params is not None else self._params(),
            )
        except httpx.HTTPError as e:
            raise UpstreamError(operation, str(e) or type(e).__name__) from e

        raw = response.text
        if not response.is_success:
            raise UpstreamError(
                operation,
                f"({response.status_code}): {raw or response.reason_phrase}",
                upstream_status=response.status_code,
                body=raw,
            )
        try:
            return response.json()
        except ValueError:
            return None

    async def create_thread(self) -> str:
        payload = await self._request("Create thread", "POST", "/threads", json={})
        thread_id = _id_from(payload, "id", "threadId", "thread_id")
        if not thread_id:
            raise UpstreamError("Create thread", "response missing id", body=str(payload))
        return thread_id

    async def add_message(self, thread_id: str, prompt: str) -> None:
        content: Any = prompt
        if self._settings.message_content_format == "blocks":
            content = [{"type": "text", "text": prompt}]
        await self._request(
            "Add message",
            "POST",
            f"/threads/{thread_id}/messages",
            json={"role": "user", "content": content},
        )

    async def create_run(self, thread_id: str) -> str:
        body = {self._settings.run_agent_field: self._settings.agent_id}
        payload = await self._request("Create run", "POST", f"/threads/{thread_id}/runs", json=body)
        run_id = _id_from(payload, "id", "runId", "run_id")
        if not run_id:
            raise UpstreamError("Create run", "response missing id", body=str(payload))
        return run_id

    async def get_run(self, thread_id: str, run_id: str) -> Run:
        payload = await self._request("Run status", "GET", f"/threads/{thread_id}/runs/{run_id}")
        if not isinstance(payload, dict):
            raise UpstreamError("Run status", "response is not a JSON object", body=str(payload))
        run = Run.from_payload(payload, run_id=run_id)
        if not run.status:
            raise UpstreamError("Run status", "response missing status", body=str(payload))
        return run

    async def list_messages(self, thread_id: str) -> Any:
        return await self._request(
            "List messages",
            "GET",
            f"/threads/{thread_id}/messages",
            params=self._params(order=self._settings.list_order),
        )
