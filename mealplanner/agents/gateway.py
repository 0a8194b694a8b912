"""Agent gateway -- turns one prompt into one assistant reply.

Drives the agent service protocol for a single request:
  credential -> create thread -> add user message -> create run
  -> poll run until terminal -> list messages -> extract text

Nothing is retried except the run status poll, which waits for a run that
was already committed. A request aborted by the caller leaves the remote run
executing; threads are never deleted.
"""

from __future__ import annotations

import asyncio
import logging
import time

import httpx

from mealplanner.agents.client import AgentsClient
from mealplanner.agents.credentials import build_credential
from mealplanner.agents.extract import extract_assistant_text
from mealplanner.agents.schemas import Run, RunOutcome
from mealplanner.config import Settings
from mealplanner.errors import ConfigError, EmptyResponseError, RunFailedError, RunTimeoutError

logger = logging.getLogger(__name__)


class AgentGateway:
    """Runs the configured agent over a fresh thread for each prompt.

    The httpx client is shared across requests; credentials, threads and
    runs are not.
    """

    def __init__(self, settings: Settings, http: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._http = http
        self._owns_http = http is None
        # Swappable for tests
        self._sleep = asyncio.sleep
        self._clock = time.monotonic

    async def start(self) -> None:
        """Create the shared httpx client unless one was injected."""
        if self._http is not None:
            return
        settings = self._settings
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=settings.http_timeout_connect,
                read=settings.http_timeout_read,
                write=10.0,
                pool=10.0,
            ),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
        )
        self._owns_http = True
        logger.info(
            "Agent gateway ready (auth: %s, paths: %s, run field: %s)",
            "api key" if settings.uses_api_key else "client credentials",
            settings.path_style,
            settings.run_agent_field,
        )

    async def close(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def check_config(self) -> None:
        missing = self._settings.missing_config()
        if missing:
            raise ConfigError(missing)

    async def run(self, prompt: str) -> str:
        """Execute the agent on ``prompt`` and return its non-empty reply.

        Raises a MealPlannerError subclass on any failure.
        """
        self.check_config()
        if self._http is None:
            raise RuntimeError("httpx client not initialized -- call start() first")

        credential = build_credential(self._settings, self._http)
        client = AgentsClient(self._settings, self._http, await credential.auth_headers())

        thread_id = await client.create_thread()
        logger.info("Created thread %s", thread_id)

        await client.add_message(thread_id, prompt)

        run_id = await client.create_run(thread_id)
        logger.info("Started run %s on thread %s", run_id, thread_id)

        await self.wait_for_run(client, thread_id, run_id)

        payload = await client.list_messages(thread_id)
        text = extract_assistant_text(payload)
        if not text:
            raise EmptyResponseError()
        logger.info("Run %s produced %d chars", run_id, len(text))
        return text

    async def wait_for_run(self, client: AgentsClient, thread_id: str, run_id: str) -> Run:
        """Poll until the run succeeds.

        Raises RunFailedError on a failure status and RunTimeoutError once
        ``run_poll_timeout_ms`` has elapsed without a terminal status.
        """
        timeout_ms = self._settings.run_poll_timeout_ms
        interval = self._settings.run_poll_interval_ms / 1000
        start = self._clock()
        polls = 0

        while True:
            run = await client.get_run(thread_id, run_id)
            polls += 1

            if run.outcome is RunOutcome.SUCCEEDED:
                logger.info("Run %s %s after %d polls", run_id, run.status, polls)
                return run
            if run.outcome is RunOutcome.FAILED:
                logger.warning("Run %s ended with status %s", run_id, run.status)
                raise RunFailedError(run.status, run.error_message)

            elapsed_ms = int((self._clock() - start) * 1000)
            if elapsed_ms > timeout_ms:
                raise RunTimeoutError(run.status, elapsed_ms, timeout_ms)

            logger.debug("Run %s status %s (poll %d)", run_id, run.status, polls)
            await self._sleep(interval)
