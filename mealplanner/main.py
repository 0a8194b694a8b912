"""Meal planner proxy entry point.

  Settings -> AgentGateway -> App -> Uvicorn

Uses Starlette lifespan to open and close the gateway's httpx client on the
same event loop as uvicorn.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from starlette.applications import Starlette

from mealplanner.agents.gateway import AgentGateway
from mealplanner.api.rest import create_app
from mealplanner.config import Settings

logger = logging.getLogger(__name__)


def build_app(settings: Settings) -> Starlette:
    """Build the Starlette app with gateway lifecycle management."""
    gateway = AgentGateway(settings)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        await gateway.start()
        app.state.gateway = gateway
        logger.info("Meal planner proxy started (agent %s)", settings.agent_id or "<unset>")
        yield
        await gateway.close()
        logger.info("Meal planner proxy shutdown complete.")

    return create_app(gateway, settings, lifespan=lifespan)


def main() -> None:
    """Entry point -- parse settings, build app, run server."""
    settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    logger.info("Endpoint: %s (%s paths)", settings.project_endpoint or "<unset>", settings.path_style)
    logger.info(
        "Run polling: every %dms, timeout %dms",
        settings.run_poll_interval_ms,
        settings.run_poll_timeout_ms,
    )

    missing = settings.missing_config()
    if missing:
        logger.warning("Missing configuration: %s -- /api/plan will fail", ", ".join(missing))

    app = build_app(settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
