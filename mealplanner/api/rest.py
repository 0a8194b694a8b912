"""REST API for the meal planner proxy.

Endpoints:
  POST /api/plan       - Run the planner agent on a prompt -> {text}
  POST /api/plan/cart  - Split plan text, extract ASINs, build cart link
  GET  /api/pantry     - Approved pantry catalog
  GET  /health         - Health check (configuration completeness)

Failures always carry a JSON body: {"error": ..., "details": {...}}.
"""

from __future__ import annotations

import logging
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from mealplanner.agents.gateway import AgentGateway
from mealplanner.config import Settings
from mealplanner.errors import MealPlannerError, ValidationError
from mealplanner.planner import APPROVED_PANTRY, STARTER_CART_ITEMS, build_cart

logger = logging.getLogger(__name__)

# Accepted for compatibility, in priority order
_PROMPT_FIELDS = ("prompt", "input", "text")
# Older clients sent these; the agent target is server-side config only
_IGNORED_OVERRIDES = ("endpoint", "agentId", "agent_id", "projectId", "apiKey")


def _error_response(exc: MealPlannerError) -> JSONResponse:
    body: dict[str, Any] = {"error": str(exc)}
    details = exc.details()
    if details:
        body["details"] = details
    return JSONResponse(body, status_code=exc.status_code)


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except Exception:
        raise ValidationError("Invalid JSON body") from None
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def parse_prompt(body: dict[str, Any]) -> str:
    """First truthy prompt field; must be a non-empty string."""
    prompt = next((body[f] for f in _PROMPT_FIELDS if body.get(f)), None)
    if not isinstance(prompt, str):
        raise ValidationError("Missing 'prompt' (string) in request body.")
    return prompt


def create_app(
    gateway: AgentGateway,
    settings: Settings,
    lifespan: Any | None = None,
) -> Starlette:
    """Create the Starlette ASGI app with all routes."""

    async def plan(request: Request) -> JSONResponse:
        """POST /api/plan - Prompt in, assistant text out."""
        try:
            body = await _read_json_object(request)
            prompt = parse_prompt(body)
            overrides = [k for k in _IGNORED_OVERRIDES if k in body]
            if overrides:
                logger.warning("Ignoring caller-supplied overrides: %s", ", ".join(overrides))
            text = await gateway.run(prompt)
            return JSONResponse({"text": text})
        except MealPlannerError as e:
            logger.error("POST /api/plan failed (%s): %s", type(e).__name__, e)
            return _error_response(e)
        except Exception:
            logger.exception("POST /api/plan unexpected error")
            return JSONResponse({"error": "Internal server error"}, status_code=500)

    async def plan_cart(request: Request) -> JSONResponse:
        """POST /api/plan/cart - Plan/grocery split plus Amazon cart link."""
        try:
            body = await _read_json_object(request)
            text = body.get("text")
            if not isinstance(text, str) or not text.strip():
                raise ValidationError("Missing 'text' (string) in request body.")
        except ValidationError as e:
            return _error_response(e)

        return JSONResponse(
            build_cart(text, tag=settings.amazon_affiliate_tag, fallback=STARTER_CART_ITEMS)
        )

    async def pantry(request: Request) -> JSONResponse:
        """GET /api/pantry - Approved pantry items by section."""
        return JSONResponse({"pantry": APPROVED_PANTRY})

    async def health(request: Request) -> JSONResponse:
        """GET /health - Health check."""
        missing = settings.missing_config()
        if missing:
            return JSONResponse({"status": "unconfigured", "missing": missing}, status_code=503)
        return JSONResponse({"status": "healthy"})

    routes = [
        Route("/api/plan", plan, methods=["POST"]),
        Route("/api/plan/cart", plan_cart, methods=["POST"]),
        Route("/api/pantry", pantry),
        Route("/health", health),
    ]

    kwargs: dict[str, Any] = {"routes": routes}
    if lifespan is not None:
        kwargs["lifespan"] = lifespan
    return Starlette(**kwargs)
