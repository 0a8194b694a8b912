"""Credentials for the agent service.

Two modes, chosen by configuration:
  - ApiKeyCredential: a pre-shared key sent as the ``api-key`` header.
  - ClientCredentialsProvider: Entra OAuth2 client_credentials exchange,
    yielding a bearer token scoped to the Cognitive Services resource.

Tokens are fetched fresh for every plan request and never cached.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from mealplanner.config import Settings
from mealplanner.errors import AuthError

logger = logging.getLogger(__name__)


class Credential(Protocol):
    async def auth_headers(self) -> dict[str, str]: ...


class ApiKeyCredential:
    """Static pre-shared key."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    async def auth_headers(self) -> dict[str, str]:
        return {"api-key": self._api_key}


class ClientCredentialsProvider:
    """OAuth2 client_credentials token exchange over httpx."""

    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    @property
    def token_url(self) -> str:
        return f"{self._settings.token_authority}/{self._settings.tenant_id}/oauth2/v2.0/token"

    async def get_token(self) -> str:
        """Exchange tenant/client id/secret for an access token.

        Raises AuthError on transport failure, a non-2xx status, or a
        response without ``access_token``.
        """
        form = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "scope": self._settings.token_scope,
            "grant_type": "client_credentials",
        }
        try:
            response = await self._http.post(self.token_url, data=form)
        except httpx.HTTPError as e:
            raise AuthError(f"Token request failed: {e}") from e

        raw = response.text
        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            description = None
            if isinstance(data, dict):
                description = data.get("error_description") or data.get("error")
            raise AuthError(
                f"Token request failed ({response.status_code}). {description or raw or 'No details'}",
                upstream_status=response.status_code,
                body=raw,
            )

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise AuthError(
                "Token response missing access_token",
                upstream_status=response.status_code,
                body=raw,
            )

        logger.debug("Acquired access token for tenant %s", self._settings.tenant_id)
        return token

    async def auth_headers(self) -> dict[str, str]:
        token = await self.get_token()
        return {"Authorization": f"Bearer {token}"}


def build_credential(settings: Settings, http: httpx.AsyncClient) -> Credential:
    """Pick the credential mode from settings (API key wins when set)."""
    if settings.uses_api_key:
        return ApiKeyCredential(settings.api_key)
    return ClientCredentialsProvider(settings, http)
