"""Settings via pydantic-settings with MEALPLANNER_ env prefix.

Deployment fields use validation_alias to read the same unprefixed env vars
(AZURE_TENANT_ID, PROJECT_ENDPOINT, AGENT_ID, etc.) that the hosting
platform's app settings already define, so one .env drives both.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MEALPLANNER_", env_file=".env", extra="ignore")

    # Entra client credentials (used when api_key is empty)
    tenant_id: str = Field("", validation_alias="AZURE_TENANT_ID")
    client_id: str = Field("", validation_alias="AZURE_CLIENT_ID")
    client_secret: str = Field("", validation_alias="AZURE_CLIENT_SECRET")
    # Pre-shared key, sent as the api-key header
    api_key: str = Field("", validation_alias="AGENTS_API_KEY")

    token_authority: str = "https://login.microsoftonline.com"
    token_scope: str = "https://cognitiveservices.azure.com/.default"

    # Agent service -- runtime endpoint, never accepted from the caller
    project_endpoint: str = Field("", validation_alias="PROJECT_ENDPOINT")
    project_id: str = Field("", validation_alias="PROJECT_ID")
    agent_id: str = Field("", validation_alias="AGENT_ID")

    # Deployment generation
    api_version: str = "2024-05-01-preview"
    path_style: Literal["project", "flat"] = "project"
    run_agent_field: Literal["agent_id", "assistant_id"] = "agent_id"
    message_content_format: Literal["string", "blocks"] = "string"
    list_order: str = "asc"  # empty to omit the order query param

    # Run polling
    run_poll_interval_ms: int = Field(1500, validation_alias="RUN_POLL_INTERVAL_MS")
    run_poll_timeout_ms: int = Field(120000, validation_alias="RUN_POLL_TIMEOUT_MS")

    # Outbound HTTP
    http_timeout_connect: int = 10  # seconds
    http_timeout_read: int = 60  # seconds

    # Shopping cart
    amazon_affiliate_tag: str = Field("", validation_alias="AMAZON_AFFILIATE_TAG")

    # Runtime
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    @field_validator("project_endpoint", "token_authority")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("run_poll_interval_ms", "run_poll_timeout_ms")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("poll settings must be >= 0")
        return value

    @property
    def uses_api_key(self) -> bool:
        return bool(self.api_key)

    def missing_config(self) -> list[str]:
        """Names of required env vars that are not set."""
        missing = []
        if not self.api_key:
            if not self.tenant_id:
                missing.append("AZURE_TENANT_ID")
            if not self.client_id:
                missing.append("AZURE_CLIENT_ID")
            if not self.client_secret:
                missing.append("AZURE_CLIENT_SECRET")
        if not self.project_endpoint:
            missing.append("PROJECT_ENDPOINT")
        if self.path_style == "project" and not self.project_id:
            missing.append("PROJECT_ID")
        if not self.agent_id:
            missing.append("AGENT_ID")
        return missing
