from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.enums import WindowUnit
from .urls import DEFAULT_API_URL


class AppConfig(BaseSettings):
    """Client configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_CLIENT_ prefix.
    For example:
        - CRPT_CLIENT_API_URL=https://markirovka.sandbox.crptech.ru/api/v3/lk/documents/create
        - CRPT_CLIENT_WINDOW_UNIT=SECONDS
        - CRPT_CLIENT_REQUEST_LIMIT=5
        - CRPT_CLIENT_TIMEOUT_SECONDS=10

    Alternatively, settings can be provided programmatically:
        client = CrptClient(window_unit=WindowUnit.SECONDS, request_limit=5)
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_CLIENT_",
        case_sensitive=False,
        extra="forbid",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Endpoint that documents are POSTed to",
    )

    window_unit: WindowUnit = Field(
        default=WindowUnit.MINUTES,
        description="Length of one rate-limit window (the window is one unit long)",
    )

    request_limit: int = Field(
        default=10,
        ge=1,
        description="Maximum number of calls admitted per window",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="HTTP timeout for a single call",
    )
