from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Optional

from pydantic import ValidationError

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.enums import WindowUnit
from ..core.domain.errors import ConfigurationError
from ..core.domain.models import Document

if TYPE_CHECKING:
    import httpx


class CrptClient:
    """Rate-limited client for the CRPT "create document" API.

    All calls made through one client share a single rate limit, no matter how
    many threads use it. The limiter's background thread and the HTTP
    connection pool are released by :meth:`close`.

    Example:
        # Using default configuration (from environment variables)
        client = CrptClient()
        resp = client.call_api(document, "signature")
        client.close()

        # Using context manager (recommended)
        with CrptClient(window_unit=WindowUnit.SECONDS, request_limit=5) as client:
            resp = client.call_api(document, "signature")

        # Sharing one client between threads
        with CrptClient(request_limit=10) as client, ThreadPoolExecutor(20) as pool:
            futures = [pool.submit(client.call_api, doc, sign) for doc in documents]
    """

    def __init__(
        self,
        *,
        api_url: str | None = None,
        window_unit: WindowUnit | str | None = None,
        request_limit: int | None = None,
        timeout_seconds: float | None = None,
    ):
        """Initialize the client.

        Args:
            api_url: Endpoint to POST documents to.
                     If None, uses CRPT_CLIENT_API_URL or the production endpoint.
            window_unit: Length of one rate-limit window.
                         If None, uses CRPT_CLIENT_WINDOW_UNIT or default (MINUTES).
            request_limit: Maximum calls admitted per window.
                           If None, uses CRPT_CLIENT_REQUEST_LIMIT or default (10).
            timeout_seconds: HTTP timeout for a single call.
                             If None, uses CRPT_CLIENT_TIMEOUT_SECONDS or default (20).

        Raises:
            ConfigurationError: If any setting is invalid (e.g. request_limit <= 0).
        """
        self._container = Container()

        # Build config dict with only provided values
        config_dict: dict[str, object] = {}
        if api_url is not None:
            config_dict["api_url"] = api_url
        if window_unit is not None:
            config_dict["window_unit"] = window_unit
        if request_limit is not None:
            config_dict["request_limit"] = request_limit
        if timeout_seconds is not None:
            config_dict["timeout_seconds"] = timeout_seconds

        if config_dict:
            try:
                config = AppConfig(**config_dict)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid client settings: {e}") from e
            self._container.config.from_pydantic(config)

        try:
            self._container.init_resources()
        except Exception:
            # Stop whatever did start, e.g. the replenisher thread
            self._container.shutdown_resources()
            raise
        self._create_uc = self._container.create_document_uc()
        self._closed = False

    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        """Take one permit from the shared rate limit without making a call."""
        self._container.rate_limiter().acquire(cancel)

    def available_permits(self) -> int:
        return self._container.rate_limiter().available

    def call_api(
        self,
        document: Document,
        signature: str | None = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> "httpx.Response":
        """Submit a document, blocking until the rate limit admits the call.

        Args:
            document: The document to send.
            signature: Document signature, sent in the ``Signature`` header.
            cancel: Optional event; setting it aborts the wait for a permit.

        Returns:
            The HTTP response, whatever its status code.

        Raises:
            CancellationError: ``cancel`` was set before a permit was granted.
            TransportError: The request failed with an I/O error. The permit
                            is still consumed.
        """
        return self._create_uc.execute(document, signature, cancel=cancel)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._container.shutdown_resources()

    def __enter__(self) -> CrptClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
