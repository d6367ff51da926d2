from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..config.urls import DEFAULT_API_URL, JSON_MEDIA_TYPE
from ..core.domain.errors import TransportError
from ..core.ports.transport_port import TransportPort

logger = logging.getLogger(__name__)


class HttpClient(TransportPort):
    def __init__(
        self,
        url: str = DEFAULT_API_URL,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        self._url = url
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10
        )

    @property
    def url(self) -> str:
        return self._url

    def send(self, payload: bytes, *, signature: Optional[str] = None) -> httpx.Response:
        headers = {"Content-Type": JSON_MEDIA_TYPE}
        if signature is not None:
            headers["Signature"] = signature
        try:
            resp = self._client.post(self._url, content=payload, headers=headers)
        except httpx.RequestError as e:
            raise TransportError(f"POST {self._url} failed: {e}") from e
        logger.debug(f"POST {self._url} -> {resp.status_code}")
        return resp

    def close(self) -> None:
        self._client.close()
