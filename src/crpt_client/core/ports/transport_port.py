from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    import httpx


class TransportPort(Protocol):
    def send(self, payload: bytes, *, signature: Optional[str] = None) -> "httpx.Response":
        """POST the serialized payload and return the response.

        Raises TransportError on I/O failure. Non-2xx responses are returned as is.
        """
        ...
