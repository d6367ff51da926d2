from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from ..domain.models import Document
from ..ports.rate_limiter_port import RateLimiterPort
from ..ports.serializer_port import DocumentSerializerPort
from ..ports.transport_port import TransportPort

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class CreateDocumentUseCase:
    """Submit one document, waiting for a rate-limit permit first.

    The permit is spent as soon as it is granted: a failed send does not give
    it back. Transport errors propagate unchanged.
    """

    def __init__(
        self,
        rate_limiter: RateLimiterPort,
        serializer: DocumentSerializerPort,
        transport: TransportPort,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._serializer = serializer
        self._transport = transport

    def execute(
        self,
        document: Document,
        signature: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> "httpx.Response":
        self._rate_limiter.acquire(cancel)
        payload = self._serializer.serialize(document)
        logger.debug(f"Sending document doc_id={document.doc_id!r} ({len(payload)} bytes)")
        return self._transport.send(payload, signature=signature)
