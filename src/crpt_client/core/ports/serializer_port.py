from __future__ import annotations

from typing import Protocol

from ..domain.models import Document


class DocumentSerializerPort(Protocol):
    def serialize(self, document: Document) -> bytes:
        """Encode a document into the request body sent to the API."""
        ...
