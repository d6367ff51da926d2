from __future__ import annotations

from ..core.domain.models import Document
from ..core.ports.serializer_port import DocumentSerializerPort
from .schemas import DocumentPayload


class JsonDocumentSerializer(DocumentSerializerPort):
    """Encode documents as UTF-8 JSON. Fields that are None are left out."""

    def serialize(self, document: Document) -> bytes:
        payload = DocumentPayload.from_domain(document)
        return payload.model_dump_json(exclude_none=True).encode("utf-8")
