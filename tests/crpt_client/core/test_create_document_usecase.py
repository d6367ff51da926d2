from __future__ import annotations

import threading
from unittest.mock import Mock

import httpx
import pytest

from crpt_client.core.domain.errors import CancellationError, TransportError
from crpt_client.core.domain.models import Document
from crpt_client.core.ports.serializer_port import DocumentSerializerPort
from crpt_client.core.ports.transport_port import TransportPort
from crpt_client.core.usecases.create_document import CreateDocumentUseCase


class FakeSerializer(DocumentSerializerPort):
    def serialize(self, document: Document) -> bytes:
        return f"doc:{document.doc_id}".encode("utf-8")


class RecordingTransport(TransportPort):
    def __init__(self, status_code: int = 200) -> None:
        self.sent: list[tuple[bytes, str | None]] = []
        self._status_code = status_code

    def send(self, payload: bytes, *, signature: str | None = None) -> httpx.Response:
        self.sent.append((payload, signature))
        return httpx.Response(self._status_code)


class FailingTransport(TransportPort):
    def __init__(self) -> None:
        self.error = TransportError("connection reset")
        self.calls = 0

    def send(self, payload: bytes, *, signature: str | None = None) -> httpx.Response:
        self.calls += 1
        raise self.error


def test_execute_acquires_then_sends(make_limiter):
    limiter = make_limiter(2)
    transport = RecordingTransport(status_code=201)
    uc = CreateDocumentUseCase(rate_limiter=limiter, serializer=FakeSerializer(), transport=transport)

    resp = uc.execute(Document(doc_id="42"), "sig")

    assert resp.status_code == 201
    assert transport.sent == [(b"doc:42", "sig")]
    assert limiter.available == 1


def test_acquire_happens_before_serialization():
    calls: list[str] = []
    limiter = Mock()
    limiter.acquire.side_effect = lambda cancel=None: calls.append("acquire")
    serializer = Mock()
    serializer.serialize.side_effect = lambda d: calls.append("serialize") or b"{}"
    transport = Mock()
    transport.send.side_effect = lambda payload, signature=None: calls.append("send") or httpx.Response(200)

    CreateDocumentUseCase(limiter, serializer, transport).execute(Document(), "s")
    assert calls == ["acquire", "serialize", "send"]


def test_transport_failure_propagates_unchanged_and_permit_is_spent(make_limiter):
    limiter = make_limiter(3)
    transport = FailingTransport()
    uc = CreateDocumentUseCase(rate_limiter=limiter, serializer=FakeSerializer(), transport=transport)

    with pytest.raises(TransportError) as excinfo:
        uc.execute(Document(doc_id="1"), "sig")

    assert excinfo.value is transport.error
    assert transport.calls == 1
    assert limiter.available == 2


def test_cancelled_wait_never_reaches_transport(make_limiter):
    limiter = make_limiter(1)
    limiter.acquire()
    transport = RecordingTransport()
    uc = CreateDocumentUseCase(rate_limiter=limiter, serializer=FakeSerializer(), transport=transport)
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(CancellationError):
        uc.execute(Document(doc_id="1"), "sig", cancel=cancel)
    assert transport.sent == []
    assert limiter.available == 0
