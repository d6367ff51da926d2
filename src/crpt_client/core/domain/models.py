from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Product:
    certificate_document: Optional[str] = None
    certificate_document_date: Optional[date] = None
    certificate_document_number: Optional[str] = None
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[date] = None
    tnved_code: Optional[str] = None
    uit_code: Optional[str] = None
    uitu_code: Optional[str] = None


@dataclass(frozen=True)
class Document:
    """A document submitted to the "create document" endpoint.

    Date fields accept either ``date`` or ``datetime``; only the calendar day
    is sent over the wire.
    """

    description: Optional[str] = None
    doc_id: Optional[str] = None
    doc_status: Optional[str] = None
    doc_type: Optional[str] = None
    import_request: bool = False
    owner_inn: Optional[str] = None
    participant_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[date] = None
    production_type: Optional[str] = None
    products: tuple[Product, ...] = field(default_factory=tuple)
    reg_date: Optional[date] = None
    reg_number: Optional[str] = None
