from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_serializer

from ..core.domain.models import Document, Product

DATE_FORMAT = "%Y-%m-%d"


def _as_date(value: Optional[date]) -> Optional[date]:
	"""Drop the time part of datetimes; the API only takes calendar days."""
	if isinstance(value, datetime):
		return value.date()
	return value


class ProductPayload(BaseModel):
	certificate_document: Optional[str] = None
	certificate_document_date: Optional[date] = None
	certificate_document_number: Optional[str] = None
	owner_inn: Optional[str] = None
	producer_inn: Optional[str] = None
	production_date: Optional[date] = None
	tnved_code: Optional[str] = None
	uit_code: Optional[str] = None
	uitu_code: Optional[str] = None

	@field_serializer("certificate_document_date", "production_date")
	def format_date(self, value: Optional[date]) -> Optional[str]:
		return value.strftime(DATE_FORMAT) if value is not None else None

	@classmethod
	def from_domain(cls, p: Product) -> "ProductPayload":
		return cls(
			certificate_document=p.certificate_document,
			certificate_document_date=_as_date(p.certificate_document_date),
			certificate_document_number=p.certificate_document_number,
			owner_inn=p.owner_inn,
			producer_inn=p.producer_inn,
			production_date=_as_date(p.production_date),
			tnved_code=p.tnved_code,
			uit_code=p.uit_code,
			uitu_code=p.uitu_code,
		)


class DocumentPayload(BaseModel):
	"""Wire shape of a document: snake_case keys, dates as yyyy-MM-dd."""
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
	products: list[ProductPayload] = []
	reg_date: Optional[date] = None
	reg_number: Optional[str] = None

	@field_serializer("production_date", "reg_date")
	def format_date(self, value: Optional[date]) -> Optional[str]:
		return value.strftime(DATE_FORMAT) if value is not None else None

	@classmethod
	def from_domain(cls, d: Document) -> "DocumentPayload":
		return cls(
			description=d.description,
			doc_id=d.doc_id,
			doc_status=d.doc_status,
			doc_type=d.doc_type,
			import_request=d.import_request,
			owner_inn=d.owner_inn,
			participant_inn=d.participant_inn,
			producer_inn=d.producer_inn,
			production_date=_as_date(d.production_date),
			production_type=d.production_type,
			products=[ProductPayload.from_domain(p) for p in d.products],
			reg_date=_as_date(d.reg_date),
			reg_number=d.reg_number,
		)
