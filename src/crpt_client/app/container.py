from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..core.usecases.create_document import CreateDocumentUseCase
from ..infra.document_serializer import JsonDocumentSerializer
from ..infra.http_client import HttpClient
from ..infra.rate_limiter import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


def rate_limiter_resource(window_unit, request_limit):
	"""Create the rate limiter and stop its replenisher thread on shutdown."""
	logger.info(f"Initializing rate limiter: {request_limit} call(s) per {window_unit}")
	limiter = FixedWindowRateLimiter.for_unit(window_unit, request_limit)
	try:
		yield limiter
	finally:
		logger.debug("Closing rate limiter")
		limiter.close()


def http_client_resource(api_url, timeout_seconds):
	logger.info(f"Initializing HTTP client for {api_url}")
	client = HttpClient(url=api_url, timeout_seconds=timeout_seconds)
	try:
		yield client
	finally:
		logger.debug("Closing HTTP client")
		client.close()


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	# One limiter per container: every call made through it shares the same permits
	rate_limiter = providers.Resource(
		rate_limiter_resource,
		window_unit=config.window_unit,
		request_limit=config.request_limit,
	)

	http_client = providers.Resource(
		http_client_resource,
		api_url=config.api_url,
		timeout_seconds=config.timeout_seconds,
	)

	serializer = providers.Factory(JsonDocumentSerializer)

	create_document_uc = providers.Factory(
		CreateDocumentUseCase,
		rate_limiter=rate_limiter,
		serializer=serializer,
		transport=http_client,
	)
