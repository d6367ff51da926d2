"""crpt_client package: app/core/infra/config.

Expose the rate-limited API client at the package level.
"""

from .app.api import CrptClient
from .config.settings import AppConfig
from .core.domain.enums import WindowUnit
from .core.domain.errors import (
    CancellationError,
    ConfigurationError,
    CrptClientError,
    LimiterClosedError,
    TransportError,
)
from .core.domain.models import Document, Product
from .infra.rate_limiter import FixedWindowRateLimiter

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "AppConfig",
    "CancellationError",
    "ConfigurationError",
    "CrptClient",
    "CrptClientError",
    "Document",
    "FixedWindowRateLimiter",
    "LimiterClosedError",
    "Product",
    "TransportError",
    "WindowUnit",
]
