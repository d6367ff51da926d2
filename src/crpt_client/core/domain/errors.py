from __future__ import annotations


class CrptClientError(Exception):
    """Base class for errors raised by crpt_client."""


class ConfigurationError(CrptClientError, ValueError):
    """Invalid capacity, window or settings. Raised at construction time."""


class CancellationError(CrptClientError):
    """A caller waiting for a permit was cancelled by its own signal."""


class TransportError(CrptClientError):
    """The HTTP call failed with an I/O error before a response was received."""


class LimiterClosedError(CancellationError):
    """The rate limiter was closed; no permit will ever be granted again."""
