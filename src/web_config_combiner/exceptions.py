"""Exception types raised by the configuration library."""

from __future__ import annotations

from typing import Optional
from xml.sax import SAXException


class ConfigurationError(Exception):
    """Base class for configuration related failures."""


class UnsupportedOperationError(ConfigurationError, NotImplementedError):
    """Raised when a read-only configuration is asked to change."""


class EntityResolutionError(SAXException):
    """An external entity could not be loaded from its registered URL.

    The underlying I/O error is available through :meth:`getException` (the
    SAX convention) and is also chained as ``__cause__`` when raised with
    ``raise ... from``.

    Args:
        message: Human-readable description including the offending URL.
        cause: The exception raised while opening the URL.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
