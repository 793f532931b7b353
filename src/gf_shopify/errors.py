"""Exceptions raised while relaying a submission to Shopify."""

from typing import Optional


class RelayError(Exception):
    """Base class for relay failures."""


class ExtractionFailed(RelayError):
    """No email could be resolved from the submission."""


class UpsertError(RelayError):
    """Customer create-or-update did not succeed."""


class ConfigurationMissing(UpsertError):
    """Store domain or API token is not configured."""


class InvalidDomain(UpsertError, ValueError):
    """Store domain is not a bare *.myshopify.com host."""


class RemoteTransportError(UpsertError):
    """Connection, DNS, TLS, timeout, or redirect-limit failure."""


class RemoteAPIError(UpsertError):
    """Shopify answered with an unexpected status code."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RemoteConflict(RemoteAPIError):
    """Create returned 422; the customer most likely exists already."""


class RemoteNotFound(UpsertError):
    """Customer search returned no match."""
