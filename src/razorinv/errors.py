"""Exception hierarchy for the invoice client.

Every failure surfaced by this package is an :class:`InvoiceClientError`.
Local validation failures derive from :class:`RequestValidationError` and are
raised before any request leaves the process. :class:`TransportError` is only
ever raised by the HTTP transport.
"""

from __future__ import annotations
from typing import Any, Optional


class InvoiceClientError(Exception):
    """Base class for all client errors."""


class RequestValidationError(InvoiceClientError, ValueError):
    """A request was rejected locally, before transmission."""


class MissingIdentifierError(RequestValidationError):
    def __init__(self, message: str = "`id` is mandatory"):
        super().__init__(message)


class MandatoryFieldError(RequestValidationError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"`{field}` is mandatory")


class InvalidCustomerIdentityError(RequestValidationError):
    def __init__(self, message: str = "Exactly one of `customer_id` or `customer` must be provided"):
        super().__init__(message)


class InvalidLineItemError(RequestValidationError):
    def __init__(self, index: int, message: str):
        self.index = index
        super().__init__(f"line_items[{index}]: {message}")


class InvalidNotifyMediumError(RequestValidationError):
    def __init__(self, medium: Any):
        self.medium = medium
        super().__init__(f"Unsupported notification medium {medium!r}, expected 'sms' or 'email'")


class InvalidDateError(RequestValidationError):
    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"`{field}` is not a date: {value!r}")


class InvalidPaginationError(RequestValidationError):
    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"`{field}` must not be negative, got {value!r}")


class TransportError(InvoiceClientError):
    """The HTTP exchange failed (network error, non-2xx status or bad body)."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class InvalidPayloadError(RequestValidationError):
    def __init__(self, reason: Any):
        self.reason = reason
        super().__init__(f"Payload cannot be encoded as JSON: {reason}")
