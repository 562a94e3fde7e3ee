"""Razorpay-style invoice API client."""

from __future__ import annotations

from .client import InvoiceClient
from .errors import (
    InvalidCustomerIdentityError,
    InvalidDateError,
    InvalidLineItemError,
    InvalidNotifyMediumError,
    InvalidPaginationError,
    InvoiceClientError,
    MandatoryFieldError,
    MissingIdentifierError,
    RequestValidationError,
    TransportError,
)
from .models import (
    Address,
    CustomerDetails,
    Invoice,
    InvoiceCollection,
    InvoiceDraft,
    InvoiceQuery,
    InvoiceStatus,
    LineItem,
    NotifyMedium,
    NotifyResult,
)
from .resources.invoices import Invoices

__all__ = [
    "Address",
    "CustomerDetails",
    "InvalidCustomerIdentityError",
    "InvalidDateError",
    "InvalidLineItemError",
    "InvalidNotifyMediumError",
    "InvalidPaginationError",
    "Invoice",
    "InvoiceClient",
    "InvoiceClientError",
    "InvoiceCollection",
    "InvoiceDraft",
    "InvoiceQuery",
    "InvoiceStatus",
    "Invoices",
    "LineItem",
    "MandatoryFieldError",
    "MissingIdentifierError",
    "NotifyMedium",
    "NotifyResult",
    "RequestValidationError",
    "TransportError",
]
