from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    ISSUED = "issued"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    DELETED = "deleted"


class EntityType(str, Enum):
    INVOICE = "invoice"
    COLLECTION = "collection"


class NotifyMedium(str, Enum):
    SMS = "sms"
    EMAIL = "email"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"


class _Wire(BaseModel):
    # the remote service adds fields freely; keep whatever it sends
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Address(_Wire):
    id: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    zipcode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class CustomerDetails(_Wire):
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None
    gstin: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_contact: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None


class LineItem(_Wire):
    """Catalog reference (``item_id``) or inline item (``name`` + ``amount``)."""

    id: Optional[str] = None
    item_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    quantity: Optional[int] = None

    # server-computed
    ref_id: Optional[str] = None
    ref_type: Optional[str] = None
    unit_amount: Optional[int] = None
    gross_amount: Optional[int] = None
    tax_amount: Optional[int] = None
    taxable_amount: Optional[int] = None
    net_amount: Optional[int] = None
    tax_inclusive: Optional[bool] = None
    hsn_code: Optional[str] = None
    sac_code: Optional[str] = None
    tax_rate: Optional[float] = None
    unit: Optional[str] = None


class InvoiceDraft(_Wire):
    """Caller intent to create an invoice.

    Everything is optional here; structural rules are enforced by
    :func:`razorinv.resources.invoices.validate_invoice_draft` so that each
    violation maps to its own error type.
    """

    description: Optional[str] = None
    customer_id: Optional[str] = None
    customer: Optional[CustomerDetails] = None
    order_id: Optional[str] = None
    line_items: List[LineItem] = Field(default_factory=list)
    status: Optional[InvoiceStatus] = None
    expire_by: Optional[int] = None
    sms_notify: Optional[int] = None
    email_notify: Optional[int] = None
    partial_payment: Optional[bool] = None


class Invoice(InvoiceDraft):
    id: str
    entity: Optional[EntityType] = None
    type: Optional[EntityType] = None
    invoice_number: Optional[str] = None
    customer_details: Optional[CustomerDetails] = None
    issued_at: Optional[int] = None
    paid_at: Optional[int] = None
    cancelled_at: Optional[int] = None
    expired_at: Optional[int] = None
    sms_status: Optional[DeliveryStatus] = None
    email_status: Optional[DeliveryStatus] = None
    gross_amount: Optional[int] = None
    tax_amount: Optional[int] = None
    taxable_amount: Optional[int] = None
    amount: Optional[int] = None
    amount_paid: Optional[int] = None
    amount_due: Optional[int] = None
    currency: Optional[str] = None
    notes: Optional[Any] = None
    short_url: Optional[str] = None
    billing_start: Optional[int] = None
    billing_end: Optional[int] = None
    group_taxes_discounts: Optional[bool] = None
    date: Optional[int] = None
    terms: Optional[Union[str, int]] = None
    comment: Optional[Union[str, int]] = None
    created_at: Optional[int] = None


class InvoiceQuery(_Wire):
    from_: Any = Field(default=None, alias="from")
    to: Any = None
    count: Any = None
    skip: Any = None
    type: Optional[str] = None
    payment_id: Optional[str] = None
    receipt: Optional[str] = None
    customer_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        # dates and counters are left raw for the normalizer
        return self.model_dump(by_alias=True, exclude_none=True)


class InvoiceCollection(BaseModel):
    entity: EntityType = EntityType.COLLECTION
    count: int = 0
    items: List[Invoice] = Field(default_factory=list)


class NotifyResult(BaseModel):
    success: bool
