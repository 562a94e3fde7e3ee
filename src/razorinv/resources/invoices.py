from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from ..errors import (
    InvalidCustomerIdentityError,
    InvalidLineItemError,
    InvalidNotifyMediumError,
    InvalidPayloadError,
    MandatoryFieldError,
)
from ..models import (
    EntityType,
    Invoice,
    InvoiceCollection,
    InvoiceDraft,
    InvoiceQuery,
    NotifyMedium,
    NotifyResult,
)
from ..normalize import normalize_query
from .base import ResourceBinding, Transport

logger = logging.getLogger(__name__)

INVOICES_PATH = "/invoices"

DraftLike = Union[InvoiceDraft, Mapping[str, Any]]
QueryLike = Union[InvoiceQuery, Mapping[str, Any], None]


_JSON = TypeAdapter(Any)


def _as_payload(obj: Any) -> Dict[str, Any]:
    if hasattr(obj, "to_payload"):
        return obj.to_payload()
    return dict(obj)


def _as_json_payload(obj: Any) -> Dict[str, Any]:
    """Like :func:`_as_payload`, with nested models, dates and enums encoded for the wire."""
    try:
        return _JSON.dump_python(_as_payload(obj), mode="json", by_alias=True, exclude_none=True)
    except PydanticSerializationError as e:
        raise InvalidPayloadError(e) from e


def validate_invoice_draft(draft: Mapping[str, Any]) -> None:
    """Check a create payload; raise on the first violation."""
    has_id = bool(draft.get("customer_id"))
    has_details = bool(draft.get("customer"))
    if has_id == has_details:
        raise InvalidCustomerIdentityError()

    line_items = draft.get("line_items")
    if not line_items:
        raise MandatoryFieldError("line_items")

    for idx, item in enumerate(line_items):
        item = _as_payload(item)
        if not item.get("item_id") and not item.get("name"):
            raise InvalidLineItemError(idx, "either `item_id` or `name` must be provided")
        if not item.get("item_id") and not item.get("amount"):
            raise InvalidLineItemError(idx, "either `item_id` or `amount` must be provided")


def _medium(value: Any) -> NotifyMedium:
    if value is None or value == "":
        raise MandatoryFieldError("medium")
    try:
        return NotifyMedium(value)
    except ValueError:
        raise InvalidNotifyMediumError(value) from None


class Invoices:
    """Invoice operations.

    Every method validates locally, then awaits exactly one transport call.
    Transport errors are passed through as raised.
    """

    def __init__(self, api: Transport, path: str = INVOICES_PATH):
        self.resource = ResourceBinding(api=api, path=path)

    async def create(self, params: DraftLike) -> Invoice:
        draft = _as_json_payload(params)
        validate_invoice_draft(draft)
        logger.debug("Creating invoice with %d line item(s)", len(draft["line_items"]))
        data = await self.resource.api.post(
            self.resource.url(),
            {**draft, "type": EntityType.INVOICE.value},
        )
        return Invoice.model_validate(data)

    async def fetch_all(self, query: QueryLike = None) -> InvoiceCollection:
        params = normalize_query(_as_payload(query) if query is not None else None)
        logger.debug("Listing invoices with %s", params)
        data = await self.resource.api.get(self.resource.url(), params)
        return InvoiceCollection.model_validate(data)

    async def fetch(self, invoice_id: Optional[str]) -> Invoice:
        invoice_id = self.resource.require_id(invoice_id)
        data = await self.resource.api.get(self.resource.url(invoice_id))
        return Invoice.model_validate(data)

    async def cancel(self, invoice_id: Optional[str]) -> Invoice:
        invoice_id = self.resource.require_id(invoice_id)
        logger.debug("Cancelling invoice %s", invoice_id)
        data = await self.resource.api.post(self.resource.url(invoice_id, "cancel"))
        return Invoice.model_validate(data)

    async def edit(self, invoice_id: Optional[str], params: Optional[Mapping[str, Any]]) -> Invoice:
        invoice_id = self.resource.require_id(invoice_id)
        if params is None:
            raise self.resource.field_mandatory_error("Params")
        logger.debug("Editing invoice %s", invoice_id)
        data = await self.resource.api.patch(self.resource.url(invoice_id), _as_json_payload(params))
        return Invoice.model_validate(data)

    async def notify(self, invoice_id: Optional[str], medium: Union[NotifyMedium, str, None]) -> NotifyResult:
        invoice_id = self.resource.require_id(invoice_id)
        medium = _medium(medium)
        logger.debug("Notifying invoice %s by %s", invoice_id, medium.value)
        data = await self.resource.api.post(self.resource.url(invoice_id, "notify_by", medium.value))
        return NotifyResult.model_validate(data)
