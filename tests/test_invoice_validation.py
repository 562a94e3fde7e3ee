import asyncio

import pytest

from razorinv.errors import (
    InvalidCustomerIdentityError,
    InvalidLineItemError,
    MandatoryFieldError,
    RequestValidationError,
)
from razorinv.models import CustomerDetails, InvoiceDraft, LineItem
from razorinv.resources.invoices import Invoices, validate_invoice_draft

ITEM = {"item_id": "item_1", "amount": 100}


def test_missing_customer_identity():
    with pytest.raises(InvalidCustomerIdentityError):
        validate_invoice_draft({"line_items": [ITEM]})


def test_both_customer_forms_rejected():
    with pytest.raises(InvalidCustomerIdentityError):
        validate_invoice_draft({"customer_id": "cust_1", "customer": {"name": "A"}, "line_items": [ITEM]})


def test_customer_checked_before_line_items():
    with pytest.raises(InvalidCustomerIdentityError):
        validate_invoice_draft({"customer_id": "", "line_items": []})


@pytest.mark.parametrize("line_items", [None, []])
def test_line_items_mandatory(line_items):
    draft = {"customer_id": "cust_1"}
    if line_items is not None:
        draft["line_items"] = line_items
    with pytest.raises(MandatoryFieldError) as exc:
        validate_invoice_draft(draft)
    assert exc.value.field == "line_items"


def test_line_item_needs_identity():
    with pytest.raises(InvalidLineItemError) as exc:
        validate_invoice_draft({"customer_id": "c", "line_items": [{"amount": 100}]})
    assert exc.value.index == 0
    assert "name" in str(exc.value)


def test_line_item_needs_price():
    with pytest.raises(InvalidLineItemError) as exc:
        validate_invoice_draft({"customer_id": "c", "line_items": [{"name": "Widget"}]})
    assert "amount" in str(exc.value)


def test_zero_amount_counts_as_missing():
    with pytest.raises(InvalidLineItemError):
        validate_invoice_draft({"customer_id": "c", "line_items": [{"name": "Widget", "amount": 0}]})


def test_stops_at_first_bad_item():
    items = [ITEM, {"description": "no id"}, {"name": "no price"}]
    with pytest.raises(InvalidLineItemError) as exc:
        validate_invoice_draft({"customer_id": "c", "line_items": items})
    assert exc.value.index == 1


def test_valid_drafts_pass():
    validate_invoice_draft({"customer_id": "c", "line_items": [{"item_id": "item_1"}]})
    validate_invoice_draft(
        {"customer": {"email": "a@b.c"}, "line_items": [{"name": "W", "amount": 1, "currency": "INR", "quantity": 2}]}
    )


def test_validation_errors_are_value_errors():
    assert issubclass(InvalidLineItemError, RequestValidationError)
    assert issubclass(InvalidLineItemError, ValueError)


def test_create_rejects_without_network_call(transport):
    invoices = Invoices(transport)
    with pytest.raises(InvalidCustomerIdentityError):
        asyncio.run(invoices.create({"line_items": [ITEM]}))
    with pytest.raises(MandatoryFieldError):
        asyncio.run(invoices.create({"customer_id": "c", "line_items": []}))
    with pytest.raises(InvalidLineItemError):
        asyncio.run(invoices.create(InvoiceDraft(customer_id="c", line_items=[LineItem(name="W")])))
    assert transport.calls == []


def test_model_draft_validated_like_mapping(transport):
    draft = InvoiceDraft(customer=CustomerDetails(name="Acme"), line_items=[LineItem(description="x")])
    with pytest.raises(InvalidLineItemError):
        asyncio.run(Invoices(transport).create(draft))
    assert transport.calls == []
