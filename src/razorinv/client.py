from __future__ import annotations
from typing import Optional

from .api.transport import HttpTransport
from .config.settings import Settings
from .resources.base import Transport
from .resources.invoices import Invoices


class InvoiceClient:
    """Entry point: ``InvoiceClient().invoices.fetch("inv_...")``."""

    def __init__(self, api: Optional[Transport] = None, settings: Optional[Settings] = None):
        self.api = api if api is not None else HttpTransport(settings=settings)
        self.invoices = Invoices(self.api)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> InvoiceClient:
        return cls(HttpTransport(settings=settings))
