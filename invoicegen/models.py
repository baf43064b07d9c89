"""
Invoice Models
==============
Typed option records for a single invoice run.

``InvoiceOptions`` is built once by ``invoicegen.config.merge`` and is
frozen afterwards; pipeline stages derive new records with
``model_copy(update=...)``.
"""

import datetime as dt
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CURRENCY = "USD"
DEFAULT_HEADER = "Invoice"
DEFAULT_LOCALE = "en_US"
DEFAULT_YML = "invoice.yml"
DEFAULT_TEMPLATE = "invoicegenerator.html"
DEFAULT_SMTP_PORT = 587
DEFAULT_DUE_DAYS = 15


class SmtpSettings(BaseModel):
    """SMTP delivery settings."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    address: Optional[str] = None
    port: int = DEFAULT_SMTP_PORT
    user: Optional[str] = None
    password: Optional[str] = None
    authentication: Literal["plain", "login", "cram_md5"] = "plain"
    enable_starttls_auto: bool = True

    @property
    def is_complete(self) -> bool:
        """Address, user and password are all set."""
        return all([self.address, self.user, self.password])


class InvoiceOptions(BaseModel):
    """All values that go into one invoice."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    client: Optional[str] = None
    sender: Optional[str] = Field(default=None, alias="from")
    header: str = DEFAULT_HEADER
    notes: Optional[str] = None
    po: Optional[str] = None
    currency: str = DEFAULT_CURRENCY
    locale: str = DEFAULT_LOCALE

    # Strings until invoicegen.dates.normalize has run
    date: Optional[Union[dt.datetime, dt.date, str]] = None
    due_date: Optional[Union[dt.datetime, dt.date, str]] = None

    invoice_counter: Optional[int] = None
    items: List[Any]

    send_to: Optional[str] = None
    send_from: Optional[str] = None
    smtp: SmtpSettings = SmtpSettings()

    yml: Optional[str] = None
    template: Optional[str] = None
