"""
invoicegen
==========
Command-line invoice generator.

Reads invoice values from CLI flags and a YAML defaults file, renders an
HTML template with ``%placeholder%`` tokens into a PDF, bumps the invoice
counter in the defaults file and optionally emails the PDF.

Usage:
    from invoicegen import load_options, InvoiceService

    options = load_options({"yml": "invoice.yml", "po": "4711"})
    pdf = InvoiceService().generate(options)
"""

from .errors import (
    InvoiceGeneratorError,
    ConfigurationError,
    DateParseError,
    MalformedItemError,
)
from .models import InvoiceOptions, SmtpSettings
from .config import load_options, load_yaml, merge
from .items import LineItem, parse_items, render_rows
from .money import format_money, line_total, total
from .dates import normalize, format_long, period_fields
from .template import substitute, placeholders
from .counter import bump, invoice_number
from .service import InvoiceService, RenderedInvoice

__version__ = "1.0.0"

__all__ = [
    # Errors
    "InvoiceGeneratorError",
    "ConfigurationError",
    "DateParseError",
    "MalformedItemError",
    # Models
    "InvoiceOptions",
    "SmtpSettings",
    "LineItem",
    # Pipeline
    "load_options",
    "load_yaml",
    "merge",
    "normalize",
    "format_long",
    "period_fields",
    "format_money",
    "line_total",
    "total",
    "parse_items",
    "render_rows",
    "substitute",
    "placeholders",
    "bump",
    "invoice_number",
    "InvoiceService",
    "RenderedInvoice",
]
