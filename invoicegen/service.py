#!/usr/bin/env python3
"""
INVOICE SERVICE
===============
Turns merged options into an invoice PDF.

Usage:
  from invoicegen.config import load_options
  from invoicegen.service import InvoiceService

  options = load_options({"yml": "invoice.yml"})
  pdf = InvoiceService(output_dir=Path(".")).generate(options)

Steps, in order: normalize dates, expand period placeholders, total and
render the line items, substitute the template, write the PDF, bump the
counter, send the email. Nothing is rolled back if a later step fails.
"""

import datetime as dt
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .counter import bump, invoice_number
from .dates import normalize, period_fields
from .items import parse_items, render_rows
from .mailer import send_invoice
from .models import InvoiceOptions
from .money import format_money, total
from .pdf import render_pdf
from .template import load_template, placeholders, resolve_template, substitute

logger = logging.getLogger(__name__)


@dataclass
class RenderedInvoice:
    """Everything the template needs, computed from the options."""
    options: InvoiceOptions
    number: str
    balance: str
    rows: str
    values: Dict[str, Any]

    @property
    def filename(self) -> str:
        return f"invoice-{self.number}.pdf"


class InvoiceService:
    """Generates one invoice per call to ``generate``."""

    def __init__(self, output_dir: Optional[Path] = None, today: Optional[dt.date] = None):
        self.output_dir = Path(output_dir) if output_dir else Path(".")
        self.today = today

    def prepare(self, options: InvoiceOptions) -> RenderedInvoice:
        """Compute all derived fields. Touches no files."""
        period = period_fields(self.today or dt.date.today())

        def expand(text: Optional[str]) -> Optional[str]:
            return substitute(text, period) if text else text

        options = options.model_copy(update={
            "date": normalize(options.date),
            "due_date": normalize(options.due_date),
            "notes": expand(options.notes),
            "header": expand(options.header),
        })

        items = [
            replace(item, description=expand(item.description))
            for item in parse_items(options.items)
        ]
        balance = format_money(total(items), options.currency, options.locale)
        rows = render_rows(items, options.currency, options.locale)
        number = invoice_number(options.invoice_counter)

        return RenderedInvoice(
            options=options,
            number=number,
            balance=balance,
            rows=rows,
            values=placeholders(options, rows=rows, balance=balance, number=number, period=period),
        )

    def render_html(self, invoice: RenderedInvoice, template_path: Path) -> str:
        return substitute(load_template(template_path), invoice.values)

    def generate(self, options: InvoiceOptions) -> Path:
        """
        Create the invoice PDF and run the follow-up steps.

        Returns:
            Path to generated PDF
        """
        invoice = self.prepare(options)
        template_path = resolve_template(options.template)
        html = self.render_html(invoice, template_path)

        pdf_file = self.output_dir / invoice.filename
        print(f"Generating {pdf_file.name}...")
        render_pdf(html, pdf_file, base_url=str(template_path.resolve().parent))

        if options.yml:
            bump(options.yml, options.invoice_counter)
        else:
            logger.warning("No defaults file given, invoice counter not updated")

        send_invoice(invoice.options, invoice.number, pdf_file)
        return pdf_file
