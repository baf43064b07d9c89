"""
Template Substitution
=====================
Flat ``%key%`` placeholder replacement for the invoice HTML template.
No loops, no conditionals, no nesting.
"""

import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .dates import format_long
from .errors import ConfigurationError
from .models import DEFAULT_TEMPLATE, InvoiceOptions

BUNDLED_TEMPLATE = Path(__file__).parent / "templates" / DEFAULT_TEMPLATE


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def substitute(template: str, values: Mapping[str, Any]) -> str:
    """
    Replace every ``%key%`` for each key in ``values``.

    One left-to-right pass over the template: replacement text is never
    scanned again, and unknown ``%tokens%`` are left as they are.
    """
    if not values:
        return template
    keys = sorted(values, key=len, reverse=True)
    pattern = re.compile("%(" + "|".join(re.escape(k) for k in keys) + ")%")
    return pattern.sub(lambda m: _render(values[m.group(1)]), template)


def placeholders(
    options: InvoiceOptions,
    rows: str,
    balance: str,
    number: str,
    period: Mapping[str, str],
) -> Dict[str, Any]:
    """Values available to the template, keyed by placeholder name.

    Expects ``options.date`` and ``options.due_date`` to be dates already.
    """
    due_date = format_long(options.due_date)
    values = {
        "client": options.client,
        "from": options.sender,
        "header": options.header,
        "notes": options.notes,
        "po": options.po,
        "currency": options.currency,
        "date": format_long(options.date),
        "due_date": due_date,
        "due-date": due_date,
        "invoice_counter": options.invoice_counter,
        "number": number,
        "items": rows,
        "balance": balance,
        "send_to": options.send_to,
    }
    values.update(period)
    return values


def resolve_template(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Find the HTML template.

    An explicit path must exist. Without one, ``invoicegenerator.html`` in
    the working directory is used, falling back to the bundled template.
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Template not found: {path}")
        return path

    local = Path(DEFAULT_TEMPLATE)
    return local if local.exists() else BUNDLED_TEMPLATE


def load_template(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")
