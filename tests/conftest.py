"""
Invoice Generator Test Configuration

Shared fixtures for all tests.
"""
import datetime as dt
from textwrap import dedent

import pytest


# =============================================================================
# FIXTURES: Sample Data
# =============================================================================

SAMPLE_YML = dedent("""\
    from: |
      Blauweiss EDV
      Vienna
    client: |
      ACME Corp
      Main Street 1
    notes: Payable within 15 days, %month% %year%.
    po: PO-4711
    items:
      -
        - Nice item for %past_month% %year%
        - 1
        - 12334
      -
        - Other item, for %month%
        - 0.5
        - 100000
    currency: GBP
    invoice_counter: 41
""")


@pytest.fixture
def today() -> dt.date:
    """Fixed run date."""
    return dt.date(2024, 3, 4)


@pytest.fixture
def defaults_file(tmp_path):
    """Defaults file with two items and counter 41."""
    path = tmp_path / "invoice.yml"
    path.write_text(SAMPLE_YML, encoding="utf-8")
    return path


@pytest.fixture
def sample_options(defaults_file, today):
    """Options merged from the sample defaults file, no env overrides."""
    from invoicegen.config import load_options

    return load_options({"yml": str(defaults_file)}, today=today, environ={})


@pytest.fixture
def make_options(today):
    """Factory for options built straight from a dict."""
    from invoicegen.config import merge

    def _make(**values):
        values.setdefault("items", [["Widget", 2, 500]])
        return merge({}, values, today=today, environ={})

    return _make
