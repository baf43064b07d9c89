"""Invoice generator errors."""


class InvoiceGeneratorError(Exception):
    """Base class for all invoice generation failures."""


class ConfigurationError(InvoiceGeneratorError):
    """Defaults file missing or unreadable, or options are invalid."""


class DateParseError(InvoiceGeneratorError, ValueError):
    """A date option could not be parsed."""


class MalformedItemError(InvoiceGeneratorError, ValueError):
    """A line item is not a (description, quantity, unit_price) triple."""
