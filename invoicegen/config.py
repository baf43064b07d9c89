"""
Options Loader
==============
Builds ``InvoiceOptions`` from CLI flags and the YAML defaults file.

Priority: CLI flags > env vars > YAML file > defaults

Env overrides follow the pattern INVOICE__{KEY}, e.g.
INVOICE__SMTP_PASSWORD=secret sets ``smtp_password``.
"""

import datetime as dt
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .models import DEFAULT_DUE_DAYS, DEFAULT_YML, InvoiceOptions, SmtpSettings

logger = logging.getLogger(__name__)

ENV_PREFIX = "INVOICE"

# Flat YAML/CLI keys -> SmtpSettings fields
SMTP_KEYS = {
    "smtp_address": "address",
    "smtp_port": "port",
    "smtp_user": "user",
    "smtp_password": "password",
    "smtp_authentication": "authentication",
    "smtp_enable_starttls_auto": "enable_starttls_auto",
}

OPTION_KEYS = {
    "client",
    "from",
    "header",
    "notes",
    "po",
    "currency",
    "locale",
    "date",
    "due_date",
    "invoice_counter",
    "items",
    "send_to",
    "send_from",
    "yml",
    "template",
} | set(SMTP_KEYS)


def load_yaml(path: Path) -> Dict[str, Any]:
    """Read the defaults file; it must hold a mapping."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"YML file {path} not found or can't be read.") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YML file {path} is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"YML file {path} must contain a mapping of options.")
    return data


def _normalize_keys(values: Mapping[str, Any]) -> Dict[str, Any]:
    # Old defaults files spell some keys with dashes (due-date)
    return {str(key).replace("-", "_"): value for key, value in values.items()}


def _apply_env_overrides(
    values: Dict[str, Any],
    prefix: str = ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Apply environment variable overrides to the option dict.

    Pattern: INVOICE__KEY=value maps to values[key] = value
    """
    environ = os.environ if environ is None else environ
    for key, value in environ.items():
        if not key.startswith(f"{prefix}__"):
            continue
        # Left as strings, the models coerce ports, counters and flags
        values[key[len(prefix) + 2 :].lower()] = value
    return values


def merge(
    cli_values: Mapping[str, Any],
    yaml_contents: Mapping[str, Any],
    today: Optional[dt.date] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InvoiceOptions:
    """
    Merge CLI flags over the YAML defaults.

    Args:
        cli_values: Flag values; ``None`` means the flag was not given
        yaml_contents: Parsed defaults file
        today: Reference date for the date defaults (default: today)
        environ: Environment to read overrides from (default: os.environ)

    Returns:
        Validated InvoiceOptions
    """
    today = today or dt.date.today()
    values: Dict[str, Any] = {
        "date": today,
        "due_date": today + dt.timedelta(days=DEFAULT_DUE_DAYS),
    }
    # Empty keys in the defaults file leave the built-in default in place
    values.update(
        {k: v for k, v in _normalize_keys(yaml_contents).items() if v is not None}
    )
    _apply_env_overrides(values, environ=environ)
    values.update(
        {k: v for k, v in _normalize_keys(cli_values).items() if v is not None}
    )

    if not isinstance(values.get("items"), (list, tuple)):
        raise ConfigurationError("Items not in the right format, something is missing.")

    unknown = sorted(set(values) - OPTION_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown options: {', '.join(unknown)}")
        for key in unknown:
            del values[key]

    smtp = {}
    for key, field in SMTP_KEYS.items():
        value = values.pop(key, None)
        if value is not None:
            smtp[field] = value

    try:
        return InvoiceOptions.model_validate(
            {**values, "smtp": SmtpSettings.model_validate(smtp)}
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options: {e}") from e


def load_options(
    cli_values: Mapping[str, Any],
    today: Optional[dt.date] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InvoiceOptions:
    """Load the defaults file named by ``yml`` and merge the CLI flags over it."""
    yml = Path(cli_values.get("yml") or DEFAULT_YML)
    contents = load_yaml(yml)
    logger.info(f"Loaded defaults from {yml}")
    return merge({**cli_values, "yml": str(yml)}, contents, today=today, environ=environ)
