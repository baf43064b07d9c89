"""
Invoice Counter
===============
The counter lives in the defaults file under ``invoice_counter``. It is
read at start, shown zero-padded as the invoice number, and written back
incremented after the PDF exists.

The file is replaced atomically (temp file + rename). There is no lock:
two runs against the same file can still hand out the same number.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .config import load_yaml
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

COUNTER_KEY = "invoice_counter"
NUMBER_WIDTH = 6


class _BlockDumper(yaml.SafeDumper):
    """Dumps multi-line strings as ``|`` blocks, as they are usually written."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_BlockDumper.add_representer(str, _represent_str)


def invoice_number(counter: Optional[Union[int, str]]) -> str:
    """41 -> "000041" """
    return ("" if counter is None else str(counter)).rjust(NUMBER_WIDTH, "0")


def _write_atomic(path: Path, data: Dict[str, Any]) -> None:
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            yaml.dump(
                data,
                f,
                Dumper=_BlockDumper,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
            )
        shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except Exception:
        Path(tmp).unlink(missing_ok=True)
        raise


def bump(path: Union[str, Path], current: Optional[int] = None) -> int:
    """
    Increment the counter stored in the defaults file.

    Args:
        path: Defaults file
        current: Counter used for this run; defaults to the file's value

    Returns:
        The new counter value written to the file
    """
    path = Path(path)
    data = load_yaml(path)

    base = current if current is not None else data.get(COUNTER_KEY)
    try:
        new_value = int(base or 0) + 1
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{COUNTER_KEY} in {path} is not a number: {base!r}") from e

    data[COUNTER_KEY] = new_value
    _write_atomic(path, data)
    logger.info(f"Invoice counter in {path} bumped to {new_value}")
    return new_value
