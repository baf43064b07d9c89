"""HTML to PDF rendering with WeasyPrint."""

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def render_pdf(
    html: str,
    output_path: Union[str, Path],
    base_url: Optional[str] = None,
) -> Path:
    """Render ``html`` to ``output_path``; relative assets resolve against ``base_url``."""
    # Imported here: WeasyPrint needs Pango at import time
    from weasyprint import HTML

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    HTML(string=html, base_url=base_url).write_pdf(str(output_path))
    logger.info(f"PDF written: {output_path}")
    return output_path
