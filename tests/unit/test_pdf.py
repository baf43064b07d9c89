"""
Unit Tests for invoicegen.pdf

WeasyPrint is replaced by a mock module.
"""

import sys
from unittest.mock import MagicMock, patch


class TestRenderPdf:

    def test_render_pdf(self, tmp_path):
        """HTML goes to WeasyPrint, output directory is created."""
        from invoicegen.pdf import render_pdf

        weasyprint = MagicMock()
        target = tmp_path / "out" / "invoice-000001.pdf"

        with patch.dict(sys.modules, {"weasyprint": weasyprint}):
            result = render_pdf("<html></html>", target, base_url="/templates")

        assert result == target
        assert target.parent.is_dir()
        weasyprint.HTML.assert_called_once_with(string="<html></html>", base_url="/templates")
        weasyprint.HTML.return_value.write_pdf.assert_called_once_with(str(target))
