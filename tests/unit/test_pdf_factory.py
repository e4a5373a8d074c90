import pytest

from agenda_insights.config.settings import Settings
from agenda_insights.pdf.factory import PdfExtractorFactory
from agenda_insights.pdf.pdfplumber_adapter import PdfPlumberAdapter
from agenda_insights.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPdfExtractorFactory:
    def test_default_engine_is_pdfplumber(self) -> None:
        extractor = PdfExtractorFactory.create(Settings(_env_file=None))
        assert isinstance(extractor, PdfPlumberAdapter)

    def test_creates_pymupdf(self) -> None:
        extractor = PdfExtractorFactory.create(Settings(_env_file=None, pdf_engine="pymupdf"))
        assert isinstance(extractor, PyMuPdfAdapter)

    def test_engine_name_is_normalized(self) -> None:
        assert isinstance(PdfExtractorFactory.for_engine("  PyMuPDF "), PyMuPdfAdapter)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.for_engine("tesseract")
