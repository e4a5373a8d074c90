import io
from collections.abc import Iterator

import pdfplumber

from agenda_insights.pdf.base import BasePdfExtractor
from agenda_insights.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def _iter_page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(
                f"pdfplumber extraction failed: {exc.__class__.__name__}"
            ) from exc
        yield from pages
