from collections.abc import Iterator

import pymupdf

from agenda_insights.pdf.base import BasePdfExtractor
from agenda_insights.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def _iter_page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [doc.load_page(index).get_text() for index in range(doc.page_count)]
        except Exception as exc:
            raise PdfExtractionError(
                f"pymupdf extraction failed: {exc.__class__.__name__}"
            ) from exc
        yield from pages
