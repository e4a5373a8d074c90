from abc import ABC, abstractmethod
from collections.abc import Iterator

from agenda_insights.logging.logger import Log
from agenda_insights.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Engines yield raw page text in page order; this class joins the pages and
    turns any engine failure into empty output.
    """

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Blank or whitespace-only pages are skipped. Every other page is emitted
        followed by a newline, in page order, without layout reconstruction.

        Returns:
            The concatenated page text, or "" when the document is unreadable
            or has no text layer. Never raises.
        """
        parts: list[str] = []
        try:
            for page_text in self._iter_page_texts(pdf_bytes):
                if not page_text or not page_text.strip():
                    continue
                parts.append(page_text + "\n")
        except PdfExtractionError as exc:
            Log.warning(f"PDF text extraction failed: {exc}")
            return ""
        return "".join(parts)

    @abstractmethod
    def _iter_page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        """Yield glyph-ordered text for each page.

        Raises:
            PdfExtractionError: if the document cannot be opened or read.
        """
