from agenda_insights.config.settings import Settings
from agenda_insights.pdf.base import BasePdfExtractor
from agenda_insights.pdf.pdfplumber_adapter import PdfPlumberAdapter
from agenda_insights.pdf.pymupdf_adapter import PyMuPdfAdapter

ENGINES: dict[str, type[BasePdfExtractor]] = {
    "pdfplumber": PdfPlumberAdapter,
    "pymupdf": PyMuPdfAdapter,
    "fitz": PyMuPdfAdapter,
}


class PdfExtractorFactory:
    """Picks the text engine named by ``Settings.pdf_engine``."""

    @staticmethod
    def for_engine(name: str) -> BasePdfExtractor:
        key = name.strip().lower()
        if key not in ENGINES:
            raise ValueError(f"Unknown PDF engine '{name}'. Choose from: {sorted(ENGINES)}")
        return ENGINES[key]()

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        return cls.for_engine(settings.pdf_engine)
