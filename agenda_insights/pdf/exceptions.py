class PdfExtractionError(Exception):
    """Raised by a PDF engine when a document cannot be read."""
