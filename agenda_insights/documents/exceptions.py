class DocumentSourceError(Exception):
    """Raised when the document store cannot be queried."""
