class ExtractionError(Exception):
    """Raised when structured extraction cannot be set up or completed."""


class ExtractionValidationError(ExtractionError):
    """Raised when the parsed model response violates the project record schema."""
