class PdfExtractionError(Exception):
    """Raised when text extraction from a PDF fails."""


class PdfStampError(Exception):
    """Raised when drawing labels onto a PDF fails."""
