"""
Custom Exceptions - HK IPO Prospectus Scorer
hk_ipo_scorer/core/exceptions.py

Exception classes for scoring runs and reference-data loading.
"""


class ScoringException(Exception):
    """Base exception for scoring operations."""

    pass


class DocumentTooShortError(ScoringException):
    """Extracted prospectus text is too short to score (likely a scanned image)."""

    def __init__(self, stock_code: str, length: int, minimum: int):
        self.stock_code = stock_code
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Prospectus text for {stock_code} has {length} characters "
            f"(minimum {minimum}); the source is probably a scanned image"
        )


class ReferenceDataError(ScoringException):
    """Reference data file is unreadable or malformed."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Invalid reference data in {path}: {message}")
