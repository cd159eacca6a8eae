"""
Core Package - HK IPO Prospectus Scorer
hk_ipo_scorer/core/__init__.py

Core infrastructure: exceptions, logging setup.
"""

from hk_ipo_scorer.core.exceptions import (
    DocumentTooShortError,
    ReferenceDataError,
    ScoringException,
)
from hk_ipo_scorer.core.logging_config import configure_logging

__all__ = [
    # Exceptions
    "DocumentTooShortError",
    "ReferenceDataError",
    "ScoringException",
    # Logging
    "configure_logging",
]
