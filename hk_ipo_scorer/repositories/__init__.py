"""
Repositories Package - HK IPO Prospectus Scorer
hk_ipo_scorer/repositories/__init__.py

Data access layer for sponsor reference files.
"""

from hk_ipo_scorer.repositories.sponsor_repository import (
    SponsorReferenceTable,
    SponsorRepository,
    StockCodeSponsorMap,
    read_sponsor_snapshot,
    read_stock_code_mapping,
)

__all__ = [
    "SponsorReferenceTable",
    "SponsorRepository",
    "StockCodeSponsorMap",
    "read_sponsor_snapshot",
    "read_stock_code_mapping",
]
