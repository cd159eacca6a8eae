# tests/conftest.py

"""
Pytest Fixtures - Shared settings, reference data and synthetic prospectus text

FILLER TEXT:
- Built from FILLER_UNIT, which contains no section heading, no track keyword,
  no sponsor alias and no star-investor alias, so a test controls every match
  by what it adds around the filler.
"""

import pytest

from hk_ipo_scorer.config import Settings
from hk_ipo_scorer.data.fallback_sponsors import fallback_records
from hk_ipo_scorer.models.sponsor import SponsorRecord
from hk_ipo_scorer.repositories.sponsor_repository import SponsorReferenceTable, StockCodeSponsorMap
from hk_ipo_scorer.scoring.engine import ProspectusScorer, ReferenceData

FILLER_UNIT = "甲乙丙丁戊己庚辛壬癸。"


def make_filler(length: int) -> str:
    """Exactly `length` characters of keyword-free text."""
    repeats = length // len(FILLER_UNIT) + 1
    return (FILLER_UNIT * repeats)[:length]


# =============================================================================
# TEXT FIXTURES
# =============================================================================

@pytest.fixture
def filler():
    """Factory: filler(n) -> n characters of keyword-free text."""
    return make_filler


# =============================================================================
# SETTINGS / REFERENCE DATA FIXTURES
# =============================================================================

@pytest.fixture
def app_settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def fallback_table():
    """Reference table built from the bundled fallback sponsors only."""
    return SponsorReferenceTable(fallback_records())


@pytest.fixture
def make_record():
    """Factory for SponsorRecord with sensible defaults."""
    def _make(name: str, rate: float, count: int, win_rate: float = 60.0) -> SponsorRecord:
        return SponsorRecord(
            name=name,
            avg_first_day_return=rate,
            deal_count=count,
            win_rate=win_rate,
        )
    return _make


@pytest.fixture
def empty_reference():
    """No sponsor data and no stock-code mapping."""
    return ReferenceData(sponsors=SponsorReferenceTable(), stock_code_map=StockCodeSponsorMap())


@pytest.fixture
def scorer(fallback_table, app_settings):
    """Scorer over the fallback sponsor table, no stock-code mapping."""
    return ProspectusScorer(
        reference=ReferenceData(sponsors=fallback_table),
        settings=app_settings,
    )
