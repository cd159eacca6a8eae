"""
scoring/ - Prospectus Scoring Engine

Modules:
    evidence_recorder.py  - Audit trail builder shared by every rule
    old_share_rule.py     - Sale-share (vendor share) detection
    sponsor_rule.py       - Sponsor track-record lookup
    cornerstone_rule.py   - Star cornerstone investor detection
    lockup_rule.py        - Pre-IPO investor lock-up detection
    industry_rule.py      - Industry sentiment classification
    aggregator.py         - Total score and recommendation tier
    engine.py             - ProspectusScorer orchestration
"""

from hk_ipo_scorer.scoring.aggregator import aggregate, tier_for_total
from hk_ipo_scorer.scoring.engine import ProspectusDocument, ProspectusScorer, ReferenceData

__all__ = [
    "aggregate",
    "tier_for_total",
    "ProspectusDocument",
    "ProspectusScorer",
    "ReferenceData",
]
