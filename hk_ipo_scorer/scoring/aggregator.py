"""
Aggregator
hk_ipo_scorer/scoring/aggregator.py

Total = unweighted sum of the rule scores. Tier by inclusive lower bound:
    >= 6  strongly recommended
    >= 4  recommended
    >= 2  worth considering
    >= 0  cautious
    <  0  not recommended
"""

from typing import Sequence, Tuple

from hk_ipo_scorer.models.enumerations import RecommendationTier
from hk_ipo_scorer.models.report import RuleResult, ScoreReport

TIER_THRESHOLDS: Tuple[Tuple[int, RecommendationTier], ...] = (
    (6, RecommendationTier.STRONGLY_RECOMMENDED),
    (4, RecommendationTier.RECOMMENDED),
    (2, RecommendationTier.WORTH_CONSIDERING),
    (0, RecommendationTier.CAUTIOUS),
)


def tier_for_total(total: int) -> RecommendationTier:
    for lower_bound, tier in TIER_THRESHOLDS:
        if total >= lower_bound:
            return tier
    return RecommendationTier.NOT_RECOMMENDED


def aggregate(
    stock_code: str,
    results: Sequence[RuleResult],
    document_length: int = 0,
) -> ScoreReport:
    total = sum(result.score for result in results)
    return ScoreReport(
        stock_code=stock_code,
        results=list(results),
        total_score=total,
        tier=tier_for_total(total),
        document_length=document_length,
    )
