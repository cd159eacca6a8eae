# hk_ipo_scorer/models/report.py
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, Dict, Any, List

from hk_ipo_scorer.models.enumerations import (
    ReasonCode,
    RecommendationTier,
    RuleName,
    SponsorSource,
)

ALLOWED_RULE_SCORES = frozenset({-2, -1, 0, 1, 2})


class MatchEvidence(BaseModel):
    """One accepted keyword hit and the text around it."""
    model_config = ConfigDict(frozen=True)

    keyword: str
    context: str = ""
    section: str
    position: Optional[int] = None      # offset in the full document, None for normalized-only hits
    normalized: bool = False


class RuleEvidence(BaseModel):
    """Audit trail of one rule evaluation."""
    model_config = ConfigDict(frozen=True)

    section: str                        # section name, or the fallback range label
    section_found: bool
    section_length: int = Field(default=0, ge=0)
    matches: List[MatchEvidence] = Field(default_factory=list)
    searched_keywords: List[str] = Field(default_factory=list)
    score_rule: str = ""
    source: Optional[SponsorSource] = None
    details: Dict[str, Any] = Field(default_factory=dict)

    @property
    def primary_match(self) -> Optional[MatchEvidence]:
        return self.matches[0] if self.matches else None


class RuleResult(BaseModel):
    """Score emitted by one rule for one scoring run."""
    model_config = ConfigDict(frozen=True)

    rule: RuleName
    score: int
    reason: ReasonCode
    detail: str
    evidence: RuleEvidence

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        if v not in ALLOWED_RULE_SCORES:
            raise ValueError(f"Rule score must be one of {sorted(ALLOWED_RULE_SCORES)}, got {v}")
        return v


class ScoreReport(BaseModel):
    """Composite recommendation for one prospectus."""
    model_config = ConfigDict(frozen=True)

    stock_code: str
    results: List[RuleResult]
    total_score: int
    tier: RecommendationTier
    document_length: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_total(self) -> "ScoreReport":
        """Total is the unweighted sum of the rule scores."""
        expected = sum(r.score for r in self.results)
        if self.total_score != expected:
            raise ValueError(f"total_score {self.total_score} != sum of rule scores {expected}")
        return self

    @property
    def tier_label(self) -> str:
        return self.tier.label

    def result_for(self, rule: RuleName) -> Optional[RuleResult]:
        for result in self.results:
            if result.rule == rule:
                return result
        return None

    def to_summary(self) -> Dict[str, Any]:
        """Flat view for API / UI consumers."""
        summary: Dict[str, Any] = {
            "stock_code": self.stock_code,
            "total_score": self.total_score,
            "tier": self.tier.value,
            "tier_label": self.tier_label,
        }
        for result in self.results:
            summary[f"{result.rule.value}_score"] = result.score
            summary[f"{result.rule.value}_reason"] = result.reason.value
        return summary
