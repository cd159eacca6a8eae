"""
Evidence Recorder
hk_ipo_scorer/scoring/evidence_recorder.py

Collects the audit trail of one rule evaluation: which range was searched,
which keywords were tried, and every accepted hit with its text window.
A recorder is a short-lived builder; build() freezes it into RuleEvidence.
"""

from typing import Any, Dict, Iterable, List, Optional

from hk_ipo_scorer.models.enumerations import SponsorSource
from hk_ipo_scorer.models.report import MatchEvidence, RuleEvidence
from hk_ipo_scorer.pipelines.keyword_matcher import KeywordHit
from hk_ipo_scorer.pipelines.normalizer import collapse_whitespace
from hk_ipo_scorer.pipelines.section_extractor import SearchScope

MAX_CONTEXT_LENGTH = 200


class EvidenceRecorder:
    """Mutable builder for RuleEvidence."""

    def __init__(
        self,
        scope: SearchScope,
        score_rule: str = "",
        searched_keywords: Iterable[str] = (),
    ):
        self.scope = scope
        self.score_rule = score_rule
        self._searched: List[str] = list(searched_keywords)
        self._matches: List[MatchEvidence] = []
        self._details: Dict[str, Any] = {}

    @property
    def matches(self) -> List[MatchEvidence]:
        return list(self._matches)

    def searched(self, keywords: Iterable[str]) -> None:
        for keyword in keywords:
            if keyword not in self._searched:
                self._searched.append(keyword)

    def record_hit(self, hit: KeywordHit, section: Optional[str] = None) -> MatchEvidence:
        """Record a matcher hit found inside the recorder's scope."""
        position = None if hit.normalized else self.scope.start + hit.index
        return self.record(
            keyword=hit.keyword,
            context=hit.context,
            section=section or self.scope.source,
            position=position,
            normalized=hit.normalized,
        )

    def record(
        self,
        keyword: str,
        context: str = "",
        section: Optional[str] = None,
        position: Optional[int] = None,
        normalized: bool = False,
    ) -> MatchEvidence:
        evidence = MatchEvidence(
            keyword=keyword,
            context=collapse_whitespace(context)[:MAX_CONTEXT_LENGTH],
            section=section or self.scope.source,
            position=position,
            normalized=normalized,
        )
        self._matches.append(evidence)
        return evidence

    def detail(self, key: str, value: Any) -> None:
        self._details[key] = value

    def build(self, source: Optional[SponsorSource] = None) -> RuleEvidence:
        return RuleEvidence(
            section=self.scope.source,
            section_found=self.scope.section_found,
            section_length=len(self.scope),
            matches=list(self._matches),
            searched_keywords=list(self._searched),
            score_rule=self.score_rule,
            source=source,
            details=dict(self._details),
        )
