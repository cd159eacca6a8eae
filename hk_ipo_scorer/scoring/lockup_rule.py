"""
Lock-up Rule
hk_ipo_scorer/scoring/lockup_rule.py

Three-way outcome:
    no pre-IPO investment phrase                     ->  0  no_pre_ipo
    pre-IPO investors with a lock-up phrase nearby   ->  0  pre_ipo_locked_up
    pre-IPO investors, no lock-up phrase found       -> -2  pre_ipo_no_lockup

Search range, first that exists:
    principal terms of the pre-IPO investments -> history and reorganization
    -> share capital -> substantial shareholders -> characters 20,000-220,000
The fallback slice skips the front of the document, where the cover page and
summary financials produce noise.

The lock-up search looks first at a window around the pre-IPO hit, then at the
whole range.
"""

import re
from typing import Optional

import structlog

from hk_ipo_scorer.models.enumerations import ReasonCode, RuleName
from hk_ipo_scorer.models.report import RuleResult
from hk_ipo_scorer.pipelines.keyword_matcher import KeywordHit, search_keyword
from hk_ipo_scorer.pipelines.keywords import DEFAULT_TAXONOMIES, ScoringTaxonomies
from hk_ipo_scorer.pipelines.section_extractor import FallbackSlice, SearchScope, SectionSpec, resolve_scope
from hk_ipo_scorer.scoring.evidence_recorder import EvidenceRecorder

logger = structlog.get_logger(__name__)

LOCKUP_SECTIONS = (
    SectionSpec.build(
        "pre_ipo_terms",
        starts=[
            r"首次公開發售前投資的主要條款", r"首次公开发售前投资的主要条款",
            r"PRINCIPAL\s+TERMS\s+OF\s+THE\s+PRE-IPO\s+INVESTMENTS?",
        ],
        ends=[r"(?:控股|主要)股(?:東|东)", r"附(?:錄|录)"],
        max_length=5000,
    ),
    SectionSpec.build(
        "history_and_reorganization",
        starts=[
            r"歷史[、,，]?\s*重組", r"历史[、,，]?\s*重组",
            r"歷史[、,，]?\s*發展", r"历史[、,，]?\s*发展",
            r"HISTORY,?\s*(?:AND\s+)?(?:REORGANI[SZ]ATION|DEVELOPMENT)",
        ],
        ends=[re.compile(r"^[ \t]*(?:業務|业务|BUSINESS)[ \t]*$", re.MULTILINE)],
        max_length=150000,
    ),
    SectionSpec.build(
        "share_capital",
        starts=[r"股本", r"SHARE\s+CAPITAL"],
        ends=[r"財務資料", r"财务资料", r"FINANCIAL\s+INFORMATION"],
        max_length=80000,
    ),
    SectionSpec.build(
        "substantial_shareholders",
        starts=[r"主要股(?:東|东)", r"SUBSTANTIAL\s+SHAREHOLDERS"],
        ends=[r"股本", r"SHARE\s+CAPITAL", r"財務資料", r"财务资料"],
        max_length=80000,
    ),
)
LOCKUP_FALLBACK = FallbackSlice(200000, offset=20000)

WINDOW_BEFORE = 100
WINDOW_AFTER = 1000

SCORE_RULE = "no pre-IPO => 0; pre-IPO with lock-up => 0; pre-IPO without lock-up => -2"


def find_lockup(scope: SearchScope, pre_ipo: KeywordHit, taxonomies: ScoringTaxonomies) -> Optional[KeywordHit]:
    """Lock-up phrase near the pre-IPO hit, else anywhere in the range."""
    if not pre_ipo.normalized:
        start = max(0, pre_ipo.index - WINDOW_BEFORE)
        window = scope.text[start:pre_ipo.index + WINDOW_AFTER]
        for phrase in taxonomies.lockup_phrases:
            hit = search_keyword(window, phrase, ignore_case=True)
            if hit:
                return KeywordHit(hit.keyword, start + hit.index, hit.context, False)

    for phrase in taxonomies.lockup_phrases:
        hit = search_keyword(scope.text, phrase, scope.normalized, ignore_case=True)
        if hit:
            return hit
    return None


def score_lockup(text: str, taxonomies: ScoringTaxonomies = DEFAULT_TAXONOMIES) -> RuleResult:
    scope = resolve_scope(text, LOCKUP_SECTIONS, LOCKUP_FALLBACK)
    recorder = EvidenceRecorder(scope, SCORE_RULE, taxonomies.pre_ipo_phrases)

    pre_ipo = None
    for phrase in taxonomies.pre_ipo_phrases:
        pre_ipo = search_keyword(scope.text, phrase, scope.normalized, ignore_case=True)
        if pre_ipo:
            break

    if pre_ipo is None:
        return RuleResult(
            rule=RuleName.LOCKUP,
            score=0,
            reason=ReasonCode.NO_PRE_IPO,
            detail=f"No pre-IPO investment found in {scope.source}",
            evidence=recorder.build(),
        )

    recorder.record_hit(pre_ipo)
    recorder.searched(taxonomies.lockup_phrases)
    lockup = find_lockup(scope, pre_ipo, taxonomies)

    if lockup is None:
        logger.debug("pre_ipo_without_lockup", section=scope.source, keyword=pre_ipo.keyword)
        return RuleResult(
            rule=RuleName.LOCKUP,
            score=-2,
            reason=ReasonCode.PRE_IPO_NO_LOCKUP,
            detail=f"Pre-IPO investors ('{pre_ipo.keyword}') with no lock-up found in {scope.source}",
            evidence=recorder.build(),
        )

    recorder.record_hit(lockup)
    return RuleResult(
        rule=RuleName.LOCKUP,
        score=0,
        reason=ReasonCode.PRE_IPO_LOCKED_UP,
        detail=f"Pre-IPO investors ('{pre_ipo.keyword}') are subject to a lock-up ('{lockup.keyword}')",
        evidence=recorder.build(),
    )
