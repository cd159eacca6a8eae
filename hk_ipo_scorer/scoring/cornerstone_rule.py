"""
Cornerstone Rule
hk_ipo_scorer/scoring/cornerstone_rule.py

+2 when at least one star institution (sovereign fund, global asset manager,
top-tier PE/VC) is named as a cornerstone investor, else 0. Binary: five
star investors score the same as one.

Search range: cornerstone investors section -> summary -> first 150,000
characters. Hits inside a genuine cornerstone section (at least
CORNERSTONE_SECTION_MIN_LENGTH characters) are trusted outright. Anywhere
else a hit must not sit inside an abbreviation/definition table. Short Latin
aliases are never accepted when glued to other letters ("GIC" inside "AGIC").
"""

from typing import Dict, List, Optional

from hk_ipo_scorer.config import Settings, get_settings
from hk_ipo_scorer.models.enumerations import ReasonCode, RuleName
from hk_ipo_scorer.models.report import RuleResult
from hk_ipo_scorer.pipelines.keyword_matcher import (
    ContextFilter,
    is_definition_list,
    search_keyword,
)
from hk_ipo_scorer.pipelines.keywords import DEFAULT_TAXONOMIES, ScoringTaxonomies
from hk_ipo_scorer.pipelines.section_extractor import FallbackSlice, SearchScope, SectionSpec, resolve_scope
from hk_ipo_scorer.scoring.evidence_recorder import EvidenceRecorder

CORNERSTONE_SECTION_NAME = "cornerstone_investors"

CORNERSTONE_SECTIONS = (
    SectionSpec.build(
        CORNERSTONE_SECTION_NAME,
        starts=[r"基石投資者", r"基石投资者", r"CORNERSTONE\s*INVESTORS?"],
        ends=[r"風險因素", r"风险因素", r"行業概覽", r"行业概览"],
        max_length=50000,
    ),
    SectionSpec.build(
        "summary",
        starts=[r"概要", r"SUMMARY"],
        ends=[r"釋義", r"释义", r"DEFINITIONS", r"風險因素", r"风险因素"],
        max_length=60000,
    ),
)
CORNERSTONE_FALLBACK = FallbackSlice(150000)

CONTEXT_RADIUS = 50
DEFINITION_UPPER_DENSITY = 0.6

SCORE_RULE = "any star cornerstone investor => +2, else 0"


def is_genuine_cornerstone_section(scope: SearchScope, settings: Settings) -> bool:
    return scope.source == CORNERSTONE_SECTION_NAME and len(scope) >= settings.CORNERSTONE_SECTION_MIN_LENGTH


def _reject_glossary_context(context: str, keyword: str) -> bool:
    return is_definition_list(context, upper_density=DEFINITION_UPPER_DENSITY, token_density=None)


def find_star_investors(
    scope: SearchScope,
    taxonomies: ScoringTaxonomies,
    trusted: bool,
    recorder: Optional[EvidenceRecorder] = None,
) -> Dict[str, str]:
    """canonical name -> first alias that matched, in taxonomy order."""
    reject: Optional[ContextFilter] = None if trusted else _reject_glossary_context
    found: Dict[str, str] = {}
    for alias in taxonomies.star_aliases:
        canonical = taxonomies.canonical_investor(alias)
        if canonical in found:
            continue
        hit = search_keyword(
            scope.text,
            alias,
            scope.normalized,
            reject=reject,
            before=CONTEXT_RADIUS,
            after=CONTEXT_RADIUS,
        )
        if hit is None:
            continue
        found[canonical] = alias
        if recorder is not None:
            recorder.record_hit(hit)
    return found


def score_cornerstone(
    text: str,
    taxonomies: ScoringTaxonomies = DEFAULT_TAXONOMIES,
    settings: Optional[Settings] = None,
) -> RuleResult:
    settings = settings or get_settings()
    scope = resolve_scope(text, CORNERSTONE_SECTIONS, CORNERSTONE_FALLBACK)
    trusted = is_genuine_cornerstone_section(scope, settings)

    recorder = EvidenceRecorder(scope, SCORE_RULE, taxonomies.star_aliases)
    found = find_star_investors(scope, taxonomies, trusted, recorder)
    investors: List[str] = list(found)
    recorder.detail("trusted_section", trusted)
    recorder.detail("investors", investors)

    if investors:
        return RuleResult(
            rule=RuleName.CORNERSTONE,
            score=2,
            reason=ReasonCode.STAR_CORNERSTONE,
            detail=f"Star cornerstone investors: {', '.join(investors)}",
            evidence=recorder.build(),
        )
    return RuleResult(
        rule=RuleName.CORNERSTONE,
        score=0,
        reason=ReasonCode.NO_STAR_CORNERSTONE,
        detail=f"No star cornerstone investor found in {scope.source}",
        evidence=recorder.build(),
    )
