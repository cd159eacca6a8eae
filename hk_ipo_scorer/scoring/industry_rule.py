"""
Industry Rule
hk_ipo_scorer/scoring/industry_rule.py

Classifies the issuer's track by market sentiment:
    hot (+2) -> growth (+1) -> low elasticity (-1)   first match wins
    avoid (-2)                                       tested last, overrides
    nothing                                          0 neutral

Search range: industry overview -> business -> first 250,000 characters.
A candidate hit inside an abbreviation/definition table is discarded and the
scan continues with the next keyword.
"""

from typing import Optional, Tuple

from hk_ipo_scorer.models.enumerations import ReasonCode, RuleName, TrackCategory
from hk_ipo_scorer.models.report import RuleResult
from hk_ipo_scorer.pipelines.keyword_matcher import KeywordHit, is_definition_list, search_keyword
from hk_ipo_scorer.pipelines.keywords import DEFAULT_TAXONOMIES, KeywordTaxonomy, ScoringTaxonomies
from hk_ipo_scorer.pipelines.section_extractor import FallbackSlice, SearchScope, SectionSpec, resolve_scope
from hk_ipo_scorer.scoring.evidence_recorder import EvidenceRecorder

_SECTION_ENDS = [
    r"監管概覽", r"监管概览", r"REGULATORY\s+OVERVIEW",
    r"董事及高級管理層", r"董事及高级管理层", r"DIRECTORS\s+AND\s+SENIOR\s+MANAGEMENT",
]

INDUSTRY_SECTIONS = (
    SectionSpec.build(
        "industry_overview",
        starts=[r"行業概覽", r"行业概览", r"INDUSTRY\s*OVERVIEW"],
        ends=_SECTION_ENDS,
        max_length=100000,
    ),
    SectionSpec.build(
        "business",
        starts=[r"業務概覽", r"业务概览", r"業務", r"业务", r"BUSINESS"],
        ends=_SECTION_ENDS,
        max_length=100000,
    ),
)
INDUSTRY_FALLBACK = FallbackSlice(250000)

SHORT_KEYWORD_MAX_LENGTH = 4
DEFINITION_UPPER_DENSITY = 0.4
DEFINITION_TOKEN_DENSITY = 0.5

SCORE_RULE = "hot +2 > growth +1 > low elasticity -1 (first match); avoid -2 overrides; else 0"


def _reject_glossary_context(context: str, keyword: str) -> bool:
    return is_definition_list(
        context,
        upper_density=DEFINITION_UPPER_DENSITY,
        token_density=DEFINITION_TOKEN_DENSITY,
    )


def first_track_hit(scope: SearchScope, taxonomy: KeywordTaxonomy) -> Optional[KeywordHit]:
    """First keyword of *taxonomy*, in list order, with an accepted hit."""
    for keyword in taxonomy.keywords:
        hit = search_keyword(
            scope.text,
            keyword,
            scope.normalized,
            reject=_reject_glossary_context,
            max_short_length=SHORT_KEYWORD_MAX_LENGTH,
        )
        if hit:
            return hit
    return None


def classify_track(
    scope: SearchScope,
    taxonomies: ScoringTaxonomies = DEFAULT_TAXONOMIES,
) -> Tuple[Optional[KeywordTaxonomy], Optional[KeywordHit], Optional[KeywordHit]]:
    """
    (winning taxonomy, its hit, the ranked hit that was overridden).

    The winner is None when nothing matched.
    """
    industry = taxonomies.industry
    winner, winning_hit = None, None
    for taxonomy in industry.ranked:
        hit = first_track_hit(scope, taxonomy)
        if hit:
            winner, winning_hit = taxonomy, hit
            break

    avoid_hit = first_track_hit(scope, industry.override)
    if avoid_hit:
        return industry.override, avoid_hit, winning_hit
    return winner, winning_hit, None


def score_industry(text: str, taxonomies: ScoringTaxonomies = DEFAULT_TAXONOMIES) -> RuleResult:
    scope = resolve_scope(text, INDUSTRY_SECTIONS, INDUSTRY_FALLBACK)
    recorder = EvidenceRecorder(scope, SCORE_RULE)
    for taxonomy in taxonomies.industry.all_taxonomies:
        recorder.searched(taxonomy.keywords)
    recorder.detail("track_catalogue", taxonomies.industry.catalogue())

    taxonomy, hit, overridden = classify_track(scope, taxonomies)

    if taxonomy is None:
        recorder.detail("category", TrackCategory.NEUTRAL.value)
        return RuleResult(
            rule=RuleName.INDUSTRY,
            score=0,
            reason=ReasonCode.NEUTRAL_TRACK,
            detail=f"No track keyword found in {scope.source}; neutral",
            evidence=recorder.build(),
        )

    recorder.record_hit(hit)
    if overridden is not None:
        recorder.record_hit(overridden)
        recorder.detail("overridden_keyword", overridden.keyword)
    recorder.detail("category", taxonomy.category.value)
    return RuleResult(
        rule=RuleName.INDUSTRY,
        score=taxonomy.score,
        reason=taxonomy.reason,
        detail=f"{taxonomy.category.value} track: '{hit.keyword}' in {scope.source}",
        evidence=recorder.build(),
    )
