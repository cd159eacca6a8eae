"""
Old-Share Rule
hk_ipo_scorer/scoring/old_share_rule.py

Detects vendor (sale) shares in the offering. Binary:
    any sale-share phrase in the offering section, or the
    "company will not receive the selling shareholder's proceeds"
    disclaimer anywhere in the document           -> -2  has_old_shares
    otherwise                                     ->  0  all_new_shares

Search range, first that exists:
    structure of the global offering -> use of proceeds ->
    selling shareholder section -> first 80,000 characters

The new/sale share counts and the cover-page offering statement are
recorded as evidence only; they never change the score.
"""

import re
from typing import Optional, Tuple

from hk_ipo_scorer.models.enumerations import ReasonCode, RuleName
from hk_ipo_scorer.models.report import RuleResult
from hk_ipo_scorer.pipelines.keyword_matcher import search_keyword
from hk_ipo_scorer.pipelines.keywords import DEFAULT_TAXONOMIES, ScoringTaxonomies
from hk_ipo_scorer.pipelines.normalizer import collapse_whitespace, normalize_text
from hk_ipo_scorer.pipelines.section_extractor import FallbackSlice, SectionSpec, resolve_scope
from hk_ipo_scorer.scoring.evidence_recorder import EvidenceRecorder

OLD_SHARE_SECTIONS = (
    SectionSpec.build(
        "global_offering",
        starts=[
            r"全球發售的架構", r"全球发售的架构", r"STRUCTURE\s+OF\s+THE\s+GLOBAL\s+OFFERING",
            r"全球發售", r"全球发售", r"GLOBAL\s+OFFERING",
        ],
        ends=[r"風險因素", r"风险因素", r"RISK\s+FACTORS"],
        max_length=30000,
    ),
    SectionSpec.build(
        "use_of_proceeds",
        starts=[r"所得款項用途", r"所得款项用途", r"USE\s+OF\s+PROCEEDS"],
        ends=[r"包銷", r"包销", r"UNDERWRITING"],
        max_length=30000,
    ),
    SectionSpec.build(
        "selling_shareholder",
        starts=[r"售股股東", r"售股股东", r"SELLING\s+SHAREHOLDERS?"],
        ends=[r"包銷", r"包销", r"UNDERWRITING"],
        max_length=30000,
    ),
)
OLD_SHARE_FALLBACK = FallbackSlice(80000)

# Matched against normalize_text(document): no whitespace, partly simplified
PROCEEDS_DISCLAIMERS = (
    re.compile(
        r"本公司(?:將|将)不(?:會|会)?(?:收取|獲得|获得).{0,40}?售股股(?:東|东).{0,60}?所得款(?:項|项)"
    ),
    re.compile(r"本公司不(?:會|会)(?:收取|獲得|获得)任何.{0,30}?售股股(?:東|东)"),
    re.compile(
        r"willnotreceiveany(?:ofthe)?proceeds.{0,80}?sellingshareholder", re.IGNORECASE
    ),
)

OFFERING_STATEMENT = re.compile(r"全球(?:發|发)售的(?:發|发)售股份(?:數|数)目\s*[：:]\s*([^\n]+)")
OFFERING_STATEMENT_WINDOW = 25000

NEW_SHARE_COUNT = re.compile(r"(\d[\d,]*)\s*股\s*新股份?")
SALE_SHARE_COUNT = re.compile(r"(\d[\d,]*)\s*股\s*(?:銷售|销售)股份")

SCORE_RULE = "sale-share phrase in offering section or proceeds disclaimer => -2, else 0"


def find_offering_statement(text: str) -> str:
    """The cover-page "number of offer shares under the global offering" line, or ''."""
    match = OFFERING_STATEMENT.search(text[:OFFERING_STATEMENT_WINDOW])
    if not match:
        return ""
    return collapse_whitespace(match.group(0))


def find_proceeds_disclaimer(normalized_text: str) -> Optional[Tuple[int, str]]:
    """(offset, matched sentence) of the first proceeds disclaimer in normalized text."""
    for pattern in PROCEEDS_DISCLAIMERS:
        match = pattern.search(normalized_text)
        if match:
            return match.start(), match.group(0)
    return None


def _first_count(pattern, *texts: str) -> Optional[int]:
    for text in texts:
        if not text:
            continue
        match = pattern.search(text)
        if match:
            return int(match.group(1).replace(",", ""))
    return None


def share_counts(*texts: str) -> Tuple[Optional[int], Optional[int]]:
    """(new shares, sale shares) from the first text that states each."""
    return _first_count(NEW_SHARE_COUNT, *texts), _first_count(SALE_SHARE_COUNT, *texts)


def sale_share_ratio(new_shares: Optional[int], sale_shares: Optional[int]) -> Optional[float]:
    if not sale_shares:
        return None
    total = (new_shares or 0) + sale_shares
    return round(sale_shares / total, 4)


def score_old_shares(text: str, taxonomies: ScoringTaxonomies = DEFAULT_TAXONOMIES) -> RuleResult:
    scope = resolve_scope(text, OLD_SHARE_SECTIONS, OLD_SHARE_FALLBACK)
    recorder = EvidenceRecorder(scope, SCORE_RULE, taxonomies.old_share_phrases)

    for phrase in taxonomies.old_share_phrases:
        hit = search_keyword(scope.text, phrase, scope.normalized, ignore_case=True)
        if hit:
            recorder.record_hit(hit)

    disclaimer = find_proceeds_disclaimer(normalize_text(text))
    if disclaimer:
        _, sentence = disclaimer
        recorder.record(
            keyword="proceeds_disclaimer",
            context=sentence,
            section="full_text",
            normalized=True,
        )

    statement = find_offering_statement(text)
    new_shares, sale_shares = share_counts(statement, scope.text)
    recorder.detail("offering_statement", statement or None)
    recorder.detail("new_shares", new_shares)
    recorder.detail("sale_shares", sale_shares)
    recorder.detail("sale_share_ratio", sale_share_ratio(new_shares, sale_shares))
    recorder.detail("disclaimer_found", disclaimer is not None)

    evidence = recorder.build()
    if evidence.matches:
        first = evidence.primary_match
        return RuleResult(
            rule=RuleName.OLD_SHARES,
            score=-2,
            reason=ReasonCode.HAS_OLD_SHARES,
            detail=f"Offering includes sale shares ('{first.keyword}' in {first.section})",
            evidence=evidence,
        )

    return RuleResult(
        rule=RuleName.OLD_SHARES,
        score=0,
        reason=ReasonCode.ALL_NEW_SHARES,
        detail=f"No sale-share wording found in {scope.source}; all offer shares are new",
        evidence=evidence,
    )
