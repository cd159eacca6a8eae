"""
Sponsor Rule
hk_ipo_scorer/scoring/sponsor_rule.py

Scores the listing sponsor's historical first-day performance.

Path 1 (prospectus text): search range, first that exists
    "the [joint/sole] sponsor(s) means ..." definition window ->
    parties involved in the global offering -> first 120,000 characters
Every name in the reference table is tested against that range. Matches
are collapsed by (return, count) since aliases share statistics, and the
sponsor with the most deals is the main sponsor.

Path 2 (stock-code mapping), only when path 1 matched nothing: the stock
code printed in the document, or the caller's identifier, is looked up in
the external code -> sponsor mapping and the names are resolved against
the reference table.

Tiers for the main sponsor:
    deal count < SPONSOR_MIN_DEAL_COUNT      ->  0  insufficient_data
    return >= SPONSOR_PREMIUM_RETURN         -> +2  premium_sponsor
    return >= SPONSOR_AVERAGE_RETURN         ->  0  average_sponsor
    otherwise                                -> -2  weak_sponsor
    mapped names without performance data    ->  0  no_track_record
    nothing identified                       ->  0  unidentified
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from hk_ipo_scorer.config import Settings, get_settings
from hk_ipo_scorer.models.enumerations import ReasonCode, RuleName, SponsorSource
from hk_ipo_scorer.models.report import RuleResult
from hk_ipo_scorer.models.sponsor import SponsorRecord
from hk_ipo_scorer.pipelines.keyword_matcher import search_keyword
from hk_ipo_scorer.pipelines.normalizer import format_stock_code
from hk_ipo_scorer.pipelines.section_extractor import FallbackSlice, SectionSpec, resolve_scope
from hk_ipo_scorer.repositories.sponsor_repository import SponsorReferenceTable, StockCodeSponsorMap
from hk_ipo_scorer.scoring.evidence_recorder import EvidenceRecorder

SPONSOR_DEFINITION = SectionSpec.build(
    "sponsor_definition",
    starts=[
        r"「(?:聯席|联席|獨家|独家)?保(?:薦|荐)人」\s*指",
        r"[\"“](?:Joint\s+|Sole\s+)?Sponsors?[\"”]\s+(?:means|refers\s+to)",
    ],
    ends=[],
    max_length=800,
    skip_toc=False,
    min_length=50,
)
PARTIES_SECTION = SectionSpec.build(
    "parties_involved",
    starts=[
        r"董事及參與全球發售的各方", r"參與全球發售的各方", r"参与全球发售的各方",
        r"PARTIES\s+INVOLVED\s+IN\s+THE\s+GLOBAL\s+OFFERING",
    ],
    ends=[
        r"公司資料", r"公司资料", r"CORPORATE\s+INFORMATION",
        r"行業概覽", r"行业概览", r"監管概覽", r"监管概览",
    ],
    max_length=40000,
)
SPONSOR_SECTIONS = (SPONSOR_DEFINITION, PARTIES_SECTION)
SPONSOR_FALLBACK = FallbackSlice(120000)

STOCK_CODE_IN_TEXT = re.compile(r"股份代(?:號|号)\s*[：:]\s*(\d+)|Stock\s*Code\s*[：:]\s*(\d+)", re.IGNORECASE)

DECLARED_SPONSOR_PATTERNS = (
    re.compile(r"(?:聯席|联席|獨家|独家)保(?:薦|荐)人[^\n]*\n([^\n]+有限公司)"),
    re.compile(r"(?:聯席|联席|獨家|独家)保(?:薦|荐)人[ \t]+([^\n]+有限公司)"),
)
SPONSOR_DEFINITION_LIST = re.compile(r"「(?:聯席|联席)保(?:薦|荐)人」\s*指\s*([^「」]+?)(?=「|$)")
_NAME_SEPARATORS = re.compile(r"[、及和]")
_TRAILING_PARENTHETICAL = re.compile(r"[（(][^）)]*[）)]$")
_WHITESPACE = re.compile(r"\s+")
DECLARED_SEARCH_WINDOW = 100000
MAX_DECLARED_NAME_LENGTH = 60


@dataclass(frozen=True)
class SponsorMatch:
    name: str                   # the table key or mapped name that matched
    record: SponsorRecord


def sponsor_tier(record: SponsorRecord, settings: Settings) -> Tuple[int, ReasonCode]:
    if record.deal_count < settings.SPONSOR_MIN_DEAL_COUNT:
        return 0, ReasonCode.INSUFFICIENT_DATA
    if record.avg_first_day_return >= settings.SPONSOR_PREMIUM_RETURN:
        return 2, ReasonCode.PREMIUM_SPONSOR
    if record.avg_first_day_return >= settings.SPONSOR_AVERAGE_RETURN:
        return 0, ReasonCode.AVERAGE_SPONSOR
    return -2, ReasonCode.WEAK_SPONSOR


def dedupe_matches(matches: Sequence[SponsorMatch]) -> List[SponsorMatch]:
    """Keep the first match per (return, count) pair."""
    seen = set()
    unique = []
    for match in matches:
        if match.record.stats_key in seen:
            continue
        seen.add(match.record.stats_key)
        unique.append(match)
    return unique


def select_main_sponsor(matches: Sequence[SponsorMatch]) -> Optional[SponsorMatch]:
    """Most deals wins; earlier match wins a tie."""
    if not matches:
        return None
    return max(matches, key=lambda m: m.record.deal_count)


def find_stock_code(text: str) -> str:
    """First stock code printed in the document, 5-digit form, or ''."""
    match = STOCK_CODE_IN_TEXT.search(text)
    if not match:
        return ""
    return format_stock_code(match.group(1) or match.group(2))


def _clean_name(name: str) -> str:
    return _WHITESPACE.sub("", name).strip()


def extract_declared_sponsors(text: str, parties_text: str = "") -> List[str]:
    """Sponsor names as printed under the sponsor headings or in the definition."""
    search_text = parties_text or text[:DECLARED_SEARCH_WINDOW]
    declared: List[str] = []
    for pattern in DECLARED_SPONSOR_PATTERNS:
        for match in pattern.finditer(search_text):
            name = _clean_name(match.group(1))
            if 4 <= len(name) <= MAX_DECLARED_NAME_LENGTH and "公司" in name and name not in declared:
                declared.append(name)
    if declared:
        return declared

    definition = SPONSOR_DEFINITION_LIST.search(text)
    if definition:
        for part in _NAME_SEPARATORS.split(definition.group(1)):
            name = _TRAILING_PARENTHETICAL.sub("", _clean_name(part))
            if not 4 <= len(name) <= MAX_DECLARED_NAME_LENGTH:
                continue
            if ("公司" in name or "Limited" in name) and name not in declared:
                declared.append(name)
    return declared


def _tiered_result(
    main: SponsorMatch,
    matched: Sequence[SponsorMatch],
    recorder: EvidenceRecorder,
    source: SponsorSource,
    settings: Settings,
) -> RuleResult:
    score, reason = sponsor_tier(main.record, settings)
    record = main.record
    recorder.detail("main_sponsor", record.name)
    recorder.detail("avg_first_day_return", record.avg_first_day_return)
    recorder.detail("deal_count", record.deal_count)
    recorder.detail("win_rate", record.win_rate)
    recorder.detail("all_matched", [m.name for m in matched])

    if reason == ReasonCode.INSUFFICIENT_DATA:
        detail = (
            f"{record.name}: only {record.deal_count} past deals "
            f"(< {settings.SPONSOR_MIN_DEAL_COUNT}), not scored"
        )
    else:
        detail = (
            f"{record.name}: average first-day return {record.avg_first_day_return:.2f}% "
            f"over {record.deal_count} deals"
        )
    return RuleResult(
        rule=RuleName.SPONSOR,
        score=score,
        reason=reason,
        detail=detail,
        evidence=recorder.build(source=source),
    )


def score_sponsor(
    text: str,
    stock_code: str = "",
    sponsors: Optional[SponsorReferenceTable] = None,
    stock_code_map: Optional[StockCodeSponsorMap] = None,
    settings: Optional[Settings] = None,
) -> RuleResult:
    settings = settings or get_settings()
    sponsors = sponsors if sponsors is not None else SponsorReferenceTable()
    stock_code_map = stock_code_map if stock_code_map is not None else StockCodeSponsorMap()

    scope = resolve_scope(text, SPONSOR_SECTIONS, SPONSOR_FALLBACK)
    recorder = EvidenceRecorder(
        scope,
        score_rule=(
            f"main sponsor by deal count; count < {settings.SPONSOR_MIN_DEAL_COUNT} => 0, "
            f"return >= {settings.SPONSOR_PREMIUM_RETURN:g}% => +2, "
            f">= {settings.SPONSOR_AVERAGE_RETURN:g}% => 0, else -2"
        ),
    )
    recorder.detail("declared_sponsors", extract_declared_sponsors(text, PARTIES_SECTION.extract(text)))

    # Path 1: names in the prospectus text
    in_text: List[SponsorMatch] = []
    for name, record in sponsors.items():
        hit = search_keyword(scope.text, name, scope.normalized)
        if hit:
            recorder.record_hit(hit)
            in_text.append(SponsorMatch(name, record))

    unique = dedupe_matches(in_text)
    main = select_main_sponsor(unique)
    if main is not None:
        return _tiered_result(main, unique, recorder, SponsorSource.PROSPECTUS_TEXT, settings)

    # Path 2: stock code -> sponsor mapping
    document_code = find_stock_code(text)
    caller_code = format_stock_code(stock_code) if stock_code else ""
    lookup_code, mapped_names = "", ()
    for code in (document_code, caller_code):
        if code and stock_code_map.sponsors_for(code):
            lookup_code, mapped_names = code, stock_code_map.sponsors_for(code)
            break
    recorder.detail("stock_code", lookup_code or document_code or caller_code or None)
    recorder.detail("mapped_sponsors", list(mapped_names))

    if mapped_names:
        resolved = []
        for name in mapped_names:
            record = sponsors.resolve(name)
            if record is not None:
                resolved.append(SponsorMatch(name, record))
        unique = dedupe_matches(resolved)
        main = select_main_sponsor(unique)
        if main is not None:
            return _tiered_result(main, unique, recorder, SponsorSource.STOCK_CODE_MAPPING, settings)

        return RuleResult(
            rule=RuleName.SPONSOR,
            score=0,
            reason=ReasonCode.NO_TRACK_RECORD,
            detail=f"Sponsors {', '.join(mapped_names)} (from stock code {lookup_code}) have no performance data",
            evidence=recorder.build(source=SponsorSource.STOCK_CODE_MAPPING),
        )

    return RuleResult(
        rule=RuleName.SPONSOR,
        score=0,
        reason=ReasonCode.UNIDENTIFIED,
        detail=f"No known sponsor found in {scope.source} and no stock-code mapping",
        evidence=recorder.build(),
    )
