"""
Prospectus Scoring Engine
hk_ipo_scorer/scoring/engine.py

Orchestrates one scoring run:

  (document text, stock code, reference data)
      -> refuse documents too short to be real text (scanned PDFs)
      -> run the five rules, each on its own extracted section
      -> aggregate into a ScoreReport

A run is a pure function of its inputs. ReferenceData is loaded once by the
caller and shared read-only across runs, so independent runs may execute in
parallel.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple, Union

import structlog

from hk_ipo_scorer.config import Settings, get_settings
from hk_ipo_scorer.core.exceptions import DocumentTooShortError
from hk_ipo_scorer.models.enumerations import RuleName
from hk_ipo_scorer.models.report import RuleResult, ScoreReport
from hk_ipo_scorer.pipelines.keywords import DEFAULT_TAXONOMIES, ScoringTaxonomies
from hk_ipo_scorer.pipelines.normalizer import format_stock_code
from hk_ipo_scorer.repositories.sponsor_repository import (
    SponsorReferenceTable,
    SponsorRepository,
    StockCodeSponsorMap,
)
from hk_ipo_scorer.scoring.aggregator import aggregate
from hk_ipo_scorer.scoring.cornerstone_rule import score_cornerstone
from hk_ipo_scorer.scoring.industry_rule import score_industry
from hk_ipo_scorer.scoring.lockup_rule import score_lockup
from hk_ipo_scorer.scoring.old_share_rule import score_old_shares
from hk_ipo_scorer.scoring.sponsor_rule import score_sponsor

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProspectusDocument:
    """Decoded prospectus text for one stock code."""
    stock_code: str
    text: str

    def __post_init__(self):
        object.__setattr__(self, "stock_code", format_stock_code(self.stock_code) if self.stock_code else "")

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class ReferenceData:
    """Read-only inputs shared by every run in a batch."""
    sponsors: SponsorReferenceTable = field(default_factory=SponsorReferenceTable)
    stock_code_map: StockCodeSponsorMap = field(default_factory=StockCodeSponsorMap)
    taxonomies: ScoringTaxonomies = DEFAULT_TAXONOMIES

    @classmethod
    def load(cls, settings: Optional[Settings] = None) -> "ReferenceData":
        """Fallback table + crawler snapshot + stock-code mapping from DATA_DIR."""
        repository = SponsorRepository(settings)
        return cls(
            sponsors=repository.load_reference_table(),
            stock_code_map=repository.load_stock_code_map(),
        )


RuleFunction = Callable[[ProspectusDocument, ReferenceData, Settings], RuleResult]


def _old_shares(document: ProspectusDocument, reference: ReferenceData, settings: Settings) -> RuleResult:
    return score_old_shares(document.text, reference.taxonomies)


def _sponsor(document: ProspectusDocument, reference: ReferenceData, settings: Settings) -> RuleResult:
    return score_sponsor(
        document.text,
        document.stock_code,
        reference.sponsors,
        reference.stock_code_map,
        settings,
    )


def _cornerstone(document: ProspectusDocument, reference: ReferenceData, settings: Settings) -> RuleResult:
    return score_cornerstone(document.text, reference.taxonomies, settings)


def _lockup(document: ProspectusDocument, reference: ReferenceData, settings: Settings) -> RuleResult:
    return score_lockup(document.text, reference.taxonomies)


def _industry(document: ProspectusDocument, reference: ReferenceData, settings: Settings) -> RuleResult:
    return score_industry(document.text, reference.taxonomies)


RULES: Tuple[Tuple[RuleName, RuleFunction], ...] = (
    (RuleName.OLD_SHARES, _old_shares),
    (RuleName.SPONSOR, _sponsor),
    (RuleName.CORNERSTONE, _cornerstone),
    (RuleName.LOCKUP, _lockup),
    (RuleName.INDUSTRY, _industry),
)


class ProspectusScorer:
    """Score prospectuses against the five heuristic rules."""

    def __init__(
        self,
        reference: Optional[ReferenceData] = None,
        settings: Optional[Settings] = None,
        rules: Sequence[Tuple[RuleName, RuleFunction]] = RULES,
    ):
        self.reference = reference if reference is not None else ReferenceData()
        self.settings = settings or get_settings()
        self.rules = tuple(rules)

    def score(
        self,
        document: Union[ProspectusDocument, str],
        stock_code: str = "",
    ) -> ScoreReport:
        """
        Args:
            document: ProspectusDocument, or the raw text (then stock_code applies).
            stock_code: Stock identifier when passing raw text.

        Returns:
            ScoreReport with one RuleResult per rule.

        Raises:
            DocumentTooShortError: text shorter than MIN_DOCUMENT_LENGTH.
        """
        if isinstance(document, str):
            document = ProspectusDocument(stock_code=stock_code, text=document)

        log = logger.bind(stock_code=document.stock_code)
        minimum = self.settings.MIN_DOCUMENT_LENGTH
        if len(document) < minimum:
            log.warning("document_rejected", length=len(document), minimum=minimum)
            raise DocumentTooShortError(document.stock_code, len(document), minimum)

        log.info("scoring_started", document_length=len(document))

        results: List[RuleResult] = []
        for name, rule in self.rules:
            result = rule(document, self.reference, self.settings)
            log.info(
                "rule_scored",
                rule=name.value,
                score=result.score,
                reason=result.reason.value,
                section=result.evidence.section,
                section_found=result.evidence.section_found,
            )
            results.append(result)

        report = aggregate(document.stock_code, results, len(document))
        log.info(
            "scoring_completed",
            total_score=report.total_score,
            tier=report.tier.value,
        )
        return report
