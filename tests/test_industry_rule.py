# tests/test_industry_rule.py
"""
Industry Rule Tests
"""

from dataclasses import replace

import pytest

from hk_ipo_scorer.models.enumerations import ReasonCode, RuleName, TrackCategory
from hk_ipo_scorer.pipelines.keywords import (
    DEFAULT_TAXONOMIES,
    IndustryTaxonomy,
    KeywordTaxonomy,
)
from hk_ipo_scorer.scoring.industry_rule import score_industry


def overview(body: str, filler) -> str:
    return "行業概覽\n" + body + "\n" + filler(500) + "\n監管概覽\n" + filler(500)


class TestTrackPrecedence:
    """hot > growth > low elasticity, avoid overrides all."""

    @pytest.mark.parametrize("body,score,reason,keyword", [
        ("本公司是領先的人工智能解決方案供應商。", 2, ReasonCode.HOT_TRACK, "人工智能"),
        ("本集團主要從事醫療器械的研發及銷售。", 1, ReasonCode.GROWTH_TRACK, "醫療器械"),
        ("本集團提供第三方物流服務。", -1, ReasonCode.LOW_ELASTICITY_TRACK, "物流"),
        ("本集團從事住宅物業管理。", -2, ReasonCode.AVOID_TRACK, "物業管理"),
    ])
    def test_single_track(self, filler, body, score, reason, keyword):
        result = score_industry(overview(body, filler))
        assert result.rule == RuleName.INDUSTRY
        assert result.score == score
        assert result.reason == reason
        assert result.evidence.primary_match.keyword == keyword
        assert result.evidence.section == "industry_overview"

    def test_avoid_overrides_hot(self, filler):
        result = score_industry(overview("本集團為半導體企業提供物業管理服務。", filler))
        assert result.score == -2
        assert result.evidence.details["category"] == TrackCategory.AVOID.value
        assert result.evidence.details["overridden_keyword"] == "半導體"
        assert [m.keyword for m in result.evidence.matches] == ["物業管理", "半導體"]

    def test_hot_beats_low_elasticity(self, filler):
        result = score_industry(overview("本集團的機場物流平台採用人工智能技術。", filler))
        assert result.score == 2
        assert "overridden_keyword" not in result.evidence.details

    def test_neutral(self, filler):
        result = score_industry(overview("本集團經營一家連鎖酒店。", filler))
        assert result.score == 0
        assert result.reason == ReasonCode.NEUTRAL_TRACK
        assert result.evidence.details["category"] == "neutral"
        assert result.evidence.matches == []

    def test_track_catalogue_recorded(self, filler):
        result = score_industry(overview("本集團經營一家連鎖酒店。", filler))
        assert set(result.evidence.details["track_catalogue"]) == {
            "hot", "growth", "low_elasticity", "avoid", "neutral",
        }


class TestFalsePositives:

    def test_abbreviation_table_hit_rejected(self, filler):
        result = score_industry(overview("縮寫 ABC DEF GPU GHI JKL MNO PQR ", filler))
        assert result.reason == ReasonCode.NEUTRAL_TRACK

    def test_short_keyword_in_prose_accepted(self, filler):
        result = score_industry(overview("本公司設計GPU產品。", filler))
        assert result.score == 2
        assert result.evidence.primary_match.keyword == "GPU"

    def test_short_keyword_inside_product_code(self, filler):
        result = score_industry(overview("本公司的主要產品為HBMX200模組。", filler))
        assert result.reason == ReasonCode.NEUTRAL_TRACK

    def test_keyword_outside_section_ignored(self, filler):
        text = "行業概覽\n本集團經營酒店。\n監管概覽\n本公司受半導體法規規管。" + filler(500)
        assert score_industry(text).score == 0


class TestSearchRange:

    def test_business_section(self, filler):
        text = (
            filler(300) + "業務概覽\n本集團從事物流。\n" + filler(300)
            + "\n董事及高級管理層\n" + filler(300)
        )
        result = score_industry(text)
        assert result.evidence.section == "business"
        assert result.score == -1

    def test_fallback_prefix(self, filler):
        text = filler(300) + "本公司從事半導體設計。" + filler(300)
        result = score_industry(text)
        assert result.evidence.section == "prefix:250000"
        assert result.evidence.section_found is False
        assert result.score == 2

    def test_position_points_into_document(self, filler):
        text = filler(200) + overview("本公司從事半導體設計。", filler)
        match = score_industry(text).evidence.primary_match
        assert text[match.position:match.position + len(match.keyword)] == match.keyword

    def test_keyword_wrapped_across_lines(self, filler):
        result = score_industry(overview("本公司是人工\n智能公司。", filler))
        assert result.score == 2
        assert result.evidence.primary_match.normalized is True
        assert result.evidence.primary_match.position is None

    def test_simplified_text(self, filler):
        assert score_industry(overview("本公司从事半导体设计。", filler)).score == 2


class TestCustomTaxonomy:

    def test_taxonomy_is_injectable(self, filler):
        industry = IndustryTaxonomy(
            ranked=(
                KeywordTaxonomy(
                    "test_hot", TrackCategory.HOT, 2, ReasonCode.HOT_TRACK, "test (+2)", ("丙丁",),
                ),
            ),
            override=KeywordTaxonomy(
                "test_avoid", TrackCategory.AVOID, -2, ReasonCode.AVOID_TRACK, "test (-2)", ("子丑",),
            ),
        )
        taxonomies = replace(DEFAULT_TAXONOMIES, industry=industry)
        result = score_industry(filler(500), taxonomies)
        assert result.score == 2
        assert result.evidence.primary_match.keyword == "丙丁"
        assert DEFAULT_TAXONOMIES.industry.ranked[0].name == "hot_tracks"


class TestGlossaryWithNormalizedRetry:
    """CJK keywords are retried on normalized text; glossary hits stay rejected."""

    def test_cjk_keyword_in_abbreviation_table(self, filler):
        body = "ABC DEF GHI JKL MNO 物業管理 PQR STU VWX XYZ QRS"
        result = score_industry(overview(body, filler))
        assert result.score == 0
        assert result.reason == ReasonCode.NEUTRAL_TRACK

    def test_wrapped_cjk_keyword_in_abbreviation_table(self, filler):
        body = "ABC DEF GHI JKL MNO 半導\n體 PQR STU VWX XYZ QRS"
        assert score_industry(overview(body, filler)).score == 0

    def test_prose_hit_after_glossary_still_scores(self, filler):
        body = "ABC DEF GHI JKL MNO 物業管理 PQR STU VWX XYZ QRS\n" + filler(100) + "本集團從事半導\n體設計。"
        result = score_industry(overview(body, filler))
        assert result.score == 2
        assert result.evidence.primary_match.keyword == "半導體"
