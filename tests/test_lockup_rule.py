# tests/test_lockup_rule.py
"""
Lock-up Rule Tests
"""

from structlog.testing import capture_logs

from hk_ipo_scorer.models.enumerations import ReasonCode, RuleName
from hk_ipo_scorer.pipelines.keywords import DEFAULT_TAXONOMIES
from hk_ipo_scorer.scoring.lockup_rule import score_lockup


def history_section(body: str, filler) -> str:
    return (
        filler(300) + "歷史、重組及公司架構\n" + filler(200) + body
        + filler(500) + "\n業務\n" + filler(500)
    )


class TestLockupOutcomes:
    """no pre-IPO -> 0, locked up -> 0, not locked up -> -2."""

    def test_pre_ipo_with_lockup(self, filler):
        text = history_section("首次公開發售前投資者已同意於上市後十二個月的禁售期內不出售股份。", filler)
        result = score_lockup(text)
        assert result.rule == RuleName.LOCKUP
        assert result.score == 0
        assert result.reason == ReasonCode.PRE_IPO_LOCKED_UP
        assert result.evidence.section == "history_and_reorganization"
        assert [m.keyword for m in result.evidence.matches] == ["首次公開發售前投資", "禁售期"]

    def test_pre_ipo_without_lockup(self, filler):
        text = history_section("首次公開發售前投資者按每股10港元認購股份。", filler)
        result = score_lockup(text)
        assert result.score == -2
        assert result.reason == ReasonCode.PRE_IPO_NO_LOCKUP
        assert len(result.evidence.matches) == 1
        assert "禁售" in result.evidence.searched_keywords

    def test_no_pre_ipo(self, filler):
        text = history_section("本公司於二零一五年在開曼群島註冊成立。", filler)
        result = score_lockup(text)
        assert result.score == 0
        assert result.reason == ReasonCode.NO_PRE_IPO
        assert result.evidence.matches == []

    def test_missing_lockup_is_logged(self, filler):
        text = history_section("首次公開發售前投資者按每股10港元認購股份。", filler)
        with capture_logs() as logs:
            score_lockup(text)
        events = [entry for entry in logs if entry["event"] == "pre_ipo_without_lockup"]
        assert len(events) == 1
        assert events[0]["section"] == "history_and_reorganization"


class TestLockupSearch:

    def test_lockup_near_pre_ipo_hit(self, filler):
        text = history_section("首次公開發售前投資者須遵守禁售安排。", filler)
        result = score_lockup(text)
        lockup = result.evidence.matches[1]
        assert lockup.keyword == "禁售"
        assert text[lockup.position:lockup.position + 2] == "禁售"

    def test_lockup_far_from_pre_ipo_hit(self, filler):
        text = history_section(
            "首次公開發售前投資者認購股份。" + filler(3000) + "上述股份須遵守禁售安排。", filler
        )
        result = score_lockup(text)
        assert result.reason == ReasonCode.PRE_IPO_LOCKED_UP
        lockup = result.evidence.matches[1]
        assert text[lockup.position:lockup.position + 2] == "禁售"

    def test_lockup_outside_range_does_not_count(self, filler):
        text = history_section("首次公開發售前投資者認購股份。", filler) + "禁售期"
        assert score_lockup(text).reason == ReasonCode.PRE_IPO_NO_LOCKUP

    def test_wrapped_pre_ipo_phrase(self, filler):
        text = history_section("首次公開發售前\n投資者須遵守禁售期。", filler)
        result = score_lockup(text)
        assert result.reason == ReasonCode.PRE_IPO_LOCKED_UP
        assert result.evidence.primary_match.normalized is True

    def test_english_wording(self, filler):
        text = (
            "HISTORY, REORGANIZATION AND CORPORATE STRUCTURE\n"
            "The Pre-IPO Investors are subject to a lock-up period of 12 months.\n"
            + filler(500) + "\nBUSINESS\n" + filler(500)
        )
        result = score_lockup(text)
        assert result.evidence.section == "history_and_reorganization"
        assert result.reason == ReasonCode.PRE_IPO_LOCKED_UP

    def test_english_without_lockup(self, filler):
        text = (
            "HISTORY, REORGANIZATION AND CORPORATE STRUCTURE\n"
            "The Pre-IPO Investors paid US$10 per Share.\n"
            + filler(500) + "\nBUSINESS\n" + filler(500)
        )
        assert score_lockup(text).score == -2


class TestSearchRange:

    def test_principal_terms_block(self, filler):
        text = (
            filler(300) + "首次公開發售前投資的主要條款\n"
            + "禁售：首次公開發售前投資者於上市後六個月內不得出售股份。" + filler(300)
            + "\n主要股東\n" + filler(500)
        )
        result = score_lockup(text)
        assert result.evidence.section == "pre_ipo_terms"
        assert result.reason == ReasonCode.PRE_IPO_LOCKED_UP

    def test_business_mentioned_in_prose_does_not_end_history(self, filler):
        text = history_section(
            "本集團的業務發展迅速。" + filler(300) + "首次公開發售前投資者認購股份。", filler
        )
        assert score_lockup(text).reason == ReasonCode.PRE_IPO_NO_LOCKUP

    def test_share_capital_section(self, filler):
        text = (
            filler(300) + "股本\n優先股已於上市時轉換，並受禁售限制。"
            + filler(300) + "\n財務資料\n" + filler(500)
        )
        result = score_lockup(text)
        assert result.evidence.section == "share_capital"
        assert result.reason == ReasonCode.PRE_IPO_LOCKED_UP
        assert result.evidence.primary_match.keyword == "優先股"

    def test_substantial_shareholders_section(self, filler):
        text = filler(300) + "主要股東\n私募投資者持有本公司5%權益。" + filler(500)
        result = score_lockup(text)
        assert result.evidence.section == "substantial_shareholders"
        assert result.score == -2

    def test_fallback_skips_front_of_long_document(self, filler):
        text = "Pre-IPO" + filler(50_000)
        result = score_lockup(text)
        assert result.evidence.section == "slice:20000-220000"
        assert result.evidence.section_found is False
        assert result.reason == ReasonCode.NO_PRE_IPO

    def test_fallback_keeps_front_of_short_document(self, filler):
        text = "Pre-IPO" + filler(30_000)
        result = score_lockup(text, DEFAULT_TAXONOMIES)
        assert result.reason == ReasonCode.PRE_IPO_NO_LOCKUP
        assert result.evidence.primary_match.position == 0
