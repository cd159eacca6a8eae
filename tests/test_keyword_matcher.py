# tests/test_keyword_matcher.py
"""
Keyword Matcher Tests
"""

import pytest

from hk_ipo_scorer.pipelines.keyword_matcher import (
    context_window,
    find_keyword,
    is_cjk_keyword,
    is_definition_list,
    is_short_alnum_keyword,
    matches,
    search_keyword,
)
from hk_ipo_scorer.pipelines.normalizer import normalize_text


class TestKeywordShapes:

    def test_cjk_keyword(self):
        assert is_cjk_keyword("半導體")
        assert not is_cjk_keyword("AI芯片")

    @pytest.mark.parametrize("keyword,expected", [
        ("L3", True),
        ("GPU", True),
        ("DDR5", True),
        ("eVTOL", True),
        ("Chiplet", False),
        ("CAR-T", False),
        ("AI芯片", False),
    ])
    def test_short_alnum_keyword(self, keyword, expected):
        assert is_short_alnum_keyword(keyword) is expected


class TestMatches:
    """Tests for matches()."""

    def test_rejects_short_token_embedded_in_longer_token(self):
        assert matches("L330TOPSPCB module", "L3") is False

    def test_accepts_short_token_between_separators(self):
        assert matches("compliant with L3 rules", "L3") is True

    def test_short_token_at_string_edges(self):
        assert matches("L3", "L3")
        assert matches("rules: L3", "L3")

    def test_short_token_next_to_cjk(self):
        assert matches("本公司設計GPU產品", "GPU")

    def test_short_token_case_insensitive(self):
        assert matches("our gpu clusters", "GPU")

    def test_cjk_plain_containment(self):
        assert matches("本公司從事半導體設計", "半導體")

    def test_longer_keyword_plain_containment(self):
        assert matches("a Robotaxi fleet", "Robotaxi")
        assert matches("CAR-T therapies", "CAR-T")

    def test_longer_keyword_case_sensitive_by_default(self):
        assert matches("a robotaxi fleet", "Robotaxi") is False
        assert matches("a robotaxi fleet", "Robotaxi", ignore_case=True) is True

    def test_empty_inputs(self):
        assert matches("", "GPU") is False
        assert matches("GPU", "") is False

    def test_find_keyword_returns_first_bounded_position(self):
        text = "L330 then L3 here"
        assert find_keyword(text, "L3") == text.index("L3 here")

    def test_find_keyword_absent(self):
        assert find_keyword("nothing", "GPU") == -1


class TestDefinitionList:
    """Tests for is_definition_list()."""

    def test_abbreviation_table_detected(self):
        context = "ADC 指 ADC GPU 指 GPU NPU 指"
        assert is_definition_list(context)

    def test_english_prose_not_flagged(self):
        context = "The company develops autonomous driving systems for passenger cars"
        assert not is_definition_list(context)

    def test_chinese_prose_not_flagged(self):
        assert not is_definition_list("本公司是領先的人工智能解決方案供應商，服務多個行業客戶。")

    def test_too_few_tokens_never_flagged(self):
        assert not is_definition_list("GPU NPU ADC")

    def test_technical_token_density(self):
        context = "DDR5 PCIe eVTOL SoC CXL5 iPhone the and"
        assert is_definition_list(context, upper_density=0.9, token_density=0.5)
        assert not is_definition_list(context, upper_density=0.9, token_density=None)

    def test_upper_density_threshold(self):
        # 4 of 8 tokens are abbreviations: 0.5
        context = "GPU NPU ADC TPU one two three four"
        assert is_definition_list(context, upper_density=0.4, token_density=None)
        assert not is_definition_list(context, upper_density=0.6, token_density=None)


class TestContextWindow:

    def test_window_is_clamped_to_text(self):
        text = "0123456789"
        assert context_window(text, 2, 2, before=5, after=5) == "012345678"

    def test_window_bounds(self):
        text = "a" * 100 + "KEY" + "b" * 100
        window = context_window(text, 100, 3, before=30, after=50)
        assert window == "a" * 30 + "KEY" + "b" * 50


class TestSearchKeyword:
    """Tests for search_keyword()."""

    def test_raw_hit(self):
        text = "本公司從事半導體設計"
        hit = search_keyword(text, "半導體")
        assert hit is not None
        assert hit.index == text.index("半導體")
        assert hit.normalized is False

    def test_wrapped_keyword_found_in_normalized_text(self):
        text = "本公司專注人工\n智能"
        hit = search_keyword(text, "人工智能", normalize_text(text))
        assert hit is not None
        assert hit.normalized is True

    def test_traditional_keyword_matches_simplified_text(self):
        text = "本集团从事半导体"
        hit = search_keyword(text, "半導體", text)
        assert hit is not None
        assert hit.normalized is True

    def test_ascii_keyword_not_retried_on_normalized_text(self):
        """Whitespace removal would glue short tokens to their neighbours."""
        text = "L 3"
        assert search_keyword(text, "L3", "L3") is None

    def test_rejected_occurrence_is_skipped(self):
        glossary = "ADC GPU NPU TPU CPU 半導體 DSP ISP MCU SoC "
        prose = "。" * 100 + "本公司專注半導體設計"
        text = glossary + prose

        def reject(context, keyword):
            return is_definition_list(context)

        hit = search_keyword(text, "半導體", reject=reject)
        assert hit is not None
        assert hit.index == text.rindex("半導體")

    def test_all_occurrences_rejected(self):
        text = "ADC GPU NPU TPU CPU 半導體 DSP ISP MCU SoC"
        assert search_keyword(text, "半導體", reject=lambda c, k: is_definition_list(c)) is None

    def test_context_is_whitespace_collapsed(self):
        text = "前文\n\n  半導體  \n後文"
        hit = search_keyword(text, "半導體")
        assert hit.context == "前文 半導體 後文"


class TestNormalizedRetryFiltering:
    """The retry on normalized text is filtered against the raw context."""

    GLOSSARY = "ABC DEF GHI JKL MNO {} PQR STU VWX XYZ QRS"

    @staticmethod
    def reject(context, keyword):
        return is_definition_list(context)

    def test_rejected_raw_hit_not_accepted_by_retry(self):
        text = self.GLOSSARY.format("物業管理")
        assert search_keyword(text, "物業管理", normalize_text(text), reject=self.reject) is None

    def test_wrapped_keyword_inside_glossary_rejected(self):
        text = self.GLOSSARY.format("物業\n管理")
        assert search_keyword(text, "物業管理", normalize_text(text), reject=self.reject) is None

    def test_wrapped_keyword_in_prose_accepted(self):
        text = "本集團從事住宅物業\n管理及社區服務。"
        hit = search_keyword(text, "物業管理", normalize_text(text), reject=self.reject)
        assert hit is not None
        assert hit.normalized is True
        assert hit.context == "本集團從事住宅物業 管理及社區服務。"

    def test_later_prose_occurrence_found_after_glossary(self):
        text = self.GLOSSARY.format("物業\n管理") + "。" * 100 + "本集團從事物業\n管理。"
        hit = search_keyword(text, "物業管理", normalize_text(text), reject=self.reject)
        assert hit is not None
        assert hit.context.endswith("本集團從事物業 管理。")
