# tests/test_normalizer.py
"""
Text Normalizer Tests
"""

import pytest

from hk_ipo_scorer.pipelines.normalizer import (
    collapse_whitespace,
    format_stock_code,
    normalize_text,
    raw_offsets,
    strip_corporate_suffix,
)


class TestNormalizeText:
    """Tests for normalize_text()."""

    def test_removes_whitespace_entirely(self):
        """Whitespace is removed, not collapsed, so wrapped keywords rejoin."""
        assert normalize_text("人工 智能\n解決\t方案") == "人工智能解決方案"

    def test_fullwidth_ascii_becomes_halfwidth(self):
        assert normalize_text("ＡＢＣ１２３（香港）") == "ABC123(香港)"

    def test_traditional_characters_become_simplified(self):
        assert normalize_text("中國證券") == "中国证券"
        assert normalize_text("半導體") == "半导体"

    def test_unmapped_traditional_characters_are_kept(self):
        """Only the fixed financial vocabulary table is converted."""
        assert normalize_text("亞洲") == "亞洲"

    def test_strips_limited_company_suffix(self):
        assert normalize_text("中信證券(香港)有限公司") == "中信证券(香港)"

    def test_strips_limited_liability_suffix(self):
        """責 is simplified first, so the traditional suffix is stripped too."""
        assert normalize_text("高盛(亞洲)有限責任公司") == "高盛(亞洲)"

    def test_suffix_only_stripped_at_the_end(self):
        assert normalize_text("有限公司的業務") == "有限公司的业務"

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input_gives_empty_string(self, value):
        assert normalize_text(value) == ""

    @pytest.mark.parametrize("value", [
        "有限公司有限公司",
        "ＡＢＣ 有限 公司",
        "招銀國際融資有限公司",
        " \n\t ",
    ])
    def test_idempotent(self, value):
        once = normalize_text(value)
        assert normalize_text(once) == once


class TestStripCorporateSuffix:

    def test_repeated_suffixes_are_all_removed(self):
        assert strip_corporate_suffix("甲有限公司有限责任公司") == "甲"

    def test_name_without_suffix_unchanged(self):
        assert strip_corporate_suffix("第一上海") == "第一上海"


class TestHelpers:

    def test_collapse_whitespace(self):
        assert collapse_whitespace("  lock-up \n\n period ") == "lock-up period"

    @pytest.mark.parametrize("raw,expected", [
        ("2677", "02677"),
        ("02677", "02677"),
        ("2677.HK", "02677"),
        (2677, "02677"),
        ("00700", "00700"),
    ])
    def test_format_stock_code(self, raw, expected):
        assert format_stock_code(raw) == expected


class TestRawOffsets:

    def test_offsets_skip_whitespace(self):
        text = "半導\n體 公司"
        assert raw_offsets(text) == [0, 1, 3, 5, 6]
        assert normalize_text(text) == "半导体公司"

    def test_empty(self):
        assert raw_offsets("") == []
