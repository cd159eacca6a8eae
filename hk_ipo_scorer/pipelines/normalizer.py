"""
Text Normalizer
hk_ipo_scorer/pipelines/normalizer.py

Canonical form used for fuzzy matching of prospectus text:
  1. every whitespace character is removed (not collapsed), so a keyword
     wrapped across two PDF lines still matches
  2. full-width ASCII (U+FF01-U+FF5E) becomes half-width
  3. a fixed set of traditional characters common in financial/legal
     vocabulary becomes simplified
  4. a trailing 有限公司 / 有限责任公司 is stripped, so sponsor names with
     and without the corporate suffix compare equal

normalize_text(normalize_text(s)) == normalize_text(s) for every s.
"""

import re
from typing import List

_WHITESPACE = re.compile(r"\s+")

_FULLWIDTH_OFFSET = 0xFEE0
_FULLWIDTH_TABLE = {code: code - _FULLWIDTH_OFFSET for code in range(0xFF01, 0xFF5F)}

TRADITIONAL_TO_SIMPLIFIED = {
    "證": "证", "國": "国", "際": "际", "銀": "银", "資": "资",
    "業": "业", "發": "发", "項": "项", "實": "实", "與": "与",
    "為": "为", "無": "无", "個": "个", "開": "开", "關": "关",
    "機": "机", "車": "车", "電": "电", "導": "导", "體": "体",
    "產": "产", "軟": "软", "製": "制", "廠": "厂", "責": "责",
}
_TRADITIONAL_TABLE = str.maketrans(TRADITIONAL_TO_SIMPLIFIED)

CORPORATE_SUFFIXES = ("有限责任公司", "有限公司")

_STOCK_CODE_DIGITS = re.compile(r"\D")


def normalize_text(text: str) -> str:
    """Return the matching form of *text*. Empty or None input gives ''."""
    if not text:
        return ""
    text = _WHITESPACE.sub("", text)
    text = text.translate(_FULLWIDTH_TABLE)
    text = text.translate(_TRADITIONAL_TABLE)
    return strip_corporate_suffix(text)


def strip_corporate_suffix(name: str) -> str:
    """Drop trailing corporate suffixes (repeatedly, so the result is stable)."""
    stripped = True
    while stripped:
        stripped = False
        for suffix in CORPORATE_SUFFIXES:
            if name.endswith(suffix):
                name = name[: -len(suffix)]
                stripped = True
    return name


def raw_offsets(text: str) -> List[int]:
    """
    Index in *text* of every character that survives normalization.

    normalize_text(text)[i] comes from text[raw_offsets(text)[i]]: only
    whitespace is dropped before the one-to-one translations, and suffix
    stripping only shortens the tail.
    """
    return [i for i, char in enumerate(text) if not char.isspace()]


def collapse_whitespace(text: str) -> str:
    """Single-space form used for human-readable evidence snippets."""
    return _WHITESPACE.sub(" ", text).strip()


def format_stock_code(code) -> str:
    """Digits only, zero-padded to the 5-digit HKEX form ('2677' -> '02677')."""
    return _STOCK_CODE_DIGITS.sub("", str(code)).zfill(5)
