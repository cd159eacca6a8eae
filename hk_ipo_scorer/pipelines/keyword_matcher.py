"""
Keyword Matcher
hk_ipo_scorer/pipelines/keyword_matcher.py

Deterministic keyword tests over a search range. Rules by keyword shape:

  pure CJK                 -> plain containment (no word-separator ambiguity)
  short ASCII alnum (<= 5) -> must be bounded by a non-alphanumeric character
                              or the string edge; otherwise "L3" would match
                              inside "L330TOPSPCB"
  anything else            -> plain containment

is_definition_list() rejects hits that sit inside an abbreviation/glossary
table, where a dense run of short upper-case tokens surrounds the keyword.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterator, List, Optional, Pattern, Tuple

from hk_ipo_scorer.pipelines.normalizer import collapse_whitespace, normalize_text, raw_offsets

SHORT_TOKEN_MAX_LENGTH = 5

_CJK_ONLY = re.compile(r"^[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]+$")
_ASCII_ALNUM = re.compile(r"^[A-Za-z0-9]+$")
_HAS_CJK = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")

_ABBREVIATION_TOKEN = re.compile(r"^[A-Z0-9\-]{2,}$")
# short alphanumeric token with a digit or a non-initial capital (DDR5, eVTOL, SoC)
_TECH_TOKEN = re.compile(r"^(?=.*\d|.+[A-Z])[A-Za-z0-9\-]{1,15}$")


def is_cjk_keyword(keyword: str) -> bool:
    return bool(_CJK_ONLY.match(keyword))


def is_short_alnum_keyword(keyword: str, max_length: int = SHORT_TOKEN_MAX_LENGTH) -> bool:
    return bool(_ASCII_ALNUM.match(keyword)) and len(keyword) <= max_length


@lru_cache(maxsize=4096)
def keyword_pattern(
    keyword: str,
    ignore_case: bool = False,
    max_short_length: int = SHORT_TOKEN_MAX_LENGTH,
) -> Pattern:
    """Compiled matcher for *keyword* following the shape rules above."""
    escaped = re.escape(keyword)
    if is_short_alnum_keyword(keyword, max_short_length):
        return re.compile(rf"(?<![A-Za-z0-9]){escaped}(?![A-Za-z0-9])", re.IGNORECASE)
    return re.compile(escaped, re.IGNORECASE if ignore_case else 0)


def iter_keyword_positions(
    text: str,
    keyword: str,
    ignore_case: bool = False,
    max_short_length: int = SHORT_TOKEN_MAX_LENGTH,
) -> Iterator[int]:
    if not text or not keyword:
        return
    for match in keyword_pattern(keyword, ignore_case, max_short_length).finditer(text):
        yield match.start()


def find_keyword(
    text: str,
    keyword: str,
    ignore_case: bool = False,
    max_short_length: int = SHORT_TOKEN_MAX_LENGTH,
) -> int:
    """Index of the first acceptable occurrence, or -1."""
    for position in iter_keyword_positions(text, keyword, ignore_case, max_short_length):
        return position
    return -1


def matches(
    search_text: str,
    keyword: str,
    ignore_case: bool = False,
    max_short_length: int = SHORT_TOKEN_MAX_LENGTH,
) -> bool:
    return find_keyword(search_text, keyword, ignore_case, max_short_length) != -1


def context_window(text: str, index: int, length: int, before: int = 30, after: int = 50) -> str:
    """Raw text around text[index:index+length]."""
    return text[max(0, index - before):min(len(text), index + length + after)]


def is_definition_list(
    context: str,
    upper_density: float = 0.4,
    token_density: Optional[float] = 0.5,
    min_tokens: int = 6,
) -> bool:
    """
    True when *context* looks like a glossary / defined-terms table.

    Tokens are whitespace separated. The context is a definition list when
    the share of all-caps abbreviations exceeds *upper_density*, or (if
    given) the share of short technical tokens exceeds *token_density*.
    Ordinary English words do not count as technical tokens, so running
    English prose is not mistaken for a glossary.
    """
    tokens = context.split()
    if len(tokens) < min_tokens:
        return False
    upper = sum(1 for t in tokens if _ABBREVIATION_TOKEN.match(t))
    if upper / len(tokens) > upper_density:
        return True
    if token_density is not None:
        short = sum(1 for t in tokens if _TECH_TOKEN.match(t))
        if short / len(tokens) > token_density:
            return True
    return False


@dataclass(frozen=True)
class KeywordHit:
    keyword: str
    index: int              # offset in the searched text (raw or normalized)
    context: str            # raw text around the hit, whitespace collapsed
    normalized: bool        # found only after normalization


ContextFilter = Callable[[str, str], bool]   # (context, keyword) -> reject?


def search_keyword(
    text: str,
    keyword: str,
    normalized_text: Optional[str] = None,
    reject: Optional[ContextFilter] = None,
    ignore_case: bool = False,
    max_short_length: int = SHORT_TOKEN_MAX_LENGTH,
    before: int = 30,
    after: int = 50,
) -> Optional[KeywordHit]:
    """
    First occurrence of *keyword* whose context passes *reject*.

    The raw text is tried first. Keywords containing CJK characters are then
    retried against the normalized text (normalize_text(text)), which
    tolerates line-wrapping and traditional/simplified variation. Pure ASCII
    keywords are not retried: whitespace removal would defeat the
    word-boundary rule.

    *reject* always sees raw text: a normalized hit is mapped back to the
    raw span it came from, since the normalized form has no token breaks.
    """
    for position in iter_keyword_positions(text, keyword, ignore_case, max_short_length):
        context = context_window(text, position, len(keyword), before, after)
        if reject is not None and reject(context, keyword):
            continue
        return KeywordHit(keyword, position, collapse_whitespace(context), False)

    if normalized_text is None or not _HAS_CJK.search(keyword):
        return None

    normalized_keyword = normalize_text(keyword)
    offsets: Optional[List[int]] = None
    for position in iter_keyword_positions(
        normalized_text, normalized_keyword, ignore_case, max_short_length
    ):
        if offsets is None:
            offsets = raw_offsets(text)
        raw_start, raw_end = raw_span(offsets, position, len(normalized_keyword), len(text))
        context = context_window(text, raw_start, raw_end - raw_start, before, after)
        if reject is not None and reject(context, keyword):
            continue
        return KeywordHit(keyword, position, collapse_whitespace(context), True)
    return None


def raw_span(offsets: List[int], position: int, length: int, text_length: int) -> Tuple[int, int]:
    """Raw [start, end) covering normalized[position:position+length]."""
    if not offsets or position >= len(offsets):
        return text_length, text_length
    last = min(position + length, len(offsets)) - 1
    return offsets[position], offsets[last] + 1
