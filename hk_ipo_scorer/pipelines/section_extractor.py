"""
Section Extractor
hk_ipo_scorer/pipelines/section_extractor.py

Carves a sub-range out of a prospectus:

  start  = first occurrence of the first start pattern that has a non-ToC hit
  end    = min(start + max_length, len(text), first hit of each end pattern after the marker)

A table-of-contents line repeats the chapter heading followed by a dotted
leader ("行業概覽 ........ 12"), so an occurrence whose next ~30 characters
look like a leader is skipped and scanning continues.

Extraction never raises on absent markers; it returns "" and callers fall
back to a bounded slice of the document via resolve_scope().
"""

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Optional, Pattern, Sequence, Tuple, Union

from hk_ipo_scorer.pipelines.normalizer import normalize_text

PatternLike = Union[str, Pattern]

TOC_PEEK_LENGTH = 30
_TOC_LEADER = re.compile(r"^\s*(?:[.．·…][\s.．·…]*){3}")


def compile_pattern(pattern: PatternLike) -> Pattern:
    """Strings are regex sources, matched case-insensitively."""
    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    return pattern


@dataclass(frozen=True)
class SectionSpec:
    """Recipe for one document sub-range."""
    name: str
    start_patterns: Tuple[Pattern, ...]
    end_patterns: Tuple[Pattern, ...]
    max_length: int
    skip_toc: bool = True
    min_length: int = 0     # shorter extractions count as "not found"

    @classmethod
    def build(
        cls,
        name: str,
        starts: Iterable[PatternLike],
        ends: Iterable[PatternLike],
        max_length: int,
        skip_toc: bool = True,
        min_length: int = 0,
    ) -> "SectionSpec":
        return cls(
            name=name,
            start_patterns=tuple(compile_pattern(p) for p in starts),
            end_patterns=tuple(compile_pattern(p) for p in ends),
            max_length=max_length,
            skip_toc=skip_toc,
            min_length=min_length,
        )

    def extract(self, text: str) -> str:
        return extract_section(
            text, self.start_patterns, self.end_patterns, self.max_length, self.skip_toc
        )


def is_toc_entry(text: str, marker_end: int) -> bool:
    """True when the characters after a heading look like a dotted leader."""
    peek = text[marker_end:marker_end + TOC_PEEK_LENGTH]
    return _TOC_LEADER.match(peek) is not None


def find_section_span(
    text: str,
    start_patterns: Sequence[PatternLike],
    end_patterns: Sequence[PatternLike],
    max_length: int,
    skip_toc: bool = True,
) -> Optional[Tuple[int, int]]:
    """(start, end) offsets of the section, or None if no start marker qualifies."""
    if not text or max_length <= 0:
        return None

    for start_pattern in start_patterns:
        regex = compile_pattern(start_pattern)
        for match in regex.finditer(text):
            if skip_toc and is_toc_entry(text, match.end()):
                continue

            start = match.start()
            end = min(start + max_length, len(text))
            for end_pattern in end_patterns:
                end_match = compile_pattern(end_pattern).search(text, match.end(), end)
                if end_match:
                    end = min(end, end_match.start())
            return start, end
    return None


def extract_section(
    text: str,
    start_patterns: Sequence[PatternLike],
    end_patterns: Sequence[PatternLike],
    max_length: int = 50000,
    skip_toc: bool = True,
) -> str:
    """Text of the section, or "" when no start marker is found."""
    span = find_section_span(text, start_patterns, end_patterns, max_length, skip_toc)
    if span is None:
        return ""
    start, end = span
    return text[start:end]


@dataclass(frozen=True)
class SearchScope:
    """The range a rule searches, and where it came from."""
    text: str
    source: str             # section name, or e.g. "prefix:80000"
    start: int              # offset of text[0] in the full document
    section_found: bool

    @cached_property
    def normalized(self) -> str:
        return normalize_text(self.text)

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class FallbackSlice:
    """Bounded slice used when no section spec matches."""
    length: int
    offset: int = 0

    def label(self) -> str:
        if self.offset:
            return f"slice:{self.offset}-{self.offset + self.length}"
        return f"prefix:{self.length}"

    def apply(self, text: str) -> Tuple[int, str]:
        # Skip the offset only when the document is long enough to have a "middle"
        offset = self.offset if len(text) > 2 * self.offset else 0
        return offset, text[offset:offset + self.length]


def resolve_scope(
    text: str,
    specs: Sequence[SectionSpec],
    fallback: FallbackSlice,
) -> SearchScope:
    """Try each spec in order; the first non-empty extraction wins."""
    for spec in specs:
        span = find_section_span(
            text, spec.start_patterns, spec.end_patterns, spec.max_length, spec.skip_toc
        )
        if span is None:
            continue
        start, end = span
        if end - start <= 0 or end - start < spec.min_length:
            continue
        return SearchScope(text=text[start:end], source=spec.name, start=start, section_found=True)

    offset, sliced = fallback.apply(text)
    return SearchScope(text=sliced, source=fallback.label(), start=offset, section_found=False)
