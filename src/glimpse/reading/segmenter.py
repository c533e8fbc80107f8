"""Chapter heading detection for plain text."""

from __future__ import annotations

import re
from typing import Optional

from glimpse.library.models import Chapter

MAX_HEADING_LENGTH = 50

_CJK_DIGITS = "一二三四五六七八九十百千万零"

# Ordered by priority; the first match wins.
HEADING_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("cjk_chapter", re.compile(rf"^第[{_CJK_DIGITS}\d]+[章节回卷部篇集]")),
    ("numbered", re.compile(r"^第?\s*\d+[、.\s]\s*.+")),
    ("chapter_en", re.compile(r"^Chapter\s+\d+", re.IGNORECASE)),
    ("chapter_upper", re.compile(r"^CHAPTER\s+\d+")),
    ("cjk_volume", re.compile(rf"^卷[{_CJK_DIGITS}\d]+")),
    ("cjk_numeral", re.compile(r"^[一二三四五六七八九十]+[、.]\s*.+")),
)

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(raw_text: str) -> list[str]:
    return _LINE_BREAK.split(raw_text)


def classify(line: str) -> Optional[str]:
    """Return the name of the heading pattern a line matches, if any."""
    text = line.strip()
    if not text or len(text) >= MAX_HEADING_LENGTH:
        return None
    for name, pattern in HEADING_PATTERNS:
        if pattern.search(text):
            return name
    return None


def segment_lines(lines: list[str]) -> list[Chapter]:
    chapters: list[Chapter] = []
    for index, line in enumerate(lines):
        if classify(line) is not None:
            chapters.append(Chapter(title=line.strip(), line_index=index))
    return chapters


def segment(raw_text: str) -> list[Chapter]:
    """Split raw text into lines and return its chapter headings in order."""
    return segment_lines(split_lines(raw_text))
