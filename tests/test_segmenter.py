"""Tests for chapter heading detection."""

from __future__ import annotations

import pytest

from glimpse.library.models import Chapter
from glimpse.reading.segmenter import classify, segment, split_lines


class TestSplitLines:
    def test_mixed_line_endings(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]

    def test_preserves_content(self):
        assert split_lines("  indented  \n\tx") == ["  indented  ", "\tx"]

    def test_empty_text_is_one_line(self):
        assert split_lines("") == [""]

    def test_trailing_newline(self):
        assert split_lines("a\n") == ["a", ""]


class TestSegment:
    def test_example_document(self):
        text = "\n".join(["第一章 开始", "body text here", "Chapter 2: Middle"])
        assert segment(text) == [
            Chapter(title="第一章 开始", line_index=0),
            Chapter(title="Chapter 2: Middle", line_index=2),
        ]

    def test_crlf_indices(self):
        text = "intro\r\n第二回 风雪\r\nbody\r\nCHAPTER 3"
        chapters = segment(text)
        assert [c.line_index for c in chapters] == [1, 3]

    def test_title_is_trimmed(self):
        chapters = segment("   第三章 归来   \nbody")
        assert chapters[0].title == "第三章 归来"

    def test_long_lines_skipped(self):
        long_line = "Chapter 1 " + "x" * 45
        assert len(long_line.strip()) >= 50
        assert segment(long_line) == []

    def test_length_boundary(self):
        just_under = "Chapter 1 " + "x" * 39
        assert len(just_under) == 49
        assert len(segment(just_under)) == 1

    def test_blank_lines_skipped(self):
        assert segment("\n   \n\t\n") == []

    def test_no_headings(self):
        assert segment("It was a dark and stormy night.\nThe end") == []

    def test_one_chapter_per_line(self):
        chapters = segment("第1章 开端")
        assert len(chapters) == 1

    def test_ascending_and_in_range(self):
        lines = ["Chapter 1", "text", "卷三", "more", "1. Start", "二、继续", ""]
        chapters = segment("\n".join(lines))
        indices = [c.line_index for c in chapters]
        assert indices == sorted(set(indices))
        assert all(0 <= i < len(lines) for i in indices)
        assert all(0 < len(c.title.strip()) < 50 for c in chapters)


class TestClassify:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ("第一章 开始", "cjk_chapter"),
            ("第1章 开端", "cjk_chapter"),
            ("第十二节", "cjk_chapter"),
            ("第3集", "cjk_chapter"),
            ("第12、归途", "numbered"),
            ("12. The Return", "numbered"),
            ("Chapter 7", "chapter_en"),
            ("chapter 7: lowercase", "chapter_en"),
            ("卷五", "cjk_volume"),
            ("卷2 北上", "cjk_volume"),
            ("三、出发", "cjk_numeral"),
            ("plain body text", None),
            ("", None),
        ],
    )
    def test_priority(self, line: str, expected: str | None):
        assert classify(line) == expected

    def test_cjk_chapter_not_numbered(self):
        assert classify("第1章 开端") == "cjk_chapter"

    def test_upper_caught_by_case_insensitive_first(self):
        assert classify("CHAPTER 9") == "chapter_en"
