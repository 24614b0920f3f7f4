"""
Unit tests for core/segmentation/segmenter.py - content/answer/analysis split
"""
import pytest
from core.segmentation.segmenter import (
    Section,
    SegmentedQuestion,
    extract_tags,
    is_answer_marker,
    next_section,
    segment,
)


class TestTransitions:
    """The classifier's transition function, independent of accumulation."""

    @pytest.mark.parametrize("line", [
        "答案：x=1", "答：3", "解：设x", "A. 1", "B、2", "C 3", "① 第一步",
    ])
    def test_answer_markers(self, line):
        assert is_answer_marker(line)

    @pytest.mark.parametrize("line", ["Apple", "解方程：2x=1", "1. 题目"])
    def test_not_answer_markers(self, line):
        assert not is_answer_marker(line)

    def test_content_to_answer(self):
        assert next_section(Section.CONTENT, "答案：1") is Section.ANSWER

    def test_answer_marker_ignored_after_answer(self):
        assert next_section(Section.ANSWER, "A. 选项") is Section.ANSWER

    def test_analysis_from_any_state(self):
        for state in Section:
            assert next_section(state, "解析：略") is Section.ANALYSIS

    def test_analysis_wins_on_same_line(self):
        assert next_section(Section.CONTENT, "答案与解析") is Section.ANALYSIS

    def test_analysis_is_terminal(self):
        assert next_section(Section.ANALYSIS, "答案：1") is Section.ANALYSIS


class TestSegment:

    def test_answer_and_analysis(self):
        result = segment("解方程：2x+1=0\n答案：x=-0.5\n解析：移项可得")
        assert result.content == "解方程：2x+1=0"
        assert result.answer == "答案：x=-0.5"
        assert result.analysis == "解析：移项可得"

    def test_no_markers_keeps_input_verbatim(self):
        raw = "只是一段普通文字\n没有任何标记"
        result = segment(raw)
        assert result.content == raw
        assert result.answer == ""
        assert result.analysis == ""

    def test_no_markers_keeps_blank_lines(self):
        raw = "  第一行\n\n第二行  "
        assert segment(raw).content == raw

    def test_blank_lines_dropped_and_lines_trimmed(self):
        result = segment("  题目  \n\n答案： 1 \n\n  解析：略")
        assert result.content == "题目"
        assert result.answer == "答案： 1"
        assert result.analysis == "解析：略"

    def test_choice_options_start_answer(self):
        result = segment("下列哪个是偶数？\nA. 1\nB. 2\n解析：2 能被 2 整除")
        assert result.content == "下列哪个是偶数？"
        assert result.answer == "A. 1\nB. 2"

    def test_ocr_text(self, ocr_text):
        result = segment(ocr_text)
        assert result.content.startswith("1. 已知")
        assert result.answer == "答案：$x=-1$"
        assert result.analysis.startswith("解析：")
        assert result.tags == ["一元一次方程", "移项"]

    def test_non_string(self):
        assert segment(None) == SegmentedQuestion()

    def test_to_dict(self):
        assert set(segment("x").to_dict()) == {"content", "answer", "analysis", "tags"}


class TestTags:

    def test_tag_line(self):
        text = "题目\n【知识点】一元二次方程、因式分解"
        assert extract_tags(text) == ["一元二次方程", "因式分解"]

    def test_duplicates_removed_order_kept(self):
        text = "【知识点】因式分解，一元二次方程、因式分解"
        assert extract_tags(text) == ["因式分解", "一元二次方程"]

    def test_colon_after_marker(self):
        assert extract_tags("【知识点】：函数; 图像") == ["函数", "图像"]

    def test_only_first_tag_line(self):
        assert extract_tags("【知识点】a\n【知识点】b") == ["a"]

    def test_no_tag_line(self):
        assert extract_tags("没有标签") == []
