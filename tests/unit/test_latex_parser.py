"""
Unit tests for core/segmentation/latex_parser.py - pasted LaTeX fragments
"""
from core.segmentation.latex_parser import (
    LATEX_EXAMPLE,
    ParsedLatex,
    clean_section,
    parse_latex_content,
)


class TestCleanSection:

    def test_collapses_blank_lines(self):
        assert clean_section("  a\n\n\n b  ") == "a\n b"


class TestParseLatexContent:

    def test_example_fragment(self):
        parsed = parse_latex_content(LATEX_EXAMPLE)
        assert parsed.content == "解方程：$2x^2 - 5x + 3 = 0$"
        assert parsed.answer == r"$x = 1$ 或 $x = \dfrac{3}{2}$"
        assert parsed.analysis.startswith("使用求根公式：\n$$\nx = \\frac{5")
        assert "\\[" not in parsed.analysis
        assert parsed.analysis.endswith("和 $x = \\frac{4}{4} = 1$。")

    def test_markdown_markers(self):
        parsed = parse_latex_content("\\item 求值\n**答案:** 2\n**解析:** 直接计算")
        assert parsed.content == "求值"
        assert parsed.answer == "2"
        assert parsed.analysis == "直接计算"

    def test_single_line_display_block(self):
        parsed = parse_latex_content("\\item 题\n\\textbf{解析：} 如下\n\\[ x=1 \\]")
        assert parsed.analysis == "如下\n$$ x=1 $$"

    def test_enumerate_wrapper(self):
        text = "\\begin{enumerate}\n\\item 第一题\n\\textbf{答案：} 1\n\\end{enumerate}\n\\item 第二题"
        parsed = parse_latex_content(text)
        assert parsed.content == "第一题"
        assert parsed.answer == "1"

    def test_without_markers_whole_input_is_content(self):
        parsed = parse_latex_content("  已知 $x=1$\n\n\n求 $x^2$  ")
        assert parsed == ParsedLatex(content="已知 $x=1$\n求 $x^2$")

    def test_empty(self):
        assert parse_latex_content("") == ParsedLatex()
        assert parse_latex_content(None) == ParsedLatex()
