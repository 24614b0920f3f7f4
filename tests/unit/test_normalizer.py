"""
Unit tests for core/latex/normalizer.py - math delimiter normalization
"""
import pytest
from core.latex.normalizer import (
    normalize,
    strip_invisible,
    convert_escaped_dollars,
    convert_bracket_math,
    convert_inline_parens,
    convert_display_brackets,
    convert_environments,
    convert_cases,
)


class TestSingleSteps:
    """Each rewrite step on its own."""

    def test_strip_invisible(self):
        assert strip_invisible("a\u200bb\ufeffc\u00a0d") == "abc d"

    def test_escaped_dollars_become_display(self):
        assert convert_escaped_dollars(r"求 \$x^2\$ 的值") == "求 $$x^2$$ 的值"

    def test_bracket_with_command_converted(self):
        assert convert_bracket_math(r"[\alpha + 1]") == r"$$\alpha + 1$$"

    def test_bracket_without_backslash_untouched(self):
        assert convert_bracket_math("选项 [1, 2] 中") == "选项 [1, 2] 中"

    def test_bracket_after_command_untouched(self):
        text = r"\sqrt[3]{x} + \left[\frac{1}{2}\right]"
        assert convert_bracket_math(text) == text

    def test_inline_parens(self):
        assert convert_inline_parens(r"设 \( x>0 \)") == "设 $x>0$"

    def test_display_brackets_multiline(self):
        text = "\\[\nx = \\frac{1}{2}\n\\]"
        assert convert_display_brackets(text) == r"$$x = \frac{1}{2}$$"

    def test_equation_environment(self):
        text = r"\begin{equation} E = mc^2 \end{equation}"
        assert convert_environments(text) == "$$E = mc^2$$"

    def test_align_environment(self):
        text = r"\begin{align}a &= b\\ c &= d\end{align}"
        assert convert_environments(text) == r"$$a &= b\\ c &= d$$"

    def test_mismatched_environment_untouched(self):
        text = r"\begin{equation} x \end{align}"
        assert convert_environments(text) == text


class TestCases:
    """OCR set notation rebuilt from cases blocks."""

    def test_two_column_set(self):
        text = r"\begin{cases} x | x > 0 \end{cases}"
        assert convert_cases(text) == r"$\{ x \mid x > 0 \}$"

    def test_ampersand_column(self):
        text = r"\begin{cases} x & x \in \mathbb{R} \end{cases}"
        assert convert_cases(text) == r"$\{ x \mid x \in \mathbb{R} \}$"

    def test_single_column_falls_back_to_display(self):
        text = r"\begin{cases} x > 0 \end{cases}"
        assert convert_cases(text) == "$$x > 0$$"

    def test_trailing_row_break_removed(self):
        text = "\\begin{cases} x | x > 1 \\\\ \\end{cases}"
        assert convert_cases(text) == r"$\{ x \mid x > 1 \}$"


class TestNormalize:
    """The full normalization sequence."""

    def test_non_string_input(self):
        assert normalize(None) == ""
        assert normalize(42) == ""
        assert normalize("") == ""

    def test_mixed_delimiters(self):
        text = r"设 \(x>0\)，求 \[ \frac{1}{x} \]"
        assert normalize(text) == r"设 $x>0$，求 $$\frac{1}{x}$$"

    def test_plain_text_unchanged(self):
        text = "今天天气很好。\n第二行"
        assert normalize(text) == text

    def test_left_bracket_inside_parens(self):
        text = r"\( \left[ a \right] \)"
        assert normalize(text) == r"$\left[ a \right]$"

    def test_existing_math_not_rewritten(self):
        text = r"已知 $[\alpha, \beta]$ 与 $$\left[ x \right]$$"
        assert normalize(text) == text

    @pytest.mark.parametrize("text", [
        r"设 \(x>0\)，求 \[ \frac{1}{x} \]",
        r"\begin{cases} x | x > 0 \end{cases} 且 [\alpha]",
        r"\$a+b\$ 与 \begin{equation}y=2x\end{equation}",
        "普通文本 $x$ 和 $$y$$",
        r"$\$5$ 和 $\$6$",
    ])
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once

    def test_no_backslash_delimiters_remain(self):
        text = r"\(a\) \[b\] \begin{equation}c\end{equation} \begin{align}d\end{align}"
        result = normalize(text)
        for token in ("\\(", "\\)", "\\[", "\\]", "\\begin{equation}", "\\begin{align}"):
            assert token not in result

    def test_literal_dollar_inside_math_kept(self):
        text = r"$\$5$ 和 $\$6$"
        assert normalize(text) == text

    def test_escaped_dollars_outside_math_still_converted(self):
        assert normalize(r"价格 $x$ 与 \$a+b\$") == r"价格 $x$ 与 $$a+b$$"

    def test_nul_characters_dropped(self):
        assert normalize("a\x00MATH3\x00b") == "aMATH3b"

    def test_cases_set_becomes_mid(self):
        result = normalize(r"\begin{cases}x+y | x>0\end{cases}")
        assert r"\mid" in result
        assert "x+y" in result
        assert "x>0" in result
        assert "cases" not in result
