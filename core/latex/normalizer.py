r"""
LaTeX Delimiter Normalizer

Rewrites the assorted math delimiter conventions found in hand-typed,
pasted and OCR-recognized question text into canonical dollar form:
``$...$`` for inline math and ``$$...$$`` for display math.

Handled inputs:
- Escaped dollars:   \$ ... \$
- Bare brackets:     [ ... ]          (only when the body holds a backslash
                                       and the bracket is not an argument)
- Inline parens:     \( ... \)
- Display brackets:  \[ ... \]
- Environments:      \begin{equation}, \begin{align}
- OCR set notation:  \begin{cases} left | right \end{cases}

Each step is a plain ``str -> str`` function so it can be tested on its own;
``normalize`` applies them in order. Every rewrite after the clean-up step only
touches text outside existing dollar spans (``core.latex.spans``, where ``\$``
is a literal dollar), which makes canonical input a fixed
point of ``normalize``.

Known limitation: the bare-bracket heuristic converts any bracketed prose that
happens to contain a backslash (OCR noise included) and leaves bracketed math
without commands alone. A bracket that directly follows a backslash or a
letter (``\[``, ``\left[``, ``\sqrt[3]``) is never a delimiter, so bracketed
math glued to a preceding word (``x[\alpha]``) is left untouched as well.

Usage:
    >>> from core.latex.normalizer import normalize
    >>> normalize(r"设 \(x>0\)，求 \[ \frac{1}{x} \]")
    '设 $x>0$，求 $$\\frac{1}{x}$$'
"""

import re
import logging
from typing import Callable, List

from core.latex.spans import MATH_SPAN

logger = logging.getLogger(__name__)

Transform = Callable[[str], str]

# NUL is reserved for the display pipeline's placeholders
_INVISIBLE_PATTERN = re.compile('[\x00\u200B\u200C\u200D\uFEFF]')
_ESCAPED_DOLLAR_PATTERN = re.compile(r'\\\$(.*?)\\\$')
# Not after a backslash (\[) or a command name (\left[, \sqrt[3])
_BRACKET_PATTERN = re.compile(r'(?<![\\A-Za-z])\[([^\[\]]*?)\]')
_INLINE_PAREN_PATTERN = re.compile(r'\\\((.*?)\\\)', re.DOTALL)
_DISPLAY_BRACKET_PATTERN = re.compile(r'\\\[(.*?)\\\]', re.DOTALL)
_ENVIRONMENT_PATTERN = re.compile(
    r'\\begin\{(equation|align)\}(.*?)\\end\{\1\}',
    re.DOTALL
)
_CASES_PATTERN = re.compile(r'\\begin\{cases\}(.*?)\\end\{cases\}', re.DOTALL)


def _outside_math(transform: Transform) -> Transform:
    """Apply ``transform`` only to the text between canonical math spans."""

    def wrapped(text: str) -> str:
        pieces = []
        last = 0
        for match in MATH_SPAN.finditer(text):
            pieces.append(transform(text[last:match.start()]))
            pieces.append(match.group(0))
            last = match.end()
        pieces.append(transform(text[last:]))
        return ''.join(pieces)

    wrapped.__name__ = transform.__name__
    wrapped.__doc__ = transform.__doc__
    return wrapped


def strip_invisible(text: str) -> str:
    """Drop NUL, zero-width characters and the BOM; NBSP becomes a plain space."""
    return _INVISIBLE_PATTERN.sub('', text).replace('\u00A0', ' ')


def convert_escaped_dollars(text: str) -> str:
    r"""\$ f \$ -> $$f$$ (one trailing backslash inside the formula is dropped)."""

    def repl(match: re.Match) -> str:
        formula = re.sub(r'\\$', '', match.group(1).strip())
        return f'$${formula}$$'

    return _ESCAPED_DOLLAR_PATTERN.sub(repl, text)


def convert_bracket_math(text: str) -> str:
    """[ f ] -> $$f$$ when the bracket body contains a backslash."""

    def repl(match: re.Match) -> str:
        formula = match.group(1).strip()
        if '\\' in formula:
            return f'$${formula}$$'
        return match.group(0)

    return _BRACKET_PATTERN.sub(repl, text)


def convert_inline_parens(text: str) -> str:
    r"""\( f \) -> $f$"""
    return _INLINE_PAREN_PATTERN.sub(lambda m: f'${m.group(1).strip()}$', text)


def convert_display_brackets(text: str) -> str:
    r"""\[ f \] -> $$f$$"""
    return _DISPLAY_BRACKET_PATTERN.sub(lambda m: f'$${m.group(1).strip()}$$', text)


def convert_environments(text: str) -> str:
    r"""\begin{equation|align} f \end{...} -> $$f$$"""
    return _ENVIRONMENT_PATTERN.sub(lambda m: f'$${m.group(2).strip()}$$', text)


def _cases_body_to_math(body: str) -> str:
    inner = re.sub(r'^\s*\\_\s*$', '', body, flags=re.MULTILINE)
    inner = re.sub(r'\\{3,}', r'\\\\', inner).strip()
    inner = inner.replace('|', ' & ')
    inner = re.sub(r'\\+\s*$', '', inner).strip()

    parts = re.split(r'\s*&\s*', inner)
    if len(parts) >= 2:
        left = parts[0].strip()
        right = ' & '.join(parts[1:]).strip()
        return f'$\\{{ {left} \\mid {right} \\}}$'

    logger.debug("cases body has a single column, emitting it as display math")
    return f'$${inner}$$'


def convert_cases(text: str) -> str:
    r"""
    \begin{cases} left | right \end{cases} -> $\{ left \mid right \}$

    OCR engines read set-builder notation as a two column cases block; this
    restores the set. Bodies without a second column fall back to display math.
    """
    return _CASES_PATTERN.sub(lambda m: _cases_body_to_math(m.group(1)), text)


NORMALIZATION_STEPS: List[Transform] = [
    strip_invisible,
    _outside_math(convert_escaped_dollars),
    _outside_math(convert_bracket_math),
    _outside_math(convert_inline_parens),
    _outside_math(convert_display_brackets),
    _outside_math(convert_environments),
    _outside_math(convert_cases),
]


def normalize(text) -> str:
    """
    Rewrite every supported math delimiter style into canonical dollar form.

    Args:
        text: Raw question text; None and non-strings are treated as ""

    Returns:
        Text whose math is delimited only by $...$ and $$...$$
    """
    if not isinstance(text, str) or not text:
        return ''

    for step in NORMALIZATION_STEPS:
        text = step(text)
    return text
