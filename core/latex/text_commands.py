r"""
LaTeX text commands -> HTML.

Only a fixed set is understood: \item, \textbf{}, \textit{}, \underline{}.
Braces are matched non-greedily without nesting, so \textbf{a {b} c} is not
supported.
"""

import re

_TEXT_COMMANDS = [
    (re.compile(r'\\item\s*'), '• '),
    (re.compile(r'\\textbf\{([^}]*)\}'), r'<strong>\1</strong>'),
    (re.compile(r'\\textit\{([^}]*)\}'), r'<em>\1</em>'),
    (re.compile(r'\\underline\{([^}]*)\}'), r'<u>\1</u>'),
]


def render_latex_text(text) -> str:
    """Replace the supported LaTeX text commands with HTML equivalents."""
    if not isinstance(text, str) or not text:
        return ''

    for pattern, replacement in _TEXT_COMMANDS:
        text = pattern.sub(replacement, text)
    return text
