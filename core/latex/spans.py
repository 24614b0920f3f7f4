r"""
Canonical math span patterns shared by the normalizer and the display pipeline.

A dollar preceded by a backslash (``\$``) is a literal dollar and never opens
or closes a span; inside a span every ``\x`` pair is consumed as a unit, so
``$\$5$`` is one inline span and ``$x\\$`` ends at its last dollar.
"""

import regex

# $$...$$ (group 1 = formula); a lone $ may appear inside
BLOCK_MATH = regex.compile(
    r'(?<!\\)\$\$((?:\\.|[^\\$]|\$(?!\$))*?)\$\$',
    regex.DOTALL
)

# $...$ (group 1 = formula)
INLINE_MATH = regex.compile(r'(?<!\\)\$((?:\\.|[^\\$])+?)\$', regex.DOTALL)

# Either kind; display first so $$ is never read as two inline spans
MATH_SPAN = regex.compile(
    r'(?<!\\)\$\$(?:\\.|[^\\$]|\$(?!\$))*?\$\$|(?<!\\)\$(?:\\.|[^\\$])+?\$',
    regex.DOTALL
)
