r"""
LaTeX fragment parser for the question editor's "paste LaTeX" import.

Understands the shape teachers typically paste from an exam source file:

    \item 解方程：$2x^2 - 5x + 3 = 0$
    \textbf{答案：} $x = 1$ 或 $x = \dfrac{3}{2}$
    \textbf{解析：} 使用求根公式：
    \[ x = \frac{5 \pm 1}{4} \]

``\item`` opens the question, ``\textbf{答案：}`` / ``**答案：**`` the answer and
``\textbf{解析：}`` / ``**解析：**`` the analysis. ``\[ ... \]`` blocks are
collected (across lines) and re-emitted as ``$$...$$``. Without any of these
markers the whole fragment becomes the question content.
"""

import re
from dataclasses import dataclass, asdict
from typing import Dict, List

_ANSWER_MARKER = re.compile(r'\\textbf\{答案[：:]\}|\*\*答案[：:]\*\*')
_ANALYSIS_MARKER = re.compile(r'\\textbf\{解析[：:]\}|\*\*解析[：:]\*\*')
_BLANK_LINES = re.compile(r'\n\s*\n')

LATEX_EXAMPLE = r"""\item 解方程：$2x^2 - 5x + 3 = 0$

\textbf{答案：} $x = 1$ 或 $x = \dfrac{3}{2}$

\textbf{解析：} 使用求根公式：
\[
x = \frac{5 \pm \sqrt{(-5)^2 - 4 \times 2 \times 3}}{2 \times 2} = \frac{5 \pm 1}{4}
\]
所以得到两个解：$x = \frac{6}{4} = \dfrac{3}{2}$ 和 $x = \frac{4}{4} = 1$。"""


@dataclass
class ParsedLatex:
    title: str = ""
    content: str = ""
    answer: str = ""
    analysis: str = ""

    def to_dict(self) -> Dict:
        return asdict(self)


def clean_section(text: str) -> str:
    """Trim and collapse blank lines."""
    return _BLANK_LINES.sub('\n', text.strip()).strip()


def _display_block(lines: List[str]) -> str:
    joined = '\n'.join(lines)
    joined = joined.replace('\\[', '$$', 1)
    return joined.replace('\\]', '$$', 1)


def parse_latex_content(latex_content) -> ParsedLatex:
    """
    Parse a pasted LaTeX question fragment.

    Args:
        latex_content: Fragment text; None/non-str gives an empty result

    Returns:
        ParsedLatex with cleaned sections
    """
    if not isinstance(latex_content, str) or not latex_content.strip():
        return ParsedLatex()

    sections: Dict[str, List[str]] = {'content': [], 'answer': [], 'analysis': []}
    current = 'content'
    explicit = False
    block: List[str] = []

    for raw_line in latex_content.split('\n'):
        line = raw_line.strip()
        if not line:
            continue

        if line == '\\begin{enumerate}':
            continue
        if line == '\\end{enumerate}':
            break

        if block:
            block.append(line)
            if '\\]' in line:
                sections[current].append(_display_block(block))
                block = []
            continue

        if line.startswith('\\item'):
            explicit = True
            current = 'content'
            sections['content'] = [line.replace('\\item', '', 1).strip()]
            continue

        if _ANSWER_MARKER.search(line):
            explicit = True
            current = 'answer'
            sections['answer'] = [_ANSWER_MARKER.sub('', line, count=1).strip()]
            continue

        if _ANALYSIS_MARKER.search(line):
            explicit = True
            current = 'analysis'
            sections['analysis'] = [_ANALYSIS_MARKER.sub('', line, count=1).strip()]
            continue

        if line.startswith('\\['):
            if '\\]' in line:
                sections[current].append(_display_block([line]))
            else:
                block = [line]
            continue

        sections[current].append(line)

    if block:
        # unterminated display block: keep what was collected
        sections[current].append('\n'.join(block).replace('\\[', '$$', 1) + '\n$$')

    if not explicit:
        return ParsedLatex(content=clean_section(latex_content))

    return ParsedLatex(
        content=clean_section('\n'.join(sections['content'])),
        answer=clean_section('\n'.join(sections['answer'])),
        analysis=clean_section('\n'.join(sections['analysis'])),
    )
