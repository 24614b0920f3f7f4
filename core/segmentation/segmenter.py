"""
Structural Segmenter - raw recognized text -> content / answer / analysis.

OCR output and pasted text carry no structure, so each line is classified
with keyword heuristics. The classifier is a three-state automaton:

    CONTENT --answer marker--> ANSWER
    any     --analysis marker--> ANALYSIS

``next_section`` is the pure transition function; ``segment`` runs it over
the lines and accumulates text per section. A separate scan pulls the
knowledge-point tags out of a ``【知识点】`` line.

When neither an answer nor an analysis is found the input is treated as
undifferentiated content and returned verbatim.
"""

import re
import logging
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List

from config.constants import (
    ANALYSIS_KEYWORDS,
    ANSWER_KEYWORDS,
    CIRCLED_NUMBERS,
    TAG_MARKER,
)

logger = logging.getLogger(__name__)

_CHOICE_OPTION = re.compile(r'^[A-D][\s.,、]')
_CIRCLED_NUMBER = re.compile(f'^[{CIRCLED_NUMBERS}]')
_TAG_LINE = re.compile(rf'{re.escape(TAG_MARKER)}[:：]?\s*(.*)')
_TAG_SEPARATORS = re.compile(r'[、,，;；\s]+')


class Section(Enum):
    """Section a recognized line belongs to"""
    CONTENT = "content"
    ANSWER = "answer"
    ANALYSIS = "analysis"


@dataclass
class SegmentedQuestion:
    """Structured form data produced from raw text"""
    content: str = ""
    answer: str = ""
    analysis: str = ""
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


def is_answer_marker(line: str) -> bool:
    """Answer keywords, a choice option (A. / B、) or a circled number."""
    if any(keyword in line for keyword in ANSWER_KEYWORDS):
        return True
    return bool(_CHOICE_OPTION.match(line) or _CIRCLED_NUMBER.match(line))


def is_analysis_marker(line: str) -> bool:
    return any(keyword in line for keyword in ANALYSIS_KEYWORDS)


def next_section(state: Section, line: str) -> Section:
    """
    Transition function of the line classifier.

    Answer markers only move CONTENT to ANSWER. Analysis markers move any
    state to ANALYSIS and win over an answer marker on the same line.
    """
    if state is Section.CONTENT and is_answer_marker(line):
        state = Section.ANSWER
    if is_analysis_marker(line):
        state = Section.ANALYSIS
    return state


def extract_tags(raw_text: str) -> List[str]:
    """
    Tags from the first ``【知识点】a、b, c`` line, de-duplicated in order.
    """
    for line in raw_text.split('\n'):
        match = _TAG_LINE.search(line)
        if not match:
            continue
        tags: List[str] = []
        for token in _TAG_SEPARATORS.split(match.group(1)):
            token = token.strip()
            if token and token not in tags:
                tags.append(token)
        return tags
    return []


def segment(raw_text) -> SegmentedQuestion:
    """
    Split raw recognized text into content, answer, analysis and tags.

    Args:
        raw_text: OCR output or pasted text; None/non-str is treated as ""

    Returns:
        SegmentedQuestion. Never raises.
    """
    if not isinstance(raw_text, str) or not raw_text:
        return SegmentedQuestion()

    sections: Dict[Section, List[str]] = {section: [] for section in Section}
    state = Section.CONTENT

    for line in raw_text.split('\n'):
        trimmed = line.strip()
        if not trimmed:
            continue
        state = next_section(state, trimmed)
        sections[state].append(trimmed)

    content = '\n'.join(sections[Section.CONTENT]).strip()
    answer = '\n'.join(sections[Section.ANSWER]).strip()
    analysis = '\n'.join(sections[Section.ANALYSIS]).strip()

    if not answer and not analysis:
        logger.debug("No answer/analysis markers found, keeping text as content")
        content = raw_text

    return SegmentedQuestion(
        content=content,
        answer=answer,
        analysis=analysis,
        tags=extract_tags(raw_text),
    )
