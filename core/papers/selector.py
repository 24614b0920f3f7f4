"""
Paper assembly helpers: filtering the question bank and random selection.

Questions are plain dicts as returned by the question repository
(``id``, ``content``, ``answer``, ``analysis``, ``grade``, ``question_type``,
``difficulty``, ``custom_tags`` and the legacy ``knowledge_point``).
"""

import random
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class QuestionFilter:
    """
    Filter criteria shared by the question list, manual and automatic papers.

    Empty values mean "no restriction". ``tags`` matches when any requested
    tag is attached to the question.
    """
    search: Optional[str] = None
    grade: Optional[str] = None
    question_type: Optional[str] = None
    difficulty: Optional[int] = None
    tags: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.search or self.grade or self.question_type
                    or self.difficulty or self.tags)


def question_tags(question: Dict) -> List[str]:
    """Custom tags plus the legacy knowledge point, if any."""
    tags = list(question.get("custom_tags") or [])
    legacy = (question.get("knowledge_point") or "").strip()
    if legacy and legacy not in tags:
        tags.append(legacy)
    return tags


def _matches_search(question: Dict, term: str) -> bool:
    term = term.lower()
    for key in ("content", "answer", "analysis"):
        if term in (question.get(key) or "").lower():
            return True
    return any(term in tag.lower() for tag in question_tags(question))


def matches(question: Dict, criteria: QuestionFilter) -> bool:
    if criteria.search and not _matches_search(question, criteria.search):
        return False
    if criteria.grade and question.get("grade") != criteria.grade:
        return False
    if criteria.question_type and question.get("question_type") != criteria.question_type:
        return False
    if criteria.difficulty and question.get("difficulty") != criteria.difficulty:
        return False
    if criteria.tags:
        attached = question_tags(question)
        if not any(tag in attached for tag in criteria.tags):
            return False
    return True


def filter_questions(questions: Iterable[Dict], criteria: QuestionFilter) -> List[Dict]:
    """Questions satisfying every non-empty criterion, original order kept."""
    return [q for q in questions if matches(q, criteria)]


def select_random(
    questions: List[Dict],
    count: int,
    rng: Optional[random.Random] = None
) -> List[str]:
    """
    Pick ``min(count, len(questions))`` distinct question ids uniformly.

    Args:
        questions: Candidate questions
        count: Requested number of questions
        rng: Random source (injectable for reproducible tests)

    Returns:
        Selected question ids in selection order
    """
    if count <= 0 or not questions:
        return []
    rng = rng or random.Random()
    picked = rng.sample(questions, min(count, len(questions)))
    logger.debug(f"Selected {len(picked)} of {len(questions)} candidate questions")
    return [q["id"] for q in picked]


def collect_tags(questions: Iterable[Dict]) -> List[str]:
    """All tags in use across the bank, first-seen order."""
    seen: List[str] = []
    for question in questions:
        for tag in question_tags(question):
            if tag not in seen:
                seen.append(tag)
    return seen
