"""
Paper assembly: question filtering and randomized selection.
"""

from core.papers.selector import (
    QuestionFilter,
    collect_tags,
    filter_questions,
    question_tags,
    select_random,
)

__all__ = [
    'QuestionFilter',
    'collect_tags',
    'filter_questions',
    'question_tags',
    'select_random',
]
