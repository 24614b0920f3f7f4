"""
Paper API Routes

Manual and automatic exam paper assembly.
"""

import logging
from typing import Optional, List

from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import BaseModel, Field

from api.question_repository import QuestionRepository
from api.question_routes import get_repository, render_question
from config.constants import AUTO_PAPER_DEFAULT_COUNT
from config.settings import settings
from core.papers import QuestionFilter, filter_questions, select_random

logger = logging.getLogger(__name__)


# =========================================
# Pydantic Models
# =========================================

class PaperCreate(BaseModel):
    """Manual paper: explicit, ordered question ids"""
    title: Optional[str] = Field(default=None, description="Blank -> generated title")
    description: Optional[str] = None
    teacher: Optional[str] = Field(default=None, description="Teacher name used for serials and titles")
    question_ids: List[str] = Field(..., min_length=1, description="Question ids in paper order")


class AutoPaperCreate(BaseModel):
    """Automatic paper: filter the bank, then pick at random"""
    title: Optional[str] = None
    description: Optional[str] = None
    teacher: Optional[str] = None
    count: int = Field(default=AUTO_PAPER_DEFAULT_COUNT, ge=1, description="Number of questions")
    search: Optional[str] = None
    grade: Optional[str] = None
    question_type: Optional[str] = None
    difficulty: Optional[int] = Field(default=None, ge=1, le=3)
    tags: List[str] = Field(default_factory=list)

    def criteria(self) -> QuestionFilter:
        return QuestionFilter(
            search=self.search,
            grade=self.grade,
            question_type=self.question_type,
            difficulty=self.difficulty,
            tags=self.tags,
        )


class PaperSummary(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    type: str = "manual"
    teacher: Optional[str] = None
    serial_no: Optional[int] = None
    created_at: str
    question_count: int = 0


# =========================================
# Router
# =========================================

router = APIRouter(prefix="/api/papers", tags=["Papers"])


@router.get("", response_model=List[PaperSummary])
async def list_papers(repo: QuestionRepository = Depends(get_repository)):
    """All papers, newest first, with their question counts."""
    return repo.list_papers()


@router.post("", response_model=PaperSummary, status_code=201)
async def create_paper(
    payload: PaperCreate,
    repo: QuestionRepository = Depends(get_repository)
):
    """Assemble a paper from hand-picked questions."""
    missing = [qid for qid in payload.question_ids if repo.get_question(qid) is None]
    if missing:
        raise HTTPException(status_code=404, detail=f"Questions not found: {', '.join(missing)}")

    return repo.create_paper(
        title=payload.title,
        description=payload.description,
        question_ids=payload.question_ids,
        teacher=payload.teacher,
    )


@router.post("/auto", response_model=PaperSummary, status_code=201)
async def create_auto_paper(
    payload: AutoPaperCreate,
    repo: QuestionRepository = Depends(get_repository)
):
    """
    Assemble a paper by random selection.

    The request count is capped by ``settings.auto_paper_max``; fewer
    questions are used when fewer match.
    """
    candidates = filter_questions(repo.list_questions(), payload.criteria())
    if not candidates:
        raise HTTPException(status_code=400, detail="No questions match the given criteria")

    count = min(payload.count, settings.auto_paper_max)
    question_ids = select_random(candidates, count)
    logger.info(f"Auto paper: {len(question_ids)} of {len(candidates)} matching questions")

    return repo.create_paper(
        title=payload.title,
        description=payload.description,
        question_ids=question_ids,
        teacher=payload.teacher,
        paper_type="auto",
    )


@router.get("/{paper_id}")
async def get_paper(
    paper_id: str,
    render: bool = Query(False, description="Include display HTML for every question"),
    repo: QuestionRepository = Depends(get_repository)
):
    """Paper with its questions in paper order."""
    paper = repo.get_paper(paper_id)
    if not paper:
        raise HTTPException(status_code=404, detail="Paper not found")

    if render:
        for question in paper["questions"]:
            question["rendered"] = render_question(question)
    return paper
