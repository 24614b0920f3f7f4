"""
Question API Routes

CRUD over the question bank plus the tag list and a rendered preview.
"""

import logging
from typing import Optional, List, Dict, Any

from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import BaseModel, Field

from api.question_repository import QuestionRepository, get_question_repository
from core.latex import render_markdown_with_latex
from core.papers import QuestionFilter, filter_questions, collect_tags

logger = logging.getLogger(__name__)


# =========================================
# Pydantic Models
# =========================================

class QuestionPayload(BaseModel):
    """Create/update body for a question"""
    title: str = Field(default="", description="Short title")
    content: str = Field(..., min_length=1, description="Question stem (Markdown + LaTeX)")
    answer: str = Field(default="", description="Answer (Markdown + LaTeX)")
    analysis: str = Field(default="", description="Worked analysis (Markdown + LaTeX)")
    grade: Optional[str] = Field(default=None, description="Grade, e.g. 初二")
    question_type: Optional[str] = Field(default=None, description="选择题 / 填空题 / 解答题 ...")
    difficulty: int = Field(default=1, ge=1, le=3, description="1 easy, 2 medium, 3 hard")
    knowledge_point: Optional[str] = Field(default=None, description="Legacy single tag, merged into custom_tags")
    custom_tags: List[str] = Field(default_factory=list, description="Knowledge point tags")


class QuestionResponse(BaseModel):
    id: str
    question_id: Optional[str] = None
    title: str = ""
    content: str
    answer: str = ""
    analysis: str = ""
    grade: Optional[str] = None
    knowledge_point: Optional[str] = None
    question_type: Optional[str] = None
    difficulty: Optional[int] = 1
    usage_count: int = 0
    custom_tags: List[str] = []
    created_at: str
    updated_at: str


class RenderedQuestion(BaseModel):
    """Display HTML of the three question sections"""
    id: str
    question_id: Optional[str] = None
    content: str
    answer: str
    analysis: str


# =========================================
# Dependencies
# =========================================

def get_repository() -> QuestionRepository:
    """Repository dependency (overridden in tests)"""
    return get_question_repository()


def question_filter(
    search: Optional[str] = Query(None, description="Case-insensitive text search"),
    grade: Optional[str] = Query(None),
    question_type: Optional[str] = Query(None),
    difficulty: Optional[int] = Query(None, ge=1, le=3),
    tags: Optional[List[str]] = Query(None, description="Match any of these tags")
) -> QuestionFilter:
    return QuestionFilter(
        search=search,
        grade=grade,
        question_type=question_type,
        difficulty=difficulty,
        tags=tags or [],
    )


# =========================================
# Router
# =========================================

router = APIRouter(prefix="/api/questions", tags=["Questions"])


@router.get("", response_model=List[QuestionResponse])
async def list_questions(
    criteria: QuestionFilter = Depends(question_filter),
    repo: QuestionRepository = Depends(get_repository)
):
    """List questions, newest first, optionally filtered."""
    questions = repo.list_questions()
    if criteria.is_empty():
        return questions
    return filter_questions(questions, criteria)


@router.post("", response_model=QuestionResponse, status_code=201)
async def create_question(
    payload: QuestionPayload,
    repo: QuestionRepository = Depends(get_repository)
):
    """Store a new question; the display id is assigned automatically."""
    return repo.create_question(payload.model_dump())


@router.get("/tags", response_model=List[str])
async def list_tags(repo: QuestionRepository = Depends(get_repository)):
    """Every tag used in the bank, first-seen order."""
    return collect_tags(repo.list_questions())


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: str,
    repo: QuestionRepository = Depends(get_repository)
):
    question = repo.get_question(question_id)
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    return question


@router.get("/{question_id}/rendered", response_model=RenderedQuestion)
async def get_rendered_question(
    question_id: str,
    repo: QuestionRepository = Depends(get_repository)
):
    """Question sections as display HTML (Markdown + typeset math)."""
    question = repo.get_question(question_id)
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    return render_question(question)


@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: str,
    payload: QuestionPayload,
    repo: QuestionRepository = Depends(get_repository)
):
    question = repo.update_question(question_id, payload.model_dump())
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    logger.info(f"Question updated: {question['question_id']}")
    return question


@router.delete("/{question_id}")
async def delete_question(
    question_id: str,
    repo: QuestionRepository = Depends(get_repository)
) -> Dict[str, Any]:
    if not repo.delete_question(question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    logger.info(f"Question deleted: {question_id}")
    return {"success": True, "message": "Question deleted"}


def render_question(question: Dict) -> Dict:
    """Run content, answer and analysis through the display pipeline."""
    return {
        "id": question["id"],
        "question_id": question.get("question_id"),
        "content": render_markdown_with_latex(question.get("content")),
        "answer": render_markdown_with_latex(question.get("answer")),
        "analysis": render_markdown_with_latex(question.get("analysis")),
    }
