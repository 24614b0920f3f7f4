"""
Admin API Routes

One-off maintenance of legacy data and a system summary.
"""

import sys
import logging
import platform

from fastapi import APIRouter, Depends

from api.question_repository import QuestionRepository
from api.question_routes import get_repository
from config.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Admin"])


@router.post("/admin/generate-question-ids")
async def generate_question_ids(repo: QuestionRepository = Depends(get_repository)):
    """Back-fill display ids of questions created before ids existed."""
    processed = repo.generate_missing_question_ids()
    return {
        "success": True,
        "processed": processed,
        "message": f"Generated ids for {processed} questions"
    }


@router.post("/admin/migrate-knowledge-points")
async def migrate_knowledge_points(repo: QuestionRepository = Depends(get_repository)):
    """Move legacy knowledge points into custom tags."""
    processed = repo.migrate_knowledge_points()
    return {
        "success": True,
        "processed": processed,
        "message": f"Migrated {processed} questions"
    }


@router.get("/system/info")
async def system_info(repo: QuestionRepository = Depends(get_repository)):
    return {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "questions": len(repo.list_questions()),
        "papers": len(repo.list_papers()),
        "settings": settings.summary(),
    }
