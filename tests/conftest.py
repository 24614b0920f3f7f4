"""
Pytest configuration and shared fixtures for the Math Question Bank tests.
"""
import sys
import shutil
import tempfile
import pytest
from datetime import datetime, timedelta
from pathlib import Path
from typing import Generator

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from api.question_repository import QuestionRepository


# ============================================================================
# Fixtures: Filesystem
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Fixtures: Repository
# ============================================================================

class FakeClock:
    """Controllable China Standard Time clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 3, 14, 9, 30, 0))


@pytest.fixture
def repository(temp_dir: Path, clock: FakeClock) -> QuestionRepository:
    """Repository on a fresh SQLite file with a fixed clock."""
    return QuestionRepository(str(temp_dir / "questions.sqlite"), clock=clock)


@pytest.fixture
def client(repository: QuestionRepository):
    """API test client bound to the temporary repository."""
    from fastapi.testclient import TestClient
    from api.main import app, limiter
    from api.question_routes import get_repository

    app.dependency_overrides[get_repository] = lambda: repository
    limiter.enabled = False
    with TestClient(app) as test_client:
        yield test_client
    limiter.enabled = True
    app.dependency_overrides.clear()


# ============================================================================
# Fixtures: Sample Texts
# ============================================================================

@pytest.fixture
def sample_question() -> dict:
    return {
        "title": "一元二次方程",
        "content": "解方程：$2x^2 - 5x + 3 = 0$",
        "answer": "$x = 1$ 或 $x = \\dfrac{3}{2}$",
        "analysis": "使用求根公式 $$x = \\frac{5 \\pm 1}{4}$$",
        "grade": "初三",
        "question_type": "解答题",
        "difficulty": 2,
        "custom_tags": ["一元二次方程"],
    }


@pytest.fixture
def ocr_text() -> str:
    """Recognized text with answer, analysis and a tag line."""
    return (
        "1. 已知 $x+2=1$，求 $x$。\n"
        "答案：$x=-1$\n"
        "解析：移项得 $x=1-2=-1$。\n"
        "【知识点】一元一次方程、移项"
    )
