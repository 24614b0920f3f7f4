"""
Question Repository - SQLite persistence for questions and papers.

Tables:
    questions        question bank (content/answer/analysis + metadata)
    papers           assembled exam papers
    paper_questions  ordered paper -> question links

Timestamps are China Standard Time strings (YYYY-MM-DD HH:MM:SS); the
display id of a question is its creation date plus a per-day sequence
number (e.g. 202503140007).
"""

import sqlite3
import json
import uuid
import logging
from pathlib import Path
from typing import Callable, Dict, Optional, List
from datetime import datetime, timedelta, timezone
from contextlib import contextmanager

from config.constants import (
    CST_OFFSET_HOURS,
    DATE_CODE_FORMAT,
    DEFAULT_TEACHER,
    PAPER_TITLE_TEMPLATE,
    QUESTION_SEQ_WIDTH,
    TIMESTAMP_FORMAT,
)

logger = logging.getLogger(__name__)

CST = timezone(timedelta(hours=CST_OFFSET_HOURS))

QUESTION_FIELDS = (
    "title", "content", "answer", "analysis", "grade",
    "question_type", "difficulty",
)


def china_now() -> datetime:
    """Current wall-clock time in China Standard Time (naive)."""
    return datetime.now(CST).replace(tzinfo=None)


def merge_tags(custom_tags: Optional[List[str]], knowledge_point: Optional[str]) -> List[str]:
    """Custom tags with the knowledge point appended when not already present."""
    tags: List[str] = []
    for tag in custom_tags or []:
        tag = (tag or "").strip()
        if tag and tag not in tags:
            tags.append(tag)
    knowledge_point = (knowledge_point or "").strip()
    if knowledge_point and knowledge_point not in tags:
        tags.append(knowledge_point)
    return tags


class QuestionRepository:
    """
    SQLite repository for the question bank and its papers.

    Args:
        db_path: SQLite file path
        clock: Returns "now" in China Standard Time (injectable for tests)
        default_teacher: Name used in generated titles of papers without a teacher
    """

    def __init__(self, db_path: str = "data/question_bank.sqlite",
                 clock: Callable[[], datetime] = china_now,
                 default_teacher: str = DEFAULT_TEACHER):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.clock = clock
        self.default_teacher = default_teacher
        self._init_db()
        logger.info(f"QuestionRepository initialized: {self.db_path}")

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception as e:
            conn.rollback()
            raise e
        finally:
            conn.close()

    def _init_db(self):
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS questions (
                    id TEXT PRIMARY KEY,
                    question_id TEXT UNIQUE,
                    title TEXT NOT NULL DEFAULT '',
                    content TEXT NOT NULL,
                    answer TEXT,
                    analysis TEXT,
                    grade TEXT,
                    knowledge_point TEXT,
                    question_type TEXT,
                    difficulty INTEGER DEFAULT 1,
                    usage_count INTEGER DEFAULT 0,
                    custom_tags TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS papers (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT,
                    type TEXT DEFAULT 'manual',
                    teacher TEXT,
                    serial_no INTEGER,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS paper_questions (
                    id TEXT PRIMARY KEY,
                    paper_id TEXT,
                    question_id TEXT,
                    order_num INTEGER,
                    FOREIGN KEY (paper_id) REFERENCES papers (id),
                    FOREIGN KEY (question_id) REFERENCES questions (id)
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_paper_questions_paper
                ON paper_questions(paper_id)
            """)

            logger.info("Database schema initialized")

    # ------------------------------------------------------------------
    # Display ids
    # ------------------------------------------------------------------

    @staticmethod
    def _day_bounds(moment: datetime):
        day = moment.strftime('%Y-%m-%d')
        return f"{day} 00:00:00", f"{day} 23:59:59"

    @staticmethod
    def _next_free_id(conn: sqlite3.Connection, date_code: str, seq: int) -> str:
        while True:
            candidate = date_code + str(seq).zfill(QUESTION_SEQ_WIDTH)
            row = conn.execute(
                "SELECT COUNT(*) AS count FROM questions WHERE question_id = ?",
                (candidate,)
            ).fetchone()
            if row["count"] == 0:
                return candidate
            seq += 1

    def _generate_question_id(self, conn: sqlite3.Connection, moment: datetime) -> str:
        """Date code + (questions created that day + 1), bumped past used ids."""
        start, end = self._day_bounds(moment)
        row = conn.execute(
            "SELECT COUNT(*) AS count FROM questions WHERE created_at BETWEEN ? AND ?",
            (start, end)
        ).fetchone()
        return self._next_free_id(conn, moment.strftime(DATE_CODE_FORMAT), (row["count"] or 0) + 1)

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def create_question(self, data: Dict) -> Dict:
        """Insert a question and return the stored record."""
        question_id = str(uuid.uuid4())
        now = self.clock()
        timestamp = now.strftime(TIMESTAMP_FORMAT)
        tags = merge_tags(data.get("custom_tags"), data.get("knowledge_point"))

        with self._get_connection() as conn:
            display_id = self._generate_question_id(conn, now)
            conn.execute("""
                INSERT INTO questions (
                    id, question_id, title, content, answer, analysis,
                    grade, question_type, difficulty, custom_tags,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                question_id,
                display_id,
                data.get("title") or "",
                data.get("content") or "",
                data.get("answer") or "",
                data.get("analysis") or "",
                data.get("grade"),
                data.get("question_type"),
                data.get("difficulty") or 1,
                json.dumps(tags, ensure_ascii=False) if tags else None,
                timestamp,
                timestamp,
            ))

        logger.info(f"Question created: {display_id}")
        return self.get_question(question_id)

    def update_question(self, question_id: str, data: Dict) -> Optional[Dict]:
        """Replace the editable fields; None when the question does not exist."""
        tags = merge_tags(data.get("custom_tags"), data.get("knowledge_point"))
        timestamp = self.clock().strftime(TIMESTAMP_FORMAT)

        with self._get_connection() as conn:
            cursor = conn.execute("""
                UPDATE questions
                SET title = ?, content = ?, answer = ?, analysis = ?, grade = ?,
                    question_type = ?, difficulty = ?, custom_tags = ?, updated_at = ?
                WHERE id = ?
            """, (
                data.get("title") or "",
                data.get("content") or "",
                data.get("answer") or "",
                data.get("analysis") or "",
                data.get("grade"),
                data.get("question_type"),
                data.get("difficulty") or 1,
                json.dumps(tags, ensure_ascii=False) if tags else None,
                timestamp,
                question_id,
            ))
            if cursor.rowcount == 0:
                return None

        return self.get_question(question_id)

    def get_question(self, question_id: str) -> Optional[Dict]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM questions WHERE id = ?",
                (question_id,)
            ).fetchone()
            return self._question_row(row) if row else None

    def list_questions(self) -> List[Dict]:
        """All questions, most recent first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM questions ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
            return [self._question_row(row) for row in rows]

    def delete_question(self, question_id: str) -> bool:
        """Delete a question together with its paper links."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM paper_questions WHERE question_id = ?", (question_id,))
            cursor = conn.execute("DELETE FROM questions WHERE id = ?", (question_id,))
            return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Papers
    # ------------------------------------------------------------------

    def create_paper(self, title: Optional[str], description: Optional[str],
                     question_ids: List[str], teacher: Optional[str] = None,
                     paper_type: str = "manual") -> Dict:
        """
        Create a paper with its ordered question links.

        The serial number counts this teacher's papers of the day; a blank
        title is replaced by "<teacher><YYYYMMDD>数学试卷 #<serial>".
        """
        paper_id = str(uuid.uuid4())
        now = self.clock()
        teacher = (teacher or "").strip() or None

        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT COALESCE(MAX(serial_no), 0) AS max_no FROM papers
                WHERE substr(created_at, 1, 10) = ?
                  AND (teacher = ? OR (teacher IS NULL AND ? IS NULL))
            """, (now.strftime('%Y-%m-%d'), teacher, teacher)).fetchone()
            serial_no = (row["max_no"] or 0) + 1

            final_title = (title or "").strip() or PAPER_TITLE_TEMPLATE.format(
                teacher=teacher or self.default_teacher,
                date=now.strftime(DATE_CODE_FORMAT),
                serial=serial_no,
            )

            conn.execute("""
                INSERT INTO papers (id, title, description, type, teacher, serial_no, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (paper_id, final_title, description, paper_type, teacher, serial_no,
                  now.strftime(TIMESTAMP_FORMAT)))

            for order_num, question_id in enumerate(question_ids, start=1):
                conn.execute("""
                    INSERT INTO paper_questions (id, paper_id, question_id, order_num)
                    VALUES (?, ?, ?, ?)
                """, (str(uuid.uuid4()), paper_id, question_id, order_num))

        logger.info(f"Paper created: {final_title} ({len(question_ids)} questions)")
        return self.get_paper_summary(paper_id)

    def get_paper_summary(self, paper_id: str) -> Optional[Dict]:
        """Paper row with its question count."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT p.*, COUNT(pq.question_id) AS question_count
                FROM papers p
                LEFT JOIN paper_questions pq ON p.id = pq.paper_id
                WHERE p.id = ?
                GROUP BY p.id
            """, (paper_id,)).fetchone()
            return dict(row) if row else None

    def get_paper(self, paper_id: str) -> Optional[Dict]:
        """Paper with its questions in paper order."""
        with self._get_connection() as conn:
            paper = conn.execute("SELECT * FROM papers WHERE id = ?", (paper_id,)).fetchone()
            if not paper:
                return None

            rows = conn.execute("""
                SELECT q.*, pq.order_num
                FROM paper_questions pq
                JOIN questions q ON q.id = pq.question_id
                WHERE pq.paper_id = ?
                ORDER BY pq.order_num ASC
            """, (paper_id,)).fetchall()

            result = dict(paper)
            result["questions"] = [self._question_row(row) for row in rows]
            return result

    def list_papers(self) -> List[Dict]:
        """All papers with question counts, most recent first."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT p.*, COUNT(pq.question_id) AS question_count
                FROM papers p
                LEFT JOIN paper_questions pq ON p.id = pq.paper_id
                GROUP BY p.id
                ORDER BY p.created_at DESC, p.rowid DESC
            """).fetchall()
            return [dict(row) for row in rows]

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def generate_missing_question_ids(self) -> int:
        """Back-fill display ids for questions created before ids existed."""
        processed = 0
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT id, created_at FROM questions
                WHERE question_id IS NULL
                ORDER BY created_at ASC
            """).fetchall()

            for row in rows:
                created = datetime.strptime(row["created_at"], TIMESTAMP_FORMAT)
                start, _end = self._day_bounds(created)
                count_row = conn.execute("""
                    SELECT COUNT(*) AS count FROM questions
                    WHERE created_at BETWEEN ? AND ? AND question_id IS NOT NULL
                """, (start, row["created_at"])).fetchone()
                display_id = self._next_free_id(
                    conn, created.strftime(DATE_CODE_FORMAT), (count_row["count"] or 0) + 1
                )
                conn.execute(
                    "UPDATE questions SET question_id = ? WHERE id = ?",
                    (display_id, row["id"])
                )
                processed += 1

        logger.info(f"Generated display ids for {processed} questions")
        return processed

    def migrate_knowledge_points(self) -> int:
        """Move legacy knowledge_point values into custom_tags."""
        processed = 0
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT id, knowledge_point, custom_tags FROM questions
                WHERE knowledge_point IS NOT NULL AND knowledge_point != ''
            """).fetchall()

            for row in rows:
                tags = merge_tags(self._load_tags(row["custom_tags"]), row["knowledge_point"])
                conn.execute(
                    "UPDATE questions SET custom_tags = ?, knowledge_point = NULL WHERE id = ?",
                    (json.dumps(tags, ensure_ascii=False) if tags else None, row["id"])
                )
                processed += 1

        logger.info(f"Migrated knowledge points of {processed} questions")
        return processed

    # ------------------------------------------------------------------
    # Row conversion
    # ------------------------------------------------------------------

    @staticmethod
    def _load_tags(raw: Optional[str]) -> List[str]:
        if not raw:
            return []
        try:
            tags = json.loads(raw)
        except ValueError:
            logger.warning(f"Unreadable custom_tags value: {raw[:50]}")
            return []
        return tags if isinstance(tags, list) else []

    def _question_row(self, row: sqlite3.Row) -> Dict:
        """Convert database row to question dict."""
        question = dict(row)
        question["custom_tags"] = self._load_tags(row["custom_tags"])
        question["answer"] = question.get("answer") or ""
        question["analysis"] = question.get("analysis") or ""
        return question


# Singleton instance
_repository: Optional[QuestionRepository] = None


def get_question_repository(db_path: Optional[str] = None) -> QuestionRepository:
    """Get or create the question repository singleton."""
    global _repository
    if _repository is None:
        from config.settings import settings
        if db_path is None:
            db_path = str(settings.database_path)
        _repository = QuestionRepository(db_path, default_teacher=settings.default_teacher)
    return _repository


def reset_question_repository():
    """Reset the singleton (useful for testing)"""
    global _repository
    _repository = None
