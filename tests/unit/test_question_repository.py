"""
Unit tests for api/question_repository.py - SQLite question and paper store
"""
import sqlite3
from api.question_repository import QuestionRepository, merge_tags


def legacy_insert(repo: QuestionRepository, row_id: str, created_at: str,
                  knowledge_point=None, custom_tags=None):
    """Insert a row the way older versions stored questions (no display id)."""
    conn = sqlite3.connect(str(repo.db_path))
    conn.execute("""
        INSERT INTO questions (id, content, knowledge_point, custom_tags, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
    """, (row_id, "旧题", knowledge_point, custom_tags, created_at, created_at))
    conn.commit()
    conn.close()


class TestMergeTags:

    def test_knowledge_point_appended_once(self):
        assert merge_tags(["函数"], "函数") == ["函数"]
        assert merge_tags(["函数"], "图像") == ["函数", "图像"]

    def test_blank_values_dropped(self):
        assert merge_tags(["", " a ", "a"], "  ") == ["a"]


class TestQuestions:

    def test_create_assigns_display_id_and_timestamps(self, repository, sample_question):
        question = repository.create_question(sample_question)
        assert question["question_id"] == "202503140001"
        assert question["created_at"] == "2025-03-14 09:30:00"
        assert question["custom_tags"] == ["一元二次方程"]
        assert question["difficulty"] == 2

    def test_sequence_per_day(self, repository, clock, sample_question):
        first = repository.create_question(sample_question)
        second = repository.create_question(sample_question)
        clock.advance(days=1)
        third = repository.create_question(sample_question)
        assert first["question_id"] == "202503140001"
        assert second["question_id"] == "202503140002"
        assert third["question_id"] == "202503150001"

    def test_sequence_skips_used_ids(self, repository, sample_question):
        first = repository.create_question(sample_question)
        second = repository.create_question(sample_question)
        repository.delete_question(first["id"])
        third = repository.create_question(sample_question)
        # one question left today -> 0002 would be next, but it is taken
        assert second["question_id"] == "202503140002"
        assert third["question_id"] == "202503140003"

    def test_knowledge_point_merged(self, repository):
        question = repository.create_question({
            "content": "x", "knowledge_point": "函数", "custom_tags": ["图像"]
        })
        assert question["custom_tags"] == ["图像", "函数"]

    def test_update(self, repository, clock, sample_question):
        question = repository.create_question(sample_question)
        clock.advance(minutes=5)
        updated = repository.update_question(question["id"], {**sample_question, "content": "新题干"})
        assert updated["content"] == "新题干"
        assert updated["updated_at"] == "2025-03-14 09:35:00"
        assert updated["question_id"] == question["question_id"]

    def test_update_missing(self, repository, sample_question):
        assert repository.update_question("missing", sample_question) is None

    def test_list_newest_first(self, repository, clock, sample_question):
        old = repository.create_question(sample_question)
        clock.advance(hours=1)
        new = repository.create_question(sample_question)
        assert [q["id"] for q in repository.list_questions()] == [new["id"], old["id"]]

    def test_delete_removes_paper_links(self, repository, sample_question):
        question = repository.create_question(sample_question)
        paper = repository.create_paper("卷", None, [question["id"]])
        assert repository.delete_question(question["id"])
        assert repository.get_question(question["id"]) is None
        assert repository.get_paper(paper["id"])["questions"] == []
        assert not repository.delete_question(question["id"])


class TestPapers:

    def test_generated_title_and_serial(self, repository, sample_question):
        question = repository.create_question(sample_question)
        first = repository.create_paper(None, None, [question["id"]], teacher="王老师")
        second = repository.create_paper("", None, [question["id"]], teacher="王老师")
        other = repository.create_paper(None, None, [question["id"]])

        assert first["title"] == "王老师20250314数学试卷 #1"
        assert second["title"] == "王老师20250314数学试卷 #2"
        assert other["title"] == "独立老师20250314数学试卷 #1"
        assert first["question_count"] == 1

    def test_serial_resets_next_day(self, repository, clock):
        repository.create_paper(None, None, [], teacher="王老师")
        clock.advance(days=1)
        paper = repository.create_paper(None, None, [], teacher="王老师")
        assert paper["serial_no"] == 1
        assert paper["title"] == "王老师20250315数学试卷 #1"

    def test_explicit_title_kept(self, repository):
        paper = repository.create_paper("期中测试", "说明", [])
        assert paper["title"] == "期中测试"
        assert paper["description"] == "说明"
        assert paper["type"] == "manual"

    def test_question_order_kept(self, repository, sample_question):
        ids = [repository.create_question(sample_question)["id"] for _ in range(3)]
        order = [ids[2], ids[0], ids[1]]
        paper = repository.create_paper("卷", None, order)

        detail = repository.get_paper(paper["id"])
        assert [q["id"] for q in detail["questions"]] == order
        assert [q["order_num"] for q in detail["questions"]] == [1, 2, 3]

    def test_list_papers_with_counts(self, repository, clock, sample_question):
        question = repository.create_question(sample_question)
        repository.create_paper("A", None, [question["id"]])
        clock.advance(minutes=1)
        repository.create_paper("B", None, [])
        papers = repository.list_papers()
        assert [(p["title"], p["question_count"]) for p in papers] == [("B", 0), ("A", 1)]

    def test_missing_paper(self, repository):
        assert repository.get_paper("missing") is None


class TestMaintenance:

    def test_generate_missing_question_ids(self, repository):
        legacy_insert(repository, "a", "2024-05-01 08:00:00")
        legacy_insert(repository, "b", "2024-05-01 09:00:00")
        legacy_insert(repository, "c", "2024-05-02 10:00:00")

        assert repository.generate_missing_question_ids() == 3
        assert repository.get_question("a")["question_id"] == "202405010001"
        assert repository.get_question("b")["question_id"] == "202405010002"
        assert repository.get_question("c")["question_id"] == "202405020001"
        assert repository.generate_missing_question_ids() == 0

    def test_migrate_knowledge_points(self, repository):
        legacy_insert(repository, "a", "2024-05-01 08:00:00",
                      knowledge_point="函数", custom_tags='["图像"]')
        legacy_insert(repository, "b", "2024-05-01 09:00:00", knowledge_point="函数",
                      custom_tags='["函数"]')

        assert repository.migrate_knowledge_points() == 2
        a = repository.get_question("a")
        assert a["custom_tags"] == ["图像", "函数"]
        assert a["knowledge_point"] is None
        assert repository.get_question("b")["custom_tags"] == ["函数"]
        assert repository.migrate_knowledge_points() == 0


class TestDefaultTeacher:

    def test_configured_name_used_in_titles(self, temp_dir, clock):
        repo = QuestionRepository(str(temp_dir / "q.sqlite"), clock=clock, default_teacher="数学组")
        paper = repo.create_paper(None, None, [])
        assert paper["title"] == "数学组20250314数学试卷 #1"
