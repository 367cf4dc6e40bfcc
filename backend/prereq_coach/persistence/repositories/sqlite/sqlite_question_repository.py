"""SQLite implementation of QuestionRepository."""
from __future__ import annotations
from typing import Iterable, List, Optional

from prereq_coach.domain.question.models import Question
from prereq_coach.persistence.interfaces.question_repository import QuestionRepository
from prereq_coach.persistence.db import connection

_COLUMNS = "id, question, option1, option2, option3, option4, correct_answer, question_type, concept_id"


def _row_to_question(row) -> Question:
    options = [row[f"option{i}"] for i in range(1, 5)]
    return Question(
        id=row["id"],
        text=row["question"],
        options=[o for o in options if o],
        correct_option_index=row["correct_answer"],
        question_type=row["question_type"],
        concept_id=row["concept_id"],
    )


class SqliteQuestionRepository(QuestionRepository):

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path

    def add(self, question: Question) -> Question:
        padded = list(question.options) + [None] * (4 - len(question.options))
        with connection("add_question", self._db_path) as conn:
            cur = conn.execute(
                """
                INSERT INTO questions (
                    question, option1, option2, option3, option4,
                    correct_answer, question_type, concept_id
                ) VALUES (
                    :question, :option1, :option2, :option3, :option4,
                    :correct_answer, :question_type, :concept_id
                )
                """,
                {
                    "question": question.text,
                    "option1": padded[0],
                    "option2": padded[1],
                    "option3": padded[2],
                    "option4": padded[3],
                    "correct_answer": question.correct_option_index,
                    "question_type": question.question_type,
                    "concept_id": question.concept_id,
                },
            )
            question.id = cur.lastrowid
        return question

    def get_by_id(self, question_id: int) -> Optional[Question]:
        with connection("get_question", self._db_path) as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM questions WHERE id = ?", (question_id,)
            ).fetchone()
        return _row_to_question(row) if row else None

    def list_by_type(self, question_type: str) -> List[Question]:
        with connection("list_questions", self._db_path) as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM questions WHERE question_type = ? ORDER BY id",
                (question_type,),
            ).fetchall()
        return [_row_to_question(r) for r in rows]

    def list_by_concepts(self, concept_ids: Iterable[int]) -> List[Question]:
        ids = list(dict.fromkeys(concept_ids))
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with connection("list_questions_by_concepts", self._db_path) as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM questions WHERE concept_id IN ({placeholders}) ORDER BY id",
                ids,
            ).fetchall()
        return [_row_to_question(r) for r in rows]
