"""SQLite implementation of SubmissionRepository."""
from __future__ import annotations
import json
from typing import List, Optional

from prereq_coach.domain.question.models import SubmissionResult
from prereq_coach.persistence.interfaces.submission_repository import SubmissionRepository
from prereq_coach.persistence.db import connection


def _row_to_result(row) -> SubmissionResult:
    return SubmissionResult(
        id=row["id"],
        student_identity=row["student_identity"],
        question_type=row["question_type"],
        score=row["score"],
        total_questions=row["total_questions"],
        percentage=row["percentage"],
        failed_question_ids=json.loads(row["failed_question_ids"] or "[]"),
        timestamp=row["test_date"],
    )


class SqliteSubmissionRepository(SubmissionRepository):

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path

    def add(self, result: SubmissionResult) -> SubmissionResult:
        with connection("add_submission_result", self._db_path) as conn:
            cur = conn.execute(
                """
                INSERT INTO student_results (
                    student_identity, question_type, score, total_questions,
                    percentage, failed_question_ids, test_date
                ) VALUES (
                    :student_identity, :question_type, :score, :total_questions,
                    :percentage, :failed_question_ids, :test_date
                )
                """,
                {
                    "student_identity": result.student_identity,
                    "question_type": result.question_type,
                    "score": result.score,
                    "total_questions": result.total_questions,
                    "percentage": result.percentage,
                    "failed_question_ids": json.dumps(result.failed_question_ids),
                    "test_date": result.timestamp,
                },
            )
            result.id = cur.lastrowid
        return result

    def list_for_student(self, student_identity: str) -> List[SubmissionResult]:
        with connection("list_submission_results", self._db_path) as conn:
            rows = conn.execute(
                "SELECT * FROM student_results WHERE student_identity = ? ORDER BY id ASC",
                (student_identity,),
            ).fetchall()
        return [_row_to_result(r) for r in rows]
