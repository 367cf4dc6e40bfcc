"""Application service: evaluate a quiz attempt, recommend remediation, record the result."""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from prereq_coach.application.recommendation_engine import RecommendationEngine
from prereq_coach.domain.common.errors import DataAccessError
from prereq_coach.domain.evaluation.evaluator import AnswerEvaluator, EvaluationResult
from prereq_coach.domain.question.models import QuestionId, SubmissionResult
from prereq_coach.domain.recommendation.models import RecommendationBundle
from prereq_coach.persistence.interfaces.question_repository import QuestionRepository
from prereq_coach.persistence.interfaces.submission_repository import SubmissionRepository

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SubmissionResponse:
    evaluation: EvaluationResult
    recommendations: RecommendationBundle = field(default_factory=RecommendationBundle)
    saved_result: Optional[SubmissionResult] = None
    success: bool = True

    @property
    def summary(self) -> dict:
        return {
            "totalQuestions": self.evaluation.total,
            "correctAnswers": self.evaluation.score,
            "score": f"{self.evaluation.percentage:.2f}%",
            "percentage": self.evaluation.percentage,
            "recommendationsCount": len(self.recommendations.questions),
            "aiInsightsCount": len(self.recommendations.ai_insights),
        }

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "evaluationResults": [r.to_dict() for r in self.evaluation.results],
            **self.recommendations.to_dict(),
            "summary": self.summary,
        }


class SubmissionAppService:
    def __init__(
        self,
        question_repo: QuestionRepository,
        submission_repo: SubmissionRepository,
        engine: RecommendationEngine,
        evaluator: Optional[AnswerEvaluator] = None,
    ):
        self._questions = question_repo
        self._submissions = submission_repo
        self._engine = engine
        self._evaluator = evaluator or AnswerEvaluator()

    def evaluate(self, question_type: str, answers: Optional[Sequence[Any]]) -> EvaluationResult:
        questions = self._questions.list_by_type(question_type)
        evaluation = self._evaluator.evaluate(questions, answers)
        logger.info(
            "Evaluated %s: %d/%d correct, %d failed",
            question_type, evaluation.score, evaluation.total, len(evaluation.failed_question_ids),
        )
        return evaluation

    def recommend(self, failed_question_ids: Sequence[QuestionId]) -> RecommendationBundle:
        return self._engine.recommend_for_failed_questions(failed_question_ids)

    def submit(
        self,
        student_identity: Optional[str],
        question_type: str,
        answers: Optional[Sequence[Any]],
    ) -> SubmissionResponse:
        """
        Evaluation errors propagate. Recommendation is best-effort, and a failed
        save of the result row is logged without taking the evaluation away from
        the student.
        """
        evaluation = self.evaluate(question_type, answers)

        recommendations = RecommendationBundle()
        if evaluation.failed_question_ids:
            recommendations = self.recommend(evaluation.failed_question_ids)

        response = SubmissionResponse(evaluation=evaluation, recommendations=recommendations)
        if student_identity:
            response.saved_result = self._save_result(student_identity, question_type, evaluation)
        else:
            logger.info("Anonymous submission for %s; result not recorded", question_type)
        return response

    def _save_result(
        self,
        student_identity: str,
        question_type: str,
        evaluation: EvaluationResult,
    ) -> Optional[SubmissionResult]:
        record = SubmissionResult(
            student_identity=student_identity,
            question_type=question_type,
            score=evaluation.score,
            total_questions=evaluation.total,
            percentage=evaluation.percentage,
            failed_question_ids=list(evaluation.failed_question_ids),
            timestamp=_now_iso(),
        )
        try:
            saved = self._submissions.add(record)
        except DataAccessError as e:
            logger.error("Could not save result for %s on %s: %s", student_identity, question_type, e)
            return None
        logger.info(
            "Saved result for %s: %d/%d (%.2f%%)",
            student_identity, saved.score, saved.total_questions, saved.percentage,
        )
        return saved

    def results_for(self, student_identity: str) -> List[SubmissionResult]:
        return self._submissions.list_for_student(student_identity)
