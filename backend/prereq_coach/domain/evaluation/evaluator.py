"""Answer evaluation: compares submitted option numbers to the stored answers."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from prereq_coach.domain.question.models import Question


@dataclass
class QuestionEvaluation:
    question_index: int
    question_id: int
    is_correct: bool
    correct_option_index: int
    concept_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "questionIndex": self.question_index,
            "questionId": self.question_id,
            "isCorrect": self.is_correct,
            "correctAnswer": self.correct_option_index,
            "conceptId": self.concept_id,
        }


@dataclass
class EvaluationResult:
    results: List[QuestionEvaluation] = field(default_factory=list)
    failed_question_ids: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def score(self) -> int:
        return sum(1 for r in self.results if r.is_correct)

    @property
    def percentage(self) -> float:
        return percentage(self.score, self.total)


def percentage(score: int, total: int) -> float:
    """score/total as a percentage rounded to two places; 0.0 for an empty quiz."""
    if total <= 0:
        return 0.0
    return round(score / total * 100, 2)


def parse_choice(raw: Any) -> Optional[int]:
    """Read a submitted option number the way a form field would send it."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


class AnswerEvaluator:
    """Position-aligned grading: answers[i] is the student's choice for questions[i]."""

    def evaluate(self, questions: Sequence[Question], answers: Optional[Sequence[Any]]) -> EvaluationResult:
        answers = list(answers or [])
        evaluation = EvaluationResult()
        seen_failed = set()

        for index, question in enumerate(questions):
            choice = parse_choice(answers[index]) if index < len(answers) else None
            is_correct = choice is not None and choice == question.correct_option_index
            evaluation.results.append(
                QuestionEvaluation(
                    question_index=index,
                    question_id=question.id,
                    is_correct=is_correct,
                    correct_option_index=question.correct_option_index,
                    concept_id=question.concept_id,
                )
            )
            if not is_correct and question.id not in seen_failed:
                seen_failed.add(question.id)
                evaluation.failed_question_ids.append(question.id)

        return evaluation
