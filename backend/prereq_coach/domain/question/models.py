"""Question domain models: pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Union

AI_GENERATED_TYPE = "ai_generated"

SOURCE_DATABASE = "database"
SOURCE_AI = "ai_generated"

QuestionId = Union[int, str]


@dataclass
class Question:
    id: int
    text: str
    options: List[str]
    correct_option_index: int  # 1-based
    question_type: str
    concept_id: Optional[int] = None


@dataclass
class PracticeQuestion:
    """A remediation item, either persisted or synthesized for one response."""

    id: QuestionId
    text: str
    options: List[str]
    correct_option_index: int
    question_type: str
    concept_id: Optional[int] = None
    concept_name: Optional[str] = None
    concept_description: Optional[str] = None
    source: str = SOURCE_DATABASE
    ai_score: Optional[int] = None
    ai_reason: Optional[str] = None

    @classmethod
    def from_question(
        cls,
        question: Question,
        concept_name: Optional[str] = None,
        concept_description: Optional[str] = None,
    ) -> "PracticeQuestion":
        return cls(
            id=question.id,
            text=question.text,
            options=list(question.options),
            correct_option_index=question.correct_option_index,
            question_type=question.question_type,
            concept_id=question.concept_id,
            concept_name=concept_name,
            concept_description=concept_description,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "question": self.text,
            "options": list(self.options),
            "correctAnswer": self.correct_option_index,
            "questionType": self.question_type,
            "conceptId": self.concept_id,
            "conceptName": self.concept_name,
            "conceptDescription": self.concept_description,
            "source": self.source,
        }
        if self.ai_score is not None:
            data["aiScore"] = self.ai_score
        if self.ai_reason:
            data["aiReason"] = self.ai_reason
        return data


@dataclass
class SubmissionResult:
    student_identity: str
    question_type: str
    score: int
    total_questions: int
    percentage: float
    failed_question_ids: List[int] = field(default_factory=list)
    timestamp: str = ""
    id: Optional[int] = None
