"""Recommendation result models."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from prereq_coach.domain.question.models import PracticeQuestion, QuestionId


@dataclass
class Guidance:
    title: str
    analysis: str
    solution: str
    how_helps: str

    def is_empty(self) -> bool:
        return not any((self.title, self.analysis, self.solution, self.how_helps))

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "analysis": self.analysis,
            "solution": self.solution,
            "howHelps": self.how_helps,
        }


@dataclass
class QuestionRanking:
    id: QuestionId
    score: int  # 1..5
    reason: str = ""


@dataclass
class FailedConcept:
    name: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "description": self.description}


@dataclass
class RecommendationResult:
    """Everything recommended for a single failed question."""

    questions: List[PracticeQuestion] = field(default_factory=list)
    ai_insight: Optional[str] = None
    ai_guidance: Optional[Guidance] = None
    failed_concept: Optional[FailedConcept] = None
    prerequisite_names: List[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "RecommendationResult":
        return cls()


@dataclass
class InsightEntry:
    question_id: QuestionId
    insights: str
    failed_concept: Optional[FailedConcept] = None

    def to_dict(self) -> dict:
        return {
            "questionId": self.question_id,
            "failedConcept": self.failed_concept.to_dict() if self.failed_concept else None,
            "insights": self.insights,
        }


@dataclass
class RecommendationBundle:
    """Aggregate over several failed questions: deduplicated questions, insights, one guidance block."""

    questions: List[PracticeQuestion] = field(default_factory=list)
    ai_insights: List[InsightEntry] = field(default_factory=list)
    ai_guidance: Optional[Guidance] = None

    def to_dict(self) -> dict:
        return {
            "recommendations": [q.to_dict() for q in self.questions],
            "aiInsights": [i.to_dict() for i in self.ai_insights],
            "aiGuidance": self.ai_guidance.to_dict() if self.ai_guidance else None,
        }
