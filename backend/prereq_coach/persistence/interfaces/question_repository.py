"""Abstract repository interface for quiz questions."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from prereq_coach.domain.question.models import Question


class QuestionRepository(ABC):

    @abstractmethod
    def add(self, question: Question) -> Question:
        """Insert a validated question and return it with its assigned id."""
        ...

    @abstractmethod
    def get_by_id(self, question_id: int) -> Optional[Question]:
        ...

    @abstractmethod
    def list_by_type(self, question_type: str) -> List[Question]:
        """Questions of one quiz type in id order: the order answers are aligned to."""
        ...

    @abstractmethod
    def list_by_concepts(self, concept_ids: Iterable[int]) -> List[Question]:
        """Questions whose concept_id is in the given set."""
        ...
