"""Abstract repository interface for submission results (append-only)."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from prereq_coach.domain.question.models import SubmissionResult


class SubmissionRepository(ABC):

    @abstractmethod
    def add(self, result: SubmissionResult) -> SubmissionResult:
        """Append a result row: rows are never updated or deleted."""
        ...

    @abstractmethod
    def list_for_student(self, student_identity: str) -> List[SubmissionResult]:
        """Return a student's results, oldest first."""
        ...
