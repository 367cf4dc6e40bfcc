"""Application service for quiz questions."""
from __future__ import annotations
import logging
from typing import List, Optional

from prereq_coach.domain.common.result import Result
from prereq_coach.domain.question.models import Question
from prereq_coach.domain.question.rules import validate_question_content
from prereq_coach.persistence.interfaces.concept_repository import ConceptRepository
from prereq_coach.persistence.interfaces.question_repository import QuestionRepository

logger = logging.getLogger(__name__)


class QuestionAppService:
    def __init__(self, repo: QuestionRepository, concept_repo: ConceptRepository):
        self._repo = repo
        self._concepts = concept_repo

    def upload_question(self, data: dict) -> Result[Question]:
        """Validate, check the concept reference, then insert. Nothing is written on failure."""
        validation = validate_question_content(data)
        if not validation.is_success:
            return Result.fail(validation.error)

        question = validation.value
        if question.concept_id is not None and self._concepts.get_by_id(question.concept_id) is None:
            return Result.fail(f"Concept '{question.concept_id}' not found. Create it before linking questions.")

        question = self._repo.add(question)
        logger.info(
            "Uploaded question %s (type=%s, concept=%s)",
            question.id, question.question_type, question.concept_id,
        )
        return Result.ok(question)

    def get_question(self, question_id: int) -> Optional[Question]:
        return self._repo.get_by_id(question_id)

    def list_questions(self, question_type: str) -> List[Question]:
        return self._repo.list_by_type(question_type)
