"""Where prerequisite practice questions come from: stored questions or generated ones."""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from prereq_coach.advisory.gateway import AdvisoryGateway
from prereq_coach.core.config import GENERATED_QUESTION_COUNT, RECOMMENDATION_STRATEGY
from prereq_coach.domain.concept.models import Concept
from prereq_coach.domain.question.models import PracticeQuestion
from prereq_coach.persistence.interfaces.question_repository import QuestionRepository

logger = logging.getLogger(__name__)

STRATEGY_DATABASE = "database"
STRATEGY_GENERATIVE = "generative"


class PracticeQuestionSource(ABC):
    name: str = ""

    @abstractmethod
    def questions_for(self, prerequisites: Sequence[Concept]) -> List[PracticeQuestion]:
        ...


class DatabasePracticeSource(PracticeQuestionSource):
    """Every stored question tagged with one of the prerequisite concepts, grouped by concept name."""

    name = STRATEGY_DATABASE

    def __init__(self, question_repo: QuestionRepository):
        self._questions = question_repo

    def questions_for(self, prerequisites: Sequence[Concept]) -> List[PracticeQuestion]:
        if not prerequisites:
            return []
        concepts = {c.id: c for c in prerequisites}
        practice = []
        for question in self._questions.list_by_concepts(concepts):
            concept = concepts[question.concept_id]
            practice.append(PracticeQuestion.from_question(question, concept.name, concept.description))
        practice.sort(key=lambda q: (q.concept_name or "", q.id))
        return practice


class GenerativePracticeSource(PracticeQuestionSource):
    """
    Ask the advisory gateway to write fresh questions over the prerequisite names.
    When generation yields nothing and a fallback source is set, that source answers instead.
    """

    name = STRATEGY_GENERATIVE

    def __init__(
        self,
        gateway: AdvisoryGateway,
        count: int = GENERATED_QUESTION_COUNT,
        fallback: Optional[PracticeQuestionSource] = None,
    ):
        self._gateway = gateway
        self._count = count
        self._fallback = fallback

    def questions_for(self, prerequisites: Sequence[Concept]) -> List[PracticeQuestion]:
        names = list(dict.fromkeys(c.name for c in prerequisites))
        if not names:
            return []
        generated = self._gateway.generate_practice_questions(names, self._count)
        if generated or self._fallback is None:
            return generated
        logger.info("No generated questions for %s; falling back to %s", names, self._fallback.name)
        return self._fallback.questions_for(prerequisites)


def build_practice_source(
    question_repo: QuestionRepository,
    gateway: AdvisoryGateway,
    strategy: str = RECOMMENDATION_STRATEGY,
    count: int = GENERATED_QUESTION_COUNT,
) -> PracticeQuestionSource:
    if strategy == STRATEGY_GENERATIVE:
        return GenerativePracticeSource(gateway, count, fallback=DatabasePracticeSource(question_repo))
    if strategy != STRATEGY_DATABASE:
        logger.warning("Unknown recommendation strategy '%s'; using '%s'", strategy, STRATEGY_DATABASE)
    return DatabasePracticeSource(question_repo)
