"""
Prerequisite-based recommendation engine.

For a failed question: find its concept, walk one hop of DEPENDS_ON edges,
collect practice questions for those prerequisites, then enrich the result
with whatever the advisory gateway can offer (insight prose, ranking,
guidance). Enrichment never fails the call; data-access errors do.
"""
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from prereq_coach.advisory.gateway import AdvisoryGateway
from prereq_coach.application.practice_sources import DatabasePracticeSource, PracticeQuestionSource
from prereq_coach.core.config import RANKED_QUESTION_LIMIT, RECOMMENDATION_WORKERS
from prereq_coach.domain.concept.models import Concept
from prereq_coach.domain.concept.service import ConceptDomainService
from prereq_coach.domain.question.models import PracticeQuestion, QuestionId
from prereq_coach.domain.recommendation.models import (
    FailedConcept,
    InsightEntry,
    RecommendationBundle,
    RecommendationResult,
)
from prereq_coach.domain.recommendation.ranking import apply_rankings, dedupe_by_text
from prereq_coach.persistence.interfaces.concept_repository import ConceptRepository
from prereq_coach.persistence.interfaces.question_repository import QuestionRepository

logger = logging.getLogger(__name__)


class RecommendationEngine:
    def __init__(
        self,
        concept_repo: ConceptRepository,
        question_repo: QuestionRepository,
        gateway: AdvisoryGateway,
        source: Optional[PracticeQuestionSource] = None,
        rank_limit: int = RANKED_QUESTION_LIMIT,
        max_workers: int = RECOMMENDATION_WORKERS,
    ):
        self._concepts = concept_repo
        self._questions = question_repo
        self._gateway = gateway
        self._database_source = DatabasePracticeSource(question_repo)
        self._source = source or self._database_source
        self._rank_limit = rank_limit
        self._max_workers = max(1, max_workers)
        self._domain = ConceptDomainService()

    # ------------------------------------------------------------------
    # Graph lookup
    # ------------------------------------------------------------------
    def prerequisites_of(self, concept_id: int) -> List[Concept]:
        """Concepts that concept_id directly DEPENDS_ON, in edge order."""
        target_ids = self._domain.prerequisite_ids(self._concepts.get_outgoing_relationships(concept_id))
        if not target_ids:
            return []
        found = {c.id: c for c in self._concepts.get_by_ids(target_ids)}
        return [found[i] for i in target_ids if i in found]

    def prerequisite_questions(self, question_id: int) -> Optional[List[PracticeQuestion]]:
        """
        Stored prerequisite questions for a failed question, with no advisory calls.
        None when the question does not exist or is not linked to a concept.
        """
        question = self._questions.get_by_id(question_id)
        if question is None or question.concept_id is None:
            return None
        return self._database_source.questions_for(self.prerequisites_of(question.concept_id))

    # ------------------------------------------------------------------
    # Single failed question
    # ------------------------------------------------------------------
    def recommend_for_failed_question(self, question_id: QuestionId) -> RecommendationResult:
        question = self._questions.get_by_id(question_id)
        if question is None or question.concept_id is None:
            logger.debug("Question %s has no linked concept; nothing to recommend", question_id)
            return RecommendationResult.empty()

        concept = self._concepts.get_by_id(question.concept_id)
        if concept is None:
            return RecommendationResult.empty()

        prerequisites = self.prerequisites_of(concept.id)
        prerequisite_names = list(dict.fromkeys(c.name for c in prerequisites))
        candidates = self._source.questions_for(prerequisites) if prerequisites else []

        insight = self._gateway.generate_insight(question.text, concept.name, prerequisite_names)

        if candidates:
            rankings = self._gateway.rank_questions(candidates, concept.name)
            candidates = apply_rankings(candidates, rankings, self._rank_limit)

        guidance = self._gateway.generate_guidance(concept.name, prerequisite_names)
        if guidance is not None and guidance.is_empty():
            guidance = None

        logger.info(
            "Question %s (%s): %d prerequisite(s), %d practice question(s)",
            question_id, concept.name, len(prerequisites), len(candidates),
        )
        return RecommendationResult(
            questions=candidates,
            ai_insight=insight,
            ai_guidance=guidance,
            failed_concept=FailedConcept(name=concept.name, description=concept.description),
            prerequisite_names=prerequisite_names,
        )

    # ------------------------------------------------------------------
    # Many failed questions
    # ------------------------------------------------------------------
    def recommend_for_failed_questions(self, question_ids: Iterable[QuestionId]) -> RecommendationBundle:
        """
        Recommend per failed question, then aggregate once every lookup has
        finished: concatenate in input order, dedupe by question text, keep
        all insights and the first guidance block. A lookup that raises is
        logged and left out.
        """
        ids = list(dict.fromkeys(question_ids))
        if not ids:
            return RecommendationBundle()

        outcomes = self._run_all(ids)

        bundle = RecommendationBundle()
        candidates = []
        for question_id, result in zip(ids, outcomes):
            if result is None:
                continue
            candidates.extend(result.questions)
            if result.ai_insight:
                bundle.ai_insights.append(
                    InsightEntry(
                        question_id=question_id,
                        insights=result.ai_insight,
                        failed_concept=result.failed_concept,
                    )
                )
            if bundle.ai_guidance is None and result.ai_guidance is not None:
                bundle.ai_guidance = result.ai_guidance

        bundle.questions = dedupe_by_text(candidates)
        logger.info(
            "Recommendations for %d failed question(s): %d candidate(s), %d unique, %d insight(s)",
            len(ids), len(candidates), len(bundle.questions), len(bundle.ai_insights),
        )
        return bundle

    def _run_all(self, ids: List[QuestionId]) -> List[Optional[RecommendationResult]]:
        if self._max_workers == 1 or len(ids) == 1:
            return [self._run_one(question_id) for question_id in ids]
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(ids))) as pool:
            return list(pool.map(self._run_one, ids))

    def _run_one(self, question_id: QuestionId) -> Optional[RecommendationResult]:
        try:
            return self.recommend_for_failed_question(question_id)
        except Exception:
            logger.exception("Recommendation failed for question %s; leaving it out", question_id)
            return None
