"""Application service: orchestrates validate → domain op → persist for the concept graph."""
from __future__ import annotations
import logging
from typing import Any, List, Optional

from prereq_coach.domain.concept.models import Concept, ConceptRelationship
from prereq_coach.domain.concept.service import ConceptDomainService
from prereq_coach.domain.common.result import Result
from prereq_coach.persistence.interfaces.concept_repository import ConceptRepository

logger = logging.getLogger(__name__)


class ConceptAppService:
    def __init__(self, repo: ConceptRepository):
        self._repo = repo
        self._domain = ConceptDomainService()

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    def create_concept(self, data: dict) -> Result[Concept]:
        result = self._domain.create_concept(data)
        if not result.is_success:
            return Result.fail(result.error)
        concept = self._repo.add_concept(result.value)
        logger.info("Created concept %s (%s)", concept.id, concept.name)
        return Result.ok(concept)

    def create_relationship(
        self,
        source_concept_id: Any,
        target_concept_id: Any,
        relationship_type: Optional[str] = None,
    ) -> Result[ConceptRelationship]:
        result = self._domain.create_relationship(source_concept_id, target_concept_id, relationship_type)
        if not result.is_success:
            return Result.fail(result.error)

        relationship = result.value
        for concept_id in (relationship.source_concept_id, relationship.target_concept_id):
            if self._repo.get_by_id(concept_id) is None:
                return Result.fail(f"Concept '{concept_id}' not found.")

        relationship = self._repo.add_relationship(relationship)
        logger.info(
            "Created relationship %s: %s -[%s]-> %s",
            relationship.id,
            relationship.source_concept_id,
            relationship.relationship_type,
            relationship.target_concept_id,
        )
        return Result.ok(relationship)

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_concept(self, concept_id: int) -> Optional[Concept]:
        return self._repo.get_by_id(concept_id)

    def list_concepts(self) -> List[Concept]:
        return self._repo.list_all()

    def list_relationships(self) -> List[ConceptRelationship]:
        return self._repo.list_relationships()

    def get_prerequisites(self, concept_id: int) -> List[Concept]:
        target_ids = self._domain.prerequisite_ids(self._repo.get_outgoing_relationships(concept_id))
        found = {c.id: c for c in self._repo.get_by_ids(target_ids)}
        return [found[i] for i in target_ids if i in found]
