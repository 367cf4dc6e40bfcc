"""Domain service: pure business logic for building concept graph records."""
from __future__ import annotations
from typing import Any, Iterable, List, Optional

from prereq_coach.domain.concept.models import Concept, ConceptRelationship, RelationshipType
from prereq_coach.domain.concept.rules import validate_concept_content, validate_relationship
from prereq_coach.domain.common.result import Result


class ConceptDomainService:
    """
    Pure domain operations: no I/O. All methods return Result[T].
    Returned records carry id=0; the repository assigns the real id on insert.
    """

    def create_concept(self, data: dict) -> Result[Concept]:
        validation = validate_concept_content(data)
        if not validation.is_success:
            return Result.fail(validation.error)

        description = (data.get("description") or "").strip() or None
        return Result.ok(Concept(id=0, name=data["name"].strip(), description=description))

    def create_relationship(
        self,
        source_concept_id: Any,
        target_concept_id: Any,
        relationship_type: Optional[str] = None,
    ) -> Result[ConceptRelationship]:
        """Build a directed edge: source depends on target. Rejects self-loops."""
        validation = validate_relationship(source_concept_id, target_concept_id)
        if not validation.is_success:
            return Result.fail(validation.error)

        source, target = validation.value
        return Result.ok(
            ConceptRelationship(
                id=0,
                source_concept_id=source,
                target_concept_id=target,
                relationship_type=RelationshipType.parse(relationship_type),
            )
        )

    def prerequisite_ids(self, outgoing: Iterable[ConceptRelationship]) -> List[int]:
        """One hop of DEPENDS_ON targets, first-seen order. Other edge types are ignored."""
        targets = []
        for relationship in outgoing:
            if not relationship.relationship_type.is_depends_on:
                continue
            if relationship.target_concept_id not in targets:
                targets.append(relationship.target_concept_id)
        return targets
