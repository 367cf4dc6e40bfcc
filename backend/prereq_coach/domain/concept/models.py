"""Concept graph domain models: pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

DEPENDS_ON = "DEPENDS_ON"


@dataclass(frozen=True)
class RelationshipType:
    """Tagged edge type: either DEPENDS_ON or some other, uninterpreted tag."""

    tag: str

    @classmethod
    def depends_on(cls) -> "RelationshipType":
        return cls(DEPENDS_ON)

    @classmethod
    def parse(cls, raw: Optional[str]) -> "RelationshipType":
        tag = (raw or "").strip()
        return cls(tag or DEPENDS_ON)

    @property
    def is_depends_on(self) -> bool:
        return self.tag == DEPENDS_ON

    def __str__(self) -> str:
        return self.tag


@dataclass
class Concept:
    id: int
    name: str
    description: Optional[str] = None


@dataclass
class ConceptRelationship:
    id: int
    source_concept_id: int  # the dependent concept
    target_concept_id: int  # the prerequisite
    relationship_type: RelationshipType = RelationshipType(DEPENDS_ON)
