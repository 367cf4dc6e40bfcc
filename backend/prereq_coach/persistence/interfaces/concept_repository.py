"""Abstract repository interface for the concept graph."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from prereq_coach.domain.concept.models import Concept, ConceptRelationship


class ConceptRepository(ABC):

    @abstractmethod
    def add_concept(self, concept: Concept) -> Concept:
        """Insert a concept and return it with its assigned id."""
        ...

    @abstractmethod
    def get_by_id(self, concept_id: int) -> Optional[Concept]:
        """Return the Concept, or None."""
        ...

    @abstractmethod
    def get_by_ids(self, concept_ids: Iterable[int]) -> List[Concept]:
        """Return the concepts that exist among the given ids, ordered by name then id."""
        ...

    @abstractmethod
    def list_all(self) -> List[Concept]:
        """Return all concepts ordered by id."""
        ...

    @abstractmethod
    def add_relationship(self, relationship: ConceptRelationship) -> ConceptRelationship:
        """Insert an edge and return it with its assigned id."""
        ...

    @abstractmethod
    def list_relationships(self) -> List[ConceptRelationship]:
        """Return every edge, whatever its type."""
        ...

    @abstractmethod
    def get_outgoing_relationships(self, concept_id: int) -> List[ConceptRelationship]:
        """Return all edges whose source is concept_id, of any type, ordered by id."""
        ...
