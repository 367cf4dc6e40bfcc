"""SQLite implementation of ConceptRepository."""
from __future__ import annotations
from typing import Iterable, List, Optional

from prereq_coach.domain.concept.models import Concept, ConceptRelationship, RelationshipType
from prereq_coach.persistence.interfaces.concept_repository import ConceptRepository
from prereq_coach.persistence.db import connection


def _row_to_concept(row) -> Concept:
    return Concept(
        id=row["id"],
        name=row["name"],
        description=row["description"],
    )


def _row_to_relationship(row) -> ConceptRelationship:
    return ConceptRelationship(
        id=row["id"],
        source_concept_id=row["source_concept_id"],
        target_concept_id=row["target_concept_id"],
        relationship_type=RelationshipType.parse(row["relationship_type"]),
    )


class SqliteConceptRepository(ConceptRepository):

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path

    def add_concept(self, concept: Concept) -> Concept:
        with connection("add_concept", self._db_path) as conn:
            cur = conn.execute(
                "INSERT INTO concepts (name, description) VALUES (:name, :description)",
                {"name": concept.name, "description": concept.description},
            )
            concept.id = cur.lastrowid
        return concept

    def get_by_id(self, concept_id: int) -> Optional[Concept]:
        with connection("get_concept", self._db_path) as conn:
            row = conn.execute(
                "SELECT id, name, description FROM concepts WHERE id = ?", (concept_id,)
            ).fetchone()
        return _row_to_concept(row) if row else None

    def get_by_ids(self, concept_ids: Iterable[int]) -> List[Concept]:
        ids = list(dict.fromkeys(concept_ids))
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with connection("get_concepts", self._db_path) as conn:
            rows = conn.execute(
                f"SELECT id, name, description FROM concepts WHERE id IN ({placeholders}) ORDER BY name, id",
                ids,
            ).fetchall()
        return [_row_to_concept(r) for r in rows]

    def list_all(self) -> List[Concept]:
        with connection("list_concepts", self._db_path) as conn:
            rows = conn.execute("SELECT id, name, description FROM concepts ORDER BY id").fetchall()
        return [_row_to_concept(r) for r in rows]

    def add_relationship(self, relationship: ConceptRelationship) -> ConceptRelationship:
        with connection("add_relationship", self._db_path) as conn:
            cur = conn.execute(
                """
                INSERT INTO concept_relationships (source_concept_id, target_concept_id, relationship_type)
                VALUES (:source, :target, :type)
                """,
                {
                    "source": relationship.source_concept_id,
                    "target": relationship.target_concept_id,
                    "type": str(relationship.relationship_type),
                },
            )
            relationship.id = cur.lastrowid
        return relationship

    def list_relationships(self) -> List[ConceptRelationship]:
        with connection("list_relationships", self._db_path) as conn:
            rows = conn.execute(
                """
                SELECT id, source_concept_id, target_concept_id, relationship_type
                FROM concept_relationships ORDER BY id
                """
            ).fetchall()
        return [_row_to_relationship(r) for r in rows]

    def get_outgoing_relationships(self, concept_id: int) -> List[ConceptRelationship]:
        with connection("get_outgoing_relationships", self._db_path) as conn:
            rows = conn.execute(
                """
                SELECT id, source_concept_id, target_concept_id, relationship_type
                FROM concept_relationships
                WHERE source_concept_id = ?
                ORDER BY id
                """,
                (concept_id,),
            ).fetchall()
        return [_row_to_relationship(r) for r in rows]
