"""Concept graph rules, services and SQLite repository."""
import sqlite3

import pytest

from prereq_coach.domain.common.errors import DataAccessError, ValidationError
from prereq_coach.domain.concept.models import DEPENDS_ON, ConceptRelationship, RelationshipType
from prereq_coach.domain.concept.rules import coerce_id, validate_relationship
from prereq_coach.domain.concept.service import ConceptDomainService
from prereq_coach.persistence.repositories.sqlite.sqlite_concept_repository import SqliteConceptRepository


# ------------------------------------------------------------------
# Relationship type variant
# ------------------------------------------------------------------
def test_relationship_type_defaults_to_depends_on():
    assert RelationshipType.parse(None).is_depends_on
    assert RelationshipType.parse("  ").is_depends_on
    assert RelationshipType.parse(DEPENDS_ON) == RelationshipType.depends_on()


def test_other_relationship_types_are_kept_verbatim():
    related = RelationshipType.parse("RELATED_TO")
    assert not related.is_depends_on
    assert str(related) == "RELATED_TO"


def test_prerequisite_ids_only_follow_depends_on():
    edges = [
        ConceptRelationship(1, 1, 2, RelationshipType.parse("RELATED_TO")),
        ConceptRelationship(2, 1, 3),
        ConceptRelationship(3, 1, 3),
        ConceptRelationship(4, 1, 4, RelationshipType.parse("PART_OF")),
    ]
    assert ConceptDomainService().prerequisite_ids(edges) == [3]


# ------------------------------------------------------------------
# Rules
# ------------------------------------------------------------------
def test_self_loop_rejected():
    result = validate_relationship(5, "5")
    assert not result.is_success
    assert "itself" in result.error


def test_missing_endpoint_rejected():
    assert not validate_relationship(None, 2).is_success
    assert not validate_relationship(1, "").is_success


def test_coerce_id():
    assert coerce_id("12") == 12
    assert coerce_id(" 7 ") == 7
    assert coerce_id("undefined") is None
    assert coerce_id("") is None
    assert coerce_id("x1") is None
    assert coerce_id(True) is None


def test_coerce_id_rejects_values_sqlite_cannot_store():
    assert coerce_id(2 ** 63 - 1) == 2 ** 63 - 1
    assert coerce_id(2 ** 63) is None
    assert coerce_id(str(2 ** 64)) is None
    assert not validate_relationship(1, 2 ** 64).is_success


# ------------------------------------------------------------------
# Application service
# ------------------------------------------------------------------
def test_create_concept(concept_svc):
    result = concept_svc.create_concept({"name": "  Pointers ", "description": ""})
    assert result.is_success
    assert result.value.id > 0
    assert result.value.name == "Pointers"
    assert result.value.description is None


def test_blank_concept_name_rejected(concept_svc):
    result = concept_svc.create_concept({"name": "   "})
    assert not result.is_success
    with pytest.raises(ValidationError):
        result.unwrap()


def test_duplicate_names_are_tolerated(concept_svc):
    first = concept_svc.create_concept({"name": "Graphs"}).unwrap()
    second = concept_svc.create_concept({"name": "Graphs"}).unwrap()
    assert first.id != second.id
    assert len(concept_svc.list_concepts()) == 2


def test_create_relationship_self_loop_writes_nothing(concept_svc):
    a = concept_svc.create_concept({"name": "A"}).unwrap()
    result = concept_svc.create_relationship(a.id, a.id)
    assert not result.is_success
    assert concept_svc.list_relationships() == []


def test_create_relationship_to_unknown_concept_rejected(concept_svc):
    a = concept_svc.create_concept({"name": "A"}).unwrap()
    result = concept_svc.create_relationship(a.id, 999)
    assert not result.is_success
    assert "999" in result.error
    assert concept_svc.list_relationships() == []


def test_relationships_store_every_type(graph, concept_svc):
    types = sorted(str(r.relationship_type) for r in concept_svc.list_relationships())
    assert types == ["DEPENDS_ON", "DEPENDS_ON", "RELATED_TO"]


def test_get_prerequisites_is_one_hop(graph, concept_svc):
    arrays = graph["concepts"]["arrays"]
    names = [c.name for c in concept_svc.get_prerequisites(arrays.id)]
    # Sorting is RELATED_TO and Variables is two hops away
    assert names == ["Loops"]


def test_concept_without_edges_has_no_prerequisites(graph, concept_svc):
    assert concept_svc.get_prerequisites(graph["concepts"]["variables"].id) == []


# ------------------------------------------------------------------
# Repository
# ------------------------------------------------------------------
def test_get_by_ids_skips_missing(concept_repo, concept_svc):
    a = concept_svc.create_concept({"name": "Zeta"}).unwrap()
    b = concept_svc.create_concept({"name": "Alpha"}).unwrap()
    found = concept_repo.get_by_ids([a.id, 404, b.id])
    assert [c.name for c in found] == ["Alpha", "Zeta"]
    assert concept_repo.get_by_ids([]) == []


def test_database_self_loop_check(concept_repo, concept_svc):
    a = concept_svc.create_concept({"name": "A"}).unwrap()
    with pytest.raises(DataAccessError):
        concept_repo.add_relationship(ConceptRelationship(0, a.id, a.id))


def test_unreachable_database_raises_data_access_error(tmp_path):
    repo = SqliteConceptRepository(str(tmp_path / "missing" / "nested" / "db.sqlite"))
    with pytest.raises(DataAccessError) as excinfo:
        repo.list_all()
    assert isinstance(excinfo.value.cause, sqlite3.Error)
