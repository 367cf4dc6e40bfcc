"""Concept graph API endpoints."""
from __future__ import annotations
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel

from prereq_coach.application.concept_app_service import ConceptAppService
from prereq_coach.container import get_concept_app_service
from prereq_coach.domain.concept.models import Concept, ConceptRelationship
from prereq_coach.domain.concept.rules import MAX_ID
from prereq_coach.persistence.db import ping

router = APIRouter(tags=["concepts"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class ConceptBody(BaseModel):
    name: str
    description: Optional[str] = None


class RelationshipBody(BaseModel):
    source_concept_id: Union[int, str, None] = None
    target_concept_id: Union[int, str, None] = None
    relationship_type: Optional[str] = None


# ------------------------------------------------------------------
# Serializers
# ------------------------------------------------------------------
def serialize_concept(c: Concept) -> dict:
    return {"id": c.id, "name": c.name, "description": c.description}


def serialize_relationship(r: ConceptRelationship) -> dict:
    return {
        "id": r.id,
        "source_concept_id": r.source_concept_id,
        "target_concept_id": r.target_concept_id,
        "relationship_type": str(r.relationship_type),
    }


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@router.get("/health")
def health():
    return {"status": "ok", "database": "ok" if ping() else "error"}


# ------------------------------------------------------------------
# Concept endpoints
# ------------------------------------------------------------------
@router.get("/concepts")
def list_concepts(svc: ConceptAppService = Depends(get_concept_app_service)):
    return {"success": True, "concepts": [serialize_concept(c) for c in svc.list_concepts()]}


@router.post("/concepts", status_code=status.HTTP_201_CREATED)
def create_concept(body: ConceptBody, svc: ConceptAppService = Depends(get_concept_app_service)):
    result = svc.create_concept(body.model_dump())
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    return {"success": True, "concept": serialize_concept(result.value)}


@router.get("/concepts/{concept_id}")
def get_concept(
    concept_id: int = Path(..., ge=1, le=MAX_ID),
    svc: ConceptAppService = Depends(get_concept_app_service),
):
    concept = svc.get_concept(concept_id)
    if not concept:
        raise HTTPException(status_code=404, detail=f"Concept '{concept_id}' not found")
    return serialize_concept(concept)


@router.get("/concepts/{concept_id}/prerequisites")
def get_prerequisites(
    concept_id: int = Path(..., ge=1, le=MAX_ID),
    svc: ConceptAppService = Depends(get_concept_app_service),
):
    if not svc.get_concept(concept_id):
        raise HTTPException(status_code=404, detail=f"Concept '{concept_id}' not found")
    return {
        "success": True,
        "prerequisites": [serialize_concept(c) for c in svc.get_prerequisites(concept_id)],
    }


# ------------------------------------------------------------------
# Relationship endpoints
# ------------------------------------------------------------------
@router.get("/concept-relationships")
def list_relationships(svc: ConceptAppService = Depends(get_concept_app_service)):
    return {
        "success": True,
        "relationships": [serialize_relationship(r) for r in svc.list_relationships()],
    }


@router.post("/concept-relationships", status_code=status.HTTP_201_CREATED)
def create_relationship(body: RelationshipBody, svc: ConceptAppService = Depends(get_concept_app_service)):
    result = svc.create_relationship(body.source_concept_id, body.target_concept_id, body.relationship_type)
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    return {"success": True, "relationship": serialize_relationship(result.value)}
