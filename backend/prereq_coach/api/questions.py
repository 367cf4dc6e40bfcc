"""Question upload and listing endpoints."""
from __future__ import annotations
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from prereq_coach.application.question_app_service import QuestionAppService
from prereq_coach.container import get_question_app_service
from prereq_coach.domain.question.models import Question

router = APIRouter(tags=["questions"])


class QuestionBody(BaseModel):
    question: str
    options: Optional[List[str]] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    option4: Optional[str] = None
    correctAnswer: Union[int, str]
    question_type: str
    concept_id: Union[int, str, None] = None


def serialize_question(q: Question) -> dict:
    return {
        "id": q.id,
        "question": q.text,
        "options": q.options,
        "correctAnswer": q.correct_option_index,
        "question_type": q.question_type,
        "concept_id": q.concept_id,
    }


@router.post("/questions", status_code=status.HTTP_201_CREATED)
def upload_question(body: QuestionBody, svc: QuestionAppService = Depends(get_question_app_service)):
    result = svc.upload_question(body.model_dump())
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    return {"success": True, "question": serialize_question(result.value)}


@router.get("/questions/{question_type}")
def list_questions(question_type: str, svc: QuestionAppService = Depends(get_question_app_service)):
    return [serialize_question(q) for q in svc.list_questions(question_type)]
