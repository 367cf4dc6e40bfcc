"""Quiz evaluation, submission and recommendation endpoints."""
from __future__ import annotations
from typing import Any, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from prereq_coach.application.recommendation_engine import RecommendationEngine
from prereq_coach.application.submission_app_service import SubmissionAppService
from prereq_coach.container import get_recommendation_engine, get_submission_app_service
from prereq_coach.domain.concept.rules import MAX_ID

router = APIRouter(tags=["quiz"])


class AnswersBody(BaseModel):
    questionType: str
    answers: List[Any] = []


class SubmissionBody(AnswersBody):
    studentIdentity: Optional[str] = None


class RecommendationBody(BaseModel):
    failedQuestionIds: List[Union[int, str]]


@router.post("/evaluate")
def evaluate(body: AnswersBody, svc: SubmissionAppService = Depends(get_submission_app_service)):
    evaluation = svc.evaluate(body.questionType, body.answers)
    return {
        "success": True,
        "evaluationResults": [r.to_dict() for r in evaluation.results],
        "failedQuestionIds": evaluation.failed_question_ids,
        "score": evaluation.score,
        "totalQuestions": evaluation.total,
        "percentage": evaluation.percentage,
    }


@router.post("/recommendations")
def recommend(body: RecommendationBody, svc: SubmissionAppService = Depends(get_submission_app_service)):
    return {"success": True, **svc.recommend(body.failedQuestionIds).to_dict()}


@router.get("/recommend-prerequisites/{question_id}")
def recommend_prerequisites(
    question_id: int = Path(..., ge=1, le=MAX_ID),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    questions = engine.prerequisite_questions(question_id)
    if questions is None:
        raise HTTPException(status_code=404, detail="Question not found or has no associated concept")
    response = {"success": True, "recommendedQuestions": [q.to_dict() for q in questions]}
    if not questions:
        response["message"] = "No prerequisite questions found for this question."
    return response


@router.post("/submitAnswers")
def submit_answers(body: SubmissionBody, svc: SubmissionAppService = Depends(get_submission_app_service)):
    return svc.submit(body.studentIdentity, body.questionType, body.answers).to_dict()
