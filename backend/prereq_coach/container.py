"""Dependency injection container: wires implementations to interfaces."""
from __future__ import annotations
from functools import lru_cache

from prereq_coach.advisory.gateway import AdvisoryGateway, build_advisory_gateway
from prereq_coach.application.concept_app_service import ConceptAppService
from prereq_coach.application.practice_sources import build_practice_source
from prereq_coach.application.question_app_service import QuestionAppService
from prereq_coach.application.recommendation_engine import RecommendationEngine
from prereq_coach.application.submission_app_service import SubmissionAppService
from prereq_coach.persistence.repositories.sqlite.sqlite_concept_repository import SqliteConceptRepository
from prereq_coach.persistence.repositories.sqlite.sqlite_question_repository import SqliteQuestionRepository
from prereq_coach.persistence.repositories.sqlite.sqlite_submission_repository import SqliteSubmissionRepository


@lru_cache(maxsize=1)
def get_concept_repo() -> SqliteConceptRepository:
    return SqliteConceptRepository()


@lru_cache(maxsize=1)
def get_question_repo() -> SqliteQuestionRepository:
    return SqliteQuestionRepository()


@lru_cache(maxsize=1)
def get_submission_repo() -> SqliteSubmissionRepository:
    return SqliteSubmissionRepository()


@lru_cache(maxsize=1)
def get_advisory_gateway() -> AdvisoryGateway:
    return build_advisory_gateway()


@lru_cache(maxsize=1)
def get_concept_app_service() -> ConceptAppService:
    return ConceptAppService(repo=get_concept_repo())


@lru_cache(maxsize=1)
def get_question_app_service() -> QuestionAppService:
    return QuestionAppService(repo=get_question_repo(), concept_repo=get_concept_repo())


@lru_cache(maxsize=1)
def get_recommendation_engine() -> RecommendationEngine:
    gateway = get_advisory_gateway()
    return RecommendationEngine(
        concept_repo=get_concept_repo(),
        question_repo=get_question_repo(),
        gateway=gateway,
        source=build_practice_source(get_question_repo(), gateway),
    )


@lru_cache(maxsize=1)
def get_submission_app_service() -> SubmissionAppService:
    return SubmissionAppService(
        question_repo=get_question_repo(),
        submission_repo=get_submission_repo(),
        engine=get_recommendation_engine(),
    )


def reset() -> None:
    """Drop every cached singleton (tests swap config between runs)."""
    for provider in (
        get_concept_repo,
        get_question_repo,
        get_submission_repo,
        get_advisory_gateway,
        get_concept_app_service,
        get_question_app_service,
        get_recommendation_engine,
        get_submission_app_service,
    ):
        provider.cache_clear()
