"""Shared fixtures: a fresh SQLite file per test and scriptable advisory gateways."""
from typing import Callable, List, Optional

import pytest

from prereq_coach.advisory.gateway import AdvisoryGateway
from prereq_coach.application.concept_app_service import ConceptAppService
from prereq_coach.application.question_app_service import QuestionAppService
from prereq_coach.persistence.db import init_db
from prereq_coach.persistence.repositories.sqlite.sqlite_concept_repository import SqliteConceptRepository
from prereq_coach.persistence.repositories.sqlite.sqlite_question_repository import SqliteQuestionRepository
from prereq_coach.persistence.repositories.sqlite.sqlite_submission_repository import SqliteSubmissionRepository


class ScriptedGateway(AdvisoryGateway):
    """
    Available gateway whose transport is a function of the prompt.
    `reply(prompt, system)` may return text or raise to simulate a failed call.
    """

    def __init__(self, reply: Callable[[str, str], Optional[str]]):
        self._reply = reply
        self.prompts: List[str] = []

    @property
    def available(self) -> bool:
        return True

    def _complete(self, prompt, system, max_tokens):
        self.prompts.append(prompt)
        return self._reply(prompt, system)


def route_by_prompt(insight=None, guidance=None, generation=None, ranking=None):
    """Build a reply function that answers each advisory purpose with its own canned text."""

    def reply(prompt, system):
        if "Rate how useful" in prompt:
            answer = ranking
        elif "practice questions that cover" in prompt:
            answer = generation
        elif "exactly these keys" in prompt:
            answer = guidance
        else:
            answer = insight
        if isinstance(answer, Exception):
            raise answer
        return answer

    return reply


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "test.db")
    init_db(path)
    return path


@pytest.fixture
def concept_repo(db_path):
    return SqliteConceptRepository(db_path)


@pytest.fixture
def question_repo(db_path):
    return SqliteQuestionRepository(db_path)


@pytest.fixture
def submission_repo(db_path):
    return SqliteSubmissionRepository(db_path)


@pytest.fixture
def concept_svc(concept_repo):
    return ConceptAppService(concept_repo)


@pytest.fixture
def question_svc(question_repo, concept_repo):
    return QuestionAppService(question_repo, concept_repo)


@pytest.fixture
def make_question(question_svc):
    """Upload a question and return its id."""

    def _make(text, concept_id=None, question_type="dsa", correct=1, options=None):
        return question_svc.upload_question(
            {
                "question": text,
                "options": options or ["a", "b", "c", "d"],
                "correctAnswer": correct,
                "question_type": question_type,
                "concept_id": concept_id,
            }
        ).unwrap().id

    return _make


@pytest.fixture
def graph(concept_svc, make_question):
    """
    Arrays (A) depends on Loops (B); Loops depends on Variables (C).
    Arrays also has a non-DEPENDS_ON edge to Sorting (D).
    """
    a = concept_svc.create_concept({"name": "Arrays", "description": "Indexed collections"}).unwrap()
    b = concept_svc.create_concept({"name": "Loops", "description": "Repetition"}).unwrap()
    c = concept_svc.create_concept({"name": "Variables"}).unwrap()
    d = concept_svc.create_concept({"name": "Sorting"}).unwrap()
    concept_svc.create_relationship(a.id, b.id).unwrap()
    concept_svc.create_relationship(b.id, c.id).unwrap()
    concept_svc.create_relationship(a.id, d.id, "RELATED_TO").unwrap()

    return {
        "concepts": {"arrays": a, "loops": b, "variables": c, "sorting": d},
        "questions": {
            "arrays": make_question("What index does the first array element have?", a.id, correct=1),
            "loops": make_question("How many times does a for loop over range(3) run?", b.id, correct=2),
            "loops_2": make_question("Which loop checks its condition first?", b.id, correct=3),
            "variables": make_question("Which line assigns 5 to x?", c.id, correct=4),
            "sorting": make_question("What is the worst case of bubble sort?", d.id, correct=1),
            "unlinked": make_question("Unlinked trivia question?", None, correct=1),
        },
    }
