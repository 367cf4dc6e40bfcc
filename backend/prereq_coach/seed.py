"""
Load a small programming-fundamentals concept graph with sample questions.

    python -m prereq_coach.seed --db backend/data/app.db
"""
from __future__ import annotations
import argparse
import logging
from typing import Dict, Optional

from prereq_coach.application.concept_app_service import ConceptAppService
from prereq_coach.application.question_app_service import QuestionAppService
from prereq_coach.core.logging import configure_logging
from prereq_coach.persistence.db import init_db
from prereq_coach.persistence.repositories.sqlite.sqlite_concept_repository import SqliteConceptRepository
from prereq_coach.persistence.repositories.sqlite.sqlite_question_repository import SqliteQuestionRepository

logger = logging.getLogger(__name__)

QUIZ_TYPE = "programming_basics"

CONCEPTS = [
    ("Variables", "Named storage for values"),
    ("Data Types", "Kinds of values such as integers, floats and strings"),
    ("Conditionals", "Branching with if / else"),
    ("Loops", "Repeating work with for and while"),
    ("Functions", "Reusable blocks of code with parameters and return values"),
    ("Recursion", "Functions that call themselves on smaller inputs"),
]

# (dependent, prerequisite)
DEPENDENCIES = [
    ("Data Types", "Variables"),
    ("Conditionals", "Data Types"),
    ("Loops", "Conditionals"),
    ("Loops", "Variables"),
    ("Functions", "Variables"),
    ("Recursion", "Functions"),
    ("Recursion", "Conditionals"),
]

QUESTIONS = [
    ("Variables", "Which statement stores 5 in a variable named x?", ["x = 5", "5 = x", "x == 5", "int 5"], 1),
    ("Data Types", "What is the type of the value 3.14?", ["int", "float", "str", "bool"], 2),
    ("Conditionals", "Which keyword starts an alternative branch after if?", ["then", "elif", "case", "when"], 2),
    ("Loops", "How many times does range(3) iterate?", ["2", "3", "4", "Forever"], 2),
    ("Functions", "Which keyword sends a value back from a function?", ["yield", "send", "return", "give"], 3),
    ("Recursion", "What stops a recursive function from calling itself forever?", ["A loop", "A base case", "A global", "An import"], 2),
]


def seed(db_path: Optional[str] = None) -> Dict[str, int]:
    """Insert the sample graph. Returns concept name -> id."""
    init_db(db_path)
    concept_repo = SqliteConceptRepository(db_path)
    concepts = ConceptAppService(concept_repo)
    questions = QuestionAppService(SqliteQuestionRepository(db_path), concept_repo)

    ids = {}
    for name, description in CONCEPTS:
        ids[name] = concepts.create_concept({"name": name, "description": description}).unwrap().id
    for dependent, prerequisite in DEPENDENCIES:
        concepts.create_relationship(ids[dependent], ids[prerequisite]).unwrap()
    for concept_name, text, options, correct in QUESTIONS:
        questions.upload_question(
            {
                "question": text,
                "options": options,
                "correctAnswer": correct,
                "question_type": QUIZ_TYPE,
                "concept_id": ids[concept_name],
            }
        ).unwrap()

    logger.info(
        "Seeded %d concepts, %d relationships, %d questions",
        len(CONCEPTS), len(DEPENDENCIES), len(QUESTIONS),
    )
    return ids


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Seed the sample concept graph")
    parser.add_argument("--db", default=None, help="SQLite file (defaults to DATABASE_PATH)")
    args = parser.parse_args(argv)
    configure_logging()
    seed(args.db)


if __name__ == "__main__":
    main()
