"""Upload rules for quiz questions."""
from __future__ import annotations
from typing import List, Optional

from prereq_coach.domain.common.result import Result
from prereq_coach.domain.concept.rules import coerce_id
from prereq_coach.domain.question.models import Question

MAX_OPTIONS = 4


def collect_options(data: dict) -> List[Optional[str]]:
    """
    Option slots in upload order, from an 'options' list or the flat
    option1..option4 fields. Blank slots are None and trailing blanks are cut,
    so slot i is still option number i + 1.
    """
    raw = data.get("options")
    if raw is None:
        raw = [data.get(f"option{i}") for i in range(1, MAX_OPTIONS + 1)]
    slots = [(str(o).strip() if o is not None else "") or None for o in raw]
    while slots and slots[-1] is None:
        slots.pop()
    return slots


def validate_question_content(data: dict) -> Result[Question]:
    """
    Checks everything that does not need the database: text, options, the
    correct option index and the question type. The concept reference is
    checked separately by the application service.
    """
    text = (data.get("question") or data.get("text") or "").strip()
    if not text:
        return Result.fail("Question text is required and cannot be empty.")

    options = collect_options(data)
    if not options:
        return Result.fail("At least one answer option is required.")
    if len(options) > MAX_OPTIONS:
        return Result.fail(f"A question can have at most {MAX_OPTIONS} options.")
    if None in options:
        gap = options.index(None) + 1
        return Result.fail(f"Option {gap} is empty but a later option is filled in.")

    correct = coerce_id(data.get("correctAnswer", data.get("correct_option_index")))
    if correct is None or not 1 <= correct <= len(options):
        return Result.fail(
            f"Correct answer must be an option number between 1 and {len(options)}."
        )

    question_type = (data.get("question_type") or data.get("questionType") or "").strip()
    if not question_type:
        return Result.fail("Question type is required.")

    raw_concept = data.get("concept_id", data.get("conceptId"))
    concept_id = coerce_id(raw_concept)
    if concept_id is None and not is_blank_reference(raw_concept):
        return Result.fail(f"Concept id '{raw_concept}' is not a valid id.")

    return Result.ok(
        Question(
            id=0,
            text=text,
            options=options,
            correct_option_index=correct,
            question_type=question_type,
            concept_id=concept_id,
        )
    )


def is_blank_reference(raw) -> bool:
    return raw is None or str(raw).strip().lower() in {"", "null", "none", "undefined"}
