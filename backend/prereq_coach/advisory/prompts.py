"""Prompt templates for the advisory backend."""
from __future__ import annotations
import json
from typing import Sequence

from prereq_coach.domain.question.models import PracticeQuestion

SYSTEM_TUTOR = (
    "You are a patient computer science tutor. Students reach you after getting a quiz "
    "question wrong; you explain which foundations they are missing and how to build them."
)
SYSTEM_JSON = "You are a specialized educational content generator. You output only structured JSON."


def _names(prerequisite_names: Sequence[str]) -> str:
    return ", ".join(prerequisite_names) if prerequisite_names else "None identified"


def insight_prompt(failed_question: str, failed_concept: str, prerequisite_names: Sequence[str]) -> str:
    return f"""
The student answered this question incorrectly: "{failed_question}"
It tests the concept: "{failed_concept}"
Prerequisite concepts from the knowledge graph: {_names(prerequisite_names)}

In at most 150 words, write a personal note to the student that:
1. Explains the likely reason this concept was hard for them.
2. Connects each prerequisite to the concept they missed.
3. Offers one concrete study tip or analogy.
4. Ends with a short line of encouragement.

Use plain, friendly language. No headings, no markdown lists.
"""


def guidance_prompt(failed_concept: str, prerequisite_names: Sequence[str]) -> str:
    return f"""
A student is struggling with the concept "{failed_concept}".
Prerequisites they should review: {_names(prerequisite_names)}

Return ONLY a JSON object with exactly these keys, each value at most 28 words:
{{
    "title": "short headline for the study plan",
    "analysis": "what gap most likely caused the mistake",
    "solution": "what to study first and how",
    "howHelps": "how closing the gap makes the failed concept easier"
}}
"""


def generation_prompt(concept_names: Sequence[str], count: int) -> str:
    return f"""
Write {count} multiple-choice practice questions that cover these prerequisite concepts,
spread as evenly as possible: {_names(concept_names)}

Rules:
1. Every question has exactly four non-empty options.
2. Exactly one option is correct; give its number (1-4) as "correctAnswer".
3. Name the concept each question practises in "concept".
4. Do not repeat a question.

Return ONLY a JSON object of this shape:
{{
    "questions": [
        {{
            "question": "...",
            "options": ["...", "...", "...", "..."],
            "correctAnswer": 1,
            "concept": "..."
        }}
    ]
}}
"""


def ranking_prompt(failed_concept: str, candidates: Sequence[PracticeQuestion]) -> str:
    items = [
        {"id": str(q.id), "conceptName": q.concept_name or "", "text": q.text}
        for q in candidates
    ]
    return f"""
A student failed a question on "{failed_concept}". Rate how useful each practice question
below is for closing that gap, from 1 (barely relevant) to 5 (exactly what they need).
Give a reason of at most 15 words.

Candidates:
{json.dumps(items, indent=2)}

Return ONLY a JSON object of this shape, one entry per candidate id:
{{
    "rankings": [{{"id": "...", "score": 5, "reason": "..."}}]
}}
"""
