"""Pure list operations over practice questions: text dedup and score merging."""
from __future__ import annotations
import re
from typing import Iterable, List, Optional, Sequence

from prereq_coach.domain.question.models import PracticeQuestion
from prereq_coach.domain.recommendation.models import QuestionRanking

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    return _WHITESPACE.sub(" ", (text or "").strip()).casefold()


def dedupe_by_text(questions: Iterable[PracticeQuestion]) -> List[PracticeQuestion]:
    """
    Keep the first question for each normalized text.

    Ids are not used: generated questions for different failed concepts carry
    distinct synthetic ids but can repeat the same text.
    """
    seen = set()
    unique = []
    for question in questions:
        key = normalize_text(question.text)
        if key in seen:
            continue
        seen.add(key)
        unique.append(question)
    return unique


def apply_rankings(
    questions: Sequence[PracticeQuestion],
    rankings: Optional[Sequence[QuestionRanking]],
    limit: int,
) -> List[PracticeQuestion]:
    """
    Merge scores onto the candidates and order them best first.

    Unscored items keep their relative order after the scored ones. The list is
    only truncated to `limit` when at least one score landed on a candidate.
    """
    if not rankings:
        return list(questions)

    by_id = {}
    for ranking in rankings:
        by_id.setdefault(str(ranking.id), ranking)

    scored_any = False
    for question in questions:
        ranking = by_id.get(str(question.id))
        if ranking is None:
            continue
        question.ai_score = ranking.score
        question.ai_reason = ranking.reason or None
        scored_any = True

    if not scored_any:
        return list(questions)

    # sorted() is stable, so ties and unscored items keep input order
    ordered = sorted(
        questions,
        key=lambda q: (q.ai_score is None, -(q.ai_score or 0)),
    )
    return ordered[:limit]
