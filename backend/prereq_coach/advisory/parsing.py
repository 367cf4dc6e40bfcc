"""Turn raw model text into validated values. Every parser returns an absent value on bad input."""
from __future__ import annotations
import json
import logging
import re
import uuid
from typing import Any, Iterable, List, Optional, Sequence

from prereq_coach.domain.question.models import AI_GENERATED_TYPE, SOURCE_AI, PracticeQuestion
from prereq_coach.domain.recommendation.models import Guidance, QuestionRanking

logger = logging.getLogger(__name__)

GUIDANCE_WORD_LIMIT = 28
OPTION_COUNT = 4
_LETTERS = {"A": 1, "B": 2, "C": 3, "D": 4}
_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Models like to wrap JSON in ```json fences; keep only the inside."""
    match = _FENCE.search(text)
    return match.group(1).strip() if match else text.strip()


def extract_json(text: Optional[str]) -> Any:
    """Best-effort JSON extraction. Returns None when nothing parses."""
    if not text:
        return None
    body = strip_code_fences(text)
    try:
        return json.loads(body)
    except ValueError:
        pass
    # Fall back to the outermost object or array embedded in prose
    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = body.find(opener), body.rfind(closer)
        if start != -1 and end > start:
            try:
                return json.loads(body[start:end + 1])
            except ValueError:
                continue
    return None


def clip_words(text: str, limit: int = GUIDANCE_WORD_LIMIT) -> str:
    words = text.split()
    if len(words) <= limit:
        return " ".join(words)
    return " ".join(words[:limit]).rstrip(",;:") + "…"


def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_guidance(text: Optional[str]) -> Optional[Guidance]:
    data = extract_json(text)
    if isinstance(data, dict) and isinstance(data.get("guidance"), dict):
        data = data["guidance"]
    if not isinstance(data, dict):
        logger.warning("Guidance response was not a JSON object; ignoring it")
        return None

    fields = {
        "title": _as_text(data.get("title")),
        "analysis": _as_text(data.get("analysis")),
        "solution": _as_text(data.get("solution")),
        "how_helps": _as_text(data.get("howHelps", data.get("how_helps"))),
    }
    missing = [name for name, value in fields.items() if not value]
    if missing:
        logger.warning("Guidance response missing fields %s; ignoring it", missing)
        return None
    return Guidance(**{name: clip_words(value) for name, value in fields.items()})


def _correct_index(raw: Any, options: Sequence[str]) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if 1 <= raw <= OPTION_COUNT else None
    if isinstance(raw, str):
        value = raw.strip()
        if value.upper() in _LETTERS:
            return _LETTERS[value.upper()]
        if value.isdigit():
            number = int(value)
            return number if 1 <= number <= OPTION_COUNT else None
        # Some models answer with the option text itself
        matches = [i for i, o in enumerate(options, start=1) if o.casefold() == value.casefold()]
        if len(matches) == 1:
            return matches[0]
    return None


def _items(data: Any, key: str) -> List[Any]:
    if isinstance(data, dict):
        data = data.get(key)
    return data if isinstance(data, list) else []


def parse_generated_questions(
    text: Optional[str],
    concept_names: Sequence[str],
    count: int,
) -> List[PracticeQuestion]:
    """
    Keep only well-formed items: a question, exactly four non-empty options and
    one correct option number in 1..4. Invalid items are dropped, not replaced.
    """
    items = _items(extract_json(text), "questions")
    fallback_concept = concept_names[0] if concept_names else None
    questions = []
    dropped = 0

    for item in items:
        if len(questions) >= count:
            break
        if not isinstance(item, dict):
            dropped += 1
            continue
        question_text = _as_text(item.get("question", item.get("text")))
        raw_options = item.get("options")
        if raw_options is None:
            raw_options = [item.get(f"option{i}") for i in range(1, OPTION_COUNT + 1)]
        options = [_as_text(o) for o in raw_options] if isinstance(raw_options, list) else []
        if not question_text or len(options) != OPTION_COUNT or not all(options):
            dropped += 1
            continue
        correct = _correct_index(
            item.get("correctAnswer", item.get("correct_option_index", item.get("answer"))),
            options,
        )
        if correct is None:
            dropped += 1
            continue

        questions.append(
            PracticeQuestion(
                id=f"ai-{uuid.uuid4().hex[:12]}",
                text=question_text,
                options=options,
                correct_option_index=correct,
                question_type=AI_GENERATED_TYPE,
                concept_id=None,
                concept_name=_as_text(item.get("conceptName", item.get("concept"))) or fallback_concept,
                source=SOURCE_AI,
            )
        )

    if dropped:
        logger.info("Dropped %d malformed generated question(s)", dropped)
    return questions


def parse_rankings(text: Optional[str], valid_ids: Iterable[Any]) -> Optional[List[QuestionRanking]]:
    """Scores are clamped to 1..5; entries for unknown ids are ignored. No usable entry -> None."""
    known = {str(i) for i in valid_ids}
    rankings = []
    for item in _items(extract_json(text), "rankings"):
        if not isinstance(item, dict) or str(item.get("id")) not in known:
            continue
        try:
            score = int(round(float(item.get("score"))))
        except (TypeError, ValueError, OverflowError):
            continue
        rankings.append(
            QuestionRanking(
                id=str(item["id"]),
                score=min(5, max(1, score)),
                reason=_as_text(item.get("reason")),
            )
        )
    if not rankings:
        logger.warning("Ranking response had no usable entries; keeping original order")
        return None
    return rankings
