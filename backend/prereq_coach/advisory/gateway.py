"""
Advisory gateway: optional generative-text capability.

Every operation is fail-soft: any failure in the call or the reply is caught
here, logged, and turned into that operation's absent value (None or []).
Callers never need to check whether the capability exists before calling.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import openai

from prereq_coach.advisory import parsing, prompts
from prereq_coach.core.config import (
    AI_ENABLED,
    AI_TIMEOUT_SECONDS,
    OPENROUTER_API_KEY,
    OPENROUTER_API_URL,
    OPENROUTER_MODEL,
)
from prereq_coach.domain.question.models import PracticeQuestion
from prereq_coach.domain.recommendation.models import Guidance, QuestionRanking

logger = logging.getLogger(__name__)


class AdvisoryGateway(ABC):
    """Prompt building and parsing live here; subclasses only supply the transport."""

    @property
    @abstractmethod
    def available(self) -> bool:
        ...

    @abstractmethod
    def _complete(self, prompt: str, system: str, max_tokens: int) -> Optional[str]:
        """Send one prompt and return the raw reply text."""
        ...

    def _ask(self, purpose: str, prompt: str, system: str, max_tokens: int) -> Optional[str]:
        if not self.available:
            return None
        try:
            reply = self._complete(prompt, system, max_tokens)
        except Exception as e:
            logger.warning("Advisory %s request failed: %s", purpose, e)
            return None
        reply = (reply or "").strip()
        if not reply:
            logger.warning("Advisory %s request returned an empty reply", purpose)
            return None
        return reply

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def generate_insight(
        self,
        failed_question_text: str,
        failed_concept_name: str,
        prerequisite_names: Sequence[str],
    ) -> Optional[str]:
        return self._ask(
            "insight",
            prompts.insight_prompt(failed_question_text, failed_concept_name, prerequisite_names),
            prompts.SYSTEM_TUTOR,
            max_tokens=400,
        )

    def generate_guidance(self, failed_concept_name: str, prerequisite_names: Sequence[str]) -> Optional[Guidance]:
        reply = self._ask(
            "guidance",
            prompts.guidance_prompt(failed_concept_name, prerequisite_names),
            prompts.SYSTEM_JSON,
            max_tokens=300,
        )
        return parsing.parse_guidance(reply) if reply else None

    def generate_practice_questions(self, concept_names: Sequence[str], count: int) -> List[PracticeQuestion]:
        if not concept_names or count <= 0:
            return []
        reply = self._ask(
            "question generation",
            prompts.generation_prompt(concept_names, count),
            prompts.SYSTEM_JSON,
            max_tokens=1500,
        )
        return parsing.parse_generated_questions(reply, concept_names, count) if reply else []

    def rank_questions(
        self,
        candidates: Sequence[PracticeQuestion],
        failed_concept_name: str = "",
    ) -> Optional[List[QuestionRanking]]:
        if not candidates:
            return None
        reply = self._ask(
            "ranking",
            prompts.ranking_prompt(failed_concept_name, candidates),
            prompts.SYSTEM_JSON,
            max_tokens=800,
        )
        return parsing.parse_rankings(reply, [q.id for q in candidates]) if reply else None


class DisabledAdvisoryGateway(AdvisoryGateway):
    """The capability is switched off or unconfigured: every call is absent."""

    @property
    def available(self) -> bool:
        return False

    def _complete(self, prompt: str, system: str, max_tokens: int) -> Optional[str]:
        return None


class OpenRouterAdvisoryGateway(AdvisoryGateway):
    """Chat completions through any OpenAI-compatible endpoint (OpenRouter by default)."""

    def __init__(
        self,
        api_key: str = OPENROUTER_API_KEY,
        base_url: str = OPENROUTER_API_URL,
        model: str = OPENROUTER_MODEL,
        timeout: float = AI_TIMEOUT_SECONDS,
        client=None,
    ):
        self.model = model
        if client is None:
            client = openai.OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
        self._client = client

    @property
    def available(self) -> bool:
        return True

    def _complete(self, prompt: str, system: str, max_tokens: int) -> Optional[str]:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=0.4,
            max_tokens=max_tokens,
            extra_headers={"X-Title": "Prereq Coach"},
        )
        if not response.choices:
            return None
        return response.choices[0].message.content


def build_advisory_gateway(enabled: bool = AI_ENABLED, api_key: str = OPENROUTER_API_KEY) -> AdvisoryGateway:
    """Pick the gateway for the current configuration. Never raises."""
    if not enabled:
        logger.info("Advisory gateway disabled (AI_ENABLED is off)")
        return DisabledAdvisoryGateway()
    if not api_key:
        logger.warning("AI_ENABLED is on but OPENROUTER_API_KEY is missing; advisory gateway disabled")
        return DisabledAdvisoryGateway()
    try:
        gateway = OpenRouterAdvisoryGateway(api_key=api_key)
    except Exception as e:
        logger.error("Failed to initialise advisory client: %s", e)
        return DisabledAdvisoryGateway()
    logger.info("Advisory gateway ready (model %s)", gateway.model)
    return gateway
