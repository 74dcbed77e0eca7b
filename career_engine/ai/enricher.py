"""
Pathway Enricher

Optional post-hoc rewording of rule-based pathway steps through the OpenAI
chat API. The model's JSON is validated against a schema; anything that
fails (API error, bad JSON, wrong shape) falls back to the rule-based plan,
which is always returned unchanged in that case.
"""

import hashlib
import json
import logging
from typing import Any, Hashable, List, Optional

import openai
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..cache import TTLCache
from ..config import Settings, DEFAULT_OPENAI_MODEL
from ..logic.contracts import Career, StudentProfile, PathwayPlan
from .prompt_builder import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)

MAX_STEP_LENGTH = 300


class EnrichedSteps(BaseModel):
    """Schema the model's JSON must satisfy."""
    steps: List[str] = Field(min_length=1)

    @field_validator("steps")
    @classmethod
    def _non_empty_steps(cls, steps: List[str]) -> List[str]:
        cleaned = [step.strip() for step in steps]
        if any(not step for step in cleaned):
            raise ValueError("steps must not be empty")
        if any(len(step) > MAX_STEP_LENGTH for step in cleaned):
            raise ValueError(f"steps must be at most {MAX_STEP_LENGTH} characters")
        return cleaned


class PathwayEnricher:
    def __init__(
        self,
        client: Optional[Any] = None,
        model: str = DEFAULT_OPENAI_MODEL,
        cache: Optional[TTLCache] = None,
        max_tokens: int = 700,
        temperature: float = 0.3,
    ):
        """
        Args:
            client: OpenAI client (or anything with ``chat.completions.create``).
                Without a client every plan is returned unchanged.
            model: Chat model name
            cache: Injected cache for enriched plans, owned by the caller
        """
        self.client = client
        self.model = model
        self.cache = cache
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings, cache: Optional[TTLCache] = None) -> "PathwayEnricher":
        client = None
        if settings.enrichment_active:
            client = openai.OpenAI(api_key=settings.openai_api_key)
        else:
            logger.info("Pathway enrichment disabled; using rule-based pathways")
        return cls(client=client, model=settings.openai_model, cache=cache)

    @staticmethod
    def cache_key(career: Career, user_prompt: str) -> Hashable:
        # Everything the model sees about the student is in the prompt
        return (career.id, hashlib.sha256(user_prompt.encode("utf-8")).hexdigest())

    def enrich(self, career: Career, profile: StudentProfile, plan: PathwayPlan) -> PathwayPlan:
        """
        Return a copy of ``plan`` with reworded steps, or ``plan`` itself when
        enrichment is unavailable or fails.
        """
        if self.client is None or not plan.steps:
            return plan

        user_prompt = build_user_prompt(career, profile, plan)
        key = self.cache_key(career, user_prompt)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": build_system_prompt()},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )
            if not response.choices:
                logger.warning(f"⚠️ Enrichment response for {career.id} had no choices; using rule-based pathway")
                return plan
            content = response.choices[0].message.content
            if not content:
                logger.warning(f"⚠️ Empty enrichment response for {career.id}; using rule-based pathway")
                return plan
            parsed = EnrichedSteps.model_validate(json.loads(content))
        except openai.OpenAIError as e:
            logger.warning(f"⚠️ Enrichment request failed for {career.id}: {e}")
            return plan
        except json.JSONDecodeError as e:
            logger.warning(f"⚠️ Enrichment returned invalid JSON for {career.id}: {e}")
            return plan
        except ValidationError as e:
            logger.warning(f"⚠️ Enrichment output rejected for {career.id}: {e.error_count()} schema error(s)")
            return plan

        if len(parsed.steps) != len(plan.steps):
            logger.warning(
                f"⚠️ Enrichment for {career.id} returned {len(parsed.steps)} steps, "
                f"expected {len(plan.steps)}; using rule-based pathway"
            )
            return plan

        enriched = plan.model_copy(update={"steps": parsed.steps, "enriched": True})
        if self.cache is not None:
            self.cache.set(key, enriched)
        return enriched
