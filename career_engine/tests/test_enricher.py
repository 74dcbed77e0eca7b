"""
Test the optional pathway enricher with a fake OpenAI client.
"""

import json
from types import SimpleNamespace

import openai

from career_engine.ai import PathwayEnricher
from career_engine.ai.prompt_builder import build_system_prompt, build_user_prompt
from career_engine.cache import TTLCache
from career_engine.config import Settings
from career_engine.logic import CareerMatchingEngine, StudentProfile, build_pathway


class FakeCompletions:
    def __init__(self, content=None, error=None, choices=None):
        self.content = content
        self.error = error
        self.choices = choices
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.choices is not None:
            return SimpleNamespace(choices=self.choices)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _rewritten(plan):
    return json.dumps({"steps": [f"Rewritten: {step}" for step in plan.steps]})


def test_successful_enrichment(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    completions = FakeCompletions(content=_rewritten(plan))
    enricher = PathwayEnricher(client=_client(completions))

    enriched = enricher.enrich(nurse, healthcare_profile, plan)

    assert enriched.enriched is True
    assert enriched.steps[0].startswith("Rewritten: ")
    assert len(enriched.steps) == len(plan.steps)
    assert enriched.timeline == plan.timeline
    assert completions.calls[0]["response_format"] == {"type": "json_object"}
    assert plan.enriched is False


def test_invalid_json_falls_back(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    enricher = PathwayEnricher(client=_client(FakeCompletions(content="Sure! Here are the steps")))

    assert enricher.enrich(nurse, healthcare_profile, plan) is plan


def test_schema_violation_falls_back(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    bad = json.dumps({"steps": ["ok"] * (len(plan.steps) - 1) + [""]})
    enricher = PathwayEnricher(client=_client(FakeCompletions(content=bad)))

    assert enricher.enrich(nurse, healthcare_profile, plan) is plan


def test_step_count_mismatch_falls_back(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    enricher = PathwayEnricher(client=_client(FakeCompletions(content=json.dumps({"steps": ["Only one"]}))))

    assert enricher.enrich(nurse, healthcare_profile, plan) is plan


def test_api_error_falls_back(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    enricher = PathwayEnricher(client=_client(FakeCompletions(error=openai.OpenAIError("rate limited"))))

    assert enricher.enrich(nurse, healthcare_profile, plan) is plan


def test_empty_content_falls_back(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    enricher = PathwayEnricher(client=_client(FakeCompletions(content="")))

    assert enricher.enrich(nurse, healthcare_profile, plan) is plan


def test_no_choices_falls_back(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    enricher = PathwayEnricher(client=_client(FakeCompletions(choices=[])))

    assert enricher.enrich(nurse, healthcare_profile, plan) is plan


def test_enriched_plans_are_cached(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)
    completions = FakeCompletions(content=_rewritten(plan))
    cache = TTLCache()
    enricher = PathwayEnricher(client=_client(completions), cache=cache)

    first = enricher.enrich(nurse, healthcare_profile, plan)
    second = enricher.enrich(nurse, healthcare_profile, plan)

    assert first == second
    assert len(completions.calls) == 1
    assert cache.hits == 1


def test_cached_plan_not_shared_between_students(nurse, healthcare_profile):
    """A rewrite for one student is never served to a student with other traits."""
    artist = healthcare_profile.model_copy(update={
        "personal_traits": ("creative", "leader"),
        "subjects_strengths": ("art",),
    })
    plan = build_pathway(nurse, healthcare_profile)
    completions = FakeCompletions(content=_rewritten(plan))
    enricher = PathwayEnricher(client=_client(completions), cache=TTLCache())

    enricher.enrich(nurse, healthcare_profile, plan)
    enricher.enrich(nurse, artist, plan)

    assert len(completions.calls) == 2
    assert enricher.cache.hits == 0


def test_without_client_plan_unchanged(nurse, healthcare_profile):
    plan = build_pathway(nurse, healthcare_profile)

    assert PathwayEnricher().enrich(nurse, healthcare_profile, plan) is plan


def test_disabled_settings_build_no_client():
    enricher = PathwayEnricher.from_settings(Settings(enrichment_enabled=True, openai_api_key=None))

    assert enricher.client is None


def test_prompt_leaves_out_location_and_free_text(nurse):
    profile = StudentProfile(
        zip_code="90210",
        free_text_interests="I volunteer at St. Mary's hospital",
        personal_traits=["compassionate"],
    )
    plan = build_pathway(nurse, profile)

    prompt = build_user_prompt(nurse, profile, plan)

    assert "90210" not in prompt
    assert "St. Mary" not in prompt
    assert "Registered Nurse" in prompt
    assert "SAFETY RULES" in build_system_prompt()


def test_engine_applies_enricher(small_taxonomy, healthcare_responses):
    class StampingEnricher:
        def enrich(self, career, profile, plan):
            return plan.model_copy(update={"enriched": True})

    engine = CareerMatchingEngine(small_taxonomy, enricher=StampingEnricher())

    payload = engine.recommend(healthcare_responses)

    assert all(top.pathway.enriched for top in payload.top_job_matches)
