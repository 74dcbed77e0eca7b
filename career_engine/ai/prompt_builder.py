from typing import Any, Dict
import json

from ..logic.contracts import Career, StudentProfile, PathwayPlan
from .safety_rules import SAFETY_RULES, SYSTEM_ROLE_DEFINITION, JSON_OUTPUT_FORMAT_INSTRUCTION


def build_system_prompt() -> str:
    """Constructs the static system prompt."""
    rules_str = "\n".join([f"- {rule}" for rule in SAFETY_RULES])

    return f"""{SYSTEM_ROLE_DEFINITION}

SAFETY RULES (NON-NEGOTIABLE):
{rules_str}

OUTPUT FORMAT:
{JSON_OUTPUT_FORMAT_INSTRUCTION}
"""


def build_user_prompt(career: Career, profile: StudentProfile, plan: PathwayPlan) -> str:
    """
    Constructs the user prompt from the career, the student and the rule-based plan.
    Only coarse profile fields are sent; ZIP code and free text stay local.
    """
    student_summary = _minimize_profile(profile)
    career_summary = {
        "title": career.title,
        "sector": career.sector.replace("_", " "),
        "required_education": career.required_education_level,
        "timeline": plan.timeline,
    }

    user_content = f"""
STUDENT:
{json.dumps(student_summary, indent=2)}

CAREER:
{json.dumps(career_summary, indent=2)}

RULE-BASED STEPS (in order):
{json.dumps(plan.steps, indent=2)}

SKILLS TO BUILD:
- Now: {", ".join(plan.skill_gaps.immediate) or "none"}
- Later: {", ".join(plan.skill_gaps.long_term) or "none"}

TASK:
Rewrite each step for this student. Adhere strictly to the safety rules.
"""
    return user_content


def _minimize_profile(profile: StudentProfile) -> Dict[str, Any]:
    """Helper to reduce the profile to what the writer needs."""
    return {
        "grade": profile.grade,
        "education_willingness": profile.education_willingness,
        "traits": list(profile.personal_traits),
        "favorite_subjects": list(profile.subjects_strengths),
    }
