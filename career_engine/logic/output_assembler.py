"""
Output Assembler

Transforms ranked matches into the final ResultPayload contract.
Builds pathways for the top-N matches and turns normalization warnings into
"suggestions for better results". Pure formatting, no new scoring logic.
"""

import logging
from typing import Dict, List, Optional, Sequence

from pydantic.alias_generators import to_camel

from .contracts import (
    StudentProfile,
    MatchResult,
    FieldWarning,
    ClusterScore,
    TopJobMatch,
    MatchSummary,
    ValidationReport,
    StudentProfileSummary,
    ResultPayload,
)
from .constants import (
    WarningCode,
    DEFAULT_TOP_N,
    PERFORMANCE_SCORE_MAP,
)
from .pathway import build_pathway
from .tags import profile_interest_tags

logger = logging.getLogger(__name__)

# Question id / dimension -> suggestion shown to the student
SUGGESTIONS: Dict[str, str] = {
    "q1_grade_zip": "Add your grade and 5-digit ZIP code so timelines and local options fit you",
    "q2_work_environment": "Tell us where you would like to work (indoors, outdoors, remote, traveling)",
    "q3_hands_on_preference": "Let us know how much you like hands-on work",
    "q4_problem_solving_style": "Pick the problem-solving style that sounds most like you",
    "q5_education_willingness": "Tell us how much education or training you are willing to pursue",
    "q6_academic_interests": "Choose the school subjects you enjoy most",
    "q7_academic_performance": "Rate how you are doing in your classes to improve academic matching",
    "q10_traits": "Select a few personality traits that describe you",
    "q11_income_importance": "Tell us how important income is to you",
    "q12_stability_importance": "Tell us how important job security is to you",
    "q13_helping_importance": "Tell us how important helping others is to you",
    "q14_constraints": "List any constraints (like staying close to home) so we can flag conflicts",
    "interest_fit": "Describe your interests or hobbies so we can find careers that match them",
    "academic_fit": "Add your favorite subjects or class ratings for a better academic match",
    "environment_fit": "Share your preferred work environment for better matches",
    "values_fit": "Tell us how much income, job security and helping others matter to you",
}
GENERIC_SUGGESTION = "Review your answer to {field} for more accurate results"

INCOMPLETE_CODES = (WarningCode.MISSING.value, WarningCode.SKIPPED.value)
MAX_SUMMARY_ITEMS = 5


def format_warning(warning: FieldWarning) -> str:
    return f"{warning.field}: {warning.message}"


def build_suggestions(warnings: Sequence[FieldWarning]) -> List[str]:
    """One suggestion per affected field, in first-seen order."""
    suggestions: List[str] = []
    for warning in warnings:
        suggestion = SUGGESTIONS.get(warning.field, GENERIC_SUGGESTION.format(field=warning.field))
        if suggestion not in suggestions:
            suggestions.append(suggestion)
    return suggestions


def _key_strengths(profile: StudentProfile) -> List[str]:
    rated = sorted(
        (
            (subject, PERFORMANCE_SCORE_MAP[rating])
            for subject, rating in profile.academic_performance
            if rating in ("good", "excellent")
        ),
        key=lambda item: (-item[1], item[0]),
    )
    strengths = [subject for subject, _ in rated]
    strengths.extend(subject for subject in profile.subjects_strengths if subject not in strengths)
    return [subject.replace("_", " ") for subject in strengths[:MAX_SUMMARY_ITEMS]]


def summarize_profile(profile: StudentProfile) -> StudentProfileSummary:
    """Echo of the normalized key fields for display."""
    return StudentProfileSummary(
        grade=profile.grade,
        zip_code=profile.zip_code,
        education_willingness=profile.education_willingness,
        key_strengths=_key_strengths(profile),
        primary_interests=[
            tag.replace("_", " ") for tag in sorted(profile_interest_tags(profile))[:MAX_SUMMARY_ITEMS]
        ],
        work_environment_preferences=list(profile.work_environment_preferences),
        constraints=list(profile.constraints),
    )


def assemble_top_match(match: MatchResult, profile: StudentProfile) -> TopJobMatch:
    return TopJobMatch(
        career=match.career,
        match_score=match.score,
        fit_category=match.fit_category,
        reasoning=list(match.reasoning),
        feasibility_notes=list(match.feasibility_notes),
        pathway=build_pathway(match.career, profile),
    )


def assemble(
    matches: Sequence[MatchResult],
    profile: StudentProfile,
    warnings: Sequence[FieldWarning],
    top_n: int = DEFAULT_TOP_N,
    clusters: Optional[Sequence[ClusterScore]] = None,
) -> ResultPayload:
    """
    Assemble the final ResultPayload.

    Args:
        matches: Ranked matches (best first)
        profile: Normalized student profile
        warnings: Normalization warnings
        top_n: How many matches get a full pathway
        clusters: Cluster scores, if computed

    Returns:
        ResultPayload without metadata (the engine fills it)
    """
    top_matches = [assemble_top_match(match, profile) for match in matches[:max(0, top_n)]]
    all_matches = [
        MatchSummary(
            rank=match.rank or position,
            career_id=match.career.id,
            title=match.career.title,
            match_score=match.score,
            fit_category=match.fit_category,
        )
        for position, match in enumerate(matches, start=1)
    ]

    if len(matches) < top_n:
        logger.warning(f"⚠️ Only {len(matches)} match(es) available for top {top_n}")

    validation = ValidationReport(
        warnings=[format_warning(warning) for warning in warnings],
        suggestions=build_suggestions(warnings),
        defaulted_fields=[to_camel(field_name) for field_name in profile.defaulted_fields],
        is_complete=not any(warning.code in INCOMPLETE_CODES for warning in warnings),
    )

    return ResultPayload(
        top_job_matches=top_matches,
        all_matches=all_matches,
        top_clusters=list(clusters or []),
        validation=validation,
        student_profile_summary=summarize_profile(profile),
    )
