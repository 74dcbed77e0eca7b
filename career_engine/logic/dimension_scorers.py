"""
Dimension Scorers

Individual scoring functions for each evaluation dimension.
Each scorer produces a score between 0 and 100 plus any feasibility notes
raised by rule violations. All logic is deterministic - no AI/ML components.
"""

from typing import Iterable, List, Optional, Tuple

from .contracts import StudentProfile, Career, DimensionScore
from .constants import (
    DIMENSION_WEIGHTS,
    NEUTRAL_SCORE,
    NO_OVERLAP_SCORE,
    MAX_SCORE,
    PERFORMANCE_SCORE_MAP,
    IMPORTANCE_SCORE_MAP,
    ACADEMIC_MIN_BAR,
    ACADEMIC_BAR_SCORE,
    EDUCATION_TIER_ORDER,
    EDUCATION_TIER_LABELS,
    EDUCATION_TIER_TOLERANCE,
    EDUCATION_TIER_PENALTY,
    EARN_SOON_THRESHOLD_YEARS,
    TIME_TO_ENTRY_PENALTY_PER_YEAR,
    CONSTRAINT_TAG_CONFLICTS,
    LIMITED_BUDGET_MAX_TIER,
    LIMITED_BUDGET_PENALTY_PER_TIER,
    SECTOR_SUBJECTS,
)
from .tags import profile_interest_tags

# Student answer field -> (value profile attribute, label)
VALUE_FIELDS = (
    ("income_importance", "income", "income"),
    ("job_security_importance", "stability", "job security"),
    ("helping_others_importance", "helping", "helping others"),
)
VALUE_ALIGNED_TOLERANCE = 0.25
MAX_EXPLAINED_TAGS = 3


def _humanize(tags: Iterable[str]) -> str:
    return ", ".join(tag.replace("_", " ") for tag in tags)


def _dimension(dimension: str, score: float, explanation: str, skipped: bool = False) -> DimensionScore:
    score = max(0.0, min(float(MAX_SCORE), score))
    weight = DIMENSION_WEIGHTS[dimension]
    return DimensionScore(
        dimension=dimension,
        score=round(score, 2),
        weight=weight,
        weighted_score=round(score * weight, 4),
        explanation=explanation,
        skipped=skipped,
    )


def tag_overlap_score(profile_tags: Iterable[str], career_tags: Iterable[str]) -> Tuple[float, frozenset]:
    """
    Jaccard-style overlap mapped onto 0-100.

    Either side empty -> NEUTRAL_SCORE (nothing to compare, never 0 or 100).
    Both present but disjoint -> NO_OVERLAP_SCORE.
    Otherwise NEUTRAL_SCORE plus the Jaccard share of the remaining range,
    so more shared tags never lowers the score.

    Returns:
        (score, shared tags)
    """
    profile_tags = frozenset(profile_tags)
    career_tags = frozenset(career_tags)
    if not profile_tags or not career_tags:
        return NEUTRAL_SCORE, frozenset()

    shared = profile_tags & career_tags
    if not shared:
        return NO_OVERLAP_SCORE, shared

    jaccard = len(shared) / len(profile_tags | career_tags)
    return NEUTRAL_SCORE + (MAX_SCORE - NEUTRAL_SCORE) * jaccard, shared


def relevant_subjects(career: Career) -> Tuple[str, ...]:
    """Subjects that signal readiness for a career: its own list, else its sector's."""
    if career.subjects:
        return tuple(career.subjects)
    return tuple(SECTOR_SUBJECTS.get(career.sector, ()))


def score_interest_fit(
    profile: StudentProfile,
    career: Career,
    interest_tags: Optional[frozenset] = None,
) -> Tuple[DimensionScore, List[str]]:
    """
    Score overlap between what the student signalled and the career's
    trait and interest tags.

    ``interest_tags`` may be passed in when scoring many careers against
    one profile.
    """
    if interest_tags is None:
        interest_tags = profile_interest_tags(profile)

    if not interest_tags:
        return _dimension(
            "interest_fit", NEUTRAL_SCORE,
            "No interests or traits to compare yet", skipped=True,
        ), []

    score, shared = tag_overlap_score(interest_tags, career.all_tags)
    if shared:
        explanation = f"Matches your interests and traits: {_humanize(sorted(shared)[:MAX_EXPLAINED_TAGS])}"
    else:
        explanation = "Few of your interests and traits line up with this career"
    return _dimension("interest_fit", score, explanation), []


def score_academic_fit(profile: StudentProfile, career: Career) -> Tuple[DimensionScore, List[str]]:
    """
    Compare ratings in the career's relevant subjects with the minimum bar.

    A subject strength without a rating counts as 'good'. Subjects the
    student has no rating for are left out, never penalized.
    """
    notes: List[str] = []
    subjects = relevant_subjects(career)

    rated: List[Tuple[str, float]] = []
    for subject in subjects:
        rating = profile.rating_for(subject)
        if rating is None and subject in profile.subjects_strengths:
            rating = "good"
        if rating in PERFORMANCE_SCORE_MAP:
            rated.append((subject, PERFORMANCE_SCORE_MAP[rating]))

    if not rated:
        if subjects:
            explanation = f"No grades yet in related subjects ({_humanize(subjects)})"
        else:
            explanation = "No related subjects to compare"
        return _dimension("academic_fit", NEUTRAL_SCORE, explanation, skipped=True), notes

    mean = sum(value for _, value in rated) / len(rated)
    rated_names = _humanize(subject for subject, _ in rated)

    if mean < ACADEMIC_MIN_BAR:
        score = ACADEMIC_BAR_SCORE * mean / ACADEMIC_MIN_BAR
        explanation = f"Grades in {rated_names} are below what this career usually needs"
        notes.append(f"Your grades in {rated_names} are below the usual academic bar for this career")
    else:
        score = ACADEMIC_BAR_SCORE + (MAX_SCORE - ACADEMIC_BAR_SCORE) * (mean - ACADEMIC_MIN_BAR) / (1.0 - ACADEMIC_MIN_BAR)
        explanation = f"Solid grades in related subjects: {rated_names}"

    return _dimension("academic_fit", score, explanation), notes


def score_education_fit(profile: StudentProfile, career: Career) -> Tuple[DimensionScore, List[str]]:
    """
    Penalize careers requiring more than one tier above the student's plan.

    No penalty when the career needs less education than the student is
    willing to pursue.
    """
    notes: List[str] = []
    required = EDUCATION_TIER_ORDER[career.required_education_level]
    willing = EDUCATION_TIER_ORDER[profile.education_willingness]
    gap = required - willing
    required_label = EDUCATION_TIER_LABELS[career.required_education_level]
    willing_label = EDUCATION_TIER_LABELS[profile.education_willingness]

    if gap <= 0:
        return _dimension(
            "education_fit", MAX_SCORE,
            f"Fits your education plans (needs {required_label})",
        ), notes

    notes.append(
        f"Education gap: requires {required_label}, more than the {willing_label} you plan to pursue"
    )
    if gap <= EDUCATION_TIER_TOLERANCE:
        return _dimension(
            "education_fit", MAX_SCORE,
            f"Needs one step more education than you planned ({required_label})",
        ), notes

    score = MAX_SCORE - EDUCATION_TIER_PENALTY * (gap - EDUCATION_TIER_TOLERANCE)
    return _dimension(
        "education_fit", score,
        f"Requires much more education than you planned ({required_label})",
    ), notes


def score_values_fit(profile: StudentProfile, career: Career) -> Tuple[DimensionScore, List[str]]:
    """
    Compare how much the student cares about income, job security and
    helping others with what the career's cluster typically offers.
    """
    stated = [
        (attribute, label, IMPORTANCE_SCORE_MAP[getattr(profile, field)])
        for field, attribute, label in VALUE_FIELDS
        if getattr(profile, field) in IMPORTANCE_SCORE_MAP and getattr(profile, field) != "not_sure"
    ]
    value_profile = career.value_profile

    if not stated or value_profile is None:
        return _dimension(
            "values_fit", NEUTRAL_SCORE,
            "No career values to compare", skipped=True,
        ), []

    differences = []
    aligned = []
    for attribute, label, importance in stated:
        difference = abs(importance - getattr(value_profile, attribute))
        differences.append(difference)
        if difference <= VALUE_ALIGNED_TOLERANCE:
            aligned.append(label)

    score = MAX_SCORE * (1.0 - sum(differences) / len(differences))
    if aligned:
        explanation = f"Lines up with what you value: {', '.join(aligned)}"
    else:
        explanation = "Offers a different balance of income, security and helping than you prefer"
    return _dimension("values_fit", score, explanation), []


def score_environment_fit(profile: StudentProfile, career: Career) -> Tuple[DimensionScore, List[str]]:
    """Overlap between preferred work settings and the career's settings."""
    if not profile.work_environment_preferences:
        return _dimension(
            "environment_fit", NEUTRAL_SCORE,
            "No work environment preference to compare", skipped=True,
        ), []

    score, shared = tag_overlap_score(profile.work_environment_preferences, career.work_environment_tags)
    if shared:
        explanation = f"Offers work settings you prefer: {_humanize(sorted(shared))}"
    else:
        explanation = "Work settings differ from what you prefer"
    return _dimension("environment_fit", score, explanation), []


def score_constraint_fit(profile: StudentProfile, career: Career) -> Tuple[DimensionScore, List[str]]:
    """
    Start at 100 and subtract a fixed penalty for every constraint the
    career conflicts with. Floored at 0. Unknown constraints are inert.
    """
    notes: List[str] = []
    if not profile.constraints:
        return _dimension(
            "constraint_fit", MAX_SCORE,
            "No personal constraints to check", skipped=True,
        ), notes

    score = float(MAX_SCORE)
    career_tags = career.all_tags | frozenset(career.work_environment_tags)

    for constraint in profile.constraints:
        if constraint == "earn_money_soon":
            excess_years = career.time_to_entry_years - EARN_SOON_THRESHOLD_YEARS
            if excess_years > 0:
                score -= TIME_TO_ENTRY_PENALTY_PER_YEAR * excess_years
                notes.append(
                    f"Takes about {career.time_to_entry_years:g} years to start working, longer than the "
                    f"{EARN_SOON_THRESHOLD_YEARS:g} years you hoped before earning"
                )
        elif constraint == "limited_budget":
            tiers_over = (
                EDUCATION_TIER_ORDER[career.required_education_level]
                - EDUCATION_TIER_ORDER[LIMITED_BUDGET_MAX_TIER]
            )
            if tiers_over > 0:
                score -= LIMITED_BUDGET_PENALTY_PER_TIER * tiers_over
                notes.append(
                    f"Requires {EDUCATION_TIER_LABELS[career.required_education_level]}, "
                    "which may be costly on a limited budget"
                )
        elif constraint in CONSTRAINT_TAG_CONFLICTS:
            conflicting_tags, penalty, note = CONSTRAINT_TAG_CONFLICTS[constraint]
            if career_tags & conflicting_tags:
                score -= penalty
                notes.append(note)

    if notes:
        explanation = f"Conflicts with {len(notes)} of your personal constraints"
    else:
        explanation = "Works with your personal constraints"
    return _dimension("constraint_fit", max(0.0, score), explanation), notes


SCORERS = (
    score_interest_fit,
    score_academic_fit,
    score_education_fit,
    score_values_fit,
    score_environment_fit,
    score_constraint_fit,
)
