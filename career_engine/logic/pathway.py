"""
Pathway Synthesizer

Builds the ordered milestones, timeline and skill-gap analysis for a
career. Purely table driven: a new career in the catalog needs no code
changes, and the same (career, profile) pair always yields the same plan.
"""

from typing import Iterable, List, Set

from .contracts import Career, StudentProfile, PathwayPlan, SkillGaps
from .constants import (
    EDUCATION_TIER_LABELS,
    PATHWAY_STEP_TEMPLATES,
    HIGH_SCHOOL_STEP_TEMPLATE,
    HIGH_SCHOOL_STEP_GENERIC,
    LAST_HIGH_SCHOOL_GRADE,
    TIMELINE_BANDS,
    TIMELINE_OVERFLOW_LABEL,
    TIER_SKILLS,
    SECTOR_SKILLS,
    SKILL_EVIDENCE,
    SUBJECT_THEMES,
)
from .dimension_scorers import relevant_subjects

STRONG_RATINGS = ("good", "excellent")


def _readable(tag: str) -> str:
    return tag.replace("_", " ")


def _join(items: List[str]) -> str:
    """['a'] -> 'a', ['a', 'b'] -> 'a and b', ['a', 'b', 'c'] -> 'a, b and c'."""
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} and {items[-1]}"


def format_timeline(years: float) -> str:
    """Convert years to entry into a human-readable band."""
    first_bound, first_label = TIMELINE_BANDS[0]
    if years < first_bound:
        return first_label
    for upper, label in TIMELINE_BANDS[1:]:
        if years <= upper:
            return label
    return TIMELINE_OVERFLOW_LABEL


def _build_steps(career: Career, profile: StudentProfile) -> List[str]:
    steps: List[str] = []
    sector = _readable(career.sector)

    if profile.grade <= LAST_HIGH_SCHOOL_GRADE:
        subjects = relevant_subjects(career)
        if subjects:
            steps.append(HIGH_SCHOOL_STEP_TEMPLATE.format(
                grade=profile.grade,
                subjects=_join([_readable(subject) for subject in subjects]),
            ))
        else:
            steps.append(HIGH_SCHOOL_STEP_GENERIC.format(grade=profile.grade, sector=sector))

    for template in PATHWAY_STEP_TEMPLATES[career.required_education_level]:
        steps.append(template.format(title=career.title, sector=sector))
    return steps


def _evidenced_tags(profile: StudentProfile) -> Set[str]:
    """Tags showing what the student already has: traits, strengths, good grades."""
    tags = set(profile.personal_traits)
    tags.update(profile.subjects_strengths)
    tags.update(
        subject for subject, rating in profile.academic_performance
        if rating in STRONG_RATINGS
    )
    for subject in list(tags):
        tags.update(SUBJECT_THEMES.get(subject, []))
    return tags


def _is_evidenced(skill: str, evidence: Set[str]) -> bool:
    if skill in evidence:
        return True
    return any(tag in evidence for tag in SKILL_EVIDENCE.get(skill, []))


def _collect(skill_lists: Iterable[List[str]], evidence: Set[str], seen: Set[str]) -> List[str]:
    skills: List[str] = []
    for skill_list in skill_lists:
        for skill in skill_list:
            if skill in seen:
                continue
            seen.add(skill)
            if not _is_evidenced(skill, evidence):
                skills.append(_readable(skill))
    return skills


def analyze_skill_gaps(career: Career, profile: StudentProfile) -> SkillGaps:
    """
    Split the skills a career needs into immediate and long-term gaps.

    Skills come from the education tier table then the sector table, in
    table order, each reported once. Skills the student already signalled
    are left out.
    """
    evidence = _evidenced_tags(profile)
    tier_skills = TIER_SKILLS.get(career.required_education_level, {})
    sector_skills = SECTOR_SKILLS.get(career.sector, {})

    seen: Set[str] = set()
    immediate = _collect(
        [tier_skills.get("immediate", []), sector_skills.get("immediate", [])], evidence, seen,
    )
    long_term = _collect(
        [tier_skills.get("long_term", []), sector_skills.get("long_term", [])], evidence, seen,
    )
    return SkillGaps(immediate=immediate, long_term=long_term)


def build_pathway(career: Career, profile: StudentProfile) -> PathwayPlan:
    """
    Build the rule-based pathway for one career.

    Always computable without external services; any enrichment is applied
    on top of this plan afterwards.
    """
    education_label = EDUCATION_TIER_LABELS[career.required_education_level]
    return PathwayPlan(
        steps=_build_steps(career, profile),
        timeline=format_timeline(career.time_to_entry_years),
        education_path=f"Complete {education_label}",
        skill_gaps=analyze_skill_gaps(career, profile),
    )
