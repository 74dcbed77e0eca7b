"""
Data Contracts for the Career Matching Engine

Defines Pydantic models for the normalized StudentProfile (input), the static
taxonomy entries (Career, Cluster) and the ResultPayload (output).
These contracts are the API boundary for the matching engine.

JSON field names are camelCase (``zipCode``, ``topJobMatches``); Python
attributes stay snake_case. Both spellings are accepted on input.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .constants import (
    EducationTier,
    FitCategory,
    WarningCode,
    EDUCATION_TIER_ORDER,
    ENGINE_VERSION,
    DISCLAIMER,
)
from .tags import slugify, canonical_tags


class ContractModel(BaseModel):
    """Shared config: camelCase aliases, enum values stored as plain strings."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class FrozenContractModel(ContractModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class FieldWarning(ContractModel):
    """Non-blocking problem found while normalizing a questionnaire answer."""
    field: str
    code: WarningCode
    message: str


class StudentProfile(FrozenContractModel):
    """
    Canonical student profile for a single scoring pass.

    Every field is optional at construction time; the normalizer fills
    structurally required fields with neutral defaults and lists them in
    ``defaulted_fields``.
    """
    # Basic Information
    grade: int = Field(default=11, ge=9, le=13)
    zip_code: str = ""  # Opaque location tag, never geocoded here

    # Work Preferences
    work_environment_preferences: Tuple[str, ...] = ()
    hands_on_preference: str = "unsure"        # high/medium/low/unsure
    problem_solving_style: str = "unsure"      # analytical/creative/practical/collaborative/unsure

    # Values
    helping_others_importance: str = "not_sure"
    income_importance: str = "not_sure"
    job_security_importance: str = "not_sure"

    # Education & Academics
    education_willingness: EducationTier = EducationTier.COLLEGE_TECHNICAL
    academic_performance: Tuple[Tuple[str, str], ...] = ()  # (subject, rating) pairs, sorted
    subjects_strengths: Tuple[str, ...] = ()

    # Free text (light keyword extraction only)
    free_text_interests: str = ""
    free_text_experience: str = ""
    free_text_impact: str = ""
    free_text_inspiration: str = ""

    # Personality
    personal_traits: Tuple[str, ...] = ()
    personal_traits_other: str = ""

    # Lifestyle & Constraints
    constraints: Tuple[str, ...] = ()

    # Bookkeeping
    defaulted_fields: Tuple[str, ...] = ()

    @field_validator(
        "work_environment_preferences",
        "subjects_strengths",
        "personal_traits",
        "constraints",
        mode="before",
    )
    @classmethod
    def _canonical_tag_set(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        return canonical_tags(value)

    @field_validator("academic_performance", mode="before")
    @classmethod
    def _canonical_ratings(cls, value):
        if not value:
            return ()
        ratings = {slugify(subject): slugify(str(rating)) for subject, rating in dict(value).items()}
        return tuple(sorted(ratings.items()))

    @field_validator(
        "hands_on_preference",
        "problem_solving_style",
        "helping_others_importance",
        "income_importance",
        "job_security_importance",
        mode="before",
    )
    @classmethod
    def _canonical_choice(cls, value):
        return slugify(str(value)) if value is not None else value

    def rating_for(self, subject: str) -> Optional[str]:
        return dict(self.academic_performance).get(subject)


class ValueProfile(FrozenContractModel):
    """What a career cluster typically offers, each on a 0-1 scale."""
    income: float = Field(ge=0.0, le=1.0)
    stability: float = Field(ge=0.0, le=1.0)
    helping: float = Field(ge=0.0, le=1.0)


class Cluster(FrozenContractModel):
    """Group of related careers sharing sector and value profile."""
    id: str
    name: str
    description: str = ""
    value_profile: ValueProfile


class Career(FrozenContractModel):
    """
    Static catalog entry. Immutable after load; the engine never mutates it.
    """
    id: str
    title: str
    sector: str
    cluster_id: Optional[str] = None
    description: str = ""

    # Requirements
    required_education_level: EducationTier
    time_to_entry_years: float = Field(ge=0.0)
    average_salary: int = Field(ge=0)

    # Matching tags
    trait_tags: Tuple[str, ...]
    interest_tags: Tuple[str, ...]
    work_environment_tags: Tuple[str, ...]
    subjects: Tuple[str, ...] = ()  # Overrides the sector subject table

    # Resolved from the cluster at load time when not given
    value_profile: Optional[ValueProfile] = None

    @field_validator("required_education_level", mode="before")
    @classmethod
    def _tier_from_ordinal(cls, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            for tier, order in EDUCATION_TIER_ORDER.items():
                if order == value:
                    return tier
        if isinstance(value, str):
            return slugify(value)
        return value

    @field_validator("sector", mode="before")
    @classmethod
    def _canonical_sector(cls, value):
        return slugify(value) if isinstance(value, str) else value

    @field_validator("trait_tags", "interest_tags", "work_environment_tags", "subjects", mode="before")
    @classmethod
    def _canonical_tags(cls, value):
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            return canonical_tags(value)
        return value

    @property
    def all_tags(self) -> frozenset:
        """Trait and interest tags together, used for interest overlap."""
        return frozenset(self.trait_tags) | frozenset(self.interest_tags)


# =============================================================================
# SCORING CONTRACTS
# =============================================================================

class DimensionScore(ContractModel):
    """Individual sub-score with explanation."""
    dimension: str
    score: float = Field(ge=0.0, le=100.0)
    weight: float = Field(ge=0.0, le=1.0)
    weighted_score: float = Field(ge=0.0, le=100.0)
    explanation: str = ""
    skipped: bool = False  # Fell back to neutral for lack of data


class MatchResult(ContractModel):
    """
    Single career match with full scoring details.
    Created fresh per scoring call; never persisted here.
    """
    career: Career
    score: int = Field(ge=0, le=100)
    reasoning: List[str] = Field(default_factory=list)
    feasibility_notes: List[str] = Field(default_factory=list)
    dimension_scores: List[DimensionScore] = Field(default_factory=list)

    # Filled by the ranker / classifier
    rank: int = 0
    fit_category: Optional[FitCategory] = None


class ClusterScore(ContractModel):
    """Coarse-grained cluster recommendation derived from career matches."""
    cluster_id: str
    name: str
    score: int = Field(ge=0, le=100)
    reasoning: List[str] = Field(default_factory=list)


class SkillGaps(ContractModel):
    immediate: List[str] = Field(default_factory=list)
    long_term: List[str] = Field(default_factory=list)


class PathwayPlan(ContractModel):
    """Ordered milestones from the student's grade to career entry."""
    steps: List[str] = Field(default_factory=list)
    timeline: str = ""
    education_path: str = ""
    skill_gaps: SkillGaps = Field(default_factory=SkillGaps)
    enriched: bool = False  # True only when an external enricher rewrote steps


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class TopJobMatch(ContractModel):
    """Detailed match entry, with pathway."""
    career: Career
    match_score: int = Field(ge=0, le=100)
    fit_category: Optional[FitCategory] = None
    reasoning: List[str] = Field(default_factory=list)
    feasibility_notes: List[str] = Field(default_factory=list)
    pathway: PathwayPlan


class MatchSummary(ContractModel):
    """Summary entry (career + score) for the full ranking."""
    rank: int
    career_id: str
    title: str
    match_score: int = Field(ge=0, le=100)
    fit_category: Optional[FitCategory] = None


class ValidationReport(ContractModel):
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    defaulted_fields: List[str] = Field(default_factory=list)
    is_complete: bool = True


class StudentProfileSummary(ContractModel):
    """Echo of the normalized key fields, for display."""
    grade: int
    zip_code: str
    education_willingness: str
    key_strengths: List[str] = Field(default_factory=list)
    primary_interests: List[str] = Field(default_factory=list)
    work_environment_preferences: List[str] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)


class ResultMetadata(ContractModel):
    """Request tracking. The only non-deterministic part of the payload."""
    request_id: Optional[str] = None
    generated_at: Optional[datetime] = None
    engine_version: str = ENGINE_VERSION
    processing_time_ms: Optional[float] = None


class ResultPayload(ContractModel):
    """
    Output contract returned to the calling HTTP layer.
    """
    top_job_matches: List[TopJobMatch] = Field(default_factory=list)
    all_matches: List[MatchSummary] = Field(default_factory=list)
    top_clusters: List[ClusterScore] = Field(default_factory=list)
    validation: ValidationReport = Field(default_factory=ValidationReport)
    student_profile_summary: StudentProfileSummary
    disclaimer: str = DISCLAIMER
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)
