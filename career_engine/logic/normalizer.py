"""
Profile Normalizer

Converts raw questionnaire answers (keyed by fixed question IDs) into a
canonical StudentProfile plus a list of FieldWarnings.

Never raises for malformed input: bad or missing answers fall back to
neutral defaults and are reported as warnings so scoring can proceed on a
partial profile.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .contracts import StudentProfile, FieldWarning
from .constants import (
    EducationTier,
    WarningCode,
    EDUCATION_TIER_ORDER,
    PERFORMANCE_SCORE_MAP,
    IMPORTANCE_SCORE_MAP,
    HANDS_ON_LEVELS,
    PROBLEM_SOLVING_STYLES,
)
from .tags import slugify, profile_interest_tags

logger = logging.getLogger(__name__)

# =============================================================================
# QUESTION SCHEMA
# =============================================================================

QUESTION_FIELDS: Dict[str, Tuple[str, ...]] = {
    "q1_grade_zip": ("grade", "zip_code"),
    "q2_work_environment": ("work_environment_preferences",),
    "q3_hands_on_preference": ("hands_on_preference",),
    "q4_problem_solving_style": ("problem_solving_style",),
    "q5_education_willingness": ("education_willingness",),
    "q6_academic_interests": ("subjects_strengths",),
    "q7_academic_performance": ("academic_performance",),
    "q8_interests_text": ("free_text_interests",),
    "q9_experience_text": ("free_text_experience",),
    "q10_traits": ("personal_traits",),
    "q10_traits_other": ("personal_traits_other",),
    "q11_income_importance": ("income_importance",),
    "q12_stability_importance": ("job_security_importance",),
    "q13_helping_importance": ("helping_others_importance",),
    "q14_constraints": ("constraints",),
    "q19_impact_text": ("free_text_impact",),
    "q20_inspiration_text": ("free_text_inspiration",),
}

REQUIRED_QUESTIONS = (
    "q1_grade_zip",
    "q5_education_willingness",
    "q7_academic_performance",
    "q10_traits",
)

MIN_GRADE = 9
MAX_GRADE = 13
DEFAULT_GRADE = 11
ZIP_PATTERN = re.compile(r"^[0-9]{5}$")
_LEADING_INT = re.compile(r"^\s*(\d+)")

# =============================================================================
# ALIAS TABLES (questionnaire wording -> canonical tags)
# Keys are slugs of the labels shown to students.
# =============================================================================

WORK_ENVIRONMENT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "outdoors_construction_sites_farms_parks": ("outdoors",),
    "outdoors": ("outdoors",),
    "outside": ("outdoors",),
    "indoors_offices_hospitals_schools": ("indoors",),
    "indoors": ("indoors",),
    "office": ("indoors",),
    "a_mix_of_indoor_and_outdoor_work": ("mixed",),
    "mix": ("mixed",),
    "mixed": ("mixed",),
    "from_home_remote": ("remote",),
    "remote": ("remote",),
    "home": ("remote",),
    "traveling_to_different_locations": ("travel",),
    "traveling": ("travel",),
    "travel": ("travel",),
}

HANDS_ON_ALIASES: Dict[str, str] = {
    "very_hands_on": "high",
    "i_love_working_with_my_hands": "high",
    "yes": "high",
    "somewhat": "medium",
    "somewhat_hands_on": "medium",
    "a_mix_of_both": "medium",
    "prefer_desk_work": "low",
    "not_hands_on": "low",
    "no": "low",
    "not_sure": "unsure",
}

PROBLEM_SOLVING_ALIASES: Dict[str, str] = {
    "troubleshooting_and_fixing_things": "practical",
    "understanding_how_systems_or_machines_work": "analytical",
    "inventing_or_designing_new_solutions": "creative",
    "helping_people_overcome_challenges": "collaborative",
    "planning_organizing_or_managing_projects": "analytical",
    "logical": "analytical",
    "hands_on": "practical",
    "team": "collaborative",
    "teamwork": "collaborative",
    "not_sure": "unsure",
}

EDUCATION_ALIASES: Dict[str, str] = {
    "start_working_right_after_high_school": EducationTier.SHORT_TRAINING.value,
    "a_few_months_to_2_years_certifications_or_training": EducationTier.SHORT_TRAINING.value,
    "certificate": EducationTier.SHORT_TRAINING.value,
    "certification": EducationTier.SHORT_TRAINING.value,
    "apprenticeship": EducationTier.SHORT_TRAINING.value,
    "trade_school": EducationTier.SHORT_TRAINING.value,
    "2_4_years_college_or_technical_school": EducationTier.COLLEGE_TECHNICAL.value,
    "two_year": EducationTier.COLLEGE_TECHNICAL.value,
    "associate": EducationTier.COLLEGE_TECHNICAL.value,
    "associate_degree": EducationTier.COLLEGE_TECHNICAL.value,
    "community_college": EducationTier.COLLEGE_TECHNICAL.value,
    "technical_school": EducationTier.COLLEGE_TECHNICAL.value,
    "bachelor": EducationTier.FOUR_YEAR.value,
    "bachelors": EducationTier.FOUR_YEAR.value,
    "bachelor_degree": EducationTier.FOUR_YEAR.value,
    "bachelor_s_degree": EducationTier.FOUR_YEAR.value,
    "four_year_degree": EducationTier.FOUR_YEAR.value,
    "4_year_college": EducationTier.FOUR_YEAR.value,
    "4_years_college_and_possibly_graduate_school": EducationTier.ADVANCED.value,
    "advanced_degree": EducationTier.ADVANCED.value,
    "graduate": EducationTier.ADVANCED.value,
    "graduate_school": EducationTier.ADVANCED.value,
    "masters": EducationTier.ADVANCED.value,
    "doctorate": EducationTier.ADVANCED.value,
}
# "Not sure yet" is a valid answer that leaves the neutral default in place
EDUCATION_UNDECIDED = ("not_sure", "i_m_not_sure_yet", "unsure", "undecided")

SUBJECT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "mathematics": ("math",),
    "science_biology_chemistry_physics": ("biology", "chemistry", "physics"),
    "science": ("biology", "chemistry", "physics"),
    "english_language_arts": ("english",),
    "language_arts": ("english",),
    "social_studies_history": ("history",),
    "social_studies": ("history",),
    "art_creative_subjects": ("art",),
    "physical_education_health": ("physical_education", "health"),
    "pe": ("physical_education",),
    "technology_computer_science": ("computer_science",),
    "technology": ("computer_science",),
    "computers": ("computer_science",),
    "foreign_language": ("foreign_languages",),
    "business_economics": ("business",),
    "economics": ("business",),
    "shop_vocational": ("shop",),
    "vocational": ("shop",),
}

PERFORMANCE_ALIASES: Dict[str, str] = {
    "needs_improvement": "fair",
    "below_average": "fair",
    "struggling": "poor",
    "failing": "poor",
    "above_average": "good",
}
NOT_TAKEN_RATINGS = ("not_taken", "haven_t_taken_yet", "havent_taken_yet", "n_a", "na", "none")

TRAIT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "creative_and_artistic": ("creative",),
    "analytical_and_logical": ("analytical",),
    "compassionate_and_caring": ("compassionate",),
    "helpful": ("compassionate",),
    "leadership_oriented": ("leader",),
    "leadership": ("leader",),
    "detail_oriented_and_organized": ("detail_oriented", "organized"),
    "adventurous_and_willing_to_take_risks": ("adventurous",),
    "patient_and_persistent": ("patient", "persistent"),
    "outgoing_and_social": ("outgoing",),
    "independent_and_self_reliant": ("independent",),
    "collaborative_and_team_focused": ("collaborative",),
    "curious_and_inquisitive": ("curious",),
    "practical_and_hands_on": ("practical",),
    "hands_on": ("practical",),
}

IMPORTANCE_ALIASES: Dict[str, str] = {
    "very": "very_important",
    "somewhat": "somewhat_important",
    "not_very": "not_very_important",
    "not_important": "not_very_important",
    "unsure": "not_sure",
}

CONSTRAINT_ALIASES: Dict[str, str] = {
    "stay_close_home": "stay_close_to_home",
    "stay_near_home": "stay_close_to_home",
    "close_to_home": "stay_close_to_home",
    "need_to_earn_money_soon": "earn_money_soon",
    "earn_money_quickly": "earn_money_soon",
    "need_income_soon": "earn_money_soon",
    "physical_limitations": "avoid_physical_work",
    "no_physical_work": "avoid_physical_work",
    "limited_money": "limited_budget",
    "limited_financial_resources": "limited_budget",
    "tight_budget": "limited_budget",
}
NO_CONSTRAINT_ANSWERS = ("none", "no_constraints", "none_of_these")


# =============================================================================
# HELPERS
# =============================================================================

def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


class _Collector:
    """Accumulates warnings and defaulted field names for one normalize() call."""

    def __init__(self):
        self.warnings: List[FieldWarning] = []
        self.defaulted: List[str] = []

    def warn(self, field: str, code: WarningCode, message: str) -> None:
        self.warnings.append(FieldWarning(field=field, code=code, message=message))

    def default(self, field_name: str) -> None:
        if field_name not in self.defaulted:
            self.defaulted.append(field_name)


def _as_list(question: str, value: Any, out: _Collector) -> List[Any]:
    """Multi-select answers: a lone scalar becomes a singleton list."""
    if _is_blank(value):
        return []
    if isinstance(value, (list, tuple, set)):
        items = list(value)
        if isinstance(value, set):
            items = sorted(items, key=str)
        return [item for item in items if not _is_blank(item) and not isinstance(item, (dict, list))]
    if isinstance(value, dict):
        out.warn(question, WarningCode.INVALID, "Expected a list of choices; answer ignored")
        return []
    out.warn(question, WarningCode.COERCED, "Single answer treated as a one-item selection")
    return [value]


def _as_scalar(question: str, value: Any, out: _Collector) -> Any:
    """Single-choice answers: a list keeps its first item."""
    if isinstance(value, (list, tuple)):
        items = [item for item in value if not _is_blank(item)]
        if not items:
            return None
        out.warn(question, WarningCode.COERCED, "Multiple answers given for a single choice; using the first")
        return items[0]
    if isinstance(value, dict):
        out.warn(question, WarningCode.INVALID, "Expected a single choice; answer ignored")
        return None
    return value


def _as_text(question: str, value: Any, out: _Collector) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        out.warn(question, WarningCode.COERCED, "List answer joined into free text")
        return " ".join(str(item).strip() for item in value if not _is_blank(item))
    if isinstance(value, dict):
        out.warn(question, WarningCode.INVALID, "Expected free text; answer ignored")
        return ""
    out.warn(question, WarningCode.COERCED, "Answer converted to free text")
    return str(value).strip()


def _expand_tags(values: Sequence[Any], aliases: Mapping[str, Any]) -> List[str]:
    tags: List[str] = []
    for value in values:
        slug = slugify(value)
        if not slug:
            continue
        mapped = aliases.get(slug, slug)
        if isinstance(mapped, str):
            mapped = (mapped,)
        tags.extend(mapped)
    return tags


def _choice(
    question: str,
    field_name: str,
    value: Any,
    aliases: Mapping[str, str],
    vocabulary: Sequence[str],
    default: str,
    out: _Collector,
) -> str:
    """Resolve a single-choice answer; unknown answers fall back to the neutral default."""
    value = _as_scalar(question, value, out)
    if _is_blank(value):
        out.default(field_name)
        return default
    slug = slugify(value)
    slug = aliases.get(slug, slug)
    if slug in vocabulary:
        return slug
    out.warn(question, WarningCode.INVALID, f"Unrecognized answer '{value}'; using '{default}'")
    out.default(field_name)
    return default


def _parse_grade(value: Any, out: _Collector) -> int:
    question = "q1_grade_zip"
    if _is_blank(value):
        out.default("grade")
        return DEFAULT_GRADE

    grade: Optional[int] = None
    if isinstance(value, bool):
        grade = None
    elif isinstance(value, int):
        grade = value
    elif isinstance(value, float) and value.is_integer():
        grade = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            grade = int(match.group(1))

    if grade is None:
        out.warn(question, WarningCode.INVALID, f"Could not read grade '{value}'; assuming grade {DEFAULT_GRADE}")
        out.default("grade")
        return DEFAULT_GRADE

    if grade < MIN_GRADE or grade > MAX_GRADE:
        clamped = min(MAX_GRADE, max(MIN_GRADE, grade))
        out.warn(question, WarningCode.CLAMPED, f"Grade {grade} is outside {MIN_GRADE}-{MAX_GRADE}; using {clamped}")
        return clamped
    return grade


def _parse_zip(value: Any, out: _Collector) -> str:
    if _is_blank(value):
        out.default("zip_code")
        return ""
    zip_code = str(value).strip()
    if not ZIP_PATTERN.match(zip_code):
        out.warn("q1_grade_zip", WarningCode.INVALID, f"ZIP code '{zip_code}' is not 5 digits")
    return zip_code


def _parse_grade_zip(value: Any, out: _Collector) -> Tuple[int, str]:
    if _is_blank(value):
        out.default("grade")
        out.default("zip_code")
        return DEFAULT_GRADE, ""
    if not isinstance(value, Mapping):
        # A bare grade is the most common client shortcut
        out.warn("q1_grade_zip", WarningCode.COERCED, "Expected {grade, zipCode}; treating the answer as the grade")
        return _parse_grade(value, out), _parse_zip(None, out)
    zip_value = value.get("zipCode", value.get("zip_code", value.get("zip")))
    return _parse_grade(value.get("grade"), out), _parse_zip(zip_value, out)


def _parse_academic_performance(value: Any, out: _Collector) -> Dict[str, str]:
    question = "q7_academic_performance"
    if _is_blank(value):
        out.default("academic_performance")
        return {}
    if not isinstance(value, Mapping):
        out.warn(question, WarningCode.INVALID, "Expected a subject -> rating matrix; answer ignored")
        out.default("academic_performance")
        return {}

    ratings: Dict[str, str] = {}
    for label, raw_rating in value.items():
        subject_slug = slugify(label)
        if not subject_slug or _is_blank(raw_rating) or isinstance(raw_rating, (dict, list)):
            continue
        rating = slugify(raw_rating)
        rating = PERFORMANCE_ALIASES.get(rating, rating)
        if rating in NOT_TAKEN_RATINGS:
            continue
        if rating not in PERFORMANCE_SCORE_MAP:
            out.warn(question, WarningCode.INVALID, f"Unrecognized rating '{raw_rating}' for {label}; ignored")
            continue
        for subject in SUBJECT_ALIASES.get(subject_slug, (subject_slug,)):
            ratings[subject] = rating
    return ratings


def _parse_education(value: Any, out: _Collector) -> str:
    question = "q5_education_willingness"
    default = EducationTier.COLLEGE_TECHNICAL.value
    value = _as_scalar(question, value, out)
    if _is_blank(value):
        out.default("education_willingness")
        return default
    if isinstance(value, int) and not isinstance(value, bool):
        for tier, order in EDUCATION_TIER_ORDER.items():
            if order == value:
                return tier
    slug = slugify(value)
    if slug in EDUCATION_UNDECIDED:
        out.default("education_willingness")
        return default
    slug = EDUCATION_ALIASES.get(slug, slug)
    if slug in EDUCATION_TIER_ORDER:
        return slug
    out.warn(question, WarningCode.INVALID, f"Unrecognized education plan '{value}'; assuming a 2-year program")
    out.default("education_willingness")
    return default


def _detect_skipped_dimensions(profile: StudentProfile, out: _Collector) -> None:
    """Warn about scoring dimensions that will fall back to neutral."""
    if not profile_interest_tags(profile):
        out.warn(
            "interest_fit", WarningCode.SKIPPED,
            "No interests, traits or subject strengths given; interest fit will be neutral",
        )
    if not profile.academic_performance and not profile.subjects_strengths:
        out.warn(
            "academic_fit", WarningCode.SKIPPED,
            "No academic ratings given; academic fit will be neutral",
        )
    if not profile.work_environment_preferences:
        out.warn(
            "environment_fit", WarningCode.SKIPPED,
            "No work environment preference given; environment fit will be neutral",
        )
    stated_values = [
        profile.income_importance,
        profile.job_security_importance,
        profile.helping_others_importance,
    ]
    if all(value == "not_sure" for value in stated_values):
        out.warn(
            "values_fit", WarningCode.SKIPPED,
            "No career values given; values fit will be neutral",
        )


# =============================================================================
# PUBLIC API
# =============================================================================

def normalize(raw_responses: Any) -> Tuple[StudentProfile, List[FieldWarning]]:
    """
    Build a StudentProfile from raw questionnaire responses.

    Args:
        raw_responses: Mapping of question id -> answer. Unknown ids are ignored.

    Returns:
        (profile, warnings). Always returns a usable profile.
    """
    out = _Collector()

    if not isinstance(raw_responses, Mapping):
        out.warn("responses", WarningCode.INVALID, "Responses must be an object; using defaults")
        raw_responses = {}

    responses = {key: value for key, value in raw_responses.items() if key in QUESTION_FIELDS}
    ignored = len(raw_responses) - len(responses)
    if ignored:
        logger.debug(f"Ignoring {ignored} unknown question id(s)")

    for question in REQUIRED_QUESTIONS:
        if _is_blank(responses.get(question)):
            out.warn(question, WarningCode.MISSING, "Required question was not answered")

    grade, zip_code = _parse_grade_zip(responses.get("q1_grade_zip"), out)

    work_environment = _expand_tags(
        _as_list("q2_work_environment", responses.get("q2_work_environment"), out),
        WORK_ENVIRONMENT_ALIASES,
    )
    subjects = _expand_tags(
        _as_list("q6_academic_interests", responses.get("q6_academic_interests"), out),
        SUBJECT_ALIASES,
    )

    traits_answer = responses.get("q10_traits")
    if _is_blank(traits_answer):
        out.default("personal_traits")
    traits = _expand_tags(_as_list("q10_traits", traits_answer, out), TRAIT_ALIASES)

    constraints = [
        tag for tag in _expand_tags(
            _as_list("q14_constraints", responses.get("q14_constraints"), out),
            CONSTRAINT_ALIASES,
        )
        if tag not in NO_CONSTRAINT_ANSWERS
    ]

    fields: Dict[str, Any] = {
        "grade": grade,
        "zip_code": zip_code,
        "work_environment_preferences": work_environment,
        "hands_on_preference": _choice(
            "q3_hands_on_preference", "hands_on_preference",
            responses.get("q3_hands_on_preference"),
            HANDS_ON_ALIASES, HANDS_ON_LEVELS, "unsure", out,
        ),
        "problem_solving_style": _choice(
            "q4_problem_solving_style", "problem_solving_style",
            responses.get("q4_problem_solving_style"),
            PROBLEM_SOLVING_ALIASES, PROBLEM_SOLVING_STYLES, "unsure", out,
        ),
        "education_willingness": _parse_education(responses.get("q5_education_willingness"), out),
        "subjects_strengths": subjects,
        "academic_performance": _parse_academic_performance(responses.get("q7_academic_performance"), out),
        "free_text_interests": _as_text("q8_interests_text", responses.get("q8_interests_text"), out),
        "free_text_experience": _as_text("q9_experience_text", responses.get("q9_experience_text"), out),
        "personal_traits": traits,
        "personal_traits_other": _as_text("q10_traits_other", responses.get("q10_traits_other"), out),
        "income_importance": _choice(
            "q11_income_importance", "income_importance",
            responses.get("q11_income_importance"),
            IMPORTANCE_ALIASES, tuple(IMPORTANCE_SCORE_MAP), "not_sure", out,
        ),
        "job_security_importance": _choice(
            "q12_stability_importance", "job_security_importance",
            responses.get("q12_stability_importance"),
            IMPORTANCE_ALIASES, tuple(IMPORTANCE_SCORE_MAP), "not_sure", out,
        ),
        "helping_others_importance": _choice(
            "q13_helping_importance", "helping_others_importance",
            responses.get("q13_helping_importance"),
            IMPORTANCE_ALIASES, tuple(IMPORTANCE_SCORE_MAP), "not_sure", out,
        ),
        "constraints": constraints,
        "free_text_impact": _as_text("q19_impact_text", responses.get("q19_impact_text"), out),
        "free_text_inspiration": _as_text("q20_inspiration_text", responses.get("q20_inspiration_text"), out),
    }
    fields["defaulted_fields"] = tuple(out.defaulted)

    profile = StudentProfile(**fields)
    _detect_skipped_dimensions(profile, out)

    if out.warnings:
        logger.warning(f"⚠️ Normalized profile with {len(out.warnings)} warning(s); defaulted: {list(out.defaulted)}")
    else:
        logger.info("🧾 Normalized profile with no warnings")

    return profile, out.warnings
