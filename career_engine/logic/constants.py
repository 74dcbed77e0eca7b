"""
Scoring Engine Constants

Defines all tiers, band mappings, weights, thresholds and rule tables used by
the matching engine and the pathway synthesizer.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List, Tuple

# =============================================================================
# EDUCATION TIERS
# =============================================================================

class EducationTier(str, Enum):
    """Ordinal buckets of education commitment / requirement."""
    SHORT_TRAINING = "short_training"          # Months to 2 years (certificates, apprenticeships)
    COLLEGE_TECHNICAL = "college_technical"    # 2-year college or technical school
    FOUR_YEAR = "four_year"                    # Bachelor's degree
    ADVANCED = "advanced"                      # Graduate / professional school


EDUCATION_TIER_ORDER: Dict[str, int] = {
    EducationTier.SHORT_TRAINING.value: 0,
    EducationTier.COLLEGE_TECHNICAL.value: 1,
    EducationTier.FOUR_YEAR.value: 2,
    EducationTier.ADVANCED.value: 3,
}

EDUCATION_TIER_LABELS: Dict[str, str] = {
    EducationTier.SHORT_TRAINING.value: "a certificate or short training program",
    EducationTier.COLLEGE_TECHNICAL.value: "a 2-year college or technical program",
    EducationTier.FOUR_YEAR.value: "a 4-year college degree",
    EducationTier.ADVANCED.value: "an advanced or graduate degree",
}

# =============================================================================
# BAND SCORE MAPPINGS
# =============================================================================

# Self-rated subject performance
PERFORMANCE_SCORE_MAP: Dict[str, float] = {
    "excellent": 1.0,
    "good": 0.75,
    "average": 0.5,
    "fair": 0.25,      # "Needs improvement" / "Struggling"
    "poor": 0.0,
}

# Values questions (income, job security, helping others)
IMPORTANCE_SCORE_MAP: Dict[str, float] = {
    "very_important": 1.0,
    "somewhat_important": 0.67,
    "not_very_important": 0.33,
    "not_sure": 0.5,
}

HANDS_ON_LEVELS = ("high", "medium", "low", "unsure")
PROBLEM_SOLVING_STYLES = ("analytical", "creative", "practical", "collaborative", "unsure")

KNOWN_CONSTRAINTS = (
    "stay_close_to_home",
    "earn_money_soon",
    "avoid_physical_work",
    "limited_budget",
)

# =============================================================================
# DIMENSION WEIGHTS
# =============================================================================

# Weights for each scoring dimension (must sum to 1.0).
# Order here is also the tie-break order for reasoning.
DIMENSION_WEIGHTS: Dict[str, float] = {
    "interest_fit": 0.35,      # Trait / interest tag overlap
    "academic_fit": 0.20,      # Ratings in sector-relevant subjects
    "education_fit": 0.15,     # Education commitment vs requirement
    "values_fit": 0.10,        # Income / security / helping vs cluster values
    "environment_fit": 0.10,   # Preferred work settings
    "constraint_fit": 0.10,    # Life constraints (earn soon, stay local, ...)
}

DIMENSION_LABELS: Dict[str, str] = {
    "interest_fit": "Interests & traits",
    "academic_fit": "Academic fit",
    "education_fit": "Education commitment",
    "values_fit": "Career values",
    "environment_fit": "Work environment",
    "constraint_fit": "Personal constraints",
}

# =============================================================================
# SCORING THRESHOLDS
# =============================================================================

NEUTRAL_SCORE = 50.0           # Used whenever a dimension has no data to compare
NO_OVERLAP_SCORE = 20.0        # Both tag sets present but nothing shared
MAX_SCORE = 100

# Academic fit: mean rating needed to clear the bar, and the score at the bar
ACADEMIC_MIN_BAR = 0.5
ACADEMIC_BAR_SCORE = 60.0

# Education fit: one tier above the student's plan is tolerated
EDUCATION_TIER_TOLERANCE = 1
EDUCATION_TIER_PENALTY = 40.0  # Per tier beyond the tolerance

# Constraint fit
EARN_SOON_THRESHOLD_YEARS = 2.0
TIME_TO_ENTRY_PENALTY_PER_YEAR = 20.0

# constraint -> (conflicting career tags, penalty, note)
CONSTRAINT_TAG_CONFLICTS: Dict[str, Tuple[frozenset, float, str]] = {
    "stay_close_to_home": (
        frozenset({"travel", "relocation"}),
        30.0,
        "Often requires travel or relocation (you prefer to stay close to home)",
    ),
    "avoid_physical_work": (
        frozenset({"physical"}),
        40.0,
        "Involves significant physical demands (you noted physical work may be difficult)",
    ),
}

LIMITED_BUDGET_MAX_TIER = EducationTier.COLLEGE_TECHNICAL.value
LIMITED_BUDGET_PENALTY_PER_TIER = 20.0

# =============================================================================
# REASONING
# =============================================================================

REASONING_FACTOR_COUNT = 3
MIN_REASONING_FACTORS = 2

# =============================================================================
# CLASSIFICATION THRESHOLDS
# =============================================================================

class FitCategory(str, Enum):
    """Classification categories for career fit."""
    BEST_FIT = "best_fit"
    GOOD_FIT = "good_fit"
    STRETCH_OPTION = "stretch_option"


BEST_FIT_MIN_SCORE = 65
BEST_FIT_RELATIVE = 0.90       # Share of the top score
GOOD_FIT_MIN_SCORE = 50
GOOD_FIT_RELATIVE = 0.75

# =============================================================================
# RANKING / OUTPUT CONFIGURATION
# =============================================================================

DEFAULT_TOP_N = 5
CLUSTER_TOP_K = 3              # Careers averaged per cluster score
MAX_TOP_CLUSTERS = 3
ENGINE_VERSION = "1.0.0"

DISCLAIMER = (
    "These recommendations are based on your assessment responses and are meant "
    "to guide your exploration. Consider your personal circumstances, local "
    "opportunities, and changing interests as you make decisions about your future."
)

# =============================================================================
# SUBJECT / THEME TABLES
# =============================================================================

# Sector -> subjects that signal academic readiness
SECTOR_SUBJECTS: Dict[str, List[str]] = {
    "healthcare": ["biology", "chemistry", "health"],
    "technology": ["math", "computer_science"],
    "engineering": ["math", "physics", "computer_science"],
    "infrastructure": ["math", "physics", "shop"],
    "manufacturing": ["math", "shop"],
    "business": ["math", "business", "english"],
    "finance": ["math", "business"],
    "education": ["english", "history", "psychology"],
    "creative": ["art", "english", "music"],
    "science": ["biology", "chemistry", "physics", "math"],
    "public_service": ["history", "english", "physical_education"],
    "law": ["english", "history"],
    "communication": ["english", "foreign_languages"],
}

# Subject -> interest themes it signals
SUBJECT_THEMES: Dict[str, List[str]] = {
    "biology": ["science", "healthcare"],
    "chemistry": ["science", "healthcare"],
    "physics": ["science", "engineering"],
    "math": ["analytical"],
    "computer_science": ["technology"],
    "health": ["healthcare"],
    "art": ["creative"],
    "music": ["creative"],
    "english": ["communication"],
    "foreign_languages": ["communication"],
    "history": ["public_service"],
    "business": ["business"],
    "psychology": ["helping"],
    "shop": ["hands_on"],
    "physical_education": ["physical"],
}

# Interest theme -> keywords looked for in free-text answers
THEME_KEYWORDS: Dict[str, List[str]] = {
    "healthcare": ["hospital", "nurse", "nursing", "doctor", "medical", "medicine", "health", "patient", "clinic"],
    "technology": ["computer", "coding", "code", "programming", "software", "app", "website", "robot", "robotics", "tech"],
    "engineering": ["engineer", "engineering", "design", "machine", "bridge", "rocket", "aerospace"],
    "creative": ["art", "draw", "drawing", "paint", "painting", "music", "photography", "film", "writing", "design"],
    "hands_on": ["build", "building", "fix", "fixing", "tools", "car", "cars", "woodworking", "welding", "repair"],
    "helping": ["help", "helping", "volunteer", "volunteering", "community", "kids", "children", "care"],
    "business": ["business", "money", "sell", "selling", "store", "entrepreneur", "marketing"],
    "science": ["science", "lab", "experiment", "research", "biology", "chemistry", "space"],
    "public_service": ["police", "firefighter", "military", "protect", "safety", "law", "justice"],
    "outdoors": ["outdoors", "outside", "nature", "animals", "farm", "hiking", "environment"],
    "education": ["teach", "teaching", "tutor", "tutoring", "coach", "coaching", "school"],
}

# Style answers -> tags added to the interest set
HANDS_ON_TAGS: Dict[str, List[str]] = {
    "high": ["hands_on"],
}

STYLE_TAGS: Dict[str, List[str]] = {
    "analytical": ["analytical", "problem_solver"],
    "creative": ["creative"],
    "practical": ["hands_on", "problem_solver"],
    "collaborative": ["collaborative", "helping"],
}

# =============================================================================
# NORMALIZATION WARNINGS
# =============================================================================

class WarningCode(str, Enum):
    """Why a questionnaire answer could not be used as given."""
    MISSING = "missing"        # Required question not answered
    INVALID = "invalid"        # Unusable value, default applied (ZIP is kept)
    CLAMPED = "clamped"        # Numeric value pulled into range
    COERCED = "coerced"        # Scalar/list shape fixed up
    SKIPPED = "skipped"        # Scoring dimension will run neutral

# =============================================================================
# PATHWAY RULE TABLES
# =============================================================================

PATHWAY_STEP_TEMPLATES: Dict[str, List[str]] = {
    EducationTier.SHORT_TRAINING.value: [
        "Identify accredited {title} training programs or apprenticeships",
        "Enroll in a {sector} certificate or apprenticeship program",
        "Complete the required training hours and coursework",
        "Earn the certification or license required to work as a {title}",
        "Apply for entry-level {title} positions",
    ],
    EducationTier.COLLEGE_TECHNICAL.value: [
        "Research community college or technical programs that train {title} candidates",
        "Apply and enroll in a 2-year {sector} program",
        "Complete an associate degree or technical diploma",
        "Pass any licensing or certification exam required for {title} work",
        "Apply for {title} positions and gain on-the-job experience",
    ],
    EducationTier.FOUR_YEAR.value: [
        "Research 4-year colleges with strong {sector} programs",
        "Apply to colleges and financial aid programs",
        "Complete a bachelor's degree in a field related to {title} work",
        "Gain internship or co-op experience in {sector}",
        "Apply for entry-level {title} roles",
    ],
    EducationTier.ADVANCED.value: [
        "Research undergraduate programs that lead to graduate study in {sector}",
        "Complete a bachelor's degree with prerequisite coursework",
        "Gain research, clinical or internship experience in {sector}",
        "Apply to and complete graduate or professional school",
        "Complete required residency, licensing or certification to practice as a {title}",
    ],
}

HIGH_SCHOOL_STEP_TEMPLATE = "Use the rest of high school (grade {grade} on) to take courses in {subjects}"
HIGH_SCHOOL_STEP_GENERIC = "Use the rest of high school (grade {grade} on) to explore {sector} through classes and activities"
LAST_HIGH_SCHOOL_GRADE = 12

# (upper bound in years, label); first match wins. The first bound is exclusive,
# the rest inclusive.
TIMELINE_BANDS: List[Tuple[float, str]] = [
    (1.0, "Less than 1 year"),
    (2.0, "1-2 years"),
    (4.0, "2-4 years"),
    (6.0, "4-6 years"),
    (8.0, "6-8 years"),
]
TIMELINE_OVERFLOW_LABEL = "8+ years"

# Education tier -> skills, split by when they need attention
TIER_SKILLS: Dict[str, Dict[str, List[str]]] = {
    EducationTier.SHORT_TRAINING.value: {
        "immediate": ["reliability", "safety_awareness", "following_instructions"],
        "long_term": ["licensing_exam_preparation", "customer_service"],
    },
    EducationTier.COLLEGE_TECHNICAL.value: {
        "immediate": ["study_habits", "time_management"],
        "long_term": ["technical_certification", "professional_communication"],
    },
    EducationTier.FOUR_YEAR.value: {
        "immediate": ["study_habits", "writing", "time_management"],
        "long_term": ["internship_experience", "professional_networking"],
    },
    EducationTier.ADVANCED.value: {
        "immediate": ["study_habits", "writing", "math"],
        "long_term": ["research_experience", "graduate_entrance_exam_preparation", "professional_networking"],
    },
}

# Sector -> skills specific to the field
SECTOR_SKILLS: Dict[str, Dict[str, List[str]]] = {
    "healthcare": {"immediate": ["biology", "empathy"], "long_term": ["clinical_skills", "patience"]},
    "technology": {"immediate": ["math", "problem_solving"], "long_term": ["programming", "teamwork"]},
    "engineering": {"immediate": ["math", "physics"], "long_term": ["technical_design", "project_management"]},
    "infrastructure": {"immediate": ["math", "hands_on_skills"], "long_term": ["blueprint_reading", "safety_certification"]},
    "manufacturing": {"immediate": ["hands_on_skills"], "long_term": ["equipment_operation", "quality_control"]},
    "business": {"immediate": ["communication", "math"], "long_term": ["leadership", "financial_literacy"]},
    "finance": {"immediate": ["math", "attention_to_detail"], "long_term": ["financial_literacy", "data_analysis"]},
    "education": {"immediate": ["communication", "patience"], "long_term": ["classroom_management", "leadership"]},
    "creative": {"immediate": ["creativity", "portfolio_building"], "long_term": ["digital_tools", "self_promotion"]},
    "science": {"immediate": ["math", "curiosity"], "long_term": ["research_methods", "data_analysis"]},
    "public_service": {"immediate": ["physical_fitness", "communication"], "long_term": ["leadership", "crisis_management"]},
    "law": {"immediate": ["writing", "critical_thinking"], "long_term": ["public_speaking", "legal_research"]},
    "communication": {"immediate": ["writing", "communication"], "long_term": ["public_speaking", "digital_tools"]},
}

# Skill -> student tags (traits, subjects, themes) that already evidence it
SKILL_EVIDENCE: Dict[str, List[str]] = {
    "empathy": ["compassionate", "helping"],
    "patience": ["patient"],
    "problem_solving": ["analytical", "problem_solver"],
    "critical_thinking": ["analytical"],
    "creativity": ["creative"],
    "communication": ["outgoing", "english", "communication"],
    "writing": ["english"],
    "leadership": ["leader"],
    "teamwork": ["collaborative"],
    "attention_to_detail": ["detail_oriented"],
    "curiosity": ["curious"],
    "hands_on_skills": ["hands_on", "practical", "shop"],
    "physical_fitness": ["physical_education", "athletic"],
    "reliability": ["dependable"],
    "time_management": ["organized"],
    "study_habits": ["organized", "persistent"],
    "programming": ["computer_science"],
}
