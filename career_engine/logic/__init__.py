"""
Career Matching Logic Module

Provides the deterministic scoring engine for career recommendations.
"""

from .contracts import (
    StudentProfile,
    Career,
    Cluster,
    ValueProfile,
    DimensionScore,
    MatchResult,
    ClusterScore,
    PathwayPlan,
    SkillGaps,
    FieldWarning,
    ResultPayload,
)
from .taxonomy import TaxonomyStore, CatalogError, load_taxonomy, load_default_taxonomy
from .normalizer import normalize
from .pathway import build_pathway
from .output_assembler import assemble
from .engine import CareerMatchingEngine, score_all, get_recommendations
from .constants import EducationTier, FitCategory, WarningCode, DIMENSION_WEIGHTS

__all__ = [
    # Main engine
    "CareerMatchingEngine",
    "score_all",
    "get_recommendations",

    # Pipeline stages
    "normalize",
    "build_pathway",
    "assemble",

    # Taxonomy
    "TaxonomyStore",
    "CatalogError",
    "load_taxonomy",
    "load_default_taxonomy",

    # Contracts
    "StudentProfile",
    "Career",
    "Cluster",
    "ValueProfile",
    "DimensionScore",
    "MatchResult",
    "ClusterScore",
    "PathwayPlan",
    "SkillGaps",
    "FieldWarning",
    "ResultPayload",

    # Enums / constants
    "EducationTier",
    "FitCategory",
    "WarningCode",
    "DIMENSION_WEIGHTS",
]
