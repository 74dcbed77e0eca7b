"""
Score Aggregator

Combines individual dimension scores into an overall 0-100 match score
and derives the reasoning and feasibility notes for each career.
"""

import logging
from typing import List, Optional, Sequence

from .contracts import StudentProfile, Career, DimensionScore, MatchResult
from .dimension_scorers import score_interest_fit, SCORERS
from .constants import (
    DIMENSION_WEIGHTS,
    MAX_SCORE,
    REASONING_FACTOR_COUNT,
    MIN_REASONING_FACTORS,
)
from .tags import profile_interest_tags

logger = logging.getLogger(__name__)

_DIMENSION_ORDER = {dimension: index for index, dimension in enumerate(DIMENSION_WEIGHTS)}


def build_reasoning(dimension_scores: Sequence[DimensionScore]) -> List[str]:
    """
    Pick the dimensions that contributed most to the score.

    Ordered by weighted contribution, ties by dimension order. Dimensions
    without student data are only used when fewer than MIN_REASONING_FACTORS
    informative ones exist.
    """
    ordered = sorted(
        dimension_scores,
        key=lambda d: (-d.weighted_score, _DIMENSION_ORDER.get(d.dimension, len(_DIMENSION_ORDER))),
    )
    informative = [d for d in ordered if not d.skipped]
    if len(informative) < MIN_REASONING_FACTORS:
        fillers = [d for d in ordered if d.skipped]
        informative = informative + fillers[:MIN_REASONING_FACTORS - len(informative)]
    return [d.explanation for d in informative[:REASONING_FACTOR_COUNT]]


def score_career(
    profile: StudentProfile,
    career: Career,
    interest_tags: Optional[frozenset] = None,
) -> MatchResult:
    """
    Compute all dimension scores for one career and aggregate them.

    Args:
        profile: Normalized student profile
        career: Catalog entry to score
        interest_tags: Precomputed profile interest tags (optional)

    Returns:
        MatchResult with rank 0 and no fit category yet
    """
    if interest_tags is None:
        interest_tags = profile_interest_tags(profile)

    dimension_scores: List[DimensionScore] = []
    feasibility_notes: List[str] = []

    for scorer in SCORERS:
        if scorer is score_interest_fit:
            dimension, notes = scorer(profile, career, interest_tags)
        else:
            dimension, notes = scorer(profile, career)
        dimension_scores.append(dimension)
        feasibility_notes.extend(notes)

    # Weighted sum, rounded and clamped
    total = sum(d.weighted_score for d in dimension_scores)
    score = int(max(0, min(MAX_SCORE, round(total))))

    logger.debug(f"Scored {career.id}: {score} ({', '.join(f'{d.dimension}={d.score:g}' for d in dimension_scores)})")

    return MatchResult(
        career=career,
        score=score,
        reasoning=build_reasoning(dimension_scores),
        feasibility_notes=feasibility_notes,
        dimension_scores=dimension_scores,
    )


def batch_score(profile: StudentProfile, careers: Sequence[Career]) -> List[MatchResult]:
    """Score every career in catalog order."""
    interest_tags = profile_interest_tags(profile)
    return [score_career(profile, career, interest_tags) for career in careers]
