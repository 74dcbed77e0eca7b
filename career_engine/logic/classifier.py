"""
Classifier

Labels ranked matches with a fit category:
- Best fit (strong score, no feasibility concerns)
- Good fit (solid score)
- Stretch option (worth exploring, with caveats)

Thresholds are both absolute and relative to the best score in the run.
"""

from typing import List, Optional

from .contracts import MatchResult
from .constants import (
    FitCategory,
    BEST_FIT_MIN_SCORE,
    BEST_FIT_RELATIVE,
    GOOD_FIT_MIN_SCORE,
    GOOD_FIT_RELATIVE,
)


def classify_match(match: MatchResult, top_score: Optional[int] = None) -> FitCategory:
    """
    Classify a single match.

    Args:
        match: Scored match
        top_score: Highest score in the same run; without it only the
            absolute thresholds apply

    Returns:
        FitCategory enum value
    """
    score = match.score
    if top_score is None:
        top_score = 0

    if not match.feasibility_notes and (
        score >= BEST_FIT_MIN_SCORE or (top_score > 0 and score >= BEST_FIT_RELATIVE * top_score)
    ):
        return FitCategory.BEST_FIT

    if score >= GOOD_FIT_MIN_SCORE or (top_score > 0 and score >= GOOD_FIT_RELATIVE * top_score):
        return FitCategory.GOOD_FIT

    return FitCategory.STRETCH_OPTION


def classify_all(matches: List[MatchResult]) -> List[MatchResult]:
    """Return copies of the matches with fit_category filled in."""
    if not matches:
        return []
    top_score = max(match.score for match in matches)
    return [
        match.model_copy(update={"fit_category": classify_match(match, top_score).value})
        for match in matches
    ]
