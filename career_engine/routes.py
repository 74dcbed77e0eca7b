"""
Career Assessment API Routes

Exposes the career matching engine via REST API.
Main endpoint: POST /career-assessment/results
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from .cache import TTLCache
from .logic.engine import CareerMatchingEngine
from .logic.normalizer import normalize
from .logic.constants import ENGINE_VERSION


router = APIRouter(prefix="/career-assessment", tags=["career-assessment"])

EXAMPLE_RESPONSES = {
    "q1_grade_zip": {"grade": "11", "zipCode": "78735"},
    "q2_work_environment": ["Indoors (offices, hospitals, schools)"],
    "q5_education_willingness": "college_technical",
    "q6_academic_interests": ["Biology", "Chemistry"],
    "q7_academic_performance": {"Science (Biology, Chemistry, Physics)": "Excellent", "Math": "Good"},
    "q10_traits": ["Compassionate and caring", "Patient and persistent"],
    "q14_constraints": ["earn_money_soon"],
}


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_engine(request: Request) -> CareerMatchingEngine:
    return request.app.state.engine


def get_cache(request: Request) -> Optional[TTLCache]:
    return getattr(request.app.state, "cache", None)


def _require_object(responses: Any) -> Dict[str, Any]:
    if not isinstance(responses, dict):
        raise HTTPException(
            status_code=400,
            detail="Request body must be a JSON object of questionnaire responses keyed by question id",
        )
    return responses


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/results", summary="Get career matches for questionnaire responses")
def get_results(
    responses: Any = Body(..., examples=[EXAMPLE_RESPONSES]),
    top_n: Optional[int] = Query(default=None, ge=1, le=50, description="Matches that get a detailed pathway"),
    engine: CareerMatchingEngine = Depends(get_engine),
):
    """
    Score questionnaire responses against the career catalog.

    **Request Body:** raw responses keyed by question id (`q1_grade_zip`, `q10_traits`, ...).
    Unknown ids are ignored; missing or malformed answers become validation warnings.

    **Response:**
    - `topJobMatches` with reasoning, feasibility notes and a pathway
    - `allMatches` summary for every career
    - `topClusters`, `validation`, `studentProfileSummary`, `metadata`
    """
    payload = engine.recommend(_require_object(responses), top_n=top_n)
    return payload.model_dump(by_alias=True, mode="json")


@router.post("/careers/{career_id}/score", summary="Score one career in detail")
def score_career(
    career_id: str,
    responses: Any = Body(..., examples=[EXAMPLE_RESPONSES]),
    engine: CareerMatchingEngine = Depends(get_engine),
):
    """Per-dimension breakdown for a single career."""
    profile, warnings = normalize(_require_object(responses))
    try:
        result = engine.score_single_career(profile, career_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Career '{career_id}' not found")
    result["warnings"] = [f"{w.field}: {w.message}" for w in warnings]
    return result


@router.get("/careers", summary="List catalog careers")
def list_careers(engine: CareerMatchingEngine = Depends(get_engine)):
    return {
        "careers": [
            career.model_dump(by_alias=True, mode="json", exclude={"value_profile"})
            for career in engine.taxonomy.careers
        ],
        "count": len(engine.taxonomy),
    }


@router.delete("/cache", summary="Clear cached pathway enrichments")
def clear_cache(cache: Optional[TTLCache] = Depends(get_cache)):
    if cache is None:
        return {"cleared": False}
    cache.clear()
    return {"cleared": True}


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Career matching engine health check")
def health_check(engine: CareerMatchingEngine = Depends(get_engine)):
    """Check if the career matching engine is operational."""
    return {
        "status": "ok",
        "engine": "career_matching",
        "version": ENGINE_VERSION,
        "careers": len(engine.taxonomy),
        "enrichment": engine.enricher is not None,
    }
