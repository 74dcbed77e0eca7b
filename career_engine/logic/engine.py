"""
Career Matching Engine

Main orchestrator that combines all scoring components into a single pipeline.
This is the primary entry point for generating career recommendations.
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Union

from .contracts import (
    StudentProfile,
    Career,
    FieldWarning,
    MatchResult,
    ResultMetadata,
    ResultPayload,
)
from .taxonomy import TaxonomyStore, load_default_taxonomy
from .normalizer import normalize
from .aggregator import batch_score
from .classifier import classify_all
from .ranker import rank_matches, score_clusters
from .output_assembler import assemble
from .constants import DEFAULT_TOP_N, MAX_TOP_CLUSTERS, ENGINE_VERSION

logger = logging.getLogger(__name__)


def score_all(
    profile: StudentProfile,
    catalog: Union[TaxonomyStore, Sequence[Career]],
) -> List[MatchResult]:
    """
    Score every career against a profile.

    Returns matches sorted by score descending, ties in catalog order, each
    with a rank and fit category. An empty catalog gives an empty list.
    """
    careers = catalog.careers if isinstance(catalog, TaxonomyStore) else tuple(catalog)
    if not careers:
        return []
    return classify_all(rank_matches(batch_score(profile, careers)))


class CareerMatchingEngine:
    """
    Orchestrates the scoring pipeline over a shared, read-only taxonomy.

    Pipeline flow:
    1. Normalization - Raw responses to StudentProfile + warnings
    2. Dimension Scoring - Score each dimension independently
    3. Aggregation - Combine into a 0-100 match score
    4. Ranking & Classification - Stable sort, best/good/stretch labels
    5. Cluster Scoring - Coarse recommendations per career cluster
    6. Output Assembly - Pathways for the top N, ResultPayload

    Holds no per-request state, so one engine can serve concurrent calls.
    """

    def __init__(
        self,
        taxonomy: TaxonomyStore,
        top_n: int = DEFAULT_TOP_N,
        enricher: Optional[Any] = None,
    ):
        """
        Args:
            taxonomy: Loaded career catalog
            top_n: Matches that get a detailed pathway
            enricher: Optional object with ``enrich(career, profile, plan)``
                that rewrites pathway steps; the rule-based plan is used when absent
        """
        self.taxonomy = taxonomy
        self.top_n = top_n
        self.enricher = enricher
        self.version = ENGINE_VERSION

    def score_all(self, profile: StudentProfile) -> List[MatchResult]:
        return score_all(profile, self.taxonomy)

    def recommend(
        self,
        raw_responses: Any,
        request_id: Optional[str] = None,
        top_n: Optional[int] = None,
    ) -> ResultPayload:
        """
        Generate recommendations from raw questionnaire responses.

        Args:
            raw_responses: Mapping of question id -> answer
            request_id: Caller's request id (generated when missing)
            top_n: Override for the engine's top N

        Returns:
            ResultPayload
        """
        profile, warnings = normalize(raw_responses)
        return self.recommend_from_profile(profile, warnings, request_id=request_id, top_n=top_n)

    def recommend_from_profile(
        self,
        profile: StudentProfile,
        warnings: Sequence[FieldWarning] = (),
        request_id: Optional[str] = None,
        top_n: Optional[int] = None,
    ) -> ResultPayload:
        """Generate recommendations for an already normalized profile."""
        start_time = time.perf_counter()
        request_id = request_id or str(uuid.uuid4())

        logger.info(f"🚀 Starting career matching for request {request_id} ({len(self.taxonomy)} careers)")

        matches = self.score_all(profile)
        if not matches:
            logger.warning("⚠️ Career catalog is empty; returning no matches")
        else:
            logger.info(f"🏆 Top match: {matches[0].career.title} ({matches[0].score})")

        clusters = score_clusters(matches, self.taxonomy.clusters, limit=MAX_TOP_CLUSTERS)
        top_n = self.top_n if top_n is None else top_n
        payload = assemble(matches, profile, warnings, top_n=top_n, clusters=clusters)

        if self.enricher is not None and payload.top_job_matches:
            payload = self._enrich(payload, profile)

        processing_time = (time.perf_counter() - start_time) * 1000
        payload = payload.model_copy(update={
            "metadata": ResultMetadata(
                request_id=request_id,
                generated_at=datetime.now(timezone.utc),
                engine_version=self.version,
                processing_time_ms=round(processing_time, 2),
            )
        })

        logger.info(f"✨ Career matching complete ({processing_time:.2f}ms)")
        return payload

    def _enrich(self, payload: ResultPayload, profile: StudentProfile) -> ResultPayload:
        enriched = [
            top.model_copy(update={"pathway": self.enricher.enrich(top.career, profile, top.pathway)})
            for top in payload.top_job_matches
        ]
        logger.info(f"🪄 Pathways enriched: {sum(1 for top in enriched if top.pathway.enriched)}/{len(enriched)}")
        return payload.model_copy(update={"top_job_matches": enriched})

    def score_single_career(self, profile: StudentProfile, career_id: str) -> dict:
        """
        Score a single career for a student.

        Useful for getting detailed scoring on a specific career
        the student is interested in.

        Raises:
            KeyError: if the career id is not in the catalog
        """
        career = self.taxonomy.get_career(career_id)
        if career is None:
            raise KeyError(f"Unknown career id: {career_id}")

        # Relative thresholds need the whole run
        match = next(m for m in self.score_all(profile) if m.career.id == career.id)

        return {
            "career_id": career.id,
            "title": career.title,
            "score": match.score,
            "fit_category": match.fit_category,
            "reasoning": match.reasoning,
            "feasibility_notes": match.feasibility_notes,
            "dimension_scores": {
                d.dimension: {
                    "score": d.score,
                    "weight": d.weight,
                    "weighted_score": d.weighted_score,
                    "explanation": d.explanation,
                    "skipped": d.skipped,
                }
                for d in match.dimension_scores
            },
        }


# Convenience function for simple usage
def get_recommendations(
    raw_responses: Any,
    taxonomy: Optional[TaxonomyStore] = None,
    top_n: int = DEFAULT_TOP_N,
) -> ResultPayload:
    """
    Run the full pipeline against the packaged catalog (or the given one).
    """
    if taxonomy is None:
        taxonomy = load_default_taxonomy()
    engine = CareerMatchingEngine(taxonomy, top_n=top_n)
    return engine.recommend(raw_responses)
