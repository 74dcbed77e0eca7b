"""
Ranker

Orders matches and derives cluster-level scores.
Ordering is load-bearing: identical input must always produce identical
output, so every sort here is stable over catalog order.
"""

from typing import List, Optional, Sequence

from .contracts import MatchResult, Cluster, ClusterScore
from .constants import CLUSTER_TOP_K


def rank_matches(matches: Sequence[MatchResult]) -> List[MatchResult]:
    """
    Sort by score (descending) and assign 1-based ranks.

    Python's sort is stable, so equal scores keep their catalog order.
    """
    ranked = sorted(matches, key=lambda match: match.score, reverse=True)
    return [
        match.model_copy(update={"rank": position})
        for position, match in enumerate(ranked, start=1)
    ]


def score_clusters(
    matches: Sequence[MatchResult],
    clusters: Sequence[Cluster],
    top_k: int = CLUSTER_TOP_K,
    limit: Optional[int] = None,
) -> List[ClusterScore]:
    """
    Score each cluster as the mean of its best ``top_k`` career scores.

    Clusters with no scored careers are left out. Sorted by score
    descending, ties in cluster catalog order.
    """
    results: List[ClusterScore] = []

    for cluster in clusters:
        members = sorted(
            (match for match in matches if match.career.cluster_id == cluster.id),
            key=lambda match: match.score,
            reverse=True,
        )[:top_k]
        if not members:
            continue

        mean_score = sum(match.score for match in members) / len(members)
        results.append(ClusterScore(
            cluster_id=cluster.id,
            name=cluster.name,
            score=int(round(mean_score)),
            reasoning=[f"Strongest matches: {', '.join(match.career.title for match in members)}"],
        ))

    results.sort(key=lambda cluster_score: cluster_score.score, reverse=True)
    if limit is not None:
        results = results[:limit]
    return results
