"""
Taxonomy Store

Holds the static catalog of careers and clusters. Loaded once at startup,
read-only afterwards, so a single store is safe to share across threads.

A malformed catalog is a deployment error: every problem found in the
document is collected and raised together as one CatalogError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .contracts import Career, Cluster

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "careers.v1.json"


class CatalogError(ValueError):
    """Raised when the career catalog cannot be loaded. Carries every problem found."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        summary = "; ".join(self.problems[:5])
        if len(self.problems) > 5:
            summary += f"; ... ({len(self.problems) - 5} more)"
        super().__init__(f"Invalid career catalog ({len(self.problems)} problem(s)): {summary}")


class TaxonomyStore:
    """Immutable view over validated careers and clusters, in catalog order."""

    def __init__(self, careers: Tuple[Career, ...], clusters: Tuple[Cluster, ...] = ()):
        self._careers = tuple(careers)
        self._clusters = tuple(clusters)
        self._careers_by_id = {career.id: career for career in self._careers}
        self._clusters_by_id = {cluster.id: cluster for cluster in self._clusters}

    @property
    def careers(self) -> Tuple[Career, ...]:
        return self._careers

    @property
    def clusters(self) -> Tuple[Cluster, ...]:
        return self._clusters

    def get_career(self, career_id: str) -> Optional[Career]:
        return self._careers_by_id.get(career_id)

    def get_cluster(self, cluster_id: str) -> Optional[Cluster]:
        return self._clusters_by_id.get(cluster_id)

    def careers_in_cluster(self, cluster_id: str) -> List[Career]:
        return [career for career in self._careers if career.cluster_id == cluster_id]

    def __len__(self) -> int:
        return len(self._careers)

    def __iter__(self) -> Iterator[Career]:
        return iter(self._careers)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TaxonomyStore":
        """Read and validate a JSON catalog document."""
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except FileNotFoundError:
            raise CatalogError([f"catalog file not found: {path}"])
        except json.JSONDecodeError as e:
            raise CatalogError([f"catalog file {path} is not valid JSON: {e}"])

        store = load_taxonomy(document)
        logger.info(f"📚 Career catalog loaded from {path}")
        return store


def _format_validation_error(prefix: str, error: ValidationError) -> List[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "entry"
        problems.append(f"{prefix}: {location}: {item['msg']}")
    return problems


def _entry_label(kind: str, index: int, entry: Any) -> str:
    entry_id = entry.get("id") if isinstance(entry, Mapping) else None
    return f"{kind}[{index}]" + (f" ({entry_id})" if entry_id else "")


def load_taxonomy(document: Mapping[str, Any]) -> TaxonomyStore:
    """
    Validate a catalog document and build a TaxonomyStore.

    Expected shape::

        {"clusters": [{...}, ...], "careers": [{...}, ...]}

    Checks every entry for required fields and types, duplicate ids and
    references to unknown clusters. Careers without their own value profile
    inherit their cluster's.

    Raises:
        CatalogError: listing every problem found in the document
    """
    if not isinstance(document, Mapping):
        raise CatalogError([f"catalog must be a JSON object, got {type(document).__name__}"])

    problems: List[str] = []

    raw_clusters = document.get("clusters", [])
    raw_careers = document.get("careers")
    if not isinstance(raw_clusters, list):
        problems.append("'clusters' must be a list")
        raw_clusters = []
    if raw_careers is None:
        problems.append("missing required 'careers' list")
        raw_careers = []
    elif not isinstance(raw_careers, list):
        problems.append("'careers' must be a list")
        raw_careers = []

    # Clusters
    clusters: List[Cluster] = []
    cluster_ids: Dict[str, Cluster] = {}
    for index, entry in enumerate(raw_clusters):
        label = _entry_label("clusters", index, entry)
        try:
            cluster = Cluster.model_validate(entry)
        except ValidationError as e:
            problems.extend(_format_validation_error(label, e))
            continue
        if cluster.id in cluster_ids:
            problems.append(f"{label}: duplicate cluster id '{cluster.id}'")
            continue
        cluster_ids[cluster.id] = cluster
        clusters.append(cluster)

    # Careers
    careers: List[Career] = []
    career_ids = set()
    for index, entry in enumerate(raw_careers):
        label = _entry_label("careers", index, entry)
        try:
            career = Career.model_validate(entry)
        except ValidationError as e:
            problems.extend(_format_validation_error(label, e))
            continue
        if career.id in career_ids:
            problems.append(f"{label}: duplicate career id '{career.id}'")
            continue
        career_ids.add(career.id)

        if career.cluster_id is not None:
            cluster = cluster_ids.get(career.cluster_id)
            if cluster is None:
                problems.append(f"{label}: unknown cluster '{career.cluster_id}'")
                continue
            if career.value_profile is None:
                career = career.model_copy(update={"value_profile": cluster.value_profile})
        careers.append(career)

    if problems:
        logger.error(f"❌ Career catalog rejected with {len(problems)} problem(s)")
        raise CatalogError(problems)

    logger.info(f"📚 Taxonomy ready: {len(careers)} careers across {len(clusters)} clusters")
    return TaxonomyStore(tuple(careers), tuple(clusters))


def load_default_taxonomy() -> TaxonomyStore:
    """Load the catalog packaged with the engine."""
    return TaxonomyStore.from_file(DEFAULT_CATALOG_PATH)
