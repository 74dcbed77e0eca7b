"""
Test catalog loading and validation.
"""

import json

import pytest
from pydantic import ValidationError

from career_engine.logic import CatalogError, TaxonomyStore, load_taxonomy


def test_packaged_catalog_loads(taxonomy):
    assert len(taxonomy) >= 25
    assert len(taxonomy.clusters) == 10
    nurse = taxonomy.get_career("registered_nurse")
    assert nurse.required_education_level == "college_technical"
    assert nurse.value_profile is not None
    assert all(career.cluster_id for career in taxonomy)


def test_camel_case_document(catalog_document):
    store = load_taxonomy(catalog_document)

    welder = store.get_career("welder")
    assert welder.time_to_entry_years == 1
    assert welder.work_environment_tags == ("indoors",)
    assert store.careers_in_cluster("C1") == [welder]


def test_value_profile_inherited_from_cluster(catalog_document):
    store = load_taxonomy(catalog_document)

    assert store.get_career("welder").value_profile == store.get_cluster("C1").value_profile


def test_ordinal_education_tier(catalog_document):
    catalog_document["careers"][0]["requiredEducationLevel"] = 3
    store = load_taxonomy(catalog_document)

    assert store.get_career("welder").required_education_level == "advanced"


def test_all_problems_reported_together(catalog_document):
    """A bad catalog lists every problem, not just the first."""
    broken = dict(catalog_document["careers"][0])
    catalog_document["careers"].extend([
        dict(broken),
        {**broken, "id": "ghost", "clusterId": "C99"},
        {"id": "half", "title": "Half"},
    ])

    with pytest.raises(CatalogError) as excinfo:
        load_taxonomy(catalog_document)

    problems = excinfo.value.problems
    assert any("duplicate career id 'welder'" in problem for problem in problems)
    assert any("unknown cluster 'C99'" in problem for problem in problems)
    assert any(problem.startswith("careers[3] (half)") for problem in problems)
    assert len(problems) >= 3


def test_negative_entry_time_rejected(catalog_document):
    catalog_document["careers"][0]["timeToEntryYears"] = -1

    with pytest.raises(CatalogError):
        load_taxonomy(catalog_document)


@pytest.mark.parametrize("document", [[], {"clusters": []}, {"careers": "welder"}])
def test_bad_document_shape(document):
    with pytest.raises(CatalogError):
        load_taxonomy(document)


def test_from_file(tmp_path, catalog_document):
    path = tmp_path / "careers.json"
    path.write_text(json.dumps(catalog_document), encoding="utf-8")

    store = TaxonomyStore.from_file(path)
    assert [career.id for career in store] == ["welder"]


def test_from_file_errors(tmp_path):
    with pytest.raises(CatalogError):
        TaxonomyStore.from_file(tmp_path / "missing.json")

    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        TaxonomyStore.from_file(path)


def test_careers_are_immutable(taxonomy):
    career = taxonomy.careers[0]

    with pytest.raises(ValidationError):
        career.title = "Something else"
