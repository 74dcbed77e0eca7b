"""
Test result payload assembly through the engine.
"""

from career_engine.logic import CareerMatchingEngine, get_recommendations, normalize
from career_engine.logic.output_assembler import assemble, build_suggestions, summarize_profile


def test_top_n_and_all_matches(taxonomy, healthcare_responses):
    engine = CareerMatchingEngine(taxonomy, top_n=3)

    payload = engine.recommend(healthcare_responses)

    assert len(payload.top_job_matches) == 3
    assert len(payload.all_matches) == len(taxonomy)
    assert [m.rank for m in payload.all_matches] == list(range(1, len(taxonomy) + 1))
    assert payload.top_job_matches[0].career.id == payload.all_matches[0].career_id
    assert len(payload.top_clusters) == 3
    assert all(top.pathway.steps for top in payload.top_job_matches)


def test_top_n_override(taxonomy, healthcare_responses):
    payload = CareerMatchingEngine(taxonomy).recommend(healthcare_responses, top_n=1)

    assert len(payload.top_job_matches) == 1


def test_fewer_careers_than_top_n(small_taxonomy, healthcare_responses):
    payload = CareerMatchingEngine(small_taxonomy, top_n=5).recommend(healthcare_responses)

    assert len(payload.top_job_matches) == 2
    assert payload.top_job_matches[0].career.id == "registered_nurse"


def test_complete_answers_have_no_suggestions(taxonomy, healthcare_responses):
    payload = CareerMatchingEngine(taxonomy).recommend(healthcare_responses)

    assert payload.validation.is_complete
    assert payload.validation.warnings == []
    assert payload.validation.suggestions == []


def test_empty_answers_are_incomplete(taxonomy):
    payload = CareerMatchingEngine(taxonomy).recommend({})

    assert not payload.validation.is_complete
    assert "q10_traits: Required question was not answered" in payload.validation.warnings
    assert "Select a few personality traits that describe you" in payload.validation.suggestions
    assert "zipCode" in payload.validation.defaulted_fields
    assert len(payload.top_job_matches) == 5


def test_suggestions_are_unique():
    """Two warnings on the same question give one suggestion."""
    _, warnings = normalize({"q1_grade_zip": {"grade": 20, "zipCode": "ABC"}})

    suggestions = build_suggestions(warnings)

    assert len([w for w in warnings if w.field == "q1_grade_zip"]) == 2
    assert len([s for s in suggestions if s.startswith("Add your grade")]) == 1
    assert len(suggestions) == len(set(suggestions))


def test_profile_summary(healthcare_responses):
    profile, _ = normalize(healthcare_responses)

    summary = summarize_profile(profile)

    assert summary.grade == 11
    assert summary.zip_code == "78735"
    assert summary.key_strengths == ["biology", "chemistry"]
    assert summary.work_environment_preferences == ["indoors"]


def test_camel_case_json(taxonomy, healthcare_responses):
    payload = CareerMatchingEngine(taxonomy).recommend(healthcare_responses, request_id="req-1")

    data = payload.model_dump(by_alias=True, mode="json")

    assert set(data) == {
        "topJobMatches", "allMatches", "topClusters", "validation",
        "studentProfileSummary", "disclaimer", "metadata",
    }
    top = data["topJobMatches"][0]
    assert {"matchScore", "fitCategory", "feasibilityNotes", "pathway"} <= set(top)
    assert "longTerm" in top["pathway"]["skillGaps"]
    assert "requiredEducationLevel" in top["career"]
    assert data["metadata"]["requestId"] == "req-1"
    assert data["metadata"]["engineVersion"] == "1.0.0"
    assert data["metadata"]["processingTimeMs"] >= 0


def test_payload_deterministic_apart_from_metadata(taxonomy, healthcare_responses):
    engine = CareerMatchingEngine(taxonomy)

    first = engine.recommend(healthcare_responses).model_dump(exclude={"metadata"})
    second = engine.recommend(healthcare_responses).model_dump(exclude={"metadata"})

    assert first == second


def test_request_ids_generated(taxonomy):
    engine = CareerMatchingEngine(taxonomy)

    assert engine.recommend({}).metadata.request_id != engine.recommend({}).metadata.request_id


def test_assemble_empty_matches(healthcare_profile):
    payload = assemble([], healthcare_profile, [])

    assert payload.top_job_matches == []
    assert payload.all_matches == []
    assert payload.student_profile_summary.grade == 11


def test_get_recommendations_uses_packaged_catalog(healthcare_responses):
    payload = get_recommendations(healthcare_responses, top_n=2)

    assert len(payload.top_job_matches) == 2
    assert payload.metadata.generated_at is not None
