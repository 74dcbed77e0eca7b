"""
Shared fixtures: a two-career catalog, the packaged catalog and canned
questionnaire answers.
"""

import pytest

from career_engine.logic import (
    Career,
    Cluster,
    StudentProfile,
    TaxonomyStore,
    ValueProfile,
    load_default_taxonomy,
)


@pytest.fixture
def nurse():
    return Career(
        id="registered_nurse",
        title="Registered Nurse",
        sector="healthcare",
        cluster_id="C2",
        required_education_level="college_technical",
        time_to_entry_years=2,
        average_salary=75000,
        trait_tags=["compassionate", "patient"],
        interest_tags=["healthcare"],
        work_environment_tags=["indoors"],
        value_profile=ValueProfile(income=0.7, stability=0.9, helping=0.9),
    )


@pytest.fixture
def developer():
    return Career(
        id="software_developer",
        title="Software Developer",
        sector="technology",
        cluster_id="C3",
        required_education_level="four_year",
        time_to_entry_years=4,
        average_salary=85000,
        trait_tags=["analytical", "independent"],
        interest_tags=["technology", "problem_solver"],
        work_environment_tags=["indoors", "remote"],
        value_profile=ValueProfile(income=0.8, stability=0.65, helping=0.4),
    )


@pytest.fixture
def clusters():
    return (
        Cluster(id="C2", name="Healthcare & Life Sciences",
                value_profile=ValueProfile(income=0.7, stability=0.9, helping=0.9)),
        Cluster(id="C3", name="Engineering & Technology",
                value_profile=ValueProfile(income=0.8, stability=0.65, helping=0.4)),
    )


@pytest.fixture
def small_taxonomy(nurse, developer, clusters):
    return TaxonomyStore((nurse, developer), clusters)


@pytest.fixture(scope="session")
def taxonomy():
    return load_default_taxonomy()


@pytest.fixture
def catalog_document():
    """Minimal valid catalog document in its JSON (camelCase) shape."""
    return {
        "clusters": [
            {"id": "C1", "name": "Skilled Trades",
             "valueProfile": {"income": 0.6, "stability": 0.8, "helping": 0.5}},
        ],
        "careers": [
            {
                "id": "welder", "title": "Welder", "sector": "manufacturing", "clusterId": "C1",
                "requiredEducationLevel": "short_training", "timeToEntryYears": 1, "averageSalary": 47000,
                "traitTags": ["practical"], "interestTags": ["hands_on"], "workEnvironmentTags": ["indoors"],
            },
        ],
    }


@pytest.fixture
def healthcare_profile():
    return StudentProfile(
        grade=11,
        zip_code="78735",
        education_willingness="college_technical",
        subjects_strengths=["biology", "chemistry"],
        academic_performance={"biology": "excellent", "chemistry": "good"},
        personal_traits=["compassionate", "patient"],
    )


@pytest.fixture
def healthcare_responses():
    return {
        "q1_grade_zip": {"grade": "11", "zipCode": "78735"},
        "q2_work_environment": ["Indoors (offices, hospitals, schools)"],
        "q5_education_willingness": "college_technical",
        "q6_academic_interests": ["Biology", "Chemistry"],
        "q7_academic_performance": {"Biology": "Excellent", "Chemistry": "Good"},
        "q10_traits": ["Compassionate and caring", "Patient and persistent"],
        "q13_helping_importance": "Very important",
    }
