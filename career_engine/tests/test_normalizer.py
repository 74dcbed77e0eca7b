"""
Test questionnaire normalization: defaults, coercions and warnings.
"""

import pytest
from pydantic import ValidationError

from career_engine.logic import normalize, WarningCode


def _codes(warnings, field):
    return [w.code for w in warnings if w.field == field]


def test_empty_responses_use_defaults():
    """An empty answer set still yields a usable profile."""
    profile, warnings = normalize({})

    assert profile.grade == 11
    assert profile.zip_code == ""
    assert profile.education_willingness == "college_technical"
    assert profile.personal_traits == ()
    for question in ("q1_grade_zip", "q5_education_willingness", "q7_academic_performance", "q10_traits"):
        assert WarningCode.MISSING in _codes(warnings, question)
    for dimension in ("interest_fit", "academic_fit", "environment_fit", "values_fit"):
        assert WarningCode.SKIPPED in _codes(warnings, dimension)
    assert {"grade", "zip_code", "education_willingness", "personal_traits"} <= set(profile.defaulted_fields)


def test_non_mapping_responses():
    profile, warnings = normalize(["not", "a", "dict"])

    assert profile.grade == 11
    assert _codes(warnings, "responses") == [WarningCode.INVALID]


@pytest.mark.parametrize("raw_grade,expected", [(17, 13), (3, 9), ("8", 9)])
def test_grade_out_of_range_is_clamped(raw_grade, expected):
    profile, warnings = normalize({"q1_grade_zip": {"grade": raw_grade, "zipCode": "10001"}})

    assert profile.grade == expected
    assert WarningCode.CLAMPED in _codes(warnings, "q1_grade_zip")


def test_grade_string_with_suffix():
    profile, warnings = normalize({"q1_grade_zip": {"grade": "10th", "zipCode": "10001"}})

    assert profile.grade == 10
    assert _codes(warnings, "q1_grade_zip") == []


def test_unreadable_grade_defaults():
    profile, warnings = normalize({"q1_grade_zip": {"grade": "sixteen", "zipCode": "10001"}})

    assert profile.grade == 11
    assert WarningCode.INVALID in _codes(warnings, "q1_grade_zip")
    assert "grade" in profile.defaulted_fields


def test_invalid_zip_is_kept_with_warning():
    profile, warnings = normalize({"q1_grade_zip": {"grade": 11, "zipCode": "ABC"}})

    assert profile.zip_code == "ABC"
    assert WarningCode.INVALID in _codes(warnings, "q1_grade_zip")


def test_bare_grade_answer_is_coerced():
    profile, warnings = normalize({"q1_grade_zip": 12})

    assert profile.grade == 12
    assert profile.zip_code == ""
    assert WarningCode.COERCED in _codes(warnings, "q1_grade_zip")
    assert "zip_code" in profile.defaulted_fields


def test_scalar_multi_select_becomes_list():
    profile, warnings = normalize({"q10_traits": "Curious and inquisitive"})

    assert profile.personal_traits == ("curious",)
    assert WarningCode.COERCED in _codes(warnings, "q10_traits")


def test_list_single_choice_keeps_first():
    profile, warnings = normalize({"q3_hands_on_preference": ["high", "low"]})

    assert profile.hands_on_preference == "high"
    assert WarningCode.COERCED in _codes(warnings, "q3_hands_on_preference")


def test_dict_multi_select_is_ignored():
    profile, warnings = normalize({"q2_work_environment": {"unexpected": "shape"}})

    assert profile.work_environment_preferences == ()
    assert WarningCode.INVALID in _codes(warnings, "q2_work_environment")


def test_questionnaire_labels_map_to_tags():
    """Long answer labels shown to students become canonical tags."""
    profile, warnings = normalize({
        "q1_grade_zip": {"grade": "11", "zipCode": "78735"},
        "q2_work_environment": ["Indoors (offices, hospitals, schools)", "From home / remote"],
        "q4_problem_solving_style": "Understanding how systems or machines work",
        "q5_education_willingness": "4+ years (college and possibly graduate school)",
        "q6_academic_interests": ["Science (Biology, Chemistry, Physics)"],
        "q7_academic_performance": {
            "Math": "Excellent",
            "English / Language Arts": "Needs Improvement",
            "Art / Creative Subjects": "Haven't taken yet",
        },
        "q10_traits": ["Detail-oriented and organized", "Patient and persistent"],
        "q11_income_importance": "Very important",
        "q14_constraints": ["stay_close_home", "Need to earn money soon"],
    })

    assert profile.work_environment_preferences == ("indoors", "remote")
    assert profile.problem_solving_style == "analytical"
    assert profile.education_willingness == "advanced"
    assert profile.subjects_strengths == ("biology", "chemistry", "physics")
    assert profile.academic_performance == (("english", "fair"), ("math", "excellent"))
    assert profile.rating_for("math") == "excellent"
    assert profile.personal_traits == ("detail_oriented", "organized", "patient", "persistent")
    assert profile.income_importance == "very_important"
    assert profile.constraints == ("earn_money_soon", "stay_close_to_home")
    assert [w for w in warnings if w.code != WarningCode.SKIPPED] == []


def test_tag_sets_are_sorted_and_unique():
    profile, _ = normalize({"q10_traits": ["Outgoing and social", "Creative and artistic", "outgoing"]})

    assert profile.personal_traits == ("creative", "outgoing")


def test_unknown_question_ids_are_ignored():
    _, warnings = normalize({"q99_unknown_question": "ignored", "q10_traits": ["Creative and artistic"]})

    assert all(w.field != "q99_unknown_question" for w in warnings)


def test_education_ordinal_and_undecided():
    profile, _ = normalize({"q5_education_willingness": 2})
    assert profile.education_willingness == "four_year"

    profile, warnings = normalize({"q5_education_willingness": "Not sure"})
    assert profile.education_willingness == "college_technical"
    assert "education_willingness" in profile.defaulted_fields
    assert _codes(warnings, "q5_education_willingness") == []


def test_unrecognized_choice_falls_back():
    profile, warnings = normalize({
        "q5_education_willingness": "space_academy",
        "q4_problem_solving_style": "interpretive dance",
    })

    assert profile.education_willingness == "college_technical"
    assert profile.problem_solving_style == "unsure"
    assert WarningCode.INVALID in _codes(warnings, "q5_education_willingness")
    assert WarningCode.INVALID in _codes(warnings, "q4_problem_solving_style")


def test_no_constraint_answer_is_dropped():
    profile, _ = normalize({"q14_constraints": ["None"]})

    assert profile.constraints == ()


def test_malformed_values_never_raise():
    profile, warnings = normalize({
        "q7_academic_performance": ["Math", "Excellent"],
        "q8_interests_text": {"text": "coding"},
        "q9_experience_text": 5,
        "q11_income_importance": {"very": True},
    })

    assert profile.academic_performance == ()
    assert profile.free_text_interests == ""
    assert profile.free_text_experience == "5"
    assert profile.income_importance == "not_sure"
    assert WarningCode.INVALID in _codes(warnings, "q7_academic_performance")
    assert WarningCode.COERCED in _codes(warnings, "q9_experience_text")


def test_profile_is_immutable():
    profile, _ = normalize({})

    with pytest.raises(ValidationError):
        profile.grade = 12


def test_academic_ratings_cannot_be_edited(healthcare_profile):
    with pytest.raises(TypeError):
        healthcare_profile.academic_performance[0] = ("art", "excellent")
    assert healthcare_profile.rating_for("art") is None


def test_non_ascii_digits_are_not_a_zip_code():
    profile, warnings = normalize({"q1_grade_zip": {"grade": 11, "zipCode": "١٢٣٤٥"}})

    assert profile.zip_code == "١٢٣٤٥"
    assert WarningCode.INVALID in _codes(warnings, "q1_grade_zip")
