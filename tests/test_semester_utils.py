import pytest

from academic_records.services.semester_utils import (
    compare_semesters,
    get_semester_order,
    get_semester_year,
    normalize_semester_name,
    sort_semesters_chronologically,
)


def test_year_extraction():
    assert get_semester_year("Summer 2021") == 2021
    assert get_semester_year("Winter-2023 (Evening)") == 2023
    assert get_semester_year("Orientation") == 0


def test_year_is_first_four_digit_run():
    assert get_semester_year("Summer 2021 batch 2022") == 2021


@pytest.mark.parametrize(
    "name,order",
    [("Summer 2021", 1), ("Spring 2021", 1), ("Winter 2021", 2), ("Fall 2021", 2), ("Trimester 2021", 0)],
)
def test_term_order(name, order):
    assert get_semester_order(name) == order


def test_term_order_is_prefix_only():
    assert get_semester_order("Late Summer 2021") == 0


def test_compare_within_year():
    assert compare_semesters("Summer 2021", "Winter 2021") < 0
    assert compare_semesters("Winter 2021", "Summer 2021") > 0


def test_compare_across_years():
    assert compare_semesters("Winter 2021", "Summer 2022") < 0
    assert compare_semesters("Summer 2023", "Winter 2022") > 0


def test_compare_legacy_aliases_are_equal():
    assert compare_semesters("Spring 2021", "Summer 2021") == 0
    assert compare_semesters("Fall 2021", "Winter 2021") == 0


def test_unknown_terms_rank_first_and_tie():
    assert compare_semesters("Intake 2021", "Summer 2021") < 0
    assert compare_semesters("Intake 2021", "Bridging 2021") == 0


def test_sort_dicts_chronologically():
    semesters = [
        {"id": 3, "name": "Summer 2022"},
        {"id": 2, "name": "Winter 2021"},
        {"id": 1, "name": "Spring 2021"},
    ]
    ordered = sort_semesters_chronologically(semesters)
    assert [s["id"] for s in ordered] == [1, 2, 3]
    # input untouched
    assert semesters[0]["id"] == 3


def test_sort_objects_with_custom_key():
    class Sem:
        def __init__(self, label):
            self.label = label

    ordered = sort_semesters_chronologically([Sem("Winter 2020"), Sem("Fall 2019"), Sem("Summer 2020")], name_key="label")
    assert [s.label for s in ordered] == ["Fall 2019", "Summer 2020", "Winter 2020"]


def test_sort_is_stable_for_ties():
    ordered = sort_semesters_chronologically(["Bridging 2021", "Intake 2021", "Summer 2021"])
    assert ordered == ["Bridging 2021", "Intake 2021", "Summer 2021"]


def test_normalize_semester_name():
    assert normalize_semester_name("Spring 2021") == "Summer 2021"
    assert normalize_semester_name("Fall 2021") == "Winter 2021"
    assert normalize_semester_name("Summer 2021") == "Summer 2021"
    assert normalize_semester_name("Pre-Fall 2021") == "Pre-Fall 2021"
