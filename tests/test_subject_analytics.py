import pytest

from academic_records.schemas.grade_mappings import GradeMapping
from academic_records.services.subject_analytics import (
    analyze_subject,
    grade_distribution,
    marks_range_distribution,
)


def test_analyze_subject(simple_scale):
    enrollment_ids = ["e1", "e2", "e3", "e4", "e5"]
    marks = {"e1": 95, "e2": 85, "e3": 30, "e4": None}

    result = analyze_subject(enrollment_ids, marks, simple_scale)

    assert result.total_students == 5
    assert result.graded_students == 3
    assert result.passed == 2
    assert result.failed == 1
    assert result.pass_rate == pytest.approx(200 / 3)
    assert result.average == pytest.approx(70.0)
    assert result.avg_grade_point == pytest.approx(7 / 3)
    assert result.highest == 95
    assert result.lowest == 30
    assert [(d.grade, d.count, d.percentage) for d in result.distribution] == [
        ("A", 1, 33.3),
        ("B", 1, 33.3),
        ("F", 1, 33.3),
    ]


def test_analyze_subject_without_grades_returns_none(simple_scale):
    assert analyze_subject(["e1", "e2"], {}, simple_scale) is None
    assert analyze_subject([], {}, simple_scale) is None


def test_analyze_subject_custom_pass_mark(simple_scale):
    result = analyze_subject(["e1", "e2"], {"e1": 55, "e2": 45}, simple_scale, pass_mark=50)
    assert result.passed == 1
    assert result.pass_rate == 50.0


def test_distribution_unmapped_marks_count_as_f():
    gapped = [
        GradeMapping(letter_grade="A", grade_point=4.0, min_marks=90, max_marks=100),
        GradeMapping(letter_grade="C", grade_point=2.0, min_marks=50, max_marks=69),
    ]
    dist = grade_distribution([95, 75, 60, 20], gapped)
    assert [(d.grade, d.count) for d in dist] == [("A", 1), ("C", 1), ("F", 2)]


def test_distribution_canonical_letter_order():
    scale = [
        GradeMapping(letter_grade="A+", grade_point=4.0, min_marks=80, max_marks=100),
        GradeMapping(letter_grade="B-", grade_point=2.75, min_marks=60, max_marks=79),
        GradeMapping(letter_grade="A-", grade_point=3.5, min_marks=70, max_marks=74),
        GradeMapping(letter_grade="P", grade_point=1.0, min_marks=0, max_marks=59),
    ]
    dist = grade_distribution([10, 62, 72, 99], scale)
    assert [d.grade for d in dist] == ["A+", "A-", "B-", "P"]


def test_marks_range_distribution():
    ranges = marks_range_distribution([0, 39.5, 40, 49, 50, 65, 79.9, 80, 90, 100])
    assert {r.range: r.count for r in ranges} == {
        "0-39": 2,
        "40-49": 2,
        "50-59": 1,
        "60-69": 1,
        "70-79": 1,
        "80-89": 1,
        "90-100": 2,
    }
