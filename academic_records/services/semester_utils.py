"""
Semester ordering and display helpers.

The academic calendar runs two terms per year:
- Summer (formerly Spring) = 1st semester of the year
- Winter (formerly Fall)   = 2nd semester of the year

Canonical order: Summer YYYY, Winter YYYY, Summer YYYY+1, ...
"""

import re
from functools import cmp_to_key
from typing import Any, List, Sequence, TypeVar

T = TypeVar("T")

YEAR_PATTERN = re.compile(r"\d{4}")

# prefix -> term order; legacy names share the rank of their replacement
TERM_ORDER = (
    ("Summer", 1),
    ("Winter", 2),
    ("Spring", 1),
    ("Fall", 2),
)


def get_semester_order(semester_name: str) -> int:
    """Term rank within a year: Summer/Spring = 1, Winter/Fall = 2, unknown = 0."""
    for prefix, order in TERM_ORDER:
        if semester_name.startswith(prefix):
            return order
    return 0


def get_semester_year(semester_name: str) -> int:
    """First run of 4 digits ("Summer 2021" -> 2021), 0 when there is none."""
    match = YEAR_PATTERN.search(semester_name)
    return int(match.group(0)) if match else 0


def compare_semesters(a: str, b: str) -> int:
    year_a = get_semester_year(a)
    year_b = get_semester_year(b)
    if year_a != year_b:
        return year_a - year_b
    return get_semester_order(a) - get_semester_order(b)


def _semester_name(item: Any, name_key: str) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        return str(item.get(name_key, ""))
    return str(getattr(item, name_key, ""))


def sort_semesters_chronologically(semesters: Sequence[T], name_key: str = "name") -> List[T]:
    """
    Return a new list sorted by calendar order. Items may be plain names,
    dicts or objects carrying the name under ``name_key``. The sort is
    stable, so semesters that compare equal keep their input order.
    """
    return sorted(
        semesters,
        key=cmp_to_key(lambda a, b: compare_semesters(_semester_name(a, name_key), _semester_name(b, name_key))),
    )


def normalize_semester_name(name: str) -> str:
    """Rename legacy terms: Spring -> Summer, Fall -> Winter."""
    return re.sub(r"^Fall", "Winter", re.sub(r"^Spring", "Summer", name))
