import itertools

from models import GroupedTeacher, Teacher
from teachers import group_by_name, representative_row, subjects_for

ROWS = [
    Teacher(id=4, name="Omar Said", subject="Physics"),
    Teacher(id=1, name="Jane Doe", subject="Maths"),
    Teacher(id=7, name="Jane Doe", subject="Chemistry"),
    Teacher(id=9, name="Jane Doe", subject="Maths"),
    Teacher(id=2, name="Ali Hassan", subject="English"),
]


def test_group_by_name_collapses_subject_rows():
    assert group_by_name(ROWS) == [
        GroupedTeacher(name="Ali Hassan", representative_id=2, subjects=("English",)),
        GroupedTeacher(name="Jane Doe", representative_id=1, subjects=("Chemistry", "Maths")),
        GroupedTeacher(name="Omar Said", representative_id=4, subjects=("Physics",)),
    ]


def test_group_by_name_ignores_row_order():
    expected = group_by_name(ROWS)
    for permutation in itertools.permutations(ROWS):
        assert group_by_name(permutation) == expected


def test_group_by_name_skips_blank_subjects():
    rows = [Teacher(id=1, name="Jane Doe", subject=""), Teacher(id=2, name="Jane Doe", subject="Art")]
    assert group_by_name(rows)[0].subjects == ("Art",)
    assert group_by_name([]) == []


def test_subjects_for_one_teacher():
    assert subjects_for(ROWS, "Jane Doe") == ["Chemistry", "Maths"]
    assert subjects_for(ROWS, "Nobody") == []


def test_representative_row_matches_grouping():
    row = representative_row(reversed(ROWS), "Jane Doe")
    assert row == Teacher(id=1, name="Jane Doe", subject="Maths")
    assert representative_row(ROWS, "Nobody") is None
