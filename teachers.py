"""Collapse teacher rows into one entry per teacher name.

The store keeps one row per (name, subject), so the same person shows up
several times. The picker needs one entry per person with all subjects.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from models import GroupedTeacher, Teacher


def _canonical(teachers: Iterable[Teacher]) -> List[Teacher]:
    return sorted(teachers, key=lambda row: (row.name, row.id))


def group_by_name(teachers: Iterable[Teacher]) -> List[GroupedTeacher]:
    """Return one ``GroupedTeacher`` per name, sorted by name.

    Rows are visited in ``(name, id)`` order so the result does not depend
    on the order the rows arrived in; the first row of a name supplies the
    representative id.
    """

    representative: Dict[str, int] = {}
    subjects: Dict[str, set] = {}
    for row in _canonical(teachers):
        representative.setdefault(row.name, row.id)
        bucket = subjects.setdefault(row.name, set())
        if row.subject and row.subject.strip():
            bucket.add(row.subject)
    return [
        GroupedTeacher(
            name=name,
            representative_id=representative[name],
            subjects=tuple(sorted(subjects[name])),
        )
        for name in sorted(representative)
    ]


def subjects_for(teachers: Iterable[Teacher], name: str) -> List[str]:
    """Return the sorted distinct subjects taught by ``name``."""

    return sorted(
        {row.subject for row in teachers if row.name == name and row.subject.strip()}
    )


def representative_row(teachers: Iterable[Teacher], name: str) -> Optional[Teacher]:
    """Return the row a selection of ``name`` resolves to, if any."""

    for row in _canonical(teachers):
        if row.name == name:
            return row
    return None


__all__ = ["group_by_name", "subjects_for", "representative_row"]
