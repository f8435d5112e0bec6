"""
Values computed from the current view state on every render.

Nothing here is cached or stored; callers pass the collections they hold.
"""

from typing import Iterable, List, Optional, Sequence

from resultmanager.core.entities import EntityId, Result, Section, Student, same_id


UNKNOWN_STUDENT = "Unknown"


def student_name(students: Iterable[Student], student_id: Optional[EntityId]) -> str:
    for student in students:
        if same_id(student.id, student_id):
            return student.name
    return UNKNOWN_STUDENT


def section_student_count(students: Iterable[Student], section: Section) -> int:
    # Plain label equality; renaming a section orphans its students.
    return sum(1 for student in students if student.section == section.name)


def filter_results(
    results: Sequence[Result],
    student_filter: Optional[EntityId] = None,
    subject_filter: Optional[str] = None,
) -> List[Result]:
    def matches(result: Result) -> bool:
        match_student = not student_filter or same_id(result.student_id, student_filter)
        match_subject = not subject_filter or result.subject == subject_filter
        return match_student and match_subject

    return [result for result in results if matches(result)]


def distinct_student_ids(results: Iterable[Result]) -> List[EntityId]:
    seen = set()
    ordered: List[EntityId] = []
    for result in results:
        if result.student_id is None:
            continue
        key = str(result.student_id)
        if key in seen:
            continue
        seen.add(key)
        ordered.append(result.student_id)
    return ordered


def distinct_subjects(results: Iterable[Result]) -> List[str]:
    ordered: List[str] = []
    for result in results:
        if result.subject not in ordered:
            ordered.append(result.subject)
    return ordered
