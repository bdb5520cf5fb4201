"""Module-level entry points backed by a default container."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .container import create_container
from .core import Assignment, AssignmentOptions, CompatibilityScore, FairnessMetrics
from .core.fairness import GroupingKey
from .schemas import StudentProfile, TeacherProfile


def score_compatibility(
    teacher: TeacherProfile,
    student: StudentProfile,
    context: dict[str, Any] | None = None,
) -> CompatibilityScore:
    """Score one teacher/student pair on the 0-100 scale."""
    return create_container().matching_service().score_compatibility(teacher, student, context)


def generate_assignment(
    students: Sequence[StudentProfile],
    teachers: Sequence[TeacherProfile],
    options: AssignmentOptions | None = None,
) -> list[Assignment]:
    """Greedily assign students to teachers without exceeding capacity.

    When ``options.capacity_ceiling`` is omitted the ceiling is 120% of the
    average number of students per teacher, rounded up.
    """
    return create_container().matching_service().generate_assignment(students, teachers, options)


def compute_fairness(
    assignments: Sequence[Assignment],
    grouping_key: GroupingKey,
    *,
    teacher_ids: Iterable[str] | None = None,
) -> FairnessMetrics:
    """Disparity, ABROCA and distribution balance for an assignment plan."""
    return create_container().matching_service().compute_fairness(
        assignments, grouping_key, teacher_ids=teacher_ids
    )
