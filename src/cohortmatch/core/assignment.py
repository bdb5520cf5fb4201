"""Capacity-constrained greedy assignment of students to teachers."""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

import structlog

from ..errors import CohortInputError
from ..schemas import StudentProfile, TeacherProfile
from .scoring import CompatibilityScore, CompatibilityScorer

DEFAULT_CAPACITY_HEADROOM = 1.2


@dataclass(frozen=True, slots=True)
class Assignment:
    """A single student placed with a teacher."""

    student_id: str
    teacher_id: str
    score: CompatibilityScore


@dataclass(slots=True)
class AssignmentOptions:
    """Caller-supplied assignment knobs."""

    capacity_ceiling: int | None = None
    min_compatibility: float | None = None


@dataclass(slots=True)
class AssignmentRun:
    """Assignments plus the bookkeeping needed to reconcile skipped students."""

    assignments: list[Assignment]
    skipped: list[str] = field(default_factory=list)
    loads: dict[str, int] = field(default_factory=dict)
    capacity_ceiling: int = 0


def default_capacity_ceiling(
    student_count: int,
    teacher_count: int,
    headroom: float = DEFAULT_CAPACITY_HEADROOM,
) -> int:
    """Average students per teacher, padded by ``headroom`` and rounded up."""
    if teacher_count <= 0:
        raise CohortInputError("At least one teacher is required to derive a capacity ceiling.")
    if student_count < 0:
        raise CohortInputError(f"student_count must be non-negative, got {student_count}")
    return math.ceil(student_count / teacher_count * headroom)


class GreedyAssigner:
    """Assign each student, in input order, to the best teacher with room left.

    Running counts start from every teacher's ``current_load`` and live only
    for the duration of one call. Ties go to the teacher listed first. A
    student with no eligible teacher is skipped rather than failing the run.
    """

    def __init__(
        self,
        scorer: CompatibilityScorer,
        *,
        min_compatibility: float | None = None,
    ) -> None:
        self._scorer = scorer
        self._min_compatibility = min_compatibility
        self._logger = structlog.get_logger(__name__)

    def assign(
        self,
        students: Sequence[StudentProfile],
        teachers: Sequence[TeacherProfile],
        capacity_ceiling: int,
    ) -> list[Assignment]:
        return self.assign_with_report(students, teachers, capacity_ceiling).assignments

    def assign_with_report(
        self,
        students: Sequence[StudentProfile],
        teachers: Sequence[TeacherProfile],
        capacity_ceiling: int,
        *,
        min_compatibility: float | None = None,
        context: dict[str, Any] | None = None,
    ) -> AssignmentRun:
        self._validate(students, teachers, capacity_ceiling)
        floor = min_compatibility if min_compatibility is not None else self._min_compatibility

        running = {teacher.subject_id: teacher.current_load for teacher in teachers}
        assignments: list[Assignment] = []
        skipped: list[str] = []

        for student in students:
            best_teacher: TeacherProfile | None = None
            best_score: CompatibilityScore | None = None

            for teacher in teachers:
                load = running[teacher.subject_id]
                if load >= capacity_ceiling:
                    continue
                score = self._scorer.score(
                    teacher,
                    student,
                    {**(context or {}), "current_load": load},
                )
                if floor is not None and score.overall < floor:
                    continue
                if best_score is None or score.overall > best_score.overall:
                    best_teacher = teacher
                    best_score = score

            if best_teacher is None or best_score is None:
                skipped.append(student.subject_id)
                self._logger.warning(
                    "assignment.student_skipped",
                    student_id=student.subject_id,
                    capacity_ceiling=capacity_ceiling,
                    min_compatibility=floor,
                )
                continue

            assignments.append(
                Assignment(
                    student_id=student.subject_id,
                    teacher_id=best_teacher.subject_id,
                    score=best_score,
                )
            )
            running[best_teacher.subject_id] += 1

        self._logger.info(
            "assignment.completed",
            students=len(students),
            teachers=len(teachers),
            assigned=len(assignments),
            skipped=len(skipped),
            capacity_ceiling=capacity_ceiling,
        )
        return AssignmentRun(
            assignments=assignments,
            skipped=skipped,
            loads=running,
            capacity_ceiling=capacity_ceiling,
        )

    @staticmethod
    def _validate(
        students: Sequence[StudentProfile],
        teachers: Sequence[TeacherProfile],
        capacity_ceiling: int,
    ) -> None:
        if isinstance(capacity_ceiling, bool) or not isinstance(capacity_ceiling, int):
            raise CohortInputError(f"capacity_ceiling must be an integer, got {capacity_ceiling!r}")
        if capacity_ceiling < 1:
            raise CohortInputError(f"capacity_ceiling must be at least 1, got {capacity_ceiling}")
        for label, subjects in (("student", students), ("teacher", teachers)):
            seen: set[str] = set()
            for subject in subjects:
                if subject.subject_id in seen:
                    raise CohortInputError(f"Duplicate {label} id: {subject.subject_id!r}")
                seen.add(subject.subject_id)


def load_stats(counts: Mapping[str, int]) -> dict[str, float]:
    """Population statistics over per-teacher loads."""
    loads = list(counts.values())
    if not loads:
        return {"mean": 0.0, "variance": 0.0, "std_dev": 0.0, "min": 0.0, "max": 0.0, "range": 0.0}
    variance = statistics.pvariance(loads)
    return {
        "mean": statistics.fmean(loads),
        "variance": float(variance),
        "std_dev": math.sqrt(variance),
        "min": float(min(loads)),
        "max": float(max(loads)),
        "range": float(max(loads) - min(loads)),
    }


def summarize_assignments(assignments: Iterable[Assignment]) -> dict[str, Any]:
    assignments = list(assignments)
    if not assignments:
        return {
            "total": 0,
            "average_score": 0.0,
            "min_score": 0.0,
            "max_score": 0.0,
            "teacher_counts": {},
        }

    scores = [assignment.score.overall for assignment in assignments]
    teacher_counts: dict[str, int] = {}
    for assignment in assignments:
        teacher_counts[assignment.teacher_id] = teacher_counts.get(assignment.teacher_id, 0) + 1

    return {
        "total": len(assignments),
        "average_score": statistics.fmean(scores),
        "min_score": min(scores),
        "max_score": max(scores),
        "teacher_counts": teacher_counts,
    }
