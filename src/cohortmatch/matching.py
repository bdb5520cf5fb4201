"""Matching service tying scoring, assignment and fairness together."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import structlog

from .core import (
    Assignment,
    AssignmentOptions,
    AssignmentRun,
    CompatibilityScore,
    CompatibilityScorer,
    FairnessEvaluator,
    FairnessMetrics,
    GreedyAssigner,
    default_capacity_ceiling,
    summarize_assignments,
)
from .core.assignment import DEFAULT_CAPACITY_HEADROOM
from .core.fairness import GroupingKey
from .schemas import StudentProfile, TeacherProfile


class MatchingService:
    """In-process entry points for scoring, assignment and fairness checks.

    Callers are expected to fetch every profile up front; nothing here
    performs I/O or keeps state between calls.
    """

    def __init__(
        self,
        *,
        scorer: CompatibilityScorer,
        assigner: GreedyAssigner,
        fairness: FairnessEvaluator,
        capacity_ceiling: int | None = None,
        capacity_headroom: float | None = None,
    ) -> None:
        self._scorer = scorer
        self._assigner = assigner
        self._fairness = fairness
        self._capacity_ceiling = capacity_ceiling
        self._capacity_headroom = capacity_headroom or DEFAULT_CAPACITY_HEADROOM
        self._logger = structlog.get_logger(__name__)

    def score_compatibility(
        self,
        teacher: TeacherProfile,
        student: StudentProfile,
        context: dict[str, Any] | None = None,
    ) -> CompatibilityScore:
        return self._scorer.score(teacher, student, context)

    def recommend_teachers(
        self,
        student: StudentProfile,
        teachers: Iterable[TeacherProfile],
        *,
        limit: int | None = None,
    ) -> list[tuple[TeacherProfile, CompatibilityScore]]:
        return self._scorer.rank(teachers, student, limit=limit)

    def generate_assignment(
        self,
        students: Sequence[StudentProfile],
        teachers: Sequence[TeacherProfile],
        options: AssignmentOptions | None = None,
    ) -> list[Assignment]:
        return self.generate_assignment_report(students, teachers, options).assignments

    def generate_assignment_report(
        self,
        students: Sequence[StudentProfile],
        teachers: Sequence[TeacherProfile],
        options: AssignmentOptions | None = None,
    ) -> AssignmentRun:
        options = options or AssignmentOptions()
        capacity_ceiling = self._resolve_capacity(len(students), len(teachers), options)

        run = self._assigner.assign_with_report(
            students,
            teachers,
            capacity_ceiling,
            min_compatibility=options.min_compatibility,
        )
        summary = summarize_assignments(run.assignments)
        self._logger.info(
            "matching.assignment_generated",
            requested=len(students),
            assigned=summary["total"],
            skipped=run.skipped,
            average_score=summary["average_score"],
            capacity_ceiling=capacity_ceiling,
        )
        return run

    def compute_fairness(
        self,
        assignments: Sequence[Assignment],
        grouping_key: GroupingKey,
        *,
        teacher_ids: Iterable[str] | None = None,
    ) -> FairnessMetrics:
        return self._fairness.evaluate(assignments, grouping_key, teacher_ids=teacher_ids)

    def _resolve_capacity(
        self,
        student_count: int,
        teacher_count: int,
        options: AssignmentOptions,
    ) -> int:
        if options.capacity_ceiling is not None:
            return options.capacity_ceiling
        if self._capacity_ceiling is not None:
            return self._capacity_ceiling
        return default_capacity_ceiling(student_count, teacher_count, self._capacity_headroom)
