from __future__ import annotations

import pytest

from cohortmatch.core import (
    Assignment,
    CompatibilityBreakdown,
    CompatibilityScore,
    FairnessEvaluator,
    group_by_student_attribute,
)
from cohortmatch.core.fairness import (
    ABROCA_RECOMMENDATION,
    BALANCE_RECOMMENDATION,
    DISPARITY_RECOMMENDATION,
    FairnessConfig,
)
from cohortmatch.schemas import StudentProfile


def make_score(overall: float) -> CompatibilityScore:
    breakdown = CompatibilityBreakdown(
        mbti=overall * 0.25,
        learning_style=overall * 0.25,
        saju=overall * 0.20,
        name=overall * 0.15,
        load_balance=overall * 0.15,
    )
    return CompatibilityScore(overall=overall, breakdown=breakdown, reasons=("test",))


def build_plan(rows: list[tuple[str, str, str, float]]) -> tuple[list[Assignment], dict[str, str]]:
    """Rows of (student_id, teacher_id, group, overall)."""
    assignments = [
        Assignment(student_id=student_id, teacher_id=teacher_id, score=make_score(overall))
        for student_id, teacher_id, _, overall in rows
    ]
    groups = {student_id: group for student_id, _, group, _ in rows}
    return assignments, groups


def test_equal_counts_and_means_are_fully_fair():
    assignments, groups = build_plan(
        [
            ("S-1", "T-1", "north", 60.0),
            ("S-2", "T-2", "north", 62.0),
            ("S-3", "T-1", "south", 61.0),
            ("S-4", "T-2", "south", 61.0),
        ]
    )

    metrics = FairnessEvaluator().evaluate(assignments, lambda a: groups[a.student_id])

    assert metrics.distribution_balance == pytest.approx(1.0)
    assert metrics.disparity_index == pytest.approx(0.0)
    assert metrics.abroca == pytest.approx(0.0)
    assert metrics.recommendations == ()


def test_lower_scoring_school_triggers_disparity_recommendation():
    rows = [(f"A-{i}", f"T-{i % 2}", "school-a", 80.0) for i in range(5)]
    rows += [(f"B-{i}", f"T-{i % 2}", "school-b", 60.0) for i in range(5)]
    assignments, groups = build_plan(rows)

    metrics = FairnessEvaluator().evaluate(assignments, lambda a: groups[a.student_id])

    assert metrics.disparity_index == pytest.approx(20 / 70)
    assert DISPARITY_RECOMMENDATION in metrics.recommendations


def test_abroca_measures_distribution_gap_between_groups():
    assignments, groups = build_plan(
        [
            ("S-1", "T-1", "a", 85.0),
            ("S-2", "T-2", "a", 85.0),
            ("S-3", "T-1", "b", 55.0),
            ("S-4", "T-2", "b", 55.0),
        ]
    )

    metrics = FairnessEvaluator().evaluate(assignments, lambda a: groups[a.student_id])

    assert metrics.abroca == pytest.approx(0.5)
    assert ABROCA_RECOMMENDATION in metrics.recommendations


def test_uneven_teacher_counts_lower_balance():
    assignments, groups = build_plan(
        [(f"S-{i}", "T-1", "g", 70.0) for i in range(10)]
        + [(f"S-{i}", "T-2", "g", 70.0) for i in range(10, 15)]
    )

    metrics = FairnessEvaluator().evaluate(assignments, lambda a: groups[a.student_id])

    assert metrics.distribution_balance == pytest.approx(1 - 2.5 / 7.5)
    assert metrics.recommendations == (BALANCE_RECOMMENDATION,)


def test_idle_teachers_count_as_zero_when_listed():
    assignments, groups = build_plan([("S-1", "T-1", "g", 50.0), ("S-2", "T-1", "g", 50.0)])

    without_idle = FairnessEvaluator().evaluate(assignments, lambda a: groups[a.student_id])
    with_idle = FairnessEvaluator().evaluate(
        assignments, lambda a: groups[a.student_id], teacher_ids=["T-1", "T-2"]
    )

    assert without_idle.distribution_balance == pytest.approx(1.0)
    assert with_idle.distribution_balance == pytest.approx(0.0)


def test_ungrouped_assignments_are_left_out_of_group_metrics():
    assignments, _ = build_plan(
        [("S-1", "T-1", "a", 90.0), ("S-2", "T-2", "b", 20.0), ("S-3", "T-1", "a", 88.0)]
    )
    groups = {"S-1": "a", "S-3": "a"}

    metrics = FairnessEvaluator().evaluate(assignments, lambda a: groups.get(a.student_id))

    assert metrics.disparity_index == 0.0
    assert metrics.abroca == 0.0


def test_empty_plan_is_neutral():
    metrics = FairnessEvaluator().evaluate([], lambda a: "g")

    assert metrics.disparity_index == 0.0
    assert metrics.abroca == 0.0
    assert metrics.distribution_balance == 1.0
    assert metrics.recommendations == ()


def test_thresholds_are_configurable():
    assignments, groups = build_plan(
        [(f"S-{i}", "T-1", "g", 70.0) for i in range(10)]
        + [(f"S-{i}", "T-2", "g", 70.0) for i in range(10, 15)]
    )
    evaluator = FairnessEvaluator(config=FairnessConfig(balance_threshold=0.5))

    metrics = evaluator.evaluate(assignments, lambda a: groups[a.student_id])

    assert metrics.recommendations == ()


def test_group_by_student_attribute_uses_student_group():
    students = [
        StudentProfile(subject_id="S-1", group="school-a"),
        StudentProfile(subject_id="S-2"),
    ]
    key = group_by_student_attribute(students)
    assignments, _ = build_plan([("S-1", "T-1", "", 50.0), ("S-2", "T-1", "", 50.0)])

    assert key(assignments[0]) == "school-a"
    assert key(assignments[1]) is None
