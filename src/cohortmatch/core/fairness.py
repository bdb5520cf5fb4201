"""Fairness metrics over an assignment plan."""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence

import structlog

from ..schemas import StudentProfile
from .assignment import Assignment
from .calculators.vectors import clamp_unit

GroupingKey = Callable[[Assignment], Optional[str]]

DISPARITY_RECOMMENDATION = (
    "Compatibility scores differ widely between groups; review the dimension weights."
)
ABROCA_RECOMMENDATION = (
    "Score distributions are skewed for some groups; the scoring algorithm needs review."
)
BALANCE_RECOMMENDATION = (
    "Assignments are unevenly spread across teachers; raise the load-balance weight."
)


@dataclass
class FairnessConfig:
    """Thresholds that trigger a recommendation."""

    disparity_threshold: float = 0.20
    abroca_threshold: float = 0.30
    balance_threshold: float = 0.70
    histogram_bins: int = 10
    max_score: float = 100.0


@dataclass(frozen=True, slots=True)
class FairnessMetrics:
    disparity_index: float
    abroca: float
    distribution_balance: float
    recommendations: tuple[str, ...]


class FairnessEvaluator:
    """Compute disparity, ABROCA and distribution balance for a plan.

    ABROCA here is an internal proxy: for each group, the total variation
    distance between its score histogram and the histogram of all grouped
    scores, averaged over groups. It is not the ROC-based metric of the same
    name.
    """

    def __init__(self, *, config: FairnessConfig | None = None) -> None:
        self._config = config or FairnessConfig()
        self._logger = structlog.get_logger(__name__)

    def evaluate(
        self,
        assignments: Sequence[Assignment],
        grouping_key: GroupingKey,
        *,
        teacher_ids: Iterable[str] | None = None,
    ) -> FairnessMetrics:
        groups = self._partition(assignments, grouping_key)

        disparity_index = self.disparity_index(groups)
        abroca = self.abroca(groups)
        distribution_balance = self.distribution_balance(assignments, teacher_ids=teacher_ids)
        recommendations = self._recommendations(disparity_index, abroca, distribution_balance)

        self._logger.info(
            "fairness.evaluated",
            groups=len(groups),
            assignments=len(assignments),
            disparity_index=disparity_index,
            abroca=abroca,
            distribution_balance=distribution_balance,
            recommendations=len(recommendations),
        )
        return FairnessMetrics(
            disparity_index=disparity_index,
            abroca=abroca,
            distribution_balance=distribution_balance,
            recommendations=tuple(recommendations),
        )

    @staticmethod
    def _partition(
        assignments: Iterable[Assignment],
        grouping_key: GroupingKey,
    ) -> dict[str, list[float]]:
        groups: dict[str, list[float]] = {}
        for assignment in assignments:
            group = grouping_key(assignment)
            if group is None:
                continue
            groups.setdefault(group, []).append(assignment.score.overall)
        return groups

    @staticmethod
    def disparity_index(groups: Mapping[str, Sequence[float]]) -> float:
        if len(groups) < 2:
            return 0.0
        means = [statistics.fmean(scores) for scores in groups.values()]
        overall_mean = statistics.fmean(score for scores in groups.values() for score in scores)
        if overall_mean <= 0:
            return 0.0
        return clamp_unit((max(means) - min(means)) / overall_mean)

    def abroca(self, groups: Mapping[str, Sequence[float]]) -> float:
        if len(groups) < 2:
            return 0.0
        overall = self._histogram([score for scores in groups.values() for score in scores])
        distances = [
            0.5 * sum(abs(q - p) for q, p in zip(self._histogram(scores), overall))
            for scores in groups.values()
        ]
        return clamp_unit(statistics.fmean(distances))

    @staticmethod
    def distribution_balance(
        assignments: Iterable[Assignment],
        *,
        teacher_ids: Iterable[str] | None = None,
    ) -> float:
        counts: dict[str, int] = {teacher_id: 0 for teacher_id in teacher_ids or ()}
        for assignment in assignments:
            counts[assignment.teacher_id] = counts.get(assignment.teacher_id, 0) + 1
        if not counts:
            return 1.0
        mean = statistics.fmean(counts.values())
        if mean == 0:
            return 1.0
        coefficient_of_variation = statistics.pstdev(counts.values()) / mean
        return clamp_unit(1 - coefficient_of_variation)

    def _histogram(self, scores: Sequence[float]) -> list[float]:
        bins = self._config.histogram_bins
        width = self._config.max_score / bins
        histogram = [0] * bins
        for score in scores:
            index = min(max(int(score // width), 0), bins - 1)
            histogram[index] += 1
        total = len(scores)
        return [count / total for count in histogram]

    def _recommendations(
        self,
        disparity_index: float,
        abroca: float,
        distribution_balance: float,
    ) -> list[str]:
        recommendations: list[str] = []
        if disparity_index > self._config.disparity_threshold:
            recommendations.append(DISPARITY_RECOMMENDATION)
        if abroca > self._config.abroca_threshold:
            recommendations.append(ABROCA_RECOMMENDATION)
        if distribution_balance < self._config.balance_threshold:
            recommendations.append(BALANCE_RECOMMENDATION)
        return recommendations


def group_by_student_attribute(students: Iterable[StudentProfile]) -> GroupingKey:
    """Grouping key that looks up each assignment's student ``group``."""
    lookup = {student.subject_id: student.group for student in students}

    def _key(assignment: Assignment) -> str | None:
        return lookup.get(assignment.student_id)

    return _key
