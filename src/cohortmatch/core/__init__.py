"""Core matching engine components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..schemas import SubjectProfile

# NOTE: keep imports explicit for export clarity.
from .assignment import (
    Assignment,
    AssignmentOptions,
    AssignmentRun,
    GreedyAssigner,
    default_capacity_ceiling,
    load_stats,
    summarize_assignments,
)
from .calculators import (
    ElementalSimilarity,
    LearningStyleSimilarity,
    LoadBalanceEvaluator,
    NameSimilarity,
    PersonalitySimilarity,
)
from .fairness import FairnessEvaluator, FairnessMetrics, group_by_student_attribute
from .scoring import (
    CompatibilityBreakdown,
    CompatibilityScore,
    CompatibilityScorer,
    DimensionResult,
)


@runtime_checkable
class SimilarityCalculator(Protocol):
    """Calculator contract for one compatibility dimension."""

    method: str

    def evaluate(
        self,
        teacher: SubjectProfile,
        student: SubjectProfile,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        """Return a payload with ``method``, ``similarity`` in [0, 1] and ``metadata``."""


__all__ = [
    "SimilarityCalculator",
    "Assignment",
    "AssignmentOptions",
    "AssignmentRun",
    "GreedyAssigner",
    "default_capacity_ceiling",
    "load_stats",
    "summarize_assignments",
    "CompatibilityBreakdown",
    "CompatibilityScore",
    "CompatibilityScorer",
    "DimensionResult",
    "FairnessEvaluator",
    "FairnessMetrics",
    "group_by_student_attribute",
    "PersonalitySimilarity",
    "LearningStyleSimilarity",
    "ElementalSimilarity",
    "NameSimilarity",
    "LoadBalanceEvaluator",
]
