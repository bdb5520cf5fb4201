"""Teacher/student compatibility scoring, assignment and fairness checks."""

from __future__ import annotations

__version__ = "0.1.0"

from .api import compute_fairness, generate_assignment, score_compatibility
from .core import (
    Assignment,
    AssignmentOptions,
    CompatibilityScore,
    FairnessMetrics,
    group_by_student_attribute,
)
from .errors import CohortInputError

__all__ = [
    "__version__",
    "score_compatibility",
    "generate_assignment",
    "compute_fairness",
    "group_by_student_attribute",
    "Assignment",
    "AssignmentOptions",
    "CompatibilityScore",
    "FairnessMetrics",
    "CohortInputError",
]
