"""Name numerology grid similarity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import NameProfile, SubjectProfile
from ...schemas.profile import GRID_ORDER, NameGrids
from .vectors import clamp_unit


@dataclass
class NameConfig:
    """Configuration for name similarity."""

    default: float = 0.0
    max_grid_value: int = 80


class NameSimilarity:
    """Normalized absolute grid distance between two names."""

    method = "name"

    def __init__(self, *, config: NameConfig | None = None) -> None:
        self._config = config or NameConfig()

    def evaluate(
        self,
        teacher: SubjectProfile,
        student: SubjectProfile,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        overrides = (context.get("evaluation_overrides") or {}).get(self.method, {})
        default = overrides.get("default", self._config.default)

        teacher_grids = self._grids(teacher.name)
        student_grids = self._grids(student.name)
        if teacher_grids is None or student_grids is None:
            return {
                "method": self.method,
                "similarity": default,
                "metadata": {"status": "insufficient_data", "grid_diffs": None},
            }

        diffs = {
            label: abs(a - b)
            for label, a, b in zip(GRID_ORDER, teacher_grids.as_vector(), student_grids.as_vector())
        }
        return {
            "method": self.method,
            "similarity": self._similarity_from_diffs(diffs),
            "metadata": {"status": "ok", "grid_diffs": diffs},
        }

    def _similarity_from_diffs(self, diffs: dict[str, int]) -> float:
        max_total = self._config.max_grid_value * len(GRID_ORDER)
        return clamp_unit(1 - sum(diffs.values()) / max_total)

    @staticmethod
    def _grids(profile: NameProfile | None) -> NameGrids | None:
        if profile is None:
            return None
        return profile.grids
