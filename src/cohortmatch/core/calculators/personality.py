"""MBTI percentage similarity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import PersonalityProfile, SubjectProfile
from .vectors import clamp_unit

# One side per axis; the complementary side carries the same difference.
_AXES: tuple[str, ...] = ("e", "s", "t", "j")


@dataclass
class PersonalityConfig:
    """Configuration for personality similarity."""

    default: float = 0.5


class PersonalitySimilarity:
    """Compare MBTI axis percentages of teacher and student."""

    method = "mbti"

    def __init__(self, *, config: PersonalityConfig | None = None) -> None:
        self._config = config or PersonalityConfig()

    def evaluate(
        self,
        teacher: SubjectProfile,
        student: SubjectProfile,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        overrides = (context.get("evaluation_overrides") or {}).get(self.method, {})
        default = overrides.get("default", self._config.default)

        if teacher.personality is None or student.personality is None:
            return {
                "method": self.method,
                "similarity": default,
                "metadata": {"status": "insufficient_data", "axis_diffs": None},
            }

        diffs = self._axis_diffs(teacher.personality, student.personality)
        return {
            "method": self.method,
            "similarity": self._similarity_from_diffs(diffs),
            "metadata": {"status": "ok", "axis_diffs": diffs},
        }

    @staticmethod
    def _axis_diffs(
        first: PersonalityProfile,
        second: PersonalityProfile,
    ) -> dict[str, float]:
        return {
            axis.upper(): abs(getattr(first, axis) - getattr(second, axis))
            for axis in _AXES
        }

    @staticmethod
    def _similarity_from_diffs(diffs: dict[str, float]) -> float:
        average = sum(diffs.values()) / len(diffs)
        return clamp_unit(1 - average / 100)
