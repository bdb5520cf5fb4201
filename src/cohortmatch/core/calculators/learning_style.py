"""Learning-style similarity derived from personality percentages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import SubjectProfile
from .vectors import clamp_unit, cosine_similarity


@dataclass
class LearningStyleConfig:
    """Configuration for learning-style similarity."""

    default: float = 0.5


class LearningStyleSimilarity:
    """Cosine similarity between VARK vectors derived on the fly."""

    method = "learning_style"

    def __init__(self, *, config: LearningStyleConfig | None = None) -> None:
        self._config = config or LearningStyleConfig()

    def evaluate(
        self,
        teacher: SubjectProfile,
        student: SubjectProfile,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        overrides = (context.get("evaluation_overrides") or {}).get(self.method, {})
        default = overrides.get("default", self._config.default)

        teacher_style = teacher.learning_style
        student_style = student.learning_style
        if teacher_style is None or student_style is None:
            return self._payload(default, "insufficient_data")

        cosine = cosine_similarity(teacher_style.as_vector(), student_style.as_vector())
        if cosine is None:
            return self._payload(default, "zero_magnitude")

        return {
            "method": self.method,
            "similarity": clamp_unit(cosine),
            "metadata": {
                "status": "ok",
                "teacher_style": teacher_style.model_dump(),
                "student_style": student_style.model_dump(),
            },
        }

    def _payload(self, similarity: float, status: str) -> dict[str, Any]:
        return {
            "method": self.method,
            "similarity": similarity,
            "metadata": {"status": status, "teacher_style": None, "student_style": None},
        }
