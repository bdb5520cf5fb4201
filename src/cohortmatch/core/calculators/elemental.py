"""Five-element balance similarity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import SubjectProfile
from .vectors import clamp_unit, cosine_similarity


@dataclass
class ElementalConfig:
    """Configuration for elemental similarity.

    Missing data scores as the worst case so that pairs are not favoured on
    an input nobody collected.
    """

    default: float = 0.0


class ElementalSimilarity:
    """Cosine similarity over wood/fire/earth/metal/water magnitudes."""

    method = "saju"

    def __init__(self, *, config: ElementalConfig | None = None) -> None:
        self._config = config or ElementalConfig()

    def evaluate(
        self,
        teacher: SubjectProfile,
        student: SubjectProfile,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        overrides = (context.get("evaluation_overrides") or {}).get(self.method, {})
        default = overrides.get("default", self._config.default)

        if teacher.elemental is None or student.elemental is None:
            return {
                "method": self.method,
                "similarity": default,
                "metadata": {"status": "insufficient_data"},
            }

        cosine = cosine_similarity(teacher.elemental.as_vector(), student.elemental.as_vector())
        if cosine is None:
            return {
                "method": self.method,
                "similarity": default,
                "metadata": {"status": "zero_magnitude"},
            }
        return {
            "method": self.method,
            "similarity": clamp_unit(cosine),
            "metadata": {"status": "ok"},
        }

