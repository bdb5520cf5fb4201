"""Compatibility scoring between a teacher and a student."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from ..schemas import StudentProfile, TeacherProfile
from .calculators import LoadBalanceEvaluator
from .calculators.vectors import clamp_unit


@dataclass(frozen=True, slots=True)
class DimensionResult:
    """Normalized calculator output."""

    method: str
    similarity: float
    metadata: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False, compare=False
    )


@dataclass(frozen=True, slots=True)
class CompatibilityBreakdown:
    """Weighted points contributed by each dimension."""

    mbti: float
    learning_style: float
    saju: float
    name: float
    load_balance: float

    def total(self) -> float:
        return self.mbti + self.learning_style + self.saju + self.name + self.load_balance

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CompatibilityScore:
    """Overall 0-100 score with its breakdown and human-readable reasons."""

    overall: float
    breakdown: CompatibilityBreakdown
    reasons: tuple[str, ...]
    dimensions: tuple[DimensionResult, ...] = ()


# (threshold, message) bands, checked top-down.
_PERSONALITY_BANDS: tuple[tuple[float, str], ...] = (
    (0.8, "Very similar personalities; communication styles should fit well."),
    (0.6, "Similar personalities; everyday communication should be easy."),
    (0.4, "Personalities differ but can complement each other."),
    (0.0, "Large personality gap, but the pair can still complement each other."),
)
_LEARNING_STYLE_BANDS: tuple[tuple[float, str], ...] = (
    (0.8, "Learning styles are well matched for effective instruction."),
    (0.5, "Learning styles are broadly aligned."),
)
_ELEMENTAL_BANDS: tuple[tuple[float, str], ...] = (
    (0.7, "Elemental balance fits well for a long-term relationship."),
    (0.5, "Elemental energies are in harmony."),
)
_NAME_BANDS: tuple[tuple[float, str], ...] = (
    (0.7, "Name numerology suggests a favourable relationship."),
)
_LOAD_BANDS: tuple[tuple[float, str], ...] = (
    (15.0, "Teacher has plenty of capacity for individual attention."),
    (10.0, "Teacher load is moderate and allows balanced guidance."),
    (5.0, "Teacher load is heavy but still manageable."),
)
_COMBINED_REASON = "High compatibility in temperament and learning style."
_FALLBACK_REASON = "Score combines all available analysis data for this pair."


def _freeze(value: Any) -> Any:
    """Read-only copy of nested calculator metadata."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _band(value: float, bands: Sequence[tuple[float, str]]) -> str | None:
    for threshold, message in bands:
        if value >= threshold:
            return message
    return None


class CompatibilityScorer:
    """Combines dimension calculators into a weighted 0-100 score."""

    DEFAULT_WEIGHTS: dict[str, float] = {
        "mbti": 25.0,
        "learning_style": 25.0,
        "saju": 20.0,
        "name": 15.0,
    }

    COMBINED_THRESHOLD = 40.0

    def __init__(
        self,
        calculators: Iterable[Any],
        *,
        load_balance: LoadBalanceEvaluator | None = None,
        weights: dict[str, float] | None = None,
    ) -> None:
        self._calculators = list(calculators)
        self._load_balance = load_balance or LoadBalanceEvaluator()
        self._weights = self.DEFAULT_WEIGHTS.copy()
        if weights:
            self._weights.update(weights)

        unknown = set(self._weights) - set(self.DEFAULT_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown weight keys: {sorted(unknown)}")
        if any(weight < 0 for weight in self._weights.values()):
            raise ValueError("Weights must be non-negative.")
        ceiling = sum(self._weights.values()) + self._load_balance.max_score
        if ceiling > 100:
            raise ValueError(f"Maximum attainable score {ceiling} exceeds 100.")

    def score(
        self,
        teacher: TeacherProfile,
        student: StudentProfile,
        context: dict[str, Any] | None = None,
    ) -> CompatibilityScore:
        evaluation_context = dict(context or {})
        current_load = evaluation_context.get("current_load", teacher.current_load)

        dimensions: list[DimensionResult] = []
        for calculator in self._calculators:
            raw_result = calculator.evaluate(teacher, student, evaluation_context)
            dimensions.append(self._normalize_result(raw_result))
        similarities = {result.method: result.similarity for result in dimensions}

        breakdown = CompatibilityBreakdown(
            mbti=similarities.get("mbti", 0.0) * self._weights["mbti"],
            learning_style=similarities.get("learning_style", 0.0) * self._weights["learning_style"],
            saju=similarities.get("saju", 0.0) * self._weights["saju"],
            name=similarities.get("name", 0.0) * self._weights["name"],
            load_balance=self._load_balance.score(current_load),
        )

        return CompatibilityScore(
            overall=breakdown.total(),
            breakdown=breakdown,
            reasons=tuple(self._reasons(breakdown, similarities)),
            dimensions=tuple(dimensions),
        )

    def rank(
        self,
        teachers: Iterable[TeacherProfile],
        student: StudentProfile,
        *,
        limit: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> list[tuple[TeacherProfile, CompatibilityScore]]:
        """Score every teacher for one student, best first (stable on ties)."""
        scored = [(teacher, self.score(teacher, student, context)) for teacher in teachers]
        scored.sort(key=lambda item: item[1].overall, reverse=True)
        return scored[:limit] if limit is not None else scored

    @staticmethod
    def _normalize_result(payload: dict[str, Any]) -> DimensionResult:
        method = payload.get("method")
        similarity = payload.get("similarity")
        if method is None:
            raise ValueError("Calculator result must include 'method'.")
        if similarity is None:
            raise ValueError(f"Calculator result for {method!r} must include 'similarity'.")
        return DimensionResult(
            method=str(method),
            similarity=clamp_unit(float(similarity)),
            metadata=_freeze(payload.get("metadata") or {}),
        )

    def _reasons(
        self,
        breakdown: CompatibilityBreakdown,
        similarities: dict[str, float],
    ) -> list[str]:
        candidates = [
            _band(similarities["mbti"], _PERSONALITY_BANDS) if "mbti" in similarities else None,
            _band(similarities["learning_style"], _LEARNING_STYLE_BANDS)
            if "learning_style" in similarities
            else None,
            _band(similarities["saju"], _ELEMENTAL_BANDS) if "saju" in similarities else None,
            _band(similarities["name"], _NAME_BANDS) if "name" in similarities else None,
            _band(breakdown.load_balance, _LOAD_BANDS),
        ]
        reasons = [reason for reason in candidates if reason]

        if breakdown.mbti + breakdown.learning_style >= self.COMBINED_THRESHOLD:
            reasons.append(_COMBINED_REASON)

        if not reasons:
            reasons.append(_FALLBACK_REASON)
        return reasons
