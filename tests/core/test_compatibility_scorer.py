from __future__ import annotations

from typing import Any

import pytest

from cohortmatch.core import CompatibilityScorer, LoadBalanceEvaluator
from cohortmatch.core.calculators import (
    ElementalSimilarity,
    LearningStyleSimilarity,
    NameSimilarity,
    PersonalitySimilarity,
)
from cohortmatch.core.calculators.load_balance import LoadBalanceConfig
from cohortmatch.schemas import (
    ElementalProfile,
    NameProfile,
    PersonalityProfile,
    StudentProfile,
    TeacherProfile,
)


def make_personality(e: float, s: float, t: float, j: float) -> PersonalityProfile:
    return PersonalityProfile(E=e, I=100 - e, S=s, N=100 - s, T=t, F=100 - t, J=j, P=100 - j)


def build_scorer(**kwargs: Any) -> CompatibilityScorer:
    calculators = [
        PersonalitySimilarity(),
        LearningStyleSimilarity(),
        ElementalSimilarity(),
        NameSimilarity(),
    ]
    return CompatibilityScorer(calculators, **kwargs)


def build_teacher(**kwargs: Any) -> TeacherProfile:
    defaults: dict[str, Any] = {"subject_id": "T-001"}
    defaults.update(kwargs)
    return TeacherProfile(**defaults)


def build_student(**kwargs: Any) -> StudentProfile:
    defaults: dict[str, Any] = {"subject_id": "S-001"}
    defaults.update(kwargs)
    return StudentProfile(**defaults)


FULL_PROFILE: dict[str, Any] = {
    "personality": make_personality(65, 40, 70, 55),
    "elemental": ElementalProfile(wood=2, fire=1, earth=3, metal=0, water=1),
    "name": NameProfile(grids={"won": 12, "hyung": 25, "yi": 31, "jeong": 44}),
}


@pytest.mark.parametrize(
    ("load", "expected"),
    [(0, 15.0), (10, 15.0), (11, 10.0), (20, 10.0), (21, 5.0), (30, 5.0), (31, 0.0), (120, 0.0)],
)
def test_load_balance_tiers(load: int, expected: float):
    assert LoadBalanceEvaluator().score(load) == expected


def test_load_balance_rejects_negative_load():
    with pytest.raises(ValueError):
        LoadBalanceEvaluator().score(-1)


def test_load_balance_custom_tiers_are_sorted():
    evaluator = LoadBalanceEvaluator(config=LoadBalanceConfig(tiers=((10, 5.0), (5, 15.0))))

    assert evaluator.score(3) == 15.0
    assert evaluator.score(7) == 5.0
    assert evaluator.score(11) == 0.0


def test_overall_equals_breakdown_sum_and_is_bounded():
    scorer = build_scorer()
    teacher = build_teacher(current_load=12, **FULL_PROFILE)
    student = build_student(
        personality=make_personality(35, 55, 40, 20),
        elemental=ElementalProfile(fire=4, water=2),
        name=NameProfile(grids={"won": 8, "hyung": 40, "yi": 22, "jeong": 60}),
    )

    result = scorer.score(teacher, student)
    breakdown = result.breakdown

    assert result.overall == pytest.approx(
        breakdown.mbti + breakdown.learning_style + breakdown.saju + breakdown.name + breakdown.load_balance
    )
    assert 0.0 <= result.overall <= 100.0
    assert breakdown.load_balance == 10.0


def test_identical_profiles_reach_full_score():
    scorer = build_scorer()
    teacher = build_teacher(**FULL_PROFILE)
    student = build_student(**FULL_PROFILE)

    result = scorer.score(teacher, student)

    assert result.overall == pytest.approx(100.0)
    assert "Very similar personalities; communication styles should fit well." in result.reasons
    assert "High compatibility in temperament and learning style." in result.reasons


def test_student_without_profiles_scores_defaults_plus_load():
    scorer = build_scorer()
    teacher = build_teacher(current_load=25, **FULL_PROFILE)
    student = build_student()

    result = scorer.score(teacher, student)

    assert result.breakdown.mbti == pytest.approx(12.5)
    assert result.breakdown.learning_style == pytest.approx(12.5)
    assert result.breakdown.saju == 0.0
    assert result.breakdown.name == 0.0
    assert result.overall == pytest.approx(25 + 5)


def test_missing_dimensions_use_asymmetric_defaults():
    scorer = build_scorer()
    teacher = build_teacher(personality=make_personality(50, 50, 50, 50))
    student = build_student(elemental=ElementalProfile(wood=1), name=NameProfile())

    result = scorer.score(teacher, student)

    assert result.breakdown.mbti == pytest.approx(12.5)
    assert result.breakdown.learning_style == pytest.approx(12.5)
    assert result.breakdown.saju == 0.0
    assert result.breakdown.name == 0.0
    assert result.breakdown.load_balance == 15.0


def test_scoring_is_deterministic():
    scorer = build_scorer()
    teacher = build_teacher(current_load=4, **FULL_PROFILE)
    student = build_student(personality=make_personality(20, 80, 45, 60))

    assert scorer.score(teacher, student) == scorer.score(teacher, student)


def test_reasons_never_empty_and_follow_bands():
    scorer = build_scorer()
    teacher = build_teacher(current_load=40)
    student = build_student()

    result = scorer.score(teacher, student)

    assert result.reasons
    assert result.reasons[0] == "Personalities differ but can complement each other."
    assert "Learning styles are broadly aligned." in result.reasons


def test_fallback_reason_when_no_band_applies():
    scorer = CompatibilityScorer([ElementalSimilarity()])
    result = scorer.score(build_teacher(current_load=40), build_student())

    assert result.reasons == ("Score combines all available analysis data for this pair.",)


def test_context_current_load_overrides_teacher_load():
    scorer = build_scorer()
    teacher = build_teacher(current_load=0)

    result = scorer.score(teacher, build_student(), {"current_load": 22})

    assert result.breakdown.load_balance == 5.0


def test_weights_override_and_validation():
    scorer = build_scorer(weights={"mbti": 20.0})

    result = scorer.score(build_teacher(), build_student())

    assert result.breakdown.mbti == pytest.approx(10.0)
    with pytest.raises(ValueError):
        build_scorer(weights={"mbti": 60.0})
    with pytest.raises(ValueError):
        build_scorer(weights={"astrology": 1.0})


def test_malformed_calculator_payload_raises():
    class BrokenCalculator:
        method = "broken"

        def evaluate(self, teacher, student, context):
            return {"method": "broken"}

    scorer = CompatibilityScorer([BrokenCalculator()])

    with pytest.raises(ValueError):
        scorer.score(build_teacher(), build_student())


def test_rank_orders_teachers_and_keeps_ties_stable():
    scorer = build_scorer()
    student = build_student(**FULL_PROFILE)
    match = build_teacher(subject_id="T-match", **FULL_PROFILE)
    busy_twin = build_teacher(subject_id="T-busy", current_load=35, **FULL_PROFILE)
    blank_a = build_teacher(subject_id="T-blank-a")
    blank_b = build_teacher(subject_id="T-blank-b")

    ranked = scorer.rank([blank_a, busy_twin, blank_b, match], student)

    assert [teacher.subject_id for teacher, _ in ranked] == [
        "T-match",
        "T-busy",
        "T-blank-a",
        "T-blank-b",
    ]
    assert len(scorer.rank([blank_a, match], student, limit=1)) == 1


def test_score_is_hashable_and_metadata_read_only():
    scorer = build_scorer()
    teacher = build_teacher(**FULL_PROFILE)
    student = build_student(personality=make_personality(20, 80, 45, 60))

    result = scorer.score(teacher, student)
    personality = result.dimensions[0]

    assert hash(result) == hash(scorer.score(teacher, student))
    assert len({result, scorer.score(teacher, student)}) == 1
    assert personality.metadata["status"] == "ok"
    with pytest.raises(TypeError):
        personality.metadata["status"] = "changed"  # type: ignore[index]
    with pytest.raises(TypeError):
        personality.metadata["axis_diffs"]["E"] = 0.0  # type: ignore[index]
    assert personality.metadata["status"] == "ok"
