from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Complementary MBTI sides; each pair sums to 100.
AXIS_PAIRS: tuple[tuple[str, str], ...] = (("e", "i"), ("s", "n"), ("t", "f"), ("j", "p"))

ELEMENT_ORDER: tuple[str, ...] = ("wood", "fire", "earth", "metal", "water")

GRID_ORDER: tuple[str, ...] = ("won", "hyung", "yi", "jeong")


class PersonalityProfile(BaseModel):
    """MBTI axis percentages produced by the upstream questionnaire."""

    e: float = Field(alias="E", ge=0, le=100)
    i: float = Field(alias="I", ge=0, le=100)
    s: float = Field(alias="S", ge=0, le=100)
    n: float = Field(alias="N", ge=0, le=100)
    t: float = Field(alias="T", ge=0, le=100)
    f: float = Field(alias="F", ge=0, le=100)
    j: float = Field(alias="J", ge=0, le=100)
    p: float = Field(alias="P", ge=0, le=100)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _check_pairs(self) -> "PersonalityProfile":
        for left, right in AXIS_PAIRS:
            total = getattr(self, left) + getattr(self, right)
            if not math.isclose(total, 100.0, abs_tol=1e-6):
                raise ValueError(
                    f"{left.upper()}/{right.upper()} must sum to 100, got {total}"
                )
        return self


class LearningStyleProfile(BaseModel):
    """VARK scores derived from a personality profile."""

    visual: float
    auditory: float
    read_write: float
    kinesthetic: float

    model_config = ConfigDict(extra="forbid", frozen=True)

    def as_vector(self) -> tuple[float, float, float, float]:
        return (self.visual, self.auditory, self.read_write, self.kinesthetic)


def derive_learning_style(
    personality: PersonalityProfile | None,
) -> LearningStyleProfile | None:
    """Map personality percentages onto VARK learning-style scores.

    Visual leans on structured sensing (S, J), kinesthetic on intuition and
    perceiving (N, P); auditory and read/write follow E and I directly.
    Returns None when no personality profile is available.
    """
    if personality is None:
        return None
    return LearningStyleProfile(
        visual=personality.s * 0.6 + personality.j * 0.4,
        auditory=personality.e,
        read_write=personality.i,
        kinesthetic=personality.n * 0.6 + personality.p * 0.4,
    )


class ElementalProfile(BaseModel):
    """Five-element balance from the birth-data analysis."""

    wood: float = Field(default=0.0, ge=0)
    fire: float = Field(default=0.0, ge=0)
    earth: float = Field(default=0.0, ge=0)
    metal: float = Field(default=0.0, ge=0)
    water: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def as_vector(self) -> tuple[float, ...]:
        return tuple(getattr(self, label) for label in ELEMENT_ORDER)


class NameGrids(BaseModel):
    """The four stroke-count grids of a name analysis."""

    won: int = Field(ge=1)
    hyung: int = Field(ge=1)
    yi: int = Field(ge=1)
    jeong: int = Field(ge=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def as_vector(self) -> tuple[int, ...]:
        return tuple(getattr(self, label) for label in GRID_ORDER)


class NameProfile(BaseModel):
    """Name numerology result; grids may be absent when no match was found."""

    grids: NameGrids | None = None

    model_config = ConfigDict(extra="allow", frozen=True)


class SubjectProfile(BaseModel):
    """Profile fragments shared by teachers and students."""

    subject_id: str
    personality: PersonalityProfile | None = None
    elemental: ElementalProfile | None = None
    name: NameProfile | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def learning_style(self) -> LearningStyleProfile | None:
        return derive_learning_style(self.personality)


class TeacherProfile(SubjectProfile):
    """Teacher profile with the headcount already under their care."""

    current_load: int = Field(default=0, ge=0)


class StudentProfile(SubjectProfile):
    """Student profile with the attribute used for fairness grouping."""

    group: str | None = None
