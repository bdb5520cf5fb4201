"""Pydantic schema definitions for subject profiles and configuration."""

from __future__ import annotations

from .profile import (
    ELEMENT_ORDER,
    ElementalProfile,
    LearningStyleProfile,
    NameGrids,
    NameProfile,
    PersonalityProfile,
    StudentProfile,
    SubjectProfile,
    TeacherProfile,
    derive_learning_style,
)

__all__ = [
    "ELEMENT_ORDER",
    "ElementalProfile",
    "LearningStyleProfile",
    "NameGrids",
    "NameProfile",
    "PersonalityProfile",
    "StudentProfile",
    "SubjectProfile",
    "TeacherProfile",
    "derive_learning_style",
]
