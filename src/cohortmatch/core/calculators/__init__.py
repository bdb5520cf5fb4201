"""Dimension calculators for the compatibility scorer."""

from .personality import PersonalitySimilarity
from .learning_style import LearningStyleSimilarity
from .elemental import ElementalSimilarity
from .name import NameSimilarity
from .load_balance import LoadBalanceEvaluator

__all__ = [
    "PersonalitySimilarity",
    "LearningStyleSimilarity",
    "ElementalSimilarity",
    "NameSimilarity",
    "LoadBalanceEvaluator",
]
