"""Dependency injection container for the matching system."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .core import (
    CompatibilityScorer,
    ElementalSimilarity,
    FairnessEvaluator,
    GreedyAssigner,
    LearningStyleSimilarity,
    LoadBalanceEvaluator,
    NameSimilarity,
    PersonalitySimilarity,
)
from .core.calculators.elemental import ElementalConfig
from .core.calculators.learning_style import LearningStyleConfig
from .core.calculators.load_balance import LoadBalanceConfig
from .core.calculators.name import NameConfig
from .core.calculators.personality import PersonalityConfig
from .core.fairness import FairnessConfig
from .matching import MatchingService
from .schemas.config import AppConfig, load_config


class MatchingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    personality = providers.Singleton(PersonalitySimilarity)
    learning_style = providers.Singleton(LearningStyleSimilarity)
    elemental = providers.Singleton(ElementalSimilarity)
    name = providers.Singleton(NameSimilarity)
    load_balance = providers.Singleton(LoadBalanceEvaluator)

    calculators = providers.List(
        personality,
        learning_style,
        elemental,
        name,
    )

    scorer = providers.Singleton(
        CompatibilityScorer,
        calculators=calculators,
        load_balance=load_balance,
        weights=config.scoring.weights,
    )

    assigner = providers.Singleton(
        GreedyAssigner,
        scorer=scorer,
        min_compatibility=config.assignment.min_compatibility,
    )

    fairness_evaluator = providers.Singleton(FairnessEvaluator)

    matching_service = providers.Factory(
        MatchingService,
        scorer=scorer,
        assigner=assigner,
        fairness=fairness_evaluator,
        capacity_ceiling=config.assignment.capacity_ceiling,
        capacity_headroom=config.assignment.capacity_headroom,
    )


def create_container(*, settings: dict[str, Any] | AppConfig | None = None) -> MatchingContainer:
    """Instantiate container with optional overrides."""

    container = MatchingContainer()

    if not settings:
        return container

    app_config = settings if isinstance(settings, AppConfig) else load_config(settings)
    normalized = app_config.to_settings()
    if normalized:
        container.config.override(normalized)

    scoring = app_config.scoring
    if scoring.defaults is not None:
        defaults = scoring.defaults
        container.personality.override(
            providers.Singleton(
                PersonalitySimilarity, config=PersonalityConfig(default=defaults.mbti)
            )
        )
        container.learning_style.override(
            providers.Singleton(
                LearningStyleSimilarity,
                config=LearningStyleConfig(default=defaults.learning_style),
            )
        )
        container.elemental.override(
            providers.Singleton(ElementalSimilarity, config=ElementalConfig(default=defaults.saju))
        )
        container.name.override(
            providers.Singleton(NameSimilarity, config=NameConfig(default=defaults.name))
        )

    if scoring.load_tiers is not None or scoring.overflow_score is not None:
        load_config_kwargs: dict[str, Any] = {}
        if scoring.load_tiers is not None:
            load_config_kwargs["tiers"] = tuple(scoring.load_tiers)
        if scoring.overflow_score is not None:
            load_config_kwargs["overflow_score"] = scoring.overflow_score
        container.load_balance.override(
            providers.Singleton(LoadBalanceEvaluator, config=LoadBalanceConfig(**load_config_kwargs))
        )

    fairness_settings = app_config.fairness.model_dump(exclude_none=True)
    if fairness_settings:
        container.fairness_evaluator.override(
            providers.Singleton(FairnessEvaluator, config=FairnessConfig(**fairness_settings))
        )

    return container
