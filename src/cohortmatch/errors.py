"""Exceptions raised by the matching core."""

from __future__ import annotations


class CohortInputError(ValueError):
    """Raised when a cohort is malformed (duplicate ids, bad capacity)."""


__all__ = ["CohortInputError"]
