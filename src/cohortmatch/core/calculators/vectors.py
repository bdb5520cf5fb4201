"""Vector helpers shared by the similarity calculators."""

from __future__ import annotations

import math
from typing import Sequence


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float | None:
    """Cosine of the angle between two vectors, or None on zero magnitude."""
    if len(vec_a) != len(vec_b):
        raise ValueError(
            f"Vector length mismatch: {len(vec_a)} != {len(vec_b)}"
        )
    norm_a = math.sqrt(sum(value * value for value in vec_a))
    norm_b = math.sqrt(sum(value * value for value in vec_b))
    if norm_a == 0 or norm_b == 0:
        return None
    dot = sum(a * b for a, b in zip(vec_a, vec_b))
    return dot / (norm_a * norm_b)
