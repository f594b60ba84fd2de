from __future__ import annotations

import math


def require_non_negative(name: str, value: float) -> None:
    """Raise a clear error for negative counts or rates."""

    if value < 0:
        raise ValueError(f"{name} must be >= 0, received {value}")


def require_finite(name: str, value: float) -> None:
    """Guard against NaN/Inf hyperparameters."""

    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, received {value}")


def require_probability(name: str, value: float) -> None:
    """Ensure ``value`` lies in the closed interval [0, 1]."""

    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must lie in [0, 1], received {value}")
