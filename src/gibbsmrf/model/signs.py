from __future__ import annotations

import math

import numpy as np


def ising_product(first: bool, second: bool) -> float:
    """Return ``+1.0`` when both booleans agree and ``-1.0`` otherwise.

    This is the product of the two values read as spins in {-1, +1}.
    """

    return 1.0 if first == second else -1.0


def sign_of(value: bool) -> float:
    """Map ``True``/``False`` onto ``+1.0``/``-1.0``."""

    return 1.0 if value else -1.0


def gibbs_probability(energy_true: float, energy_false: float) -> float:
    """Probability of the ``True`` label given the two candidate energies.

    Computes ``logistic(energy_true - energy_false)`` choosing the branch whose
    exponent is non-positive, so large differences never overflow.
    """

    diff = energy_true - energy_false
    if diff >= 0.0:
        return 1.0 / (1.0 + math.exp(-diff))
    exp_diff = math.exp(diff)
    return exp_diff / (1.0 + exp_diff)


def random_bool(rng: np.random.Generator) -> bool:
    """Uniform random boolean."""

    return bool(rng.random() < 0.5)


def sample_bool(prob_true: float, rng: np.random.Generator) -> bool:
    """Bernoulli draw returning ``True`` with probability ``prob_true``."""

    return bool(rng.random() < prob_true)
