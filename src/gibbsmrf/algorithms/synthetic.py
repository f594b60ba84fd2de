"""Helpers that derive labelled or partially labelled copies of a network.

Both return shallow copies: vertices and edges are shared with the source,
the label map is not.
"""

from __future__ import annotations

import logging

import numpy as np

from gibbsmrf.model.assignment import Assignment
from gibbsmrf.model.network import Network
from gibbsmrf.model.parameters import Parameters
from gibbsmrf.sampling.executor import SweepExecutor, sweep_executor
from gibbsmrf.utils.checks import require_non_negative, require_probability
from gibbsmrf.utils.logging import log_event

logger = logging.getLogger(__name__)


def sample_missing_labels(
    network: Network,
    parameters: Parameters,
    n_rounds: int,
    *,
    rng: np.random.Generator | None = None,
    executor: SweepExecutor | None = None,
) -> Network:
    """Label every unlabelled vertex by Gibbs sampling the conditional chain.

    Known labels are carried over unchanged.
    """

    require_non_negative("n_rounds", n_rounds)

    assignment = Assignment.conditional(network, rng)
    with sweep_executor(executor) as pool:
        for _ in range(n_rounds):
            assignment.perform_sampling_round(parameters, pool)

    log_event(
        logger,
        "labels_sampled",
        sampled=len(assignment.free_vertices),
        rounds=n_rounds,
        alpha=parameters.alpha,
        beta=parameters.beta,
    )
    return network.shallow_copy(labels=assignment.labels())


def erase_labels(
    network: Network,
    retain_proportion: float,
    *,
    rng: np.random.Generator | None = None,
) -> Network:
    """Keep each known label independently with probability ``retain_proportion``."""

    require_probability("retain_proportion", retain_proportion)
    generator = rng if rng is not None else np.random.default_rng()

    retained = {
        vertex: label
        for vertex, label in network.labels.items()
        if generator.random() < retain_proportion
    }

    log_event(
        logger,
        "labels_erased",
        before=len(network.labels),
        after=len(retained),
        retain_proportion=retain_proportion,
    )
    return network.shallow_copy(labels=retained)
