from __future__ import annotations

import logging

import numpy as np

from gibbsmrf.config.schemas import ExecutionConfig, PredictionConfig
from gibbsmrf.model.assignment import Assignment
from gibbsmrf.model.network import Network
from gibbsmrf.model.parameters import Parameters
from gibbsmrf.sampling.executor import SweepExecutor, sweep_executor
from gibbsmrf.types import ProbabilityMap
from gibbsmrf.utils.checks import require_non_negative
from gibbsmrf.utils.logging import log_event

logger = logging.getLogger(__name__)


def predict(
    network: Network,
    parameters: Parameters,
    n_observations: int,
    burn_in_rounds: int,
    between_observation_rounds: int,
    *,
    rng: np.random.Generator | None = None,
    executor: SweepExecutor | None = None,
) -> ProbabilityMap:
    """Estimate ``P(y_i = True | known labels, features)`` for unlabelled vertices.

    A single chain clamped to the known labels is burned in once, then
    observed ``n_observations`` times with ``between_observation_rounds``
    sweeps between consecutive observations. The estimate is the fraction of
    observations in which the vertex carried a positive label; with no
    observations every estimate is 0.0.
    """

    require_non_negative("n_observations", n_observations)
    require_non_negative("burn_in_rounds", burn_in_rounds)
    require_non_negative("between_observation_rounds", between_observation_rounds)

    assignment = Assignment.conditional(network, rng)
    free_vertices = assignment.free_vertices
    positive_counts = dict.fromkeys(free_vertices, 0)

    with sweep_executor(executor) as pool:
        for _ in range(burn_in_rounds):
            assignment.perform_sampling_round(parameters, pool)

        for observation in range(n_observations):
            if observation > 0:
                for _ in range(between_observation_rounds):
                    assignment.perform_sampling_round(parameters, pool)
            for vertex in free_vertices:
                if assignment.label_for(vertex):
                    positive_counts[vertex] += 1

    if n_observations == 0:
        probabilities = dict.fromkeys(free_vertices, 0.0)
    else:
        probabilities = {
            vertex: count / float(n_observations) for vertex, count in positive_counts.items()
        }

    log_event(
        logger,
        "prediction_finished",
        free_vertices=len(free_vertices),
        observations=n_observations,
        mean_probability=float(np.mean(list(probabilities.values()))) if probabilities else 0.0,
    )
    return probabilities


def predict_from_config(
    network: Network,
    parameters: Parameters,
    config: PredictionConfig,
    execution: ExecutionConfig | None = None,
) -> ProbabilityMap:
    exec_cfg = execution if execution is not None else ExecutionConfig()
    with SweepExecutor(max_workers=exec_cfg.max_workers) as pool:
        return predict(
            network,
            parameters,
            config.n_observations,
            config.burn_in_rounds,
            config.between_observation_rounds,
            rng=np.random.default_rng(exec_cfg.seed),
            executor=pool,
        )
