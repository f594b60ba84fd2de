from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from gibbsmrf.config.schemas import ExecutionConfig, TrainingConfig
from gibbsmrf.model.assignment import Assignment
from gibbsmrf.model.network import Network
from gibbsmrf.model.parameters import Parameters
from gibbsmrf.sampling.executor import SweepExecutor, sweep_executor
from gibbsmrf.utils.checks import require_finite, require_non_negative
from gibbsmrf.utils.logging import log_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DescentMetrics:
    """Per-step diagnostics of persistent-chain gradient ascent."""

    step: int
    sampling_rounds: int
    field_delta: float
    pair_delta: float
    alpha: float
    beta: float


@dataclass(frozen=True)
class TrainingResult:
    """Fitted parameters plus the trajectory that produced them."""

    parameters: Parameters
    history: list[DescentMetrics]


def run_training(
    network: Network,
    descent_steps: int,
    burn_in_rounds: int,
    between_descent_rounds: int,
    learning_rate: float,
    *,
    rng: np.random.Generator | None = None,
    executor: SweepExecutor | None = None,
) -> TrainingResult:
    """Fit ``alpha`` and ``beta`` to the known labels of ``network``.

    Two chains persist across every descent step: the target chain samples
    the unknown labels given the known ones, the observed chain samples all
    labels. The first step runs ``burn_in_rounds`` sweeps on both chains,
    every later step ``between_descent_rounds``; each step then moves the
    parameters along the difference of the chains' sufficient statistics.
    """

    require_non_negative("descent_steps", descent_steps)
    require_non_negative("burn_in_rounds", burn_in_rounds)
    require_non_negative("between_descent_rounds", between_descent_rounds)
    require_finite("learning_rate", learning_rate)
    require_non_negative("learning_rate", learning_rate)

    generator = rng if rng is not None else np.random.default_rng()
    parameters = Parameters()
    target = Assignment.conditional(network, generator)
    observed = Assignment.joint(network, generator)
    history: list[DescentMetrics] = []

    log_event(
        logger,
        "training_started",
        vertices=len(network.vertices),
        edges=len(network.edges),
        free_in_target=len(target.free_vertices),
        descent_steps=descent_steps,
        learning_rate=learning_rate,
    )

    with sweep_executor(executor) as pool:
        for step in range(descent_steps):
            rounds = burn_in_rounds if step == 0 else between_descent_rounds
            for _ in range(rounds):
                # no-op on the target chain when every label is known
                target.perform_sampling_round(parameters, pool)
                observed.perform_sampling_round(parameters, pool)

            gradient = network.perform_gradient_descent_round(
                target,
                observed,
                parameters,
                learning_rate,
                pool,
            )
            history.append(
                DescentMetrics(
                    step=step,
                    sampling_rounds=rounds,
                    field_delta=gradient.field_delta,
                    pair_delta=gradient.pair_delta,
                    alpha=parameters.alpha,
                    beta=parameters.beta,
                )
            )
            log_event(
                logger,
                "descent_step",
                level=logging.DEBUG,
                step=step,
                alpha=parameters.alpha,
                beta=parameters.beta,
            )

    log_event(logger, "training_finished", alpha=parameters.alpha, beta=parameters.beta)
    return TrainingResult(parameters=parameters, history=history)


def train(
    network: Network,
    descent_steps: int,
    burn_in_rounds: int,
    between_descent_rounds: int,
    learning_rate: float,
    *,
    rng: np.random.Generator | None = None,
    executor: SweepExecutor | None = None,
) -> Parameters:
    """Parameters maximising the likelihood of the known labels."""

    return run_training(
        network,
        descent_steps,
        burn_in_rounds,
        between_descent_rounds,
        learning_rate,
        rng=rng,
        executor=executor,
    ).parameters


def train_from_config(
    network: Network,
    config: TrainingConfig,
    execution: ExecutionConfig | None = None,
) -> TrainingResult:
    exec_cfg = execution if execution is not None else ExecutionConfig()
    with SweepExecutor(max_workers=exec_cfg.max_workers) as pool:
        return run_training(
            network,
            config.descent_steps,
            config.burn_in_rounds,
            config.between_descent_rounds,
            config.learning_rate,
            rng=np.random.default_rng(exec_cfg.seed),
            executor=pool,
        )
