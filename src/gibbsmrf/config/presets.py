from __future__ import annotations

from gibbsmrf.config.schemas import (
    ExecutionConfig,
    GridExperimentConfig,
    PredictionConfig,
    TrainingConfig,
)


def grid_small_config(seed: int = 7) -> GridExperimentConfig:
    """Small CI/laptop grid experiment."""

    return GridExperimentConfig(
        grid_size=8,
        alpha=0.3,
        beta=0.5,
        labelling_rounds=100,
        retain_proportion=0.5,
        training=TrainingConfig(
            descent_steps=60,
            burn_in_rounds=20,
            between_descent_rounds=2,
            learning_rate=1.0e-3,
        ),
        prediction=PredictionConfig(
            n_observations=40,
            burn_in_rounds=50,
            between_observation_rounds=2,
        ),
        execution=ExecutionConfig(max_workers=1, seed=seed),
    )


def grid_paper_config(seed: int = 11) -> GridExperimentConfig:
    """Full-size 100x100 torus run with the historical demo settings."""

    return GridExperimentConfig(
        grid_size=100,
        alpha=0.3,
        beta=0.5,
        labelling_rounds=1_000,
        retain_proportion=0.2,
        training=TrainingConfig(
            descent_steps=1_000,
            burn_in_rounds=1_000,
            between_descent_rounds=1,
            learning_rate=1.0e-5,
        ),
        prediction=PredictionConfig(
            n_observations=50,
            burn_in_rounds=1_000,
            between_observation_rounds=50,
        ),
        execution=ExecutionConfig(max_workers=None, seed=seed),
    )
