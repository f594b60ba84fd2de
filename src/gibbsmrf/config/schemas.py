from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TrainingConfig(BaseModel):
    """Persistent-chain gradient ascent schedule."""

    model_config = ConfigDict(extra="forbid")

    descent_steps: int = Field(ge=0)
    burn_in_rounds: int = Field(ge=0)
    between_descent_rounds: int = Field(ge=0)
    learning_rate: float = Field(ge=0.0, allow_inf_nan=False)


class PredictionConfig(BaseModel):
    """Burn-in/thinning schedule for marginal estimation."""

    model_config = ConfigDict(extra="forbid")

    n_observations: int = Field(ge=0)
    burn_in_rounds: int = Field(ge=0)
    between_observation_rounds: int = Field(ge=0)


class ExecutionConfig(BaseModel):
    """Thread fan-out and seeding for sampling sweeps."""

    model_config = ConfigDict(extra="forbid")

    max_workers: int | None = Field(default=None, ge=1)
    seed: int | None = Field(default=None, ge=0)


class GridExperimentConfig(BaseModel):
    """Generate labels on a torus, fit parameters, then predict erased labels."""

    model_config = ConfigDict(extra="forbid")

    grid_size: int = Field(ge=2)
    alpha: float = Field(allow_inf_nan=False)
    beta: float = Field(allow_inf_nan=False)
    labelling_rounds: int = Field(ge=0)
    retain_proportion: float = Field(ge=0.0, le=1.0)
    training: TrainingConfig
    prediction: PredictionConfig
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
