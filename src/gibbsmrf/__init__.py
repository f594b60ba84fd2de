"""Pairwise label Markov random fields fitted and queried by Gibbs sampling."""

from gibbsmrf.algorithms import (
    erase_labels,
    predict,
    run_training,
    sample_missing_labels,
    train,
)
from gibbsmrf.config.schemas import ExecutionConfig, PredictionConfig, TrainingConfig
from gibbsmrf.model import Network, Parameters, Vertex

__all__ = [
    "ExecutionConfig",
    "Network",
    "Parameters",
    "PredictionConfig",
    "TrainingConfig",
    "Vertex",
    "erase_labels",
    "predict",
    "run_training",
    "sample_missing_labels",
    "train",
]
