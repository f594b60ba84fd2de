from gibbsmrf.algorithms.prediction import predict, predict_from_config
from gibbsmrf.algorithms.synthetic import erase_labels, sample_missing_labels
from gibbsmrf.algorithms.training import (
    DescentMetrics,
    TrainingResult,
    run_training,
    train,
    train_from_config,
)

__all__ = [
    "DescentMetrics",
    "TrainingResult",
    "erase_labels",
    "predict",
    "predict_from_config",
    "run_training",
    "sample_missing_labels",
    "train",
    "train_from_config",
]
