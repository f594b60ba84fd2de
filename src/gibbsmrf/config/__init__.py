from gibbsmrf.config.presets import grid_paper_config, grid_small_config
from gibbsmrf.config.schemas import (
    ExecutionConfig,
    GridExperimentConfig,
    PredictionConfig,
    TrainingConfig,
)

__all__ = [
    "ExecutionConfig",
    "GridExperimentConfig",
    "PredictionConfig",
    "TrainingConfig",
    "grid_paper_config",
    "grid_small_config",
]
