from __future__ import annotations

from gibbsmrf.config.presets import grid_small_config
from gibbsmrf.experiments.grid2d import run_grid_experiment

if __name__ == "__main__":
    config = grid_small_config(seed=0)
    result = run_grid_experiment(config)

    print("Grid experiment complete")
    print(f"Generative: alpha = {config.alpha:.5f}, beta = {config.beta:.5f}")
    print(f"Fitted:     {result.fitted}")
    print(
        f"Number of predictions = {result.score.n_predictions}, "
        f"Number correct = {result.score.n_correct}"
    )
