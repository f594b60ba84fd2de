from __future__ import annotations

import numpy as np

from gibbsmrf.config.presets import grid_small_config
from gibbsmrf.experiments.grid2d import run_grid_experiment


def test_grid_small_smoke_runs() -> None:
    base = grid_small_config(seed=5)
    cfg = base.model_copy(
        update={
            "grid_size": 4,
            "labelling_rounds": 10,
            "training": base.training.model_copy(
                update={"descent_steps": 5, "burn_in_rounds": 3, "between_descent_rounds": 1}
            ),
            "prediction": base.prediction.model_copy(
                update={"n_observations": 6, "burn_in_rounds": 3, "between_observation_rounds": 1}
            ),
        }
    )

    out = run_grid_experiment(cfg)

    assert len(out.history) == 5
    assert np.isfinite(out.fitted.alpha)
    assert np.isfinite(out.fitted.beta)
    assert out.score.n_predictions == len(out.probabilities)
    assert 0.0 <= out.score.accuracy <= 1.0
    assert 0.0 <= out.label_agreement <= 1.0
