from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class RngStreams:
    """Random streams for chains and the THRML reference sampler.

    A ``None`` seed draws fresh entropy, as ``np.random.default_rng`` does.
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.seed is not None and self.seed < 0:
            raise ValueError("seed must be non-negative")
        self._np_rng = np.random.default_rng(self.seed)

    @property
    def numpy(self) -> np.random.Generator:
        return self._np_rng

    def spawn(self) -> np.random.Generator:
        """Independent generator for a separate chain."""

        return np.random.default_rng(self.next_int())

    def next_int(self, low: int = 0, high: int = 2**31 - 1) -> int:
        return int(self._np_rng.integers(low=low, high=high))
