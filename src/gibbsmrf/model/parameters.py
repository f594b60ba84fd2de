from __future__ import annotations

import threading


class Parameters:
    """Couplings ``alpha`` (label-feature) and ``beta`` (label-label).

    Writers call :meth:`increment` concurrently while a gradient round is in
    flight; readers only ever see the snapshot published by the last
    :meth:`commit`, so a sampling round reads one consistent pair throughout.
    """

    def __init__(self, alpha: float = 0.0, beta: float = 0.0) -> None:
        self._lock = threading.Lock()
        self._alpha_total = float(alpha)
        self._beta_total = float(beta)
        self._snapshot: tuple[float, float] = (self._alpha_total, self._beta_total)

    def increment(self, field_delta: float = 0.0, pair_delta: float = 0.0) -> None:
        """Add to the running totals; safe to call from many threads."""

        with self._lock:
            self._alpha_total += field_delta
            self._beta_total += pair_delta

    def commit(self) -> None:
        """Publish the running totals as the snapshot seen by samplers."""

        with self._lock:
            snapshot = (self._alpha_total, self._beta_total)
        # single reference store; readers get either the old or the new pair
        self._snapshot = snapshot

    def read(self) -> tuple[float, float]:
        return self._snapshot

    @property
    def alpha(self) -> float:
        return self._snapshot[0]

    @property
    def beta(self) -> float:
        return self._snapshot[1]

    def __str__(self) -> str:
        alpha, beta = self._snapshot
        return f"alpha = {alpha:.5f}, beta = {beta:.5f}"

    def __repr__(self) -> str:
        alpha, beta = self._snapshot
        return f"Parameters(alpha={alpha!r}, beta={beta!r})"
