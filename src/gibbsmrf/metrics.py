from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from gibbsmrf.model.network import Network
from gibbsmrf.model.vertex import Vertex


@dataclass(frozen=True)
class PredictionScore:
    """Thresholded accuracy of predicted marginals against known labels."""

    n_predictions: int
    n_correct: int

    @property
    def accuracy(self) -> float:
        if self.n_predictions == 0:
            return 0.0
        return self.n_correct / float(self.n_predictions)


def prediction_accuracy(
    probabilities: Mapping[Vertex, float],
    true_labels: Mapping[Vertex, bool],
    threshold: float = 0.5,
) -> PredictionScore:
    """Count predictions whose ``p > threshold`` matches the true label."""

    n_correct = 0
    for vertex, prob in probabilities.items():
        if (prob > threshold) == true_labels[vertex]:
            n_correct += 1
    return PredictionScore(n_predictions=len(probabilities), n_correct=n_correct)


def edge_agreement(network: Network, labels: Mapping[Vertex, bool]) -> float:
    """Fraction of edges whose endpoints carry the same label."""

    edges = network.edges
    if not edges:
        return 0.0
    agree = np.fromiter(
        (labels[e.source] == labels[e.target] for e in edges),
        dtype=np.bool_,
        count=len(edges),
    )
    return float(np.mean(agree, dtype=np.float64))


def positive_fraction(labels: Mapping[Vertex, bool]) -> float:
    """Share of ``True`` labels; the label analogue of magnetization."""

    if not labels:
        return 0.0
    return float(np.mean(np.fromiter(labels.values(), dtype=np.bool_), dtype=np.float64))
