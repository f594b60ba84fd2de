from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from gibbsmrf.model.signs import gibbs_probability, ising_product, sample_bool, sign_of

if TYPE_CHECKING:
    from gibbsmrf.model.assignment import Assignment
    from gibbsmrf.model.parameters import Parameters


class Vertex:
    """A graph node with a fixed binary feature.

    Vertices are created by :class:`~gibbsmrf.model.network.Network`, which
    also owns their incident edges; the feature never changes afterwards.
    """

    __slots__ = ("_feature",)

    def __init__(self, feature: bool) -> None:
        self._feature = bool(feature)

    @property
    def feature(self) -> bool:
        return self._feature

    @property
    def feature_sign(self) -> float:
        return sign_of(self._feature)

    def _field_statistic_for_label(self, label: bool) -> float:
        return ising_product(label, self._feature)

    def field_statistic(self, assignment: Assignment) -> float:
        """``x_i * y_i`` using this vertex's current label."""

        return self._field_statistic_for_label(assignment.label_for(self))

    def local_energy(
        self,
        label: bool,
        assignment: Assignment,
        alpha: float,
        beta: float,
    ) -> float:
        """``alpha * x_i * yhat + beta * sum_j yhat * y_j`` for a candidate label.

        Incident edges are those the assignment was built with. Neighbour
        labels come straight from ``assignment`` and may be mid-sweep.
        """

        pair_sum = 0.0
        for edge in assignment.incident_edges(self):
            pair_sum += edge.pair_statistic_from(self, label, assignment)
        return alpha * self._field_statistic_for_label(label) + beta * pair_sum

    def probability_true(self, assignment: Assignment, parameters: Parameters) -> float:
        """Gibbs conditional ``P(y_i = True | neighbours, x_i)``."""

        alpha, beta = parameters.read()
        energy_true = self.local_energy(True, assignment, alpha, beta)
        energy_false = self.local_energy(False, assignment, alpha, beta)
        return gibbs_probability(energy_true, energy_false)

    def resample(
        self,
        assignment: Assignment,
        parameters: Parameters,
        rng: np.random.Generator,
    ) -> None:
        """One single-site Gibbs update written back into ``assignment``."""

        prob_true = self.probability_true(assignment, parameters)
        assignment.set_label(self, sample_bool(prob_true, rng))

    def __repr__(self) -> str:
        return f"Vertex(feature={self._feature}, id=0x{id(self):x})"
