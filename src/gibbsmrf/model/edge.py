from __future__ import annotations

from typing import TYPE_CHECKING

from gibbsmrf.model.signs import ising_product

if TYPE_CHECKING:
    from gibbsmrf.model.assignment import Assignment
    from gibbsmrf.model.vertex import Vertex


class Edge:
    """Undirected coupling between two vertices.

    ``source`` and ``target`` only tell the endpoints apart; the pairwise term
    ``y_source * y_target`` is symmetric.
    """

    __slots__ = ("source", "target")

    def __init__(self, source: Vertex, target: Vertex) -> None:
        if source is target:
            raise ValueError("self-loops are not supported")
        self.source = source
        self.target = target

    def other(self, vertex: Vertex) -> Vertex:
        if vertex is self.source:
            return self.target
        if vertex is self.target:
            return self.source
        raise ValueError("vertex is not an endpoint of this edge")

    def pair_statistic(self, assignment: Assignment) -> float:
        """Pairwise statistic with both endpoints read from ``assignment``."""

        return ising_product(
            assignment.label_for(self.source),
            assignment.label_for(self.target),
        )

    def pair_statistic_for_source(self, label: bool, assignment: Assignment) -> float:
        return ising_product(label, assignment.label_for(self.target))

    def pair_statistic_for_target(self, label: bool, assignment: Assignment) -> float:
        return ising_product(assignment.label_for(self.source), label)

    def pair_statistic_from(self, vertex: Vertex, label: bool, assignment: Assignment) -> float:
        """Statistic with ``vertex`` taking the candidate ``label``."""

        if vertex is self.source:
            return self.pair_statistic_for_source(label, assignment)
        return self.pair_statistic_for_target(label, assignment)

    def __repr__(self) -> str:
        return f"Edge({self.source!r}, {self.target!r})"
