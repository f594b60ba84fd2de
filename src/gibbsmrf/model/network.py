"""Graph container for the pairwise label model.

The model over labels ``y`` given features ``x`` (both read as spins in
{-1, +1}) is::

    log p~(y | x) = alpha * sum_i x_i y_i + beta * sum_{(i,j)} y_i y_j

where the second sum runs over the edges. Features are known for every vertex;
labels are known only for the vertices present in :attr:`Network.labels`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from gibbsmrf.model.assignment import Assignment
from gibbsmrf.model.edge import Edge
from gibbsmrf.model.parameters import Parameters
from gibbsmrf.model.signs import random_bool
from gibbsmrf.model.vertex import Vertex
from gibbsmrf.sampling.executor import SweepExecutor


@dataclass(frozen=True)
class GradientStep:
    """Totals added to ``alpha`` and ``beta`` by one gradient round."""

    field_delta: float
    pair_delta: float


class Network:
    """Vertices, edges and the partial map of observed labels."""

    def __init__(
        self,
        vertices: Sequence[Vertex] = (),
        edges: Sequence[Edge] = (),
        labels: Mapping[Vertex, bool] | None = None,
    ) -> None:
        self._vertices: list[Vertex] = list(vertices)
        self._vertex_set: set[Vertex] = set(self._vertices)
        self._edges: list[Edge] = list(edges)
        self._adjacency: dict[Vertex, list[Edge]] = {v: [] for v in self._vertices}
        self._labels: dict[Vertex, bool] = {}

        for edge in self._edges:
            self._require_member(edge.source)
            self._require_member(edge.target)
            self._adjacency[edge.source].append(edge)
            self._adjacency[edge.target].append(edge)
        for vertex, label in (labels or {}).items():
            self._require_member(vertex)
            self._labels[vertex] = bool(label)

    def _require_member(self, vertex: Vertex) -> None:
        if vertex not in self._vertex_set:
            raise ValueError(f"{vertex!r} does not belong to this network")

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        return tuple(self._vertices)

    @property
    def edges(self) -> tuple[Edge, ...]:
        return tuple(self._edges)

    @property
    def labels(self) -> Mapping[Vertex, bool]:
        """Read-only view of the observed labels."""

        return MappingProxyType(self._labels)

    @property
    def unlabelled_vertices(self) -> tuple[Vertex, ...]:
        return tuple(v for v in self._vertices if v not in self._labels)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._vertex_set

    def incident_edges(self, vertex: Vertex) -> tuple[Edge, ...]:
        self._require_member(vertex)
        return tuple(self._adjacency[vertex])

    def degree(self, vertex: Vertex) -> int:
        self._require_member(vertex)
        return len(self._adjacency[vertex])

    def neighbours(self, vertex: Vertex) -> list[Vertex]:
        return [edge.other(vertex) for edge in self.incident_edges(vertex)]

    def adjacency(self) -> dict[Vertex, tuple[Edge, ...]]:
        """Snapshot of the incident edges of every vertex."""

        return {vertex: tuple(edges) for vertex, edges in self._adjacency.items()}

    def add_unlabelled_vertex(self, feature: bool) -> Vertex:
        vertex = Vertex(feature)
        self._vertices.append(vertex)
        self._vertex_set.add(vertex)
        self._adjacency[vertex] = []
        return vertex

    def add_unlabelled_vertex_with_random_feature(
        self,
        rng: np.random.Generator | None = None,
    ) -> Vertex:
        generator = rng if rng is not None else np.random.default_rng()
        return self.add_unlabelled_vertex(random_bool(generator))

    def add_labelled_vertex(self, feature: bool, label: bool) -> Vertex:
        vertex = self.add_unlabelled_vertex(feature)
        self._labels[vertex] = bool(label)
        return vertex

    def add_edge(self, source: Vertex, target: Vertex) -> Edge:
        """Link two vertices of this network; the direction carries no meaning."""

        self._require_member(source)
        self._require_member(target)
        edge = Edge(source, target)
        self._edges.append(edge)
        self._adjacency[source].append(edge)
        self._adjacency[target].append(edge)
        return edge

    def shallow_copy(self, labels: Mapping[Vertex, bool] | None = None) -> Network:
        """New network sharing the vertex/edge objects but owning its containers.

        The copy gets its own vertex list, edge list, adjacency and label map,
        so building on one network never changes the other.

        ``labels`` replaces the observed labels of the copy; by default the
        current labels are copied.
        """

        new_labels = dict(self._labels) if labels is None else labels
        return Network(self._vertices, self._edges, new_labels)

    def perform_gradient_descent_round(
        self,
        target: Assignment,
        observed: Assignment,
        parameters: Parameters,
        learning_rate: float,
        executor: SweepExecutor | None = None,
    ) -> GradientStep:
        """Apply one stochastic-gradient step to ``parameters`` and commit it.

        With ``L = log p(y_known | x)`` marginalising the unknown labels::

            dL/d(alpha) = sum_i E_target[x_i y_i] - sum_i E_observed[x_i y_i]
            dL/d(beta) = sum_(i,j) E_target[y_i y_j] - sum_(i,j) E_observed[y_i y_j]

        Each expectation is replaced by the current state of its persistent
        chain: ``target`` is clamped to the known labels and ``observed``
        samples every vertex.
        """

        def field_chunk(chunk: Sequence[Vertex]) -> float:
            total = 0.0
            for vertex in chunk:
                total += vertex.field_statistic(target) - vertex.field_statistic(observed)
            delta = learning_rate * total
            parameters.increment(field_delta=delta)
            return delta

        def pair_chunk(chunk: Sequence[Edge]) -> float:
            total = 0.0
            for edge in chunk:
                total += edge.pair_statistic(target) - edge.pair_statistic(observed)
            delta = learning_rate * total
            parameters.increment(pair_delta=delta)
            return delta

        if executor is None:
            field_parts = [field_chunk(self._vertices)] if self._vertices else []
            pair_parts = [pair_chunk(self._edges)] if self._edges else []
        else:
            field_parts = executor.map_chunks(field_chunk, self._vertices)
            pair_parts = executor.map_chunks(pair_chunk, self._edges)

        parameters.commit()
        return GradientStep(field_delta=float(sum(field_parts)), pair_delta=float(sum(pair_parts)))

    def __repr__(self) -> str:
        return (
            f"Network(vertices={len(self._vertices)}, edges={len(self._edges)}, "
            f"labels={len(self._labels)})"
        )
