from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

import numpy as np

from gibbsmrf.model.signs import random_bool

if TYPE_CHECKING:
    from gibbsmrf.model.edge import Edge
    from gibbsmrf.model.network import Network
    from gibbsmrf.model.parameters import Parameters
    from gibbsmrf.model.vertex import Vertex
    from gibbsmrf.sampling.executor import SweepExecutor


class Assignment:
    """Label state of one Markov chain over a network's vertices.

    Vertices found in ``clamped`` keep their label for the lifetime of the
    assignment; every other vertex starts from a random label and is free to
    be resampled. ``adjacency`` fixes the incident edges used by the Gibbs
    updates; edges added to a network later do not reach existing chains.

    Label cells are plain dict entries. During a sweep each free vertex is the
    only writer of its own cell, while neighbours may read it before or after
    the write; no locking is used.
    """

    def __init__(
        self,
        vertices: Iterable[Vertex],
        clamped: Mapping[Vertex, bool],
        rng: np.random.Generator,
        adjacency: Mapping[Vertex, Sequence[Edge]] | None = None,
    ) -> None:
        self._rng = rng
        self._labels: dict[Vertex, bool] = {}
        self._adjacency: dict[Vertex, tuple[Edge, ...]] = {}
        free: list[Vertex] = []
        for vertex in vertices:
            if vertex in clamped:
                self._labels[vertex] = bool(clamped[vertex])
            else:
                self._labels[vertex] = random_bool(rng)
                free.append(vertex)
            self._adjacency[vertex] = tuple(adjacency.get(vertex, ())) if adjacency else ()
        self._free_vertices: tuple[Vertex, ...] = tuple(free)
        self._free_set = frozenset(free)

    @classmethod
    def conditional(cls, network: Network, rng: np.random.Generator | None = None) -> Assignment:
        """Chain that samples the unlabelled vertices given the labelled ones."""

        generator = rng if rng is not None else np.random.default_rng()
        return cls(network.vertices, network.labels, generator, network.adjacency())

    @classmethod
    def joint(cls, network: Network, rng: np.random.Generator | None = None) -> Assignment:
        """Chain that samples every vertex, conditioning on no labels."""

        generator = rng if rng is not None else np.random.default_rng()
        return cls(network.vertices, {}, generator, network.adjacency())

    @property
    def free_vertices(self) -> tuple[Vertex, ...]:
        return self._free_vertices

    def is_free(self, vertex: Vertex) -> bool:
        return vertex in self._free_set

    def label_for(self, vertex: Vertex) -> bool:
        return self._labels[vertex]

    def incident_edges(self, vertex: Vertex) -> tuple[Edge, ...]:
        return self._adjacency[vertex]

    def set_label(self, vertex: Vertex, label: bool) -> None:
        if vertex not in self._free_set:
            raise ValueError("cannot relabel a clamped vertex")
        self._labels[vertex] = bool(label)

    def labels(self) -> dict[Vertex, bool]:
        """Copy of the current labels for every vertex."""

        return dict(self._labels)

    def perform_sampling_round(
        self,
        parameters: Parameters,
        executor: SweepExecutor | None = None,
    ) -> None:
        """Resample every free vertex once, in no particular order.

        Without an executor the sweep runs inline in the calling thread.
        """

        if not self._free_vertices:
            return

        def resample_chunk(chunk: Sequence[Vertex]) -> None:
            for vertex in chunk:
                vertex.resample(self, parameters, self._rng)

        if executor is None:
            resample_chunk(self._free_vertices)
        else:
            executor.map_chunks(resample_chunk, self._free_vertices)

    def __len__(self) -> int:
        return len(self._labels)
