from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from gibbsmrf.model.network import Network
from gibbsmrf.model.vertex import Vertex


@dataclass(frozen=True)
class SquareLattice:
    """Periodic LxL square lattice in row-major index order."""

    L: int

    def __post_init__(self) -> None:
        if self.L < 2:
            raise ValueError("L must be >= 2 for a periodic lattice")

    @property
    def n_sites(self) -> int:
        return self.L * self.L

    def index(self, row: int, col: int) -> int:
        return (row % self.L) * self.L + (col % self.L)

    def coordinate(self, idx: int) -> tuple[int, int]:
        if idx < 0 or idx >= self.n_sites:
            raise ValueError(f"index out of bounds: {idx}")
        return divmod(idx, self.L)

    def bonds(self) -> list[tuple[int, int]]:
        """Down and right neighbour of every site, covering each torus bond once."""

        pairs: list[tuple[int, int]] = []
        for r in range(self.L):
            for c in range(self.L):
                i = self.index(r, c)
                pairs.append((i, self.index(r + 1, c)))
                pairs.append((i, self.index(r, c + 1)))
        return pairs


def build_grid_network(
    lattice: SquareLattice,
    rng: np.random.Generator | None = None,
) -> tuple[Network, list[Vertex]]:
    """Unlabelled toroidal grid with random features.

    Returns the network and its vertices in row-major site order.
    """

    generator = rng if rng is not None else np.random.default_rng()
    network = Network()
    sites = [
        network.add_unlabelled_vertex_with_random_feature(generator)
        for _ in range(lattice.n_sites)
    ]
    for i, j in lattice.bonds():
        network.add_edge(sites[i], sites[j])
    return network, sites
