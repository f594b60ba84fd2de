from __future__ import annotations

import numpy as np
import pytest

from gibbsmrf.lattice import SquareLattice, build_grid_network
from gibbsmrf.metrics import edge_agreement, positive_fraction, prediction_accuracy
from gibbsmrf.model.network import Network


def test_square_lattice_indexing_wraps() -> None:
    lattice = SquareLattice(L=4)

    assert lattice.n_sites == 16
    assert lattice.index(4, -1) == 3
    assert lattice.coordinate(7) == (1, 3)
    assert len(lattice.bonds()) == 2 * lattice.n_sites
    with pytest.raises(ValueError):
        SquareLattice(L=1)


def test_grid_network_is_four_regular_torus() -> None:
    lattice = SquareLattice(L=5)
    network, sites = build_grid_network(lattice, rng=np.random.default_rng(0))

    assert len(network.vertices) == 25
    assert len(network.edges) == 50
    assert dict(network.labels) == {}
    assert all(network.degree(v) == 4 for v in sites)
    assert set(network.neighbours(sites[lattice.index(2, 2)])) == {
        sites[lattice.index(1, 2)],
        sites[lattice.index(3, 2)],
        sites[lattice.index(2, 1)],
        sites[lattice.index(2, 3)],
    }


def test_prediction_accuracy_thresholds_probabilities() -> None:
    network = Network()
    a, b, c = (network.add_unlabelled_vertex(feature=True) for _ in range(3))
    truth = {a: True, b: False, c: True}

    score = prediction_accuracy({a: 0.9, b: 0.6, c: 0.51}, truth)

    assert score.n_predictions == 3
    assert score.n_correct == 2
    assert score.accuracy == pytest.approx(2.0 / 3.0)
    assert prediction_accuracy({}, truth).accuracy == 0.0


def test_edge_agreement_and_positive_fraction() -> None:
    network = Network()
    a, b, c = (network.add_unlabelled_vertex(feature=True) for _ in range(3))
    network.add_edge(a, b)
    network.add_edge(b, c)
    labels = {a: True, b: True, c: False}

    assert edge_agreement(network, labels) == 0.5
    assert positive_fraction(labels) == pytest.approx(2.0 / 3.0)
    assert positive_fraction({}) == 0.0
