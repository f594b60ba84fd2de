from __future__ import annotations

from itertools import product

import numpy as np

from gibbsmrf.algorithms.prediction import predict
from gibbsmrf.model.network import Network
from gibbsmrf.model.parameters import Parameters
from gibbsmrf.model.vertex import Vertex
from gibbsmrf.sampling.thrml_backend import ThrmlReferenceSampler, colour_free_vertices


def _spin(value: bool) -> float:
    return 1.0 if value else -1.0


def _exact_marginals(network: Network, alpha: float, beta: float) -> dict[Vertex, float]:
    free = list(network.unlabelled_vertices)
    labels = network.labels

    weights: list[float] = []
    states: list[dict[Vertex, bool]] = []
    for combo in product((False, True), repeat=len(free)):
        state = {**labels, **dict(zip(free, combo))}
        field = sum(v.feature_sign * _spin(state[v]) for v in network.vertices)
        pairs = sum(_spin(state[e.source]) * _spin(state[e.target]) for e in network.edges)
        weights.append(float(np.exp(alpha * field + beta * pairs)))
        states.append(state)

    z = sum(weights)
    return {v: sum(w for w, s in zip(weights, states) if s[v]) / z for v in free}


def _small_network() -> Network:
    network = Network()
    a = network.add_unlabelled_vertex(feature=True)
    b = network.add_unlabelled_vertex(feature=False)
    c = network.add_labelled_vertex(feature=True, label=True)
    d = network.add_unlabelled_vertex(feature=False)
    network.add_edge(a, b)
    network.add_edge(b, c)
    network.add_edge(c, d)
    network.add_edge(d, a)
    return network


def test_colouring_separates_adjacent_free_vertices() -> None:
    network = _small_network()
    groups = colour_free_vertices(network)

    assert sorted(len(g) for g in groups) == [1, 2]
    for group in groups:
        members = set(group)
        for vertex in group:
            assert members.isdisjoint(network.neighbours(vertex))


def test_thrml_reference_matches_exact_marginals() -> None:
    network = _small_network()
    alpha, beta = 0.3, 0.6
    expected = _exact_marginals(network, alpha, beta)

    estimated = ThrmlReferenceSampler().estimate_marginals(
        network,
        Parameters(alpha, beta),
        n_samples=6_000,
        burn_in=100,
        thin=1,
        seed=1234,
    )

    assert set(estimated) == set(expected)
    for vertex, prob in expected.items():
        assert abs(estimated[vertex] - prob) < 0.05


def test_predict_matches_exact_marginals() -> None:
    network = _small_network()
    alpha, beta = 0.3, 0.6
    expected = _exact_marginals(network, alpha, beta)

    estimated = predict(
        network,
        Parameters(alpha, beta),
        n_observations=6_000,
        burn_in_rounds=100,
        between_observation_rounds=1,
        rng=np.random.default_rng(99),
    )

    for vertex, prob in expected.items():
        assert abs(estimated[vertex] - prob) < 0.05
