from __future__ import annotations

import numpy as np
import pytest

from gibbsmrf.algorithms.prediction import predict
from gibbsmrf.model.network import Network
from gibbsmrf.model.parameters import Parameters


def test_graph_construction_tracks_labels_and_adjacency() -> None:
    network = Network()
    a = network.add_labelled_vertex(feature=True, label=False)
    b = network.add_unlabelled_vertex(feature=False)
    c = network.add_unlabelled_vertex(feature=True)
    network.add_edge(a, b)
    network.add_edge(c, b)

    assert network.vertices == (a, b, c)
    assert len(network.edges) == 2
    assert dict(network.labels) == {a: False}
    assert network.unlabelled_vertices == (b, c)
    assert network.degree(b) == 2
    assert set(network.neighbours(b)) == {a, c}
    assert a.feature_sign == 1.0
    assert b.feature_sign == -1.0


def test_labels_are_read_only() -> None:
    network = Network()
    vertex = network.add_unlabelled_vertex(feature=True)

    with pytest.raises(TypeError):
        network.labels[vertex] = True  # type: ignore[index]


def test_edges_must_join_two_distinct_members() -> None:
    network = Network()
    other = Network()
    a = network.add_unlabelled_vertex(feature=True)
    stranger = other.add_unlabelled_vertex(feature=True)

    with pytest.raises(ValueError):
        network.add_edge(a, stranger)
    with pytest.raises(ValueError):
        network.add_edge(a, a)
    assert network.edges == ()
    assert network.degree(a) == 0


def test_shallow_copy_owns_its_label_map() -> None:
    network = Network()
    a = network.add_labelled_vertex(feature=True, label=True)
    b = network.add_unlabelled_vertex(feature=False)
    network.add_edge(a, b)

    copy = network.shallow_copy()
    extra = copy.add_labelled_vertex(feature=False, label=False)

    assert copy.vertices[:2] == network.vertices
    assert copy.edges == network.edges
    assert extra not in network
    assert dict(network.labels) == {a: True}

    source_labels = {a: False, b: True}
    relabelled = network.shallow_copy(labels=source_labels)
    source_labels[b] = False

    assert dict(relabelled.labels) == {a: False, b: True}
    assert dict(network.labels) == {a: True}

    network.add_labelled_vertex(feature=True, label=True)
    assert len(relabelled.vertices) == 2
    assert len(relabelled.labels) == 2


def test_edges_added_to_a_copy_leave_the_source_neighbourhood_alone() -> None:
    network = Network()
    a = network.add_labelled_vertex(feature=True, label=True)
    b = network.add_unlabelled_vertex(feature=False)
    network.add_edge(a, b)

    copy = network.shallow_copy()
    extra = copy.add_unlabelled_vertex(feature=True)
    copy.add_edge(a, extra)
    copy.add_edge(b, extra)

    assert len(network.edges) == 1
    assert network.degree(a) == 1
    assert network.neighbours(b) == [a]
    assert copy.degree(a) == 2
    assert set(copy.neighbours(b)) == {a, extra}

    probabilities = predict(
        network,
        Parameters(0.1, 0.2),
        n_observations=3,
        burn_in_rounds=1,
        between_observation_rounds=1,
        rng=np.random.default_rng(0),
    )
    assert set(probabilities) == {b}

    copied = predict(
        copy,
        Parameters(0.1, 0.2),
        n_observations=3,
        burn_in_rounds=1,
        between_observation_rounds=1,
        rng=np.random.default_rng(0),
    )
    assert set(copied) == {b, extra}


def test_labels_for_foreign_vertices_are_rejected() -> None:
    network = Network()
    network.add_unlabelled_vertex(feature=True)
    stranger = Network().add_unlabelled_vertex(feature=True)

    with pytest.raises(ValueError):
        network.shallow_copy(labels={stranger: True})
