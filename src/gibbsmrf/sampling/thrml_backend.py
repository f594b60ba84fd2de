"""Block-Gibbs reference sampler built on THRML.

The asynchronous sweeps in :mod:`gibbsmrf.model` read neighbours without
synchronisation. This module samples the same model with THRML's
``IsingEBM`` using properly coloured blocks, which gives an independent
estimate of the free-vertex marginals to check ``predict`` against.

THRML's Ising model has ``p(s) ~ exp(beta_T * (sum_i b_i s_i + sum_ij w_ij s_i s_j))``,
so the label model maps onto it with ``b_i = alpha * x_i``, ``w_ij = beta``
for every edge and ``beta_T = 1``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, cast

import jax
import numpy as np
from jax import numpy as jnp
from thrml import Block, SamplingSchedule, SpinNode, sample_states
from thrml.models import IsingEBM, IsingSamplingProgram, hinton_init
from thrml.pgm import AbstractNode

from gibbsmrf.model.network import Network
from gibbsmrf.model.parameters import Parameters
from gibbsmrf.model.vertex import Vertex
from gibbsmrf.types import BoolArray

FreeSuperBlocks: TypeAlias = list[tuple[Block[AbstractNode], ...] | Block[AbstractNode]]


@dataclass(frozen=True)
class _ReferenceProgram:
    ebm: IsingEBM
    program: IsingSamplingProgram
    free_blocks: list[Block[AbstractNode]]
    free_groups: list[list[Vertex]]
    clamped_state: list[BoolArray]


@dataclass(frozen=True)
class ReferenceSamples:
    """Sampled labels, one column per free vertex."""

    vertices: tuple[Vertex, ...]
    labels: BoolArray

    def marginals(self) -> dict[Vertex, float]:
        means = np.mean(self.labels, axis=0, dtype=np.float64)
        return {vertex: float(means[idx]) for idx, vertex in enumerate(self.vertices)}


def _new_spin_node() -> AbstractNode:
    return cast(AbstractNode, SpinNode())  # type: ignore[no-untyped-call]


def _squeeze_chain_axis(samples: np.ndarray) -> np.ndarray:
    if samples.ndim >= 3 and samples.shape[1] == 1:
        return samples[:, 0, ...]
    return samples


def _empty_batch_shape() -> tuple[int]:
    return cast(tuple[int], ())


def colour_free_vertices(network: Network) -> list[list[Vertex]]:
    """Greedy colouring of the unlabelled vertices into independent sets.

    Two free vertices joined by an edge never share a group, so each group
    can be updated simultaneously given the rest of the state.
    """

    free_vertices = network.unlabelled_vertices
    free_set = set(free_vertices)
    colour_of: dict[Vertex, int] = {}
    groups: list[list[Vertex]] = []
    for vertex in free_vertices:
        taken = {
            colour_of[n] for n in network.neighbours(vertex) if n in free_set and n in colour_of
        }
        colour = 0
        while colour in taken:
            colour += 1
        colour_of[vertex] = colour
        if colour == len(groups):
            groups.append([])
        groups[colour].append(vertex)
    return groups


class ThrmlReferenceSampler:
    """Sample unknown labels given known labels with THRML block Gibbs."""

    def sample_free_labels(
        self,
        network: Network,
        parameters: Parameters,
        n_samples: int,
        burn_in: int,
        thin: int,
        seed: int,
    ) -> ReferenceSamples:
        if n_samples < 1:
            raise ValueError("n_samples must be >= 1")
        if burn_in < 0:
            raise ValueError("burn_in must be >= 0")
        if thin < 1:
            raise ValueError("thin must be >= 1")
        if not network.edges:
            raise ValueError("reference sampling requires at least one edge")

        compiled = self._build_program(network, parameters)
        if not compiled.free_groups:
            return ReferenceSamples(vertices=(), labels=np.zeros((n_samples, 0), dtype=np.bool_))

        thrml_schedule = SamplingSchedule(
            n_warmup=burn_in,
            n_samples=n_samples,
            steps_per_sample=thin,
        )
        key = jax.random.PRNGKey(seed)
        init_key, sample_key = jax.random.split(key, 2)

        init_state = hinton_init(
            init_key,
            compiled.ebm,
            compiled.free_blocks,
            batch_shape=_empty_batch_shape(),
        )
        sampled = sample_states(
            sample_key,
            compiled.program,
            thrml_schedule,
            init_state_free=init_state,
            state_clamp=compiled.clamped_state,
            nodes_to_sample=compiled.free_blocks,
        )

        columns = [
            _squeeze_chain_axis(np.asarray(block_samples, dtype=np.bool_))
            for block_samples in sampled
        ]
        vertices = tuple(v for group in compiled.free_groups for v in group)
        return ReferenceSamples(vertices=vertices, labels=np.concatenate(columns, axis=1))

    def estimate_marginals(
        self,
        network: Network,
        parameters: Parameters,
        n_samples: int,
        burn_in: int,
        thin: int,
        seed: int,
    ) -> dict[Vertex, float]:
        """Fraction of positive samples for every unlabelled vertex."""

        return self.sample_free_labels(
            network,
            parameters,
            n_samples=n_samples,
            burn_in=burn_in,
            thin=thin,
            seed=seed,
        ).marginals()

    def _build_program(self, network: Network, parameters: Parameters) -> _ReferenceProgram:
        alpha, beta = parameters.read()
        vertices = network.vertices
        labels = network.labels

        nodes = {vertex: _new_spin_node() for vertex in vertices}
        edges = [(nodes[edge.source], nodes[edge.target]) for edge in network.edges]

        biases = np.asarray([alpha * v.feature_sign for v in vertices], dtype=np.float64)
        weights = np.full(len(edges), beta, dtype=np.float64)

        ebm = IsingEBM(
            nodes=[nodes[v] for v in vertices],
            edges=edges,
            biases=jnp.asarray(biases),
            weights=jnp.asarray(weights),
            beta=jnp.asarray(1.0),
        )

        free_groups = colour_free_vertices(network)
        free_blocks = [Block([nodes[v] for v in group]) for group in free_groups]
        free_super_blocks: FreeSuperBlocks = list(free_blocks)

        clamped_vertices = [v for v in vertices if v in labels]
        clamped_blocks: list[Block[AbstractNode]] = []
        clamped_state: list[BoolArray] = []
        if clamped_vertices:
            clamped_blocks.append(Block([nodes[v] for v in clamped_vertices]))
            clamped_state.append(np.asarray([labels[v] for v in clamped_vertices], dtype=np.bool_))

        program = IsingSamplingProgram(
            ebm=ebm,
            free_blocks=free_super_blocks,
            clamped_blocks=clamped_blocks,
        )
        return _ReferenceProgram(
            ebm=ebm,
            program=program,
            free_blocks=free_blocks,
            free_groups=free_groups,
            clamped_state=clamped_state,
        )
