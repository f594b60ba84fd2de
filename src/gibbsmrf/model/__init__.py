from gibbsmrf.model.assignment import Assignment
from gibbsmrf.model.edge import Edge
from gibbsmrf.model.network import GradientStep, Network
from gibbsmrf.model.parameters import Parameters
from gibbsmrf.model.signs import (
    gibbs_probability,
    ising_product,
    random_bool,
    sample_bool,
    sign_of,
)
from gibbsmrf.model.vertex import Vertex

__all__ = [
    "Assignment",
    "Edge",
    "GradientStep",
    "Network",
    "Parameters",
    "Vertex",
    "gibbs_probability",
    "ising_product",
    "random_bool",
    "sample_bool",
    "sign_of",
]
