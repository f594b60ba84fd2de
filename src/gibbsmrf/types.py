from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from gibbsmrf.model.vertex import Vertex

ProbabilityMap: TypeAlias = "dict[Vertex, float]"
BoolArray: TypeAlias = npt.NDArray[np.bool_]
