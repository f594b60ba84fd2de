from gibbsmrf.utils.checks import (
    require_finite,
    require_non_negative,
    require_probability,
)
from gibbsmrf.utils.io import ensure_dir, save_json
from gibbsmrf.utils.logging import configure_logging, log_event
from gibbsmrf.utils.rng import RngStreams

__all__ = [
    "RngStreams",
    "configure_logging",
    "ensure_dir",
    "log_event",
    "require_finite",
    "require_non_negative",
    "require_probability",
    "save_json",
]
