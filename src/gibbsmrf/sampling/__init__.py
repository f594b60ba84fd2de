from gibbsmrf.sampling.executor import SweepExecutor, split_chunks, sweep_executor

__all__ = [
    "SweepExecutor",
    "split_chunks",
    "sweep_executor",
]
