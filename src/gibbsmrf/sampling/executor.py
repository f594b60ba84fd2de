from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MAX_WORKERS: int = min(8, os.cpu_count() or 1)


def split_chunks(items: Sequence[T], n_chunks: int) -> list[Sequence[T]]:
    """Split ``items`` into at most ``n_chunks`` contiguous, non-empty slices."""

    if n_chunks < 1:
        raise ValueError("n_chunks must be >= 1")
    n_items = len(items)
    if n_items == 0:
        return []

    n_chunks = min(n_chunks, n_items)
    base, extra = divmod(n_items, n_chunks)
    chunks: list[Sequence[T]] = []
    start = 0
    for idx in range(n_chunks):
        stop = start + base + (1 if idx < extra else 0)
        chunks.append(items[start:stop])
        start = stop
    return chunks


class SweepExecutor:
    """Unordered data-parallel fan-out over vertices or edges.

    Work is split into chunks and handed to a thread pool; results come back
    in completion order. With ``max_workers=1`` everything runs inline in the
    calling thread, which keeps seeded runs reproducible.
    """

    def __init__(self, max_workers: int | None = None, chunks_per_worker: int = 4) -> None:
        workers = DEFAULT_MAX_WORKERS if max_workers is None else max_workers
        if workers < 1:
            raise ValueError("max_workers must be >= 1")
        if chunks_per_worker < 1:
            raise ValueError("chunks_per_worker must be >= 1")

        self.max_workers = workers
        self.chunks_per_worker = chunks_per_worker
        self._pool: ThreadPoolExecutor | None = None
        if workers > 1:
            self._pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gibbsmrf")

    @property
    def parallel(self) -> bool:
        return self._pool is not None

    def map_chunks(self, fn: Callable[[Sequence[T]], R], items: Sequence[T]) -> list[R]:
        """Apply ``fn`` to each chunk of ``items``; worker errors are re-raised."""

        if len(items) == 0:
            return []
        if self._pool is None:
            return [fn(items)]

        chunks = split_chunks(items, self.max_workers * self.chunks_per_worker)
        futures: list[Future[R]] = [self._pool.submit(fn, chunk) for chunk in chunks]
        return [future.result() for future in as_completed(futures)]

    def shutdown(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self) -> SweepExecutor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


@contextmanager
def sweep_executor(executor: SweepExecutor | None = None) -> Iterator[SweepExecutor]:
    """Yield ``executor`` unchanged, or an inline executor when none is given.

    Callers opt into threads by passing a pool, so seeded runs without one
    stay reproducible.
    """

    if executor is not None:
        yield executor
        return
    with SweepExecutor(max_workers=1) as owned:
        yield owned
