from __future__ import annotations

import pytest

from gibbsmrf.sampling.executor import SweepExecutor, split_chunks, sweep_executor


def test_split_chunks_covers_items_in_order() -> None:
    items = list(range(10))
    chunks = split_chunks(items, 4)

    assert [len(c) for c in chunks] == [3, 3, 2, 2]
    assert [x for c in chunks for x in c] == items
    assert split_chunks(items[:2], 5) == [[0], [1]]
    assert split_chunks([], 3) == []


def test_inline_executor_runs_one_chunk() -> None:
    with SweepExecutor(max_workers=1) as pool:
        assert not pool.parallel
        assert pool.map_chunks(lambda chunk: len(chunk), list(range(7))) == [7]
        assert pool.map_chunks(lambda chunk: len(chunk), []) == []


def test_parallel_executor_visits_every_item_once() -> None:
    items = list(range(1_000))
    with SweepExecutor(max_workers=4) as pool:
        assert pool.parallel
        sums = pool.map_chunks(lambda chunk: sum(chunk), items)

    assert len(sums) > 1
    assert sum(sums) == sum(items)


def test_worker_errors_propagate() -> None:
    def boom(chunk: object) -> None:
        raise RuntimeError("worker failed")

    with SweepExecutor(max_workers=2) as pool:
        with pytest.raises(RuntimeError, match="worker failed"):
            pool.map_chunks(boom, [1, 2, 3])


def test_sweep_executor_reuses_given_pool() -> None:
    given = SweepExecutor(max_workers=1)
    with sweep_executor(given) as pool:
        assert pool is given
    with sweep_executor() as owned:
        assert owned is not given
        assert not owned.parallel


def test_invalid_worker_count_rejected() -> None:
    with pytest.raises(ValueError):
        SweepExecutor(max_workers=0)
