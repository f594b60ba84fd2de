from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from gibbsmrf.model.parameters import Parameters


def test_parameters_start_at_zero_and_render() -> None:
    assert Parameters().read() == (0.0, 0.0)
    assert str(Parameters(0.3, 0.5)) == "alpha = 0.30000, beta = 0.50000"


def test_snapshot_only_moves_on_commit() -> None:
    params = Parameters(1.0, 2.0)
    params.increment(field_delta=0.5, pair_delta=-1.0)

    assert params.read() == (1.0, 2.0)
    assert params.alpha == 1.0

    params.commit()
    assert params.read() == (1.5, 1.0)
    assert params.beta == 1.0


def test_concurrent_increments_are_never_lost() -> None:
    params = Parameters()

    def bump(_: int) -> None:
        for _ in range(100):
            params.increment(0.5, -0.25)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(bump, range(40)))
    params.commit()

    assert params.read() == (2000.0, -1000.0)
