import time
from dataclasses import replace

import pytest

from progdemos.cake import Shop

DEFAULTS = Shop(
    cakes=20,
    bake_time=0.01,
    num_icers=1,
    ice_time=0.01,
    inscribe_time=0.01,
)


def test_baseline_finishes_in_order_and_takes_time():
    start = time.perf_counter()
    finished = replace(DEFAULTS).work(1)
    elapsed = time.perf_counter() - start
    assert finished == list(range(20))
    assert elapsed >= 0.2


def test_buffers_keep_every_cake():
    shop = replace(DEFAULTS, bake_buf=10, ice_buf=10)
    assert shop.work(1) == list(range(20))


def test_variable_times_with_buffers():
    shop = replace(
        DEFAULTS,
        bake_std_dev=DEFAULTS.bake_time / 4,
        ice_std_dev=DEFAULTS.ice_time / 4,
        inscribe_std_dev=DEFAULTS.inscribe_time / 4,
        bake_buf=10,
        ice_buf=10,
    )
    assert shop.work(1) == list(range(20))


def test_slow_icing_many_icers_runs_in_parallel():
    shop = replace(DEFAULTS, ice_time=0.05, num_icers=5)
    start = time.perf_counter()
    finished = shop.work(1)
    elapsed = time.perf_counter() - start
    assert sorted(finished) == list(range(20))
    assert elapsed < 20 * 0.05


def test_several_runs():
    shop = Shop(cakes=3, num_icers=2)
    assert sorted(shop.work(2)) == [0, 0, 1, 1, 2, 2]


def test_verbose_output(capsys):
    Shop(verbose=True, cakes=2, num_icers=1).work(1)
    lines = capsys.readouterr().out.splitlines()
    expected = [
        f"{step} {cake}"
        for cake in range(2)
        for step in ("baking", "icing", "inscribing", "finished")
    ]
    assert sorted(lines) == sorted(expected)
    assert lines[-1] == "finished 1"


def test_no_icers_is_an_error():
    with pytest.raises(ValueError):
        Shop(cakes=1, num_icers=0).work(1)