from itertools import islice

from progdemos.pipeline import counter, main, run_pipeline, squarer


def test_first_squares():
    assert list(run_pipeline(5)) == [0, 1, 4, 9, 16]


def test_default_is_one_hundred_squares():
    squares = list(run_pipeline())
    assert len(squares) == 100
    assert squares[:3] == list(squarer(range(3)))


def test_counter_without_limit_is_endless():
    assert list(islice(counter(None), 1000)) == list(range(1000))


def test_squarer_matches_counter():
    for n, square in zip(counter(50), squarer(counter(50))):
        assert square == n * n


def test_main_prints_one_square_per_line(capsys):
    assert main(["--limit", "4"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [str(v) for v in run_pipeline(4)]