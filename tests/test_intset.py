import pytest

from progdemos.intset import IntSet


def test_example_one():
    x, y = IntSet(), IntSet()
    x.add(1)
    x.add(144)
    x.add(9)
    assert str(x) == "{1 9 144}"

    y.add(9)
    y.add(42)
    assert str(y) == "{9 42}"

    x.union_with(y)
    assert str(x) == "{1 9 42 144}"

    assert (x.has(9), x.has(123)) == (True, False)


def test_example_two():
    x = IntSet()
    x.add(1)
    x.add(144)
    x.add(9)
    x.add(42)
    assert str(x) == "{1 9 42 144}"
    assert x.words() == [4398046511618, 0, 65536]


def test_empty_set():
    s = IntSet()
    assert str(s) == "{}"
    assert list(s) == []
    assert not s.has(0)


def test_iteration_is_ascending_and_unique():
    s = IntSet([200, 3, 64, 3, 63, 0])
    assert list(s) == [0, 3, 63, 64, 200]


def test_contains_matches_has():
    s = IntSet([5, 70])
    assert 5 in s and 70 in s
    assert 6 not in s
    assert "5" not in s


def test_negative_values():
    s = IntSet([1])
    assert not s.has(-1)
    with pytest.raises(ValueError):
        s.add(-1)


def test_union_with_self_is_identity():
    s = IntSet([1, 100])
    s.union_with(s)
    assert list(s) == [1, 100]


def test_union_does_not_modify_other():
    a, b = IntSet([1]), IntSet([2, 300])
    a.union_with(b)
    assert list(a) == [1, 2, 300]
    assert list(b) == [2, 300]


def test_words_returns_copy():
    s = IntSet([1])
    words = s.words()
    words.append(7)
    assert s.words() == [2]