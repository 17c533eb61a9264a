"""A set of small non-negative integers stored as a bit vector."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

_WORD_BITS = 64


class IntSet:
    """A set of small non-negative integers. A new IntSet is empty."""

    __slots__ = ("_words",)

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._words: list[int] = []
        for value in values:
            self.add(value)

    def has(self, x: int) -> bool:
        """Report whether the set contains ``x``."""
        if x < 0:
            return False
        word, bit = divmod(x, _WORD_BITS)
        return word < len(self._words) and bool(self._words[word] >> bit & 1)

    def add(self, x: int) -> None:
        """Add the non-negative value ``x`` to the set."""
        if x < 0:
            raise ValueError(f"IntSet holds non-negative integers, got {x}")
        word, bit = divmod(x, _WORD_BITS)
        if word >= len(self._words):
            self._words.extend([0] * (word + 1 - len(self._words)))
        self._words[word] |= 1 << bit

    def union_with(self, other: IntSet) -> None:
        """Set this set to the union of itself and ``other``."""
        for i, word in enumerate(list(other._words)):
            if i < len(self._words):
                self._words[i] |= word
            else:
                self._words.append(word)

    def words(self) -> list[int]:
        """Return a copy of the underlying 64-bit words."""
        return list(self._words)

    def __iter__(self) -> Iterator[int]:
        for i, word in enumerate(self._words):
            while word:
                lowest = word & -word
                yield _WORD_BITS * i + lowest.bit_length() - 1
                word ^= lowest

    def __contains__(self, x: object) -> bool:
        return isinstance(x, int) and self.has(x)

    def __str__(self) -> str:
        return "{" + " ".join(map(str, self)) + "}"

    def __repr__(self) -> str:
        return f"IntSet([{', '.join(map(str, self))}])"