"""Logical combinators over predicates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from assertkit.predicates.base import Assertable


class Conjunction(ABC):
    """Ordered group of assertables combined into one result.

    Results are not memoized across calls since members may be reconfigured;
    the last computed value is kept on ``result``.
    """

    def __init__(self, predicates: Iterable[Assertable] = ()) -> None:
        self._predicates: list[Assertable] = []
        self.result: bool | None = None
        for predicate in predicates:
            self.add(predicate)

    def add(self, predicate: Assertable) -> "Conjunction":
        if not isinstance(predicate, Assertable):
            raise TypeError(f"{predicate!r} does not provide evaluate()")
        self._predicates.append(predicate)
        return self

    def __iter__(self) -> Iterator[Assertable]:
        return iter(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)

    @abstractmethod
    def evaluate(self) -> bool:
        """Combine member results, short-circuiting where possible."""


class AndConjunction(Conjunction):
    """True when every member is true; True when empty."""

    def evaluate(self) -> bool:
        self.result = all(p.evaluate() for p in self._predicates)
        return self.result


class OrConjunction(Conjunction):
    """True when any member is true; False when empty."""

    def evaluate(self) -> bool:
        self.result = any(p.evaluate() for p in self._predicates)
        return self.result


class NotAssertion:
    def __init__(self, predicate: Assertable) -> None:
        if not isinstance(predicate, Assertable):
            raise TypeError(f"{predicate!r} does not provide evaluate()")
        self.predicate = predicate
        self.result: bool | None = None

    def evaluate(self) -> bool:
        self.result = not self.predicate.evaluate()
        return self.result
