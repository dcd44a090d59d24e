"""Expectation kinds and helpers for building them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


Thunk = Callable[[], Any]


class Expectation(ABC):
    """Right-hand side of a fact.

    Subclasses implement ``holds`` which calls the thunk and returns the
    verdict. Exceptions raised by the thunk or by the check propagate to the
    evaluator, which turns them into ``Error`` results.
    """

    @abstractmethod
    def holds(self, thunk: Thunk) -> bool:
        """Evaluate ``thunk`` once and check it against this expectation."""

    @abstractmethod
    def describe(self) -> str:
        """Return display text used when no source text is available."""


class ThrowsExpectation(Expectation):
    """Holds when the thunk raises any exception. Never raises itself."""

    def holds(self, thunk: Thunk) -> bool:
        try:
            thunk()
        except Exception:
            return True
        return False

    def describe(self) -> str:
        return ":throws"

    def __repr__(self) -> str:
        return "THROWS"


class PredicateExpectation(Expectation):
    def __init__(self, predicate: Callable[[Any], Any]) -> None:
        self.predicate = predicate

    def holds(self, thunk: Thunk) -> bool:
        actual = thunk()
        return bool(self.predicate(actual))

    def describe(self) -> str:
        return getattr(self.predicate, "__qualname__", None) or repr(self.predicate)

    def __repr__(self) -> str:
        return f"PredicateExpectation({self.describe()})"


class ValueExpectation(Expectation):
    def __init__(self, value: Any) -> None:
        self.value = value

    def holds(self, thunk: Thunk) -> bool:
        actual = thunk()
        return bool(actual == self.value)

    def describe(self) -> str:
        return repr(self.value)

    def __repr__(self) -> str:
        return f"ValueExpectation({self.value!r})"


THROWS = ThrowsExpectation()


def _is_predicate(obj: Any) -> bool:
    # Classes are compared by value: ``fact(lambda: type(x), int)``.
    return callable(obj) and not isinstance(obj, type)


def as_expectation(obj: Any) -> Expectation:
    """Infer the expectation kind from the shape of ``obj``.

    Expectation instances pass through unchanged, non-class callables become
    predicates and every other value is compared with ``==``.
    """
    if isinstance(obj, Expectation):
        return obj
    if _is_predicate(obj):
        return PredicateExpectation(obj)
    return ValueExpectation(obj)


def not_(x: Any) -> Callable[[Any], bool]:
    """Complement a predicate or a value.

    ``not_(is_odd)`` holds for even numbers, ``not_(5)`` holds for anything
    that is not equal to 5.
    """
    if _is_predicate(x):

        def negated(y: Any) -> bool:
            return not x(y)

        negated.__qualname__ = f"not_({getattr(x, '__qualname__', repr(x))})"
        return negated

    def differs(y: Any) -> bool:
        return y != x

    differs.__qualname__ = f"not_({x!r})"
    return differs
