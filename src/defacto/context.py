from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from defacto.results import Result
    from defacto.suite import FactSuite


logger = logging.getLogger(__name__)

Handler = Callable[["Result"], None]


class EmptyStackError(RuntimeError):
    """Raised when a fact is dispatched while no suite is active."""

    def __init__(self, message: str = "No active fact suite; wrap facts in `facts()` or call `begin_suite()` first"):
        super().__init__(message)


HANDLER_STACK: ContextVar[tuple[Handler, ...]] = ContextVar("handler_stack", default=())
SUITES_COLLECTOR: ContextVar[list[FactSuite] | None] = ContextVar("suites_collector", default=None)
FACT_GROUP: ContextVar[str | None] = ContextVar("fact_group", default=None)


def push_handler(handler: Handler) -> None:
    """Make ``handler`` the target of every dispatched result."""
    stack = HANDLER_STACK.get()
    HANDLER_STACK.set((*stack, handler))
    logger.debug("Pushed handler %r (depth %d)", handler, len(stack) + 1)


def pop_handler(handler: Handler) -> bool:
    """Remove ``handler`` from the stack.

    Returns False when the handler is not on the stack. Removing a handler
    that is not on top restores nothing for the handlers above it, so it is
    logged as a warning.
    """
    stack = HANDLER_STACK.get()
    for index in range(len(stack) - 1, -1, -1):
        if stack[index] is handler:
            if index != len(stack) - 1:
                logger.warning("Handler %r removed out of order (depth %d of %d)", handler, index + 1, len(stack))
            HANDLER_STACK.set(stack[:index] + stack[index + 1 :])
            logger.debug("Popped handler %r (depth %d)", handler, len(stack) - 1)
            return True
    return False


def dispatch(result: Result) -> None:
    """Route ``result`` to the handler on top of the stack."""
    stack = HANDLER_STACK.get()
    if not stack:
        raise EmptyStackError()
    stack[-1](result)


def current_handlers() -> tuple[Handler, ...]:
    return HANDLER_STACK.get()


def reset_handlers() -> None:
    HANDLER_STACK.set(())


def register_suite(suite: FactSuite) -> None:
    if (suites := SUITES_COLLECTOR.get()) is not None:
        suites.append(suite)


@contextmanager
def suites_collector(ctx: list[FactSuite]) -> Iterator[None]:
    """Append every suite created inside the ``with`` block to ``ctx``."""
    token = SUITES_COLLECTOR.set(ctx)
    try:
        yield
    finally:
        SUITES_COLLECTOR.reset(token)


@contextmanager
def fact_group(desc: str) -> Iterator[None]:
    """Label the facts submitted inside the ``with`` block.

    Parameters
    ----------
    desc : str
        Stored as ``meta["desc"]`` on every result produced by ``fact()``.
    """
    token = FACT_GROUP.set(desc)
    try:
        yield
    finally:
        FACT_GROUP.reset(token)


def get_fact_group() -> str | None:
    return FACT_GROUP.get()
