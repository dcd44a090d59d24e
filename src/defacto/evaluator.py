"""Fact evaluation and submission.

``evaluate`` turns a thunk and an expectation into exactly one result:

- ``Success`` when the expectation holds,
- ``Failure`` when it does not,
- ``Error`` when the thunk or the check raised.

``submit_assertion`` evaluates and hands the result to the active suite via
``dispatch``. ``fact`` is the convenience front end: it recovers the literal
source text of its arguments and the line number from the calling file.
"""

from __future__ import annotations

import ast
import dis
import inspect
import linecache
import logging
from collections.abc import Mapping
from functools import lru_cache
from types import FrameType
from typing import Any

from defacto.context import dispatch, get_fact_group
from defacto.expectations import Expectation, Thunk, as_expectation
from defacto.results import Error, FactRepr, Failure, Result, Success
from defacto.suite import active_suite


logger = logging.getLogger(__name__)


def evaluate(
    thunk: Thunk,
    expectation: Any,
    expr: FactRepr | None = None,
    meta: Mapping[str, Any] | None = None,
) -> Result:
    """Evaluate one fact without dispatching it.

    Parameters
    ----------
    thunk
        Zero-argument callable producing the value under test. Called at most once.
    expectation
        An :class:`Expectation`, ``THROWS``, a predicate or a plain value.
    expr
        Display form of the fact; built from reprs when omitted.
    meta
        Ordered metadata copied onto the result.
    """
    expectation = as_expectation(expectation)
    if expr is None:
        expr = describe(thunk, expectation)
    meta = dict(meta or {})
    try:
        held = expectation.holds(thunk)
    except Exception as err:
        return Error(expr, meta, cause=err, trace=err.__traceback__)
    return Success(expr, meta) if held else Failure(expr, meta)


def submit_assertion(
    thunk: Thunk,
    expectation: Any,
    expr: FactRepr | None = None,
    meta: Mapping[str, Any] | None = None,
) -> Result:
    """Evaluate one fact and route the result to the active suite.

    Raises
    ------
    EmptyStackError
        If no suite is active.
    """
    result = evaluate(thunk, expectation, expr, meta)
    dispatch(result)
    return result


def describe(thunk: Thunk, expectation: Expectation) -> FactRepr:
    lhs = getattr(thunk, "__qualname__", None) or repr(thunk)
    return FactRepr(lhs=lhs, rhs=expectation.describe())


@lru_cache(maxsize=64)
def _parse_source(filename: str, source: str) -> ast.Module | None:
    try:
        return ast.parse(source, filename=filename)
    except SyntaxError:
        logger.debug("Could not parse %s for fact source text", filename)
        return None


def _find_call(tree: ast.Module, positions: dis.Positions) -> ast.Call | None:
    span = (positions.lineno, positions.end_lineno, positions.col_offset, positions.end_col_offset)
    if None in span:
        return None
    for node in ast.walk(tree):
        if isinstance(node, ast.Call) and (node.lineno, node.end_lineno, node.col_offset, node.end_col_offset) == span:
            return node
    return None


def _segment(source: str, node: ast.expr) -> str | None:
    if isinstance(node, ast.Lambda) and not node.args.args:
        node = node.body
    text = ast.get_source_segment(source, node)
    return " ".join(text.split()) if text else None


def source_repr(frame: FrameType) -> FactRepr | None:
    """Recover ``lhs => rhs`` from the call currently executing in ``frame``.

    The call node is matched by the exact source span of the frame's current
    instruction, so aliased imports and several facts on one line resolve to
    the right call.
    """
    positions = inspect.getframeinfo(frame, context=0).positions
    if positions is None:
        return None
    filename = frame.f_code.co_filename
    source = "".join(linecache.getlines(filename, frame.f_globals))
    if not source:
        return None
    tree = _parse_source(filename, source)
    if tree is None:
        return None
    call = _find_call(tree, positions)
    if call is None or not call.args:
        return None
    lhs = _segment(source, call.args[0])
    rhs_node = call.args[1] if len(call.args) > 1 else None
    if rhs_node is None:
        rhs_node = next((kw.value for kw in call.keywords if kw.arg == "expected"), None)
    rhs = _segment(source, rhs_node) if rhs_node is not None else "True"
    if lhs is None or rhs is None:
        return None
    return FactRepr(lhs=lhs, rhs=rhs)


def fact(
    thunk: Thunk,
    expected: Any = True,
    *,
    expr: FactRepr | None = None,
    line: Any = None,
    desc: str | None = None,
) -> Result:
    """Check ``thunk()`` against ``expected`` inside the active suite.

    ``fact(lambda: 1 + 1, 2)`` is reported as ``1 + 1 => 2``. The line number
    and source text come from the caller unless ``line``/``expr`` are given,
    and ``desc`` defaults to the enclosing ``fact_group`` label, then to the
    description of the active suite.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        if caller is not None:
            if line is None:
                line = caller.f_lineno
            if expr is None:
                expr = source_repr(caller)
    finally:
        del frame, caller

    meta: dict[str, Any] = {}
    if desc is None:
        desc = get_fact_group()
    if desc is None and (suite := active_suite()) is not None:
        desc = suite.description
    if desc is not None:
        meta["desc"] = desc
    if line is not None:
        meta["line"] = line
    return submit_assertion(thunk, expected, expr, meta)
