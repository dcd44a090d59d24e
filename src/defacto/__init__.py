"""defacto - fact checking for in-process test runs."""

from .context import EmptyStackError, dispatch, fact_group, pop_handler, push_handler, suites_collector
from .evaluator import evaluate, fact, submit_assertion
from .expectations import (
    THROWS,
    Expectation,
    PredicateExpectation,
    ThrowsExpectation,
    ValueExpectation,
    as_expectation,
    not_,
)
from .reports import ConsoleReporter, Reporter
from .results import Error, FactRepr, Failure, Result, ResultStatus, Success
from .suite import FactSuite, begin_suite, create_suite, end_suite, facts, finish
from .version import __version__


__all__ = [
    # Core
    "fact",
    "facts",
    "fact_group",
    "evaluate",
    "submit_assertion",
    # Expectations
    "THROWS",
    "Expectation",
    "PredicateExpectation",
    "ThrowsExpectation",
    "ValueExpectation",
    "as_expectation",
    "not_",
    # Results
    "Result",
    "ResultStatus",
    "Success",
    "Failure",
    "Error",
    "FactRepr",
    # Suites and dispatch
    "FactSuite",
    "create_suite",
    "finish",
    "begin_suite",
    "end_suite",
    "push_handler",
    "pop_handler",
    "dispatch",
    "suites_collector",
    "EmptyStackError",
    # Reporting
    "Reporter",
    "ConsoleReporter",
    "__version__",
]
