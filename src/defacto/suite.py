"""Fact suites: per-file aggregation of results."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import PurePath

from defacto.config import get_settings
from defacto.context import Handler, current_handlers, pop_handler, push_handler, register_suite
from defacto.reports.base import Reporter
from defacto.reports.console import ConsoleReporter
from defacto.results import Error, Failure, Result, Success


logger = logging.getLogger(__name__)


@dataclass
class FactSuite:
    """Results collected for one reporting scope.

    Attributes
    ----------
    file : str
        Display name of the scope, the last segment of the location it was created from.
    description : str | None
        Optional human label shown in the header.
    successes, failures, errors : list
        Results in the order they were evaluated. The lists only ever grow.
    """

    file: str
    description: str | None = None
    successes: list[Success] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)
    errors: list[Error] = field(default_factory=list)

    handler: Handler | None = field(default=None, repr=False, compare=False)
    reporter: Reporter | None = field(default=None, repr=False, compare=False)
    finished: bool = field(default=False, repr=False, compare=False)

    @property
    def total(self) -> int:
        """Facts that produced a verdict (errors excluded)."""
        return len(self.successes) + len(self.failures)

    @property
    def count(self) -> int:
        return len(self.successes) + len(self.failures) + len(self.errors)

    @property
    def passed(self) -> bool:
        return not self.failures and not self.errors

    def record(self, result: Result) -> None:
        """Store ``result`` and render it right away if it is a problem."""
        match result:
            case Success():
                self.successes.append(result)
            case Failure():
                self.failures.append(result)
                if self.reporter is not None:
                    self.reporter.render_failure(result)
            case Error():
                self.errors.append(result)
                if self.reporter is not None:
                    self.reporter.render_error(result)
            case _:
                msg = f"Unsupported result type: {type(result).__name__}"
                raise TypeError(msg)


def file_display_name(file_location: str | PurePath) -> str:
    name = PurePath(str(file_location)).name
    return name or str(file_location)


def make_handler(suite: FactSuite) -> Handler:
    def handler(result: Result) -> None:
        suite.record(result)

    handler.__qualname__ = f"handler[{suite.file}]"
    handler.suite = suite  # type: ignore[attr-defined]
    return handler


def create_suite(
    file_location: str | PurePath,
    description: str | None = None,
    reporter: Reporter | None = None,
) -> FactSuite:
    """Open a reporting scope and make it the target of dispatched results.

    The header is rendered immediately, before any fact in the scope runs.
    """
    suite = FactSuite(file=file_display_name(file_location), description=description)
    suite.reporter = reporter or ConsoleReporter()
    suite.handler = make_handler(suite)
    push_handler(suite.handler)
    register_suite(suite)
    logger.debug("Created suite %s (%s)", suite.file, suite.description)
    suite.reporter.render_header(suite)
    return suite


def finish(suite: FactSuite) -> None:
    """Render the final tally of ``suite``.

    With ``restore_parent_handler`` enabled the suite's handler is removed from
    the stack, so results go back to the enclosing suite.
    """
    if suite.finished:
        logger.warning("Suite %s finished more than once", suite.file)
    suite.finished = True
    if suite.reporter is not None:
        suite.reporter.render_tally(suite)
    if get_settings().restore_parent_handler and suite.handler is not None:
        if not pop_handler(suite.handler):
            logger.debug("Handler for suite %s was already removed", suite.file)


def active_suite() -> FactSuite | None:
    """Return the suite owning the handler on top of the stack, if any."""
    handlers = current_handlers()
    return getattr(handlers[-1], "suite", None) if handlers else None


def begin_suite(file_location: str | PurePath, description: str | None = None, reporter: Reporter | None = None) -> FactSuite:
    return create_suite(file_location, description, reporter)


def end_suite(suite: FactSuite) -> None:
    finish(suite)


def _caller_file(depth: int) -> str:
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        logger.warning("No frame found for suite file name")
        return "<unknown>"
    return frame.f_code.co_filename


@contextmanager
def facts(
    description: str | None = None,
    *,
    file: str | PurePath | None = None,
    reporter: Reporter | None = None,
) -> Iterator[FactSuite]:
    """Run the ``with`` block as one fact suite.

    Parameters
    ----------
    description : str | None
        Label shown in the suite header.
    file : str | PurePath | None
        Location the suite is named after; defaults to the caller's file.
    reporter : Reporter | None
        Where output goes; defaults to a console reporter.
    """
    # contextmanager adds a frame between the caller and this generator
    location = file if file is not None else _caller_file(2)
    suite = create_suite(location, description, reporter)
    try:
        yield suite
    finally:
        finish(suite)
