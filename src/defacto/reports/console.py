"""Console reporter for fact output using Rich."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.text import Text
from rich.traceback import Traceback

from defacto.config import get_settings
from defacto.reports.base import Reporter


if TYPE_CHECKING:
    from defacto.results import Error, Failure, Result
    from defacto.suite import FactSuite


SUCCESS_STYLE = "green"
FAILURE_STYLE = "red"
HEADER_STYLE = "bold"


def pluralize(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


def location_tag(meta: dict[str, Any]) -> str:
    line = meta.get("line")
    return f"(line:{line}) " if line is not None else ""


def build_console(*, color: bool | None = None) -> Console:
    """Create the stdout console; ``color`` defaults to the configured setting."""
    if color is None:
        color = get_settings().color
    if color:
        return Console(force_terminal=True, color_system="standard", highlight=False)
    return Console(color_system=None, highlight=False)


class ConsoleReporter(Reporter):
    """Reporter that writes fact results to the console using Rich styles."""

    def __init__(self, console: Console | None = None, show_locals: bool | None = None) -> None:
        self.console = console or build_console()
        self.show_locals = get_settings().show_locals if show_locals is None else show_locals

    def _print_line(self, text: str, style: str | None = None) -> None:
        self.console.print(Text(text, style=style or ""), soft_wrap=True)

    def _format_line(self, label: str, result: Result) -> str:
        return f"{label} {location_tag(result.meta)}:: "

    def render_header(self, suite: FactSuite) -> None:
        title = f"{suite.description} ({suite.file})" if suite.description is not None else suite.file
        self.console.print()
        self._print_line(title, HEADER_STYLE)

    def render_failure(self, failure: Failure) -> None:
        self._print_line(self._format_line("Failure", failure) + str(failure.expr), FAILURE_STYLE)

    def render_error(self, error: Error) -> None:
        cause = error.cause
        line = self._format_line("Error", error) + str(error.expr)
        has_trace = cause is not None and error.trace is not None
        if cause is not None and not has_trace:
            # Rich prints the exception summary in its traceback footer
            line += f" :: {type(cause).__name__}: {cause}"
        self._print_line(line, FAILURE_STYLE)
        if has_trace:
            self.console.print(
                Traceback.from_exception(
                    type(cause),
                    cause,
                    error.trace,
                    suppress=[__import__("defacto")],
                    show_locals=self.show_locals,
                )
            )
        self.console.print()

    def render_tally(self, suite: FactSuite) -> None:
        successes = len(suite.successes)
        if not suite.failures and not suite.errors:
            self._print_line(f"{successes} {pluralize('fact', successes)} verified.", SUCCESS_STYLE)
        else:
            total = suite.total
            self._print_line(f"Out of {total} total {pluralize('fact', total)}:")
            self._print_line(f"  Verified: {successes}", SUCCESS_STYLE)
            self._print_line(f"  Failed:   {len(suite.failures)}", FAILURE_STYLE)
            self._print_line(f"  Errored:  {len(suite.errors)}", FAILURE_STYLE)
        self.console.print()
