from __future__ import annotations

import argparse
import logging
import os
import runpy
import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from defacto.config import get_settings
from defacto.context import EmptyStackError, reset_handlers, suites_collector
from defacto.reports.console import build_console, pluralize
from defacto.suite import FactSuite


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


class CLIApplication:
    """Top-level command router."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console
        self.parser = argparse.ArgumentParser(
            prog="defacto",
            description="Run fact files and report verified, failed and errored facts.",
        )
        self.parser.add_argument(
            "paths",
            nargs="+",
            metavar="FILE",
            help="Fact files to execute, in order.",
        )
        self.parser.add_argument(
            "--no-color",
            dest="no_color",
            action="store_true",
            help="Disable ANSI colors (DEFACTO_COLOR=false).",
        )
        self.parser.add_argument(
            "--show-locals",
            dest="show_locals",
            action="store_true",
            help="Show frame locals in error tracebacks (DEFACTO_SHOW_LOCALS=true).",
        )
        self.parser.add_argument(
            "--log-level",
            dest="log_level",
            help="Logging level (DEFACTO_LOG_LEVEL), e.g. DEBUG or INFO.",
        )

    def run(self, argv: Sequence[str] | None = None) -> int:
        load_dotenv(Path.cwd() / ".env")
        args = self.parser.parse_args(argv)
        if args.no_color:
            os.environ["DEFACTO_COLOR"] = "false"
        if args.show_locals:
            os.environ["DEFACTO_SHOW_LOCALS"] = "true"
        if args.log_level:
            os.environ["DEFACTO_LOG_LEVEL"] = args.log_level
        get_settings.cache_clear()

        console = self.console or build_console()
        configure_logging(console)
        return RunCommand(console, args).run()


def configure_logging(console: Console) -> None:
    level = get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


class RunCommand:
    """Driver for `defacto FILE...`."""

    def __init__(self, console: Console, args: argparse.Namespace) -> None:
        self.console = console
        self.paths = [Path(path).expanduser() for path in args.paths]

    def run(self) -> int:
        missing = [path for path in self.paths if not path.is_file()]
        if missing:
            for path in missing:
                self.console.print(f"[red]No such fact file: {escape(str(path))}[/red]", soft_wrap=True)
            return EXIT_USAGE

        suites: list[FactSuite] = []
        with suites_collector(suites):
            for path in self.paths:
                logger.info("Running %s", path)
                # each file starts without suites left open by the previous one
                reset_handlers()
                try:
                    runpy.run_path(str(path), run_name="__main__")
                except EmptyStackError as err:
                    self.console.print(f"[red]{escape(str(path))}: {escape(str(err))}[/red]", soft_wrap=True)
                    return EXIT_USAGE
        reset_handlers()

        self._print_summary(suites)
        return EXIT_OK if all(suite.passed for suite in suites) else EXIT_FAILED

    def _print_summary(self, suites: list[FactSuite]) -> None:
        failed = sum(1 for suite in suites if not suite.passed)
        passed = len(suites) - failed
        color = "red" if failed else "green"
        self.console.print(
            f"[bold]{len(suites)} {pluralize('suite', len(suites))}:[/bold] "
            f"[{color}]{passed} passed, {failed} failed[/{color}]"
        )


def main() -> None:
    sys.exit(CLIApplication().run())
