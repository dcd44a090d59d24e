import io

import pytest
from rich.console import Console

from defacto.config import get_settings
from defacto.context import reset_handlers
from defacto.reports import ConsoleReporter


@pytest.fixture(autouse=True)
def clean_engine_state(monkeypatch):
    """Avoid cross-test leakage of handlers and cached settings."""
    for name in ("DEFACTO_COLOR", "DEFACTO_SHOW_LOCALS", "DEFACTO_RESTORE_PARENT_HANDLER", "DEFACTO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_handlers()
    get_settings.cache_clear()
    yield
    reset_handlers()
    get_settings.cache_clear()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def reporter(output):
    console = Console(file=output, color_system=None, highlight=False, width=120)
    return ConsoleReporter(console=console)


@pytest.fixture
def color_reporter(output):
    console = Console(file=output, force_terminal=True, color_system="standard", highlight=False, width=120)
    return ConsoleReporter(console=console)
