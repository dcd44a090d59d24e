"""Reporter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from defacto.results import Error, Failure
    from defacto.suite import FactSuite


class Reporter(ABC):
    """Renders suite progress as results arrive.

    Failures and errors are rendered the moment they are recorded; the tally
    is rendered once, when the suite finishes.
    """

    @abstractmethod
    def render_header(self, suite: FactSuite) -> None: ...

    @abstractmethod
    def render_failure(self, failure: Failure) -> None: ...

    @abstractmethod
    def render_error(self, error: Error) -> None: ...

    @abstractmethod
    def render_tally(self, suite: FactSuite) -> None: ...
