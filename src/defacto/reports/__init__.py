from defacto.reports.base import Reporter
from defacto.reports.console import ConsoleReporter, pluralize


__all__ = ["ConsoleReporter", "Reporter", "pluralize"]
