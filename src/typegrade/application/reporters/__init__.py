"""Reporters for grade reports.

PlainTextReporter and JSONReporter use stdlib only.
ConsoleReporter renders with rich and returns a string.
"""

from typegrade.application.reporters._base import BaseReporter
from typegrade.application.reporters.console import ConsoleConfig, ConsoleReporter
from typegrade.application.reporters.json_reporter import JSONReporter
from typegrade.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "BaseReporter",
    "PlainTextReporter",
    "JSONReporter",
    "ConsoleConfig",
    "ConsoleReporter",
]
