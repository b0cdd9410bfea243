import logging

from src.logger import ColourConsoleFormatter, ConsoleFormat, DefaultConsoleFormatter


def _record(level):
    return logging.LogRecord("pg_resources", level, __file__, 1, "database app created", None, None)


def test_default_formatter_has_no_colour():
    line = DefaultConsoleFormatter().format(_record(logging.INFO))
    assert line.endswith(" - pg_resources - INFO - database app created")
    assert "\033[" not in line


def test_colour_formatter_wraps_line_in_level_colour():
    line = ColourConsoleFormatter().format(_record(logging.CRITICAL))
    assert line.startswith(ConsoleFormat.BOLD + ConsoleFormat.RED)
    assert line.endswith(ConsoleFormat.RESET)
