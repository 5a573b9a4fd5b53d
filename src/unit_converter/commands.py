"""Text command language shared by the REPL and the HTTP API.

A line is either one of the keywords ``units``, ``help`` and ``exit``, or
a conversion expression ``<value> <unit> -> <unit>``. Executing a command
always produces text: conversion errors are rendered, not raised.
"""

import re
from dataclasses import dataclass

from unit_converter.entities import Unit, Value, units_by_family
from unit_converter.errors import ConverterError, ParseError
from unit_converter.protocols import RateLookup

CONVERSION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s+(.+?)\s+->\s+(.+)$")

INVALID_EXPRESSION = "Invalid input. Expression should be in the form <value> <unit> -> <unit>."

BANNER = "Enter a conversion expression (e.g. 100 m -> km) or 'exit' to exit."

HELP_TEXT = """\
Usage:
  <value> <unit> -> <unit>   convert a value, e.g. 100 m -> km or 25 USD -> EUR
  units                      list every available unit
  help                       show this message
  exit                       quit

Units can be written by long or short name (meter or m). Currency rates are
fetched from openexchangerates.org and need OPENEXCHANGERATES_APP_ID to be set."""


@dataclass(frozen=True)
class ConvertCommand:
    """Convert ``value`` to ``target``."""

    value: Value
    target: Unit

    def execute(self, rates: RateLookup | None = None) -> str:
        try:
            return str(self.value.convert_to(self.target, rates))
        except ConverterError as e:
            return str(e)


@dataclass(frozen=True)
class UnitsCommand:
    """List every unit grouped by family."""

    def execute(self, rates: RateLookup | None = None) -> str:
        lines = ["Available units:"]
        for family, units in units_by_family().items():
            lines.append(f"{family.label}:")
            lines.extend(f"  {unit}" for unit in units)
        return "\n".join(lines)


@dataclass(frozen=True)
class HelpCommand:
    def execute(self, rates: RateLookup | None = None) -> str:
        return HELP_TEXT


@dataclass(frozen=True)
class ExitCommand:
    """Stop the interactive loop. Produces no output."""

    def execute(self, rates: RateLookup | None = None) -> str:
        return ""


Command = ConvertCommand | UnitsCommand | HelpCommand | ExitCommand

KEYWORDS: dict[str, Command] = {
    "units": UnitsCommand(),
    "help": HelpCommand(),
    "exit": ExitCommand(),
}


def parse_conversion(text: str) -> ConvertCommand:
    """Parse ``<value> <unit> -> <unit>``.

    Raises:
        ParseError: If the grammar does not match or a unit is unknown
    """
    match = CONVERSION_PATTERN.match(text)
    if match is None:
        raise ParseError(INVALID_EXPRESSION)

    magnitude, source, target = match.groups()
    return ConvertCommand(
        value=Value(float(magnitude), Unit.parse(source)),
        target=Unit.parse(target),
    )


def parse_command(text: str) -> Command:
    """Parse one input line into a command.

    Args:
        text: Raw input; surrounding whitespace is ignored

    Returns:
        The parsed command

    Raises:
        ParseError: If the line is neither a keyword nor a valid expression
    """
    line = text.strip()
    if line in KEYWORDS:
        return KEYWORDS[line]
    return parse_conversion(line)


def run_command(text: str, rates: RateLookup | None = None) -> str:
    """Parse and execute one line, rendering any error as text."""
    try:
        command = parse_command(text)
    except ParseError as e:
        return str(e)
    return command.execute(rates)
