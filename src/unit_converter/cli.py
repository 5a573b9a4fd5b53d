"""Interactive prompt: read a line, print a line, until ``exit``."""

import logging
from collections.abc import Callable

from unit_converter.commands import BANNER, ExitCommand, parse_command
from unit_converter.config import settings
from unit_converter.context import AppContext
from unit_converter.errors import ParseError
from unit_converter.protocols import RateLookup


def run_repl(
    rates: RateLookup | None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Run the read-eval-print loop until ``exit``, EOF or Ctrl-C.

    Args:
        rates: Exchange rate lookup for currency conversions
        read: Prompt function returning one line
        write: Output function receiving one rendered result
    """
    write(BANNER)

    while True:
        try:
            line = read("> ")
        except (EOFError, KeyboardInterrupt):
            break

        if not line.strip():
            continue

        try:
            command = parse_command(line)
        except ParseError as e:
            write(str(e))
            continue

        if isinstance(command, ExitCommand):
            break
        write(command.execute(rates))


def main() -> None:
    """Console script entry point."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    context = AppContext.create()
    try:
        run_repl(context.rate_cache)
    finally:
        context.close()


if __name__ == "__main__":
    main()
