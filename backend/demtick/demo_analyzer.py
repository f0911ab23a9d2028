# demo_analyzer.py

import logging
import sys
from typing import List, Optional

from demtick import config
from demtick.exceptions import DemoParserException
from demtick.parser import DemoParser

logger = logging.getLogger(__name__)

USAGE = "Usage: demtick <demo_file.dem> [--verbose]"


def print_analysis_results(parser: DemoParser) -> None:
    """Print header and console commands in a formatted way"""
    print("\nHeader Information:")
    print("-" * 20)
    print(parser.header)

    print("\nConsole Commands:")
    print("-" * 20)
    if not parser.console_commands:
        print("(none)")
    for cmd in parser.console_commands:
        print(f"[{cmd.tick}] {cmd.command.rstrip(chr(0))}")

    print(f"\nStopped on: {parser.stop_reason.value}")


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    verbose = "--verbose" in args
    paths = [arg for arg in args if arg != "--verbose"]

    logging.basicConfig(
        level="DEBUG" if verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )

    if len(paths) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    demo_path = paths[0]
    try:
        parser = DemoParser.from_file(demo_path)
        ticks = parser.parse()
    except FileNotFoundError:
        logger.error(f"Demo file not found: {demo_path}")
        return 1
    except DemoParserException as e:
        logger.error(f"Error parsing demo: {e}")
        return 1

    print(ticks)
    if verbose:
        print_analysis_results(parser)
    return 0


if __name__ == "__main__":
    sys.exit(main())
