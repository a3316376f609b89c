"""Command-line entry point: ``swiftly <program> [args...]``."""

import argparse
import sys
from typing import List, Optional, Sequence

from pydantic import ValidationError

from swiftly.compile import BuildError
from swiftly.config import SwiftlyConfig
from swiftly.launcher import Launcher
from swiftly.logging import configure_logging, get_logger
from swiftly.utils import EXIT_FAILURE

logger = get_logger("CLI")

_HELP_FLAGS = ("-h", "--help")

_DESCRIPTION = """\
Compile a source file once and run the cached binary on later invocations.
The binary is rebuilt whenever the source's modification time changes.
Use it as the interpreter line of a script: #!/usr/bin/env swiftly"""

_EPILOG = """\
environment:
  SWIFTLY_CACHE_PATH        cache root (default: ~/.swiftly/cache)
  SWIFTLY_COMPILER          compiler executable (default: swiftc)
  SWIFTLY_COMPILER_FLAGS    extra compiler flags
  SWIFTLY_INTERPRETER       interpreter executable (default: swift)
  SWIFTLY_SOURCE_EXTENSION  extension appended to extensionless sources (default: swift)
  SWIFTLY_LOG_LEVEL         log level (default: WARNING)"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swiftly",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-h", "--help", action="store_true", help="Show this help and the interpreter's help"
    )
    parser.add_argument("program", nargs="?", help="Source file or program on the search path")
    parser.add_argument(
        "args", nargs=argparse.REMAINDER, help="Arguments forwarded unchanged to the program"
    )
    return parser


def parse_args(argv: Sequence[str], parser: Optional[argparse.ArgumentParser] = None):
    """Split argv into the help flag, the program reference and the forwarded arguments.

    Only a leading help flag is interpreted. Any other leading option, such as ``--version``,
    is taken as the program reference and ends up forwarded to the interpreter.
    """
    argv = list(argv)
    if not argv:
        parser = parser or build_parser()
        return parser.parse_args(argv)
    if argv[0] in _HELP_FLAGS:
        # Help wins over whatever follows it.
        return argparse.Namespace(help=True, program=None, args=[])
    # Everything after the program belongs to it, including options and a "--" separator.
    return argparse.Namespace(help=False, program=argv[0], args=argv[1:])


def main(argv: Optional[List[str]] = None) -> None:
    """Run swiftly and exit with the status of the process that ran.

    This is the single place where errors turn into exit statuses:

    - ``BuildError``: the compiler's exit status
    - ``OSError`` (e.g. the cache directory cannot be created): 1
    - invalid configuration: 1
    """
    argv = sys.argv[1:] if argv is None else argv

    try:
        config = SwiftlyConfig.from_env()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(EXIT_FAILURE)
    configure_logging(config.log_level)

    parser = build_parser()
    args = parse_args(argv, parser)
    launcher = Launcher.from_config(config)

    try:
        if args.help:
            status = launcher.help(parser.format_help())
        elif args.program is None:
            status = launcher.interactive()
        else:
            status = launcher.launch(args.program, args.args)
    except BuildError as e:
        logger.debug(str(e))
        status = e.returncode
    except OSError as e:
        logger.error(f"swiftly: {e}")
        status = EXIT_FAILURE

    sys.exit(status)


if __name__ == "__main__":
    main()
