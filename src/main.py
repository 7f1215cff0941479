""" Command-line entry point for myshell. """
import argparse
import logging
import os
import sys

from constants import LOG_FORMAT, LOG_LEVEL_ENV, NAME, PROMPT, WELCOME
from shell import Shell


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog=NAME,
        description="A small interactive shell: pipes, && / ||, ';', "
                    "( groups ) and < > >> 2> redirections",
    )
    parser.add_argument(
        "-c",
        metavar="COMMAND",
        dest="command",
        help="run COMMAND and exit with its status",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log debug records, including the parsed command tree",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="write log records to PATH instead of standard error",
    )
    return parser.parse_args(argv)


def configure_logging(debug: bool, log_file=None):
    if debug:
        level = logging.DEBUG
    else:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, filename=log_file)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.debug, args.log_file)

    if args.command is not None:
        return Shell(prompt="").run_command(args.command)

    interactive = sys.stdin.isatty()
    if interactive:
        # line editing and history for input()
        import readline  # noqa: F401
        print(WELCOME)
    shell = Shell(prompt=PROMPT if interactive else "")
    return shell.run()


if __name__ == "__main__":
    sys.exit(main())
