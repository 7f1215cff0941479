""" Implement the core of the shell. """
import logging
import sys

from command import format_tree
from constants import (
    ERROR_NOTICE,
    FAREWELL,
    INTERRUPT_NOTICE,
    PROMPT,
    SUBSHELL_FAILURE_STATUS,
    SYNTAX_ERROR_STATUS,
)
from exceptions import ShellExit
from interrupts import InterruptController
from lexer import tokenize
from parser import parse_line
from runner import execute
from shell_state import ShellState

log = logging.getLogger(__name__)


def read_command(prompt=PROMPT):
    """ Read one line from the terminal. """
    return input(prompt)


class Shell:
    def __init__(self, state=None, read_line=None, prompt=PROMPT):
        self.state = state if state is not None else ShellState()
        self.read_line = read_line or read_command
        self.prompt = prompt
        self.interrupts = InterruptController(self.state)

    def evaluate(self, line: str) -> int:
        """
        Tokenize, parse and execute one line at top level.
        Parse and fork failures are reported and become the line's status;
        ShellExit propagates to the caller.
        """
        try:
            node = parse_line(tokenize(line))
        except (SyntaxError, ValueError) as e:
            print(ERROR_NOTICE.format(message=e), file=sys.stderr)
            self.state.set_status(SYNTAX_ERROR_STATUS)
            return self.state.last_status

        if node is None:
            return self.state.last_status

        log.debug("parsed %r:\n%s", line, format_tree(node))
        try:
            status = execute(node, self.state)
        except OSError as e:
            # fork() or pipe() failed in this process
            log.error("cannot run %r: %s", line, e)
            print(ERROR_NOTICE.format(message=e), file=sys.stderr)
            status = SUBSHELL_FAILURE_STATUS
        self.state.set_status(status)
        return self.state.last_status

    def run_command(self, line: str) -> int:
        """ Run a single line non-interactively and return its status. """
        self.interrupts.install()
        try:
            return self.evaluate(line)
        except ShellExit as e:
            return e.status

    def run(self) -> int:
        self.interrupts.install()
        while True:
            self.state.clear_interrupt()
            try:
                with self.interrupts.at_prompt():
                    line = self.read_line(self.prompt)
            except EOFError:
                if self.prompt:
                    print()
                print(FAREWELL)
                return 0
            except KeyboardInterrupt:
                # the pending line is discarded
                print(f"\n{INTERRUPT_NOTICE}", file=sys.stderr)
                continue

            if not line.strip():
                continue

            try:
                self.evaluate(line)
            except ShellExit as e:
                return e.status
