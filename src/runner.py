""" Execute a command tree. """
import logging
import sys

from command import And, Group, Node, Or, Pipe, Plain, Sequence, first_program
from constants import (
    ERROR_NOTICE,
    INTERRUPT_NOTICE,
    INTERRUPT_STATUS,
    NONZERO_NOTICE,
    SUBSHELL_FAILURE_STATUS,
    UNKNOWN_COMMAND_NOTICE,
    UNKNOWN_COMMAND_STATUS,
)
from exceptions import CommandInterrupted
from shell_builtins import BUILTINS
from shell_state import ShellState
from wait_status import KilledByInterrupt, NormalExit

log = logging.getLogger(__name__)


def notice(message: str):
    print(message, file=sys.stderr)


def report_nonzero(status: int, top_level: bool):
    if top_level and status != 0:
        notice(NONZERO_NOTICE.format(status=status))


def report_interrupt(state: ShellState) -> int:
    # inside a group or pipe side the shell prints the notice, not the child
    if not state.subshell:
        # start on a fresh line after the terminal's ^C echo
        notice(f"\n{INTERRUPT_NOTICE}")
    state.raise_interrupt()
    return INTERRUPT_STATUS


def run_nested(node: Node, state: ShellState) -> int:
    """ Body of a group or pipe side; runs in the child process. """
    child = state.for_subshell()
    status = execute(node, child, False)
    if child.interrupted:
        raise CommandInterrupted
    return status


def execute_plain(cmd: Plain, state: ShellState, top_level: bool) -> int:
    if cmd.name in BUILTINS:
        # exit raises ShellExit and never returns
        return BUILTINS[cmd.name](list(cmd.args[1:]), state) or 0

    outcome = state.launcher.run_program(cmd)
    log.debug("%s -> %s", cmd.name, outcome)
    if isinstance(outcome, NormalExit):
        report_nonzero(outcome.code, top_level)
        return outcome.code
    if isinstance(outcome, KilledByInterrupt):
        return report_interrupt(state)
    notice(UNKNOWN_COMMAND_NOTICE.format(name=cmd.name))
    return UNKNOWN_COMMAND_STATUS


def execute_sequence(node: Sequence, state: ShellState, top_level: bool) -> int:
    execute(node.left, state, False)
    if state.interrupted:
        return INTERRUPT_STATUS
    return execute(node.right, state, top_level)


def execute_and(node: And, state: ShellState, top_level: bool) -> int:
    status = execute(node.left, state, False)
    if status != 0:
        return status
    if state.interrupted:
        return INTERRUPT_STATUS
    return execute(node.right, state, top_level)


def execute_or(node: Or, state: ShellState, top_level: bool) -> int:
    status = execute(node.left, state, False)
    if status == 0:
        return status
    if state.interrupted:
        return INTERRUPT_STATUS
    return execute(node.right, state, top_level)


def execute_pipe(node: Pipe, state: ShellState, top_level: bool) -> int:
    left_outcome, right_outcome = state.launcher.run_pipeline(
        lambda: run_nested(node.left, state),
        lambda: run_nested(node.right, state),
    )
    log.debug("pipe -> %s, %s", left_outcome, right_outcome)
    if any(isinstance(o, KilledByInterrupt) for o in (left_outcome, right_outcome)):
        return report_interrupt(state)
    # the left side is checked first when naming a failed side
    for side, outcome in ((node.left, left_outcome), (node.right, right_outcome)):
        if not isinstance(outcome, NormalExit):
            notice(UNKNOWN_COMMAND_NOTICE.format(name=first_program(side)))
            return UNKNOWN_COMMAND_STATUS

    status = left_outcome.code or right_outcome.code
    report_nonzero(status, top_level)
    return status


def execute_group(node: Group, state: ShellState, top_level: bool) -> int:
    outcome = state.launcher.run_subshell(
        lambda: run_nested(node.inner, state),
        node.redirects,
    )
    log.debug("group -> %s", outcome)
    if isinstance(outcome, NormalExit):
        report_nonzero(outcome.code, top_level)
        return outcome.code
    if isinstance(outcome, KilledByInterrupt):
        return report_interrupt(state)
    if outcome.signal is not None:
        # a redirect failure was already reported by the child
        notice(ERROR_NOTICE.format(message=f"subshell killed by signal {outcome.signal}"))
    return SUBSHELL_FAILURE_STATUS


EXECUTORS = {
    Plain: execute_plain,
    Sequence: execute_sequence,
    And: execute_and,
    Or: execute_or,
    Pipe: execute_pipe,
    Group: execute_group,
}


def execute(node: Node, state: ShellState, top_level: bool = True) -> int:
    """
    Run a command tree and return its exit status in [0, 255].

    Abnormal terminations are reported once and mapped to INTERRUPT_STATUS,
    UNKNOWN_COMMAND_STATUS or SUBSHELL_FAILURE_STATUS. state.interrupted is
    raised when a foreground child dies from SIGINT and is checked between
    sequential steps. A group or pipe side whose child saw an interrupt
    ends by SIGINT itself, so the parent reports it the same way.
    """
    try:
        executor = EXECUTORS[type(node)]
    except KeyError:
        raise TypeError(f"not a command tree node: {node!r}") from None
    return executor(node, state, top_level)
