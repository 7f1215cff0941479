""" Create child processes and wait for them. """
import logging
import os
import sys

import interrupts
from command import Plain, Redirects
from constants import (
    ERROR_NOTICE,
    INTERRUPT_STATUS,
    LAUNCH_FAILURE_STATUS,
    SUBSHELL_FAILURE_STATUS,
)
from exceptions import CommandInterrupted, RedirectError, ShellExit
from redirects import apply_redirects
from wait_status import Outcome, decode

log = logging.getLogger(__name__)


def _flush():
    sys.stdout.flush()
    sys.stderr.flush()


def _spawn(child) -> int:
    """ Fork and run child() in the new process. child must not return. """
    _flush()
    pid = os.fork()
    if pid == 0:
        try:
            child()
        finally:
            # Never fall back into the parent's code path.
            os._exit(SUBSHELL_FAILURE_STATUS)
    log.debug("forked %d", pid)
    return pid


def _wait(pid: int) -> int:
    _, status = os.waitpid(pid, 0)
    log.debug("reaped %d status=%#x", pid, status)
    return status


def _read_report(fd: int) -> str:
    """ Read a launch-failure report until every writer has closed or exec'd. """
    with os.fdopen(fd, "rb") as f:
        return f.read().decode(errors="replace")


def _fail_launch(report_fd: int, err: Exception, notice: bool):
    _flush()
    if notice:
        # fd 2 may have been redirected already; write past sys.stderr
        os.write(2, (ERROR_NOTICE.format(message=err) + "\n").encode(errors="replace"))
    os.write(report_fd, f"{err}\n".encode(errors="replace"))
    os._exit(LAUNCH_FAILURE_STATUS)


def _finish(body):
    """ Run body() in a child and exit with its status. """
    status = SUBSHELL_FAILURE_STATUS
    try:
        status = body()
    except ShellExit as e:
        status = e.status
    except CommandInterrupted:
        _flush()
        interrupts.die_from_interrupt()
        status = INTERRUPT_STATUS
    except Exception:
        log.exception("subshell %d failed", os.getpid())
    _flush()
    os._exit(status & 0xFF)


def _exec_program(cmd: Plain, report_r: int, report_w: int):
    os.close(report_r)
    try:
        apply_redirects(cmd.redirects)
    except RedirectError as e:
        _fail_launch(report_w, e, notice=True)
    interrupts.reset_for_program()
    try:
        # report_w is close-on-exec, so a successful exec closes it
        os.execvp(cmd.name, list(cmd.args))
    except (OSError, ValueError) as e:
        _fail_launch(report_w, e, notice=False)


def _subshell(body, redirects: Redirects, report_r: int, report_w: int):
    os.close(report_r)
    try:
        apply_redirects(redirects)
    except RedirectError as e:
        _fail_launch(report_w, e, notice=True)
    os.close(report_w)
    _finish(body)


def _pipe_side(body, channel_fd: int, target_fd: int, read_fd: int, write_fd: int):
    os.dup2(channel_fd, target_fd)
    os.close(read_fd)
    os.close(write_fd)
    _finish(body)


class ForkLauncher:
    """
    Spawn-and-wait capability used by the runner.

    Each method forks, waits for every child it created with SIGINT ignored
    in this process, and returns decoded outcomes. The runner depends only on
    these three methods, so tests can swap in an in-memory launcher.
    A body that raises CommandInterrupted ends its child by SIGINT and
    decodes as KilledByInterrupt.
    """

    def run_program(self, cmd: Plain) -> Outcome:
        """ Run a plain command in a child and wait for it. """
        report_r, report_w = os.pipe()
        with interrupts.waiting():
            try:
                pid = _spawn(lambda: _exec_program(cmd, report_r, report_w))
            except OSError:
                os.close(report_r)
                raise
            finally:
                os.close(report_w)
            failure = _read_report(report_r)
            status = _wait(pid)
        if failure:
            log.debug("%s did not launch: %s", cmd.name, failure.strip())
        return decode(status, launch_failed=bool(failure))

    def run_subshell(self, body, redirects: Redirects) -> Outcome:
        """ Run body() in a child with redirects applied around it. """
        report_r, report_w = os.pipe()
        with interrupts.waiting():
            try:
                pid = _spawn(lambda: _subshell(body, redirects, report_r, report_w))
            except OSError:
                os.close(report_r)
                raise
            finally:
                os.close(report_w)
            failure = _read_report(report_r)
            status = _wait(pid)
        return decode(status, launch_failed=bool(failure))

    def run_pipeline(self, left, right) -> tuple[Outcome, Outcome]:
        """
        Run left() and right() concurrently, left's stdout feeding right's stdin.
        Both children are always waited on.
        """
        read_fd, write_fd = os.pipe()
        with interrupts.waiting():
            try:
                left_pid = _spawn(lambda: _pipe_side(left, write_fd, 1, read_fd, write_fd))
                right_pid = _spawn(lambda: _pipe_side(right, read_fd, 0, read_fd, write_fd))
            finally:
                # The reader only sees end-of-stream once every copy of the
                # write end is closed, ours included.
                os.close(read_fd)
                os.close(write_fd)
            left_status = _wait(left_pid)
            right_status = _wait(right_pid)
        return decode(left_status), decode(right_status)
