""" SIGINT dispositions for the prompt, for waits and for launched programs. """
import contextlib
import logging
import os
import signal

log = logging.getLogger(__name__)


class InterruptController:
    """ Route SIGINT in the shell process to the interrupt flag of a ShellState. """
    def __init__(self, state):
        self.state = state

    def _flag_only(self, signum, frame):
        self.state.raise_interrupt()

    def _abandon_read(self, signum, frame):
        self.state.raise_interrupt()
        raise KeyboardInterrupt

    def install(self):
        """ Between children SIGINT only raises the flag; runner checks it between steps. """
        signal.signal(signal.SIGINT, self._flag_only)
        log.debug("SIGINT -> flag")

    @contextlib.contextmanager
    def at_prompt(self):
        """ While reading a line, SIGINT raises the flag and abandons the read. """
        previous = signal.signal(signal.SIGINT, self._abandon_read)
        try:
            yield
        finally:
            signal.signal(signal.SIGINT, previous)


@contextlib.contextmanager
def waiting():
    """
    Ignore SIGINT in this process while waiting on foreground children.
    Enter before forking: children inherit the ignored disposition and
    reset it themselves when they are about to exec a program.
    """
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def reset_for_program():
    """ In a child about to exec: let the program die from SIGINT and SIGPIPE. """
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    # Python ignores SIGPIPE and the ignored disposition survives exec
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)


def die_from_interrupt():
    """ End this process by SIGINT so the waiting parent decodes an interrupt. """
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    os.kill(os.getpid(), signal.SIGINT)
