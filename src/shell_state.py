""" Current state of the shell. """
from launcher import ForkLauncher


class ShellState:
    """
    State threaded through every execute() call.

    interrupted is the cancellation token: it is raised by the interrupt
    handler or by the runner when a foreground child dies from SIGINT, and
    cleared once per prompt cycle. subshell is set on the copy a group or
    pipe side runs with; only the shell itself prints interrupt notices.
    """
    def __init__(self, launcher=None, subshell=False):
        if launcher is None:
            launcher = ForkLauncher()
        self.launcher = launcher
        self.subshell = subshell
        self.interrupted = False
        self.last_status = 0

    def raise_interrupt(self):
        self.interrupted = True

    def clear_interrupt(self):
        self.interrupted = False

    def set_status(self, status: int):
        # normalize like shells do
        self.last_status = int(status) & 0xFF if status is not None else 0

    def for_subshell(self) -> "ShellState":
        child = ShellState(self.launcher, subshell=True)
        child.last_status = self.last_status
        return child
