""" Classify how a child process terminated. """
import os
import signal
from dataclasses import dataclass


@dataclass(frozen=True)
class NormalExit:
    code: int


@dataclass(frozen=True)
class KilledByInterrupt:
    pass


@dataclass(frozen=True)
class KilledOther:
    # None when the child reported a launch failure instead of dying by signal
    signal: int | None = None


Outcome = NormalExit | KilledByInterrupt | KilledOther


def decode(status: int, launch_failed: bool = False) -> Outcome:
    """
    Translate a raw waitpid() status into an Outcome.

    launch_failed is the child's own report that it never reached the
    program; it takes precedence over whatever exit status came with it.
    """
    if launch_failed:
        return KilledOther()
    if os.WIFEXITED(status):
        return NormalExit(os.WEXITSTATUS(status))
    if os.WIFSIGNALED(status):
        sig = os.WTERMSIG(status)
        if sig == signal.SIGINT:
            return KilledByInterrupt()
        return KilledOther(sig)
    return KilledOther()
