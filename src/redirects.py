""" Remap the standard streams of a freshly forked child. """
import logging
import os

from command import Redirects
from exceptions import RedirectError

log = logging.getLogger(__name__)

TRUNCATE = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
APPEND = os.O_WRONLY | os.O_CREAT | os.O_APPEND
READ = os.O_RDONLY


def _redirect(path: str, flags: int, target_fd: int):
    try:
        fd = os.open(path, flags, 0o666)
    except OSError as e:
        raise RedirectError(path, e) from e
    if fd == target_fd:
        # target was closed and open() reused its number
        os.set_inheritable(fd, True)
    else:
        try:
            os.dup2(fd, target_fd)
        finally:
            os.close(fd)
    log.debug("fd %d -> %s", target_fd, path)


def apply_redirects(redirects: Redirects):
    """
    Apply redirections to the current process, in this order:
    output, error, input, append. When both output and append are set the
    append target is applied last and wins standard output.

    Only call this in a child process: it changes descriptors 0, 1 and 2.
    """
    if redirects.output is not None:
        _redirect(redirects.output, TRUNCATE, 1)
    if redirects.error is not None:
        _redirect(redirects.error, TRUNCATE, 2)
    if redirects.input is not None:
        _redirect(redirects.input, READ, 0)
    if redirects.append is not None:
        _redirect(redirects.append, APPEND, 1)
