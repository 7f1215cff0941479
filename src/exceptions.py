""" Exceptions used to unwind the shell. """


class ShellExit(Exception):
    """ Raised by the exit builtin to terminate the shell with a status. """
    def __init__(self, status: int):
        super().__init__(status)
        self.status = status


class RedirectError(OSError):
    """ A redirection target could not be opened. """
    def __init__(self, path: str, err: OSError):
        super().__init__(err.errno, err.strerror, path)
        self.path = path

    def __str__(self):
        return f"{self.path}: {self.strerror}"


class CommandInterrupted(Exception):
    """ A subtree running in a child was cut short by an interactive interrupt. """
