""" Registry of builtin commands. """
from constants import DIGITS_RX, FAREWELL
from exceptions import ShellExit

BUILTINS = {}


def builtin(name):
    """Decorator to register builtins"""
    def wrapper(func):
        BUILTINS[name] = func
        return func
    return wrapper


def parse_exit_status(args) -> int:
    """
    Leading decimal digits of the first argument, like atoi() without a sign.
    A missing or non-numeric argument gives 0.
    """
    if not args:
        return 0
    digits = DIGITS_RX.match(args[0]).group()
    return int(digits) & 0xFF if digits else 0


@builtin("exit")
def builtin_exit(args, state):
    status = parse_exit_status(args)
    print(FAREWELL)
    raise ShellExit(status)
