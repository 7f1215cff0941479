""" In-memory launcher for exercising the runner without forking. """
from exceptions import CommandInterrupted
from wait_status import KilledByInterrupt, KilledOther, NormalExit


def exits(code):
    return lambda cmd: NormalExit(code)


def run_body(body):
    """ Run a group or pipe-side body in-process, decoding it as a child would be. """
    try:
        return NormalExit(body())
    except CommandInterrupted:
        return KilledByInterrupt()


class FakeLauncher:
    """
    programs maps a program name to a callable taking the Plain node and
    returning an Outcome. Unknown names behave like a failed launch.
    """
    def __init__(self, programs=None, pipe_outcomes=None):
        self.programs = {"true": exits(0), "false": exits(1)}
        self.programs.update(programs or {})
        self.pipe_outcomes = pipe_outcomes
        self.ran = []
        self.subshells = []

    def run_program(self, cmd):
        self.ran.append(cmd.args)
        program = self.programs.get(cmd.name)
        if program is None:
            return KilledOther()
        return program(cmd)

    def run_subshell(self, body, redirects):
        self.subshells.append(redirects)
        return run_body(body)

    def run_pipeline(self, left, right):
        if self.pipe_outcomes is not None:
            return self.pipe_outcomes
        return run_body(left), run_body(right)
