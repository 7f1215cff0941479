import io
import signal
import sys
import unittest
from unittest.mock import patch

import shell
from fakes import FakeLauncher
from shell_state import ShellState
from wait_status import KilledByInterrupt, NormalExit


class FakeTerminal:
    """ Feeds lines to Shell.run and records the flag seen at each prompt. """
    def __init__(self, *lines):
        self.lines = list(lines)
        self.prompts = []
        self.flags = []
        self.state = None

    def __call__(self, prompt):
        self.prompts.append(prompt)
        self.flags.append(self.state.interrupted)
        if not self.lines:
            raise EOFError
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line


class ShellTestCase(unittest.TestCase):
    def setUp(self):
        self.addCleanup(signal.signal, signal.SIGINT, signal.getsignal(signal.SIGINT))
        self.launcher = FakeLauncher({
            "code": lambda cmd: NormalExit(int(cmd.args[1])),
            "sigint": lambda cmd: KilledByInterrupt(),
        })
        self.state = ShellState(launcher=self.launcher)
        self.out = io.StringIO()
        self.err = io.StringIO()
        for name, stream in (("stdout", self.out), ("stderr", self.err)):
            patcher = patch.object(sys, name, stream)
            patcher.start()
            self.addCleanup(patcher.stop)

    def make_shell(self, *lines, prompt="$ "):
        terminal = FakeTerminal(*lines)
        terminal.state = self.state
        return shell.Shell(state=self.state, read_line=terminal, prompt=prompt), terminal


class TestReadCommand(unittest.TestCase):
    def test_read_command(self):
        with patch("builtins.input", side_effect=["echo hi"]) as mock_input:
            self.assertEqual("echo hi", shell.read_command("> "))
        mock_input.assert_called_once_with("> ")


class TestLoop(ShellTestCase):
    def test_end_of_input_says_goodbye(self):
        sh, terminal = self.make_shell()
        self.assertEqual(0, sh.run())
        self.assertEqual("\ngoodbye!\n", self.out.getvalue())
        self.assertEqual(["$ "], terminal.prompts)

    def test_end_of_input_without_prompt(self):
        sh, _ = self.make_shell(prompt="")
        self.assertEqual(0, sh.run())
        self.assertEqual("goodbye!\n", self.out.getvalue())

    def test_end_of_input_ignores_last_status(self):
        sh, _ = self.make_shell("false")
        self.assertEqual(0, sh.run())
        self.assertEqual(1, self.state.last_status)

    def test_exit_builtin_ends_loop(self):
        sh, terminal = self.make_shell("true", "exit 7", "code 3")
        self.assertEqual(7, sh.run())
        self.assertEqual("goodbye!\n", self.out.getvalue())
        self.assertEqual([("true",)], self.launcher.ran)
        self.assertEqual(["code 3"], terminal.lines)

    def test_records_last_status(self):
        sh, _ = self.make_shell("code 4", "true")
        sh.run()
        self.assertEqual(0, self.state.last_status)
        self.assertIn("Exited with nonzero status 4", self.err.getvalue())

    def test_blank_lines_are_skipped(self):
        sh, terminal = self.make_shell("", "   ", "true")
        sh.run()
        self.assertEqual([("true",)], self.launcher.ran)
        self.assertEqual(4, len(terminal.prompts))

    def test_interrupt_at_prompt_discards_line_and_continues(self):
        sh, terminal = self.make_shell(KeyboardInterrupt(), "true")
        self.assertEqual(0, sh.run())
        self.assertIn("Interrupted", self.err.getvalue())
        self.assertEqual([("true",)], self.launcher.ran)
        self.assertEqual(3, len(terminal.prompts))

    def test_interrupt_flag_cleared_each_cycle(self):
        sh, terminal = self.make_shell("sigint; true", "true")
        sh.run()
        self.assertEqual([False, False, False], terminal.flags)
        # the sequence stopped after the interrupted step
        self.assertEqual([("sigint",), ("true",)], self.launcher.ran)
        self.assertEqual(0, self.state.last_status)

    def test_syntax_error_is_reported_and_loop_continues(self):
        sh, _ = self.make_shell("true &&", "true")
        self.assertEqual(0, sh.run())
        self.assertIn("error: ", self.err.getvalue())
        self.assertEqual([("true",)], self.launcher.ran)

    def test_unknown_command_continues(self):
        sh, _ = self.make_shell("nosuch", "true")
        sh.run()
        self.assertIn("Unknown command 'nosuch'", self.err.getvalue())
        self.assertEqual(0, self.state.last_status)

    def test_run_installs_flag_handler(self):
        sh, _ = self.make_shell()
        sh.run()
        signal.raise_signal(signal.SIGINT)
        self.assertTrue(self.state.interrupted)


class TestEvaluate(ShellTestCase):
    def test_status_is_recorded(self):
        sh, _ = self.make_shell()
        self.assertEqual(5, sh.evaluate("code 5"))
        self.assertEqual(5, self.state.last_status)

    def test_syntax_error_status(self):
        sh, _ = self.make_shell()
        self.assertEqual(2, sh.evaluate("( true"))
        self.assertEqual(2, self.state.last_status)
        self.assertEqual([], self.launcher.ran)

    def test_unclosed_quote(self):
        sh, _ = self.make_shell()
        self.assertEqual(2, sh.evaluate("echo 'oops"))
        self.assertIn("error: ", self.err.getvalue())

    def test_empty_line_keeps_status(self):
        sh, _ = self.make_shell()
        self.state.set_status(9)
        self.assertEqual(9, sh.evaluate(""))

    def test_fork_failure(self):
        def fail(cmd):
            raise OSError(11, "Resource temporarily unavailable")

        self.launcher.programs["busy"] = fail
        sh, _ = self.make_shell()
        with self.assertLogs("shell", level="ERROR"):
            self.assertEqual(254, sh.evaluate("busy"))
        self.assertIn("error: ", self.err.getvalue())


class TestRunCommand(ShellTestCase):
    def test_returns_status(self):
        sh, _ = self.make_shell()
        self.assertEqual(1, sh.run_command("false"))
        self.assertEqual("Exited with nonzero status 1\n", self.err.getvalue())

    def test_exit(self):
        sh, _ = self.make_shell()
        self.assertEqual(3, sh.run_command("true && exit 3"))
        self.assertEqual("goodbye!\n", self.out.getvalue())


if __name__ == "__main__":
    unittest.main()
