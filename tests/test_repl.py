"""
Test suite for the interactive loop.

Input is fed from a list through ``input_func``; the list running out acts
as end of input.
"""

import signal
import threading
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from loxpy.config import InterpreterConfig
from loxpy.repl import Repl


class RecordingEcho:
    """Stands in for click.echo and keeps everything written."""

    def __init__(self):
        self.parts = []

    def __call__(self, message: str = "", nl: bool = True):
        self.parts.append(message + ("\n" if nl else ""))

    @property
    def text(self) -> str:
        return "".join(self.parts)


def scripted_input(lines):
    remaining = iter(lines)

    def input_func(prompt):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError
    return input_func


class TestRepl(unittest.TestCase):
    """Test cases for the REPL session."""

    def _session(self, lines, config=None, handle_sigint=False):
        echo = RecordingEcho()
        repl = Repl(config, input_func=scripted_input(lines), echo=echo, handle_sigint=handle_sigint)
        repl.run()
        return repl, echo.text

    def test_evaluates_lines_until_exit(self):
        repl, text = self._session(["1 + 2", '"a" + "b"', "exit", "3"])

        self.assertEqual(text, "lox > 3\nlox > ab\nlox > Exiting...\n")
        self.assertEqual(repl.lines_run, 2)

    def test_exit_ignores_surrounding_whitespace(self):
        _, text = self._session(["  exit  "])

        self.assertEqual(text, "lox > Exiting...\n")

    def test_end_of_input(self):
        _, text = self._session(["1"])

        self.assertEqual(text, "lox > 1\nlox > \nExiting...\n")

    def test_errors_do_not_end_the_session(self):
        _, text = self._session(["1 / 0", "(1", "@", "2", "exit"])

        self.assertEqual(
            text,
            "lox > Division by zero. [line 1]\n"
            "lox > Error on line 1: Expect ')' after expression.\n"
            "lox > Error on line 1: Invalid token at line 1 pos 0: @\n"
            "Error on line 1: Expect expression.\n"
            "lox > 2\n"
            "lox > Exiting..."
            "\n"
        )

    def test_blank_lines_are_skipped(self):
        repl, text = self._session(["", "   ", "exit"])

        self.assertEqual(text, "lox > lox > lox > Exiting...\n")
        self.assertEqual(repl.lines_run, 0)

    def test_custom_prompt(self):
        _, text = self._session(["exit"], InterpreterConfig(prompt=">> "))

        self.assertEqual(text, ">> Exiting...\n")

    def test_request_quit_stops_a_waiting_session(self):
        release = threading.Event()

        def blocking_input(prompt):
            release.wait()
            raise EOFError

        echo = RecordingEcho()
        repl = Repl(input_func=blocking_input, echo=echo, handle_sigint=False)
        repl.request_quit()
        try:
            repl.run()
        finally:
            release.set()

        self.assertEqual(echo.text, "lox > Exiting...\n")

    def test_sigint_handler_is_restored(self):
        before = signal.getsignal(signal.SIGINT)

        self._session(["exit"], handle_sigint=True)

        self.assertIs(signal.getsignal(signal.SIGINT), before)


if __name__ == "__main__":
    unittest.main()
