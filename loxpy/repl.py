"""
Interactive read-eval-print loop.

Input is read on a daemon thread and handed to the main thread through a
queue, so the main thread can notice Ctrl-C between lines even while the
reader is blocked waiting for the next one. Each line is one full pass
through the pipeline; errors are reported and the loop keeps going.
"""

import logging
import queue
import signal
import threading
from typing import Callable, Optional

import click

from .config import InterpreterConfig
from .runner import run

try:
    import readline  # noqa: F401  enables line editing and history for input()
except ImportError:
    readline = None

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"

# Marks end of input on the line queue
_EOF = None


class Repl:
    """
    Line-oriented interactive session.

    Stops on the ``exit`` command, end of input, or Ctrl-C, and prints
    "Exiting..." in every case.
    """

    def __init__(
        self,
        config: Optional[InterpreterConfig] = None,
        input_func: Callable[[str], str] = input,
        echo: Callable[..., None] = click.echo,
        handle_sigint: bool = True
    ):
        self.config = config or InterpreterConfig()
        self.input_func = input_func
        self.echo = echo
        self.handle_sigint = handle_sigint
        self.lines: "queue.Queue[Optional[str]]" = queue.Queue()
        self.quit_requested = threading.Event()
        self.lines_run = 0
        self._previous_sigint = None

    def run(self):
        """Run the session until the user quits."""
        installed = self._install_sigint_handler()

        reader = threading.Thread(target=self._read_lines, name="loxpy-repl-reader", daemon=True)
        reader.start()

        try:
            self._prompt()
            while not self.quit_requested.is_set():
                try:
                    line = self.lines.get(timeout=self.config.poll_interval)
                except queue.Empty:
                    continue

                if line is _EOF:
                    self.echo("")
                    break
                if not self._process_line(line):
                    break
        finally:
            if installed:
                # None means the old handler was not installed from Python
                signal.signal(signal.SIGINT, self._previous_sigint or signal.SIG_DFL)

        self.echo("Exiting...")
        logger.debug("REPL finished after %d lines", self.lines_run)

    def request_quit(self):
        """Ask the loop to stop at its next poll."""
        self.quit_requested.set()

    def _process_line(self, line: str) -> bool:
        """Run one line; returns False when the session should end."""
        text = line.strip()

        if text == EXIT_COMMAND:
            return False

        if text:
            run(line, self.config, echo=self.echo)
            self.lines_run += 1

        self._prompt()
        return True

    def _read_lines(self):
        # Runs on the reader thread; the only shared state is the queue
        while True:
            try:
                line = self.input_func("")
            except EOFError:
                self.lines.put(_EOF)
                return
            except Exception:
                logger.exception("Reading input failed")
                self.lines.put(_EOF)
                return
            self.lines.put(line)

    def _prompt(self):
        self.echo(self.config.prompt, nl=False)

    def _install_sigint_handler(self):
        """Route Ctrl-C to the quit flag; signal handlers live on the main thread only."""
        if not self.handle_sigint or threading.current_thread() is not threading.main_thread():
            return False

        def on_sigint(signum, frame):
            self.echo("")
            self.request_quit()

        self._previous_sigint = signal.signal(signal.SIGINT, on_sigint)
        return True
