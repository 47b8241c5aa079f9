"""
Pipeline driver: scan, parse and evaluate one source text.

Every stage reports through ``echo`` in the one-line formats below, and the
outcome is returned as a ``RunResult`` so callers (the CLI and the REPL)
can decide what to do next:

    lexical error   Error on line N: <message>
    parse error     Error on line N: <message>
    runtime error   <message> [line N]
    success         display text of the value
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import click

from .config import InterpreterConfig
from .lexer.lexer import Lexer
from .lexer.errors import LexerError
from .lexer.literals import Literal, stringify
from .parser.parser import Parser
from .parser.errors import ParseError
from .parser.ast_printer import print_ast as render_ast
from .interpreter.interpreter import Interpreter
from .interpreter.errors import LoxRuntimeError

logger = logging.getLogger(__name__)

# Exit codes for file mode (BSD sysexits)
EXIT_OK = 0
EXIT_DATA_ERROR = 65
EXIT_SOFTWARE = 70
EXIT_IO_ERROR = 74


class ScriptLoadError(Exception):
    """Raised when a script file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not load '{path}': {reason}")
        self.path = path
        self.reason = reason


@dataclass
class RunResult:
    """Outcome of one pass through the pipeline."""
    value: Optional[Literal] = None
    lexer_errors: List[LexerError] = field(default_factory=list)
    parse_error: Optional[ParseError] = None
    runtime_error: Optional[LoxRuntimeError] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.lexer_errors) or self.parse_error is not None or self.runtime_error is not None

    @property
    def exit_code(self) -> int:
        if self.lexer_errors or self.parse_error is not None:
            return EXIT_DATA_ERROR
        if self.runtime_error is not None:
            return EXIT_SOFTWARE
        return EXIT_OK


def run(source: str, config: Optional[InterpreterConfig] = None,
        echo: Callable[[str], None] = click.echo, print_ast: bool = False) -> RunResult:
    """
    Run one source text through the whole pipeline.

    Lexical errors are reported and dropped; the remaining tokens are
    still parsed and evaluated. A parse error stops the pass before
    evaluation.
    """
    config = config or InterpreterConfig()
    result = RunResult()

    lexer = Lexer(source)
    lexer.scan()

    result.lexer_errors = lexer.errors
    for error in result.lexer_errors:
        echo(error.report())
    if lexer.has_warnings():
        for warning in lexer.warnings:
            logger.warning("%s (%s)", warning.message, warning.diagnostic.code)

    try:
        expr = Parser(lexer.tokens, config.max_nesting_depth).parse()
    except ParseError as e:
        result.parse_error = e
        echo(e.report())
        return result

    if print_ast:
        echo(render_ast(expr))

    try:
        result.value = Interpreter(config).interpret(expr)
    except LoxRuntimeError as e:
        result.runtime_error = e
        echo(e.report())
        return result

    echo(stringify(result.value))
    return result


def load_source(path: str) -> str:
    """
    Read a script file as UTF-8.

    Raises:
        ScriptLoadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise ScriptLoadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ScriptLoadError(path, "file is not valid UTF-8") from e


def run_file(path: str, config: Optional[InterpreterConfig] = None,
             echo: Callable[[str], None] = click.echo, print_ast: bool = False) -> RunResult:
    """Load a script and run it once."""
    source = load_source(path)
    logger.debug("Loaded %s (%d characters)", path, len(source))
    return run(source, config, echo=echo, print_ast=print_ast)
