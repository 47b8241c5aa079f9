"""
loxpy Package

A tree-walking interpreter for the expression subset of the Lox language:
scanning, recursive descent parsing and evaluation of dynamically typed
values, plus a file runner and an interactive loop.

Architecture:
    loxpy/
    ├── lexer/           # Tokens, literal values and the scanner
    ├── parser/          # Expression tree, parser and tree printer
    ├── interpreter/     # Tree-walking evaluation
    ├── runner.py        # Pipeline driver
    ├── repl.py          # Interactive loop
    └── cli.py           # Command-line entry point

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import InterpreterConfig
from .lexer import Lexer
from .parser import Parser
from .interpreter import Interpreter
from .runner import RunResult, run, run_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Interpreter",
    "InterpreterConfig",

    # Pipeline
    "RunResult",
    "run",
    "run_file",

    # Version info
    "__version__",
    "__license__",
]
