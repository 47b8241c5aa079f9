"""
loxpy Interpreter Package

Tree-walking evaluation of expression trees into runtime values.
"""

from .interpreter import Interpreter, evaluate
from .errors import LoxRuntimeError, RUNTIME_ERROR_CODES

__all__ = [
    "Interpreter",
    "evaluate",
    "LoxRuntimeError",
    "RUNTIME_ERROR_CODES",
]
