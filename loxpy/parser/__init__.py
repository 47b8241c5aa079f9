"""
loxpy Parser Package

Implements a recursive descent parser over a fixed precedence ladder and
produces immutable expression trees.

Key Features:
- One parsing routine per grammar rule
- Left-associative binary chains, right-associative ternary
- Operator tokens kept in the tree for line-numbered runtime errors
- Visitor protocol shared by the interpreter and the diagnostic printer
"""

from .ast_nodes import (
    Expression, ExpressionVisitor, Binary, Grouping, LiteralExpr, Unary, Ternary
)
from .parser import Parser, parse_string
from .ast_printer import AstPrinter, print_ast
from .errors import ParseError, SyntaxErrorRecovery

__all__ = [
    # Core parser
    "Parser",
    "parse_string",

    # Expression tree
    "Expression", "ExpressionVisitor",
    "Binary", "Grouping", "LiteralExpr", "Unary", "Ternary",

    # Diagnostics
    "AstPrinter", "print_ast",

    # Error handling
    "ParseError", "SyntaxErrorRecovery",
]
