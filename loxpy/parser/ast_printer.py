"""
Diagnostic printer for expression trees.

Renders a tree in fully parenthesized prefix notation, e.g.
``-123 * (45.67)`` becomes ``(* (- 123) (group 45.67))``. Used by tests and
the ``--print-ast`` CLI flag; it never takes part in evaluation.
"""

from typing import List

from ..lexer.literals import stringify
from .ast_nodes import (
    Binary, Expression, ExpressionVisitor, Grouping, LiteralExpr, Ternary, Unary
)


class AstPrinter(ExpressionVisitor):
    """Read-only visitor producing the prefix-notation string."""

    def print(self, expr: Expression) -> str:
        return expr.accept(self)

    def visit_binary(self, expr: Binary) -> str:
        # Walk the left-deep spine of an operator chain iteratively
        spine = []
        node = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        text = node.accept(self)
        for binary in reversed(spine):
            text = f"({binary.operator.lexeme} {text} {binary.right.accept(self)})"
        return text

    def visit_grouping(self, expr: Grouping) -> str:
        return self._parenthesize("group", [expr.expression])

    def visit_literal(self, expr: LiteralExpr) -> str:
        return stringify(expr.value)

    def visit_unary(self, expr: Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, [expr.right])

    def visit_ternary(self, expr: Ternary) -> str:
        return self._parenthesize(
            "ternary", [expr.condition, expr.then_branch, expr.else_branch]
        )

    def _parenthesize(self, name: str, exprs: List[Expression]) -> str:
        parts = [name] + [expr.accept(self) for expr in exprs]
        return "(" + " ".join(parts) + ")"


def print_ast(expr: Expression) -> str:
    """Convenience wrapper around ``AstPrinter``."""
    return AstPrinter().print(expr)
