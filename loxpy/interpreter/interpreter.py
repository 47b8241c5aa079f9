"""
loxpy Tree-Walking Interpreter

Evaluates an expression tree to a single runtime value. The interpreter is
a visitor over the tree nodes and keeps no state between calls apart from
the recursion depth of the evaluation in progress.
"""

import logging
from typing import Optional

from ..config import InterpreterConfig
from ..lexer.tokens import Token, TokenType
from ..lexer.literals import (
    Literal, BooleanLiteral, NumberLiteral, StringLiteral,
    stringify, is_truthy, values_equal
)
from ..parser.ast_nodes import (
    Binary, Expression, ExpressionVisitor, Grouping, LiteralExpr, Ternary, Unary
)
from .errors import (
    create_operand_type_error, create_division_by_zero_error,
    create_unexpected_operator_error, create_eval_too_deep_error
)

logger = logging.getLogger(__name__)

_COMPARISONS = {
    TokenType.GREATER: lambda a, b: a > b,
    TokenType.GREATER_EQUAL: lambda a, b: a >= b,
    TokenType.LESS: lambda a, b: a < b,
    TokenType.LESS_EQUAL: lambda a, b: a <= b,
}


class Interpreter(ExpressionVisitor):
    """
    Evaluator for expression trees.

    Errors are raised as ``LoxRuntimeError`` and abort the evaluation;
    nothing is caught here.
    """

    def __init__(self, config: Optional[InterpreterConfig] = None):
        self.config = config or InterpreterConfig()
        self.depth = 0

    def interpret(self, expr: Expression) -> Optional[Literal]:
        """
        Evaluate a complete expression tree.

        Returns:
            The resulting value, ``None`` for nil

        Raises:
            LoxRuntimeError: If evaluation fails
        """
        self.depth = 0
        value = self._evaluate(expr)
        logger.debug("Evaluated %s to %s", type(expr).__name__, stringify(value))
        return value

    def _evaluate(self, expr: Expression) -> Optional[Literal]:
        self.depth += 1
        try:
            if self.depth > self.config.max_eval_depth:
                raise create_eval_too_deep_error(self.config.max_eval_depth)
            return expr.accept(self)
        finally:
            self.depth -= 1

    def visit_literal(self, expr: LiteralExpr) -> Optional[Literal]:
        return expr.value

    def visit_grouping(self, expr: Grouping) -> Optional[Literal]:
        return self._evaluate(expr.expression)

    def visit_ternary(self, expr: Ternary) -> Optional[Literal]:
        # Only the selected branch is evaluated
        if is_truthy(self._evaluate(expr.condition)):
            return self._evaluate(expr.then_branch)
        return self._evaluate(expr.else_branch)

    def visit_unary(self, expr: Unary) -> Optional[Literal]:
        right = self._evaluate(expr.right)
        operator = expr.operator

        if operator.type == TokenType.BANG:
            return BooleanLiteral(not is_truthy(right))

        if operator.type == TokenType.MINUS:
            self._check_number_operand(operator, right)
            return NumberLiteral(-right.value)

        raise create_unexpected_operator_error(operator)

    def visit_binary(self, expr: Binary) -> Optional[Literal]:
        # Operator chains build a left-deep spine; fold it in a loop so only
        # real nesting (groupings, prefix operators, branches) adds depth
        spine = []
        node = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        value = self._evaluate(node)
        for binary in reversed(spine):
            right = self._evaluate(binary.right)
            value = self._apply_binary(binary.operator, value, right)

        return value

    def _apply_binary(self, operator: Token, left: Optional[Literal],
                      right: Optional[Literal]) -> Optional[Literal]:
        """Combine two evaluated operands; ',' has no rule and is rejected."""
        if operator.type == TokenType.PLUS:
            return self._add(operator, left, right)

        if operator.type == TokenType.MINUS:
            self._check_number_operands(operator, left, right)
            return NumberLiteral(left.value - right.value)

        if operator.type == TokenType.STAR:
            self._check_number_operands(operator, left, right)
            return NumberLiteral(left.value * right.value)

        if operator.type == TokenType.SLASH:
            self._check_number_operands(operator, left, right)
            if right.value == 0:
                raise create_division_by_zero_error(operator)
            return NumberLiteral(left.value / right.value)

        if operator.type in _COMPARISONS:
            return self._compare(operator, left, right)

        if operator.type == TokenType.EQUAL_EQUAL:
            return BooleanLiteral(values_equal(left, right))

        if operator.type == TokenType.BANG_EQUAL:
            return BooleanLiteral(not values_equal(left, right))

        raise create_unexpected_operator_error(operator)

    def _add(self, operator: Token, left: Optional[Literal],
             right: Optional[Literal]) -> Literal:
        if isinstance(left, NumberLiteral) and isinstance(right, NumberLiteral):
            return NumberLiteral(left.value + right.value)

        # A string on either side turns '+' into concatenation
        if isinstance(left, StringLiteral) or isinstance(right, StringLiteral):
            return StringLiteral(stringify(left) + stringify(right))

        raise create_operand_type_error(operator, "operands must be numbers or strings.")

    def _compare(self, operator: Token, left: Optional[Literal],
                 right: Optional[Literal]) -> BooleanLiteral:
        if isinstance(left, NumberLiteral) and isinstance(right, NumberLiteral):
            return BooleanLiteral(_COMPARISONS[operator.type](left.value, right.value))

        if self.config.strict_comparisons:
            raise create_operand_type_error(operator)
        return BooleanLiteral(False)

    def _check_number_operand(self, operator: Token, operand: Optional[Literal]):
        if not isinstance(operand, NumberLiteral):
            raise create_operand_type_error(operator)

    def _check_number_operands(self, operator: Token, left: Optional[Literal],
                               right: Optional[Literal]):
        if not (isinstance(left, NumberLiteral) and isinstance(right, NumberLiteral)):
            raise create_operand_type_error(operator)


def evaluate(expr: Expression, config: Optional[InterpreterConfig] = None) -> Optional[Literal]:
    """Convenience function to evaluate a tree with a fresh interpreter."""
    return Interpreter(config).interpret(expr)
