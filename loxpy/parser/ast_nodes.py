"""
Expression tree node definitions for loxpy.

The tree is built bottom-up by the parser and is never mutated afterwards:
every node is a frozen dataclass that exclusively owns its children.
Operator nodes keep their operator token so that runtime errors can report
a source line.

Consumers (the interpreter, the diagnostic printer) implement
``ExpressionVisitor`` and are dispatched to through ``Expression.accept``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

from ..lexer.tokens import Token
from ..lexer.literals import Literal


class ExpressionVisitor(ABC):
    """Abstract visitor interface, one method per node kind."""

    @abstractmethod
    def visit_binary(self, expr: 'Binary') -> Any:
        pass

    @abstractmethod
    def visit_grouping(self, expr: 'Grouping') -> Any:
        pass

    @abstractmethod
    def visit_literal(self, expr: 'LiteralExpr') -> Any:
        pass

    @abstractmethod
    def visit_unary(self, expr: 'Unary') -> Any:
        pass

    @abstractmethod
    def visit_ternary(self, expr: 'Ternary') -> Any:
        pass


class Expression(ABC):
    """Base class for expressions."""

    @abstractmethod
    def accept(self, visitor: ExpressionVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        pass

    @abstractmethod
    def children(self) -> List['Expression']:
        """Get all child nodes."""
        pass


@dataclass(frozen=True)
class Binary(Expression):
    """Binary operation, including the comma operator."""
    left: Expression
    operator: Token
    right: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_binary(self)

    def children(self) -> List[Expression]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Grouping(Expression):
    """Parenthesized expression."""
    expression: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_grouping(self)

    def children(self) -> List[Expression]:
        return [self.expression]


@dataclass(frozen=True)
class LiteralExpr(Expression):
    """Literal value; ``None`` is nil."""
    value: Optional[Literal]

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_literal(self)

    def children(self) -> List[Expression]:
        return []


@dataclass(frozen=True)
class Unary(Expression):
    """Prefix operation ('!' or '-')."""
    operator: Token
    right: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_unary(self)

    def children(self) -> List[Expression]:
        return [self.right]


@dataclass(frozen=True)
class Ternary(Expression):
    """Conditional ``condition ? then_branch : else_branch``."""
    condition: Expression
    then_branch: Expression
    else_branch: Expression

    def accept(self, visitor: ExpressionVisitor) -> Any:
        return visitor.visit_ternary(self)

    def children(self) -> List[Expression]:
        return [self.condition, self.then_branch, self.else_branch]
