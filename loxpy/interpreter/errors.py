"""
Runtime errors raised by the loxpy interpreter.

A runtime error aborts the current evaluation only; the driver reports it
and carries on with the next input.
"""

from typing import Optional

from ..lexer.tokens import Token
from ..lexer.errors import Diagnostic


class LoxRuntimeError(Exception):
    """
    Exception raised when evaluation fails.

    ``token`` is the operator the failure is attributed to; it is ``None``
    for failures that have no single responsible operator.
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            line=token.line if token is not None else 0,
            severity="error",
            code=code,
            help_text=help_text
        )

    @property
    def line(self) -> Optional[int]:
        return self.token.line if self.token is not None else None

    def report(self) -> str:
        """One-line report in the driver's output format."""
        if self.token is None:
            return self.message
        return f"{self.message} [line {self.token.line}]"

    def __str__(self) -> str:
        return self.message


RUNTIME_ERROR_CODES = {
    "R001": "Operand type mismatch",
    "R002": "Division by zero",
    "R003": "Unexpected operator",
    "R004": "Expression nesting too deep",
}


def create_operand_type_error(operator: Token, message: str = "Operands must be numbers.") -> LoxRuntimeError:
    """Create an error for operands of the wrong variant."""
    return LoxRuntimeError(
        message=message,
        token=operator,
        code="R001",
        help_text=f"Check the operand types of '{operator.lexeme}'."
    )


def create_division_by_zero_error(operator: Token) -> LoxRuntimeError:
    return LoxRuntimeError(
        message="Division by zero.",
        token=operator,
        code="R002"
    )


def create_unexpected_operator_error(operator: Token) -> LoxRuntimeError:
    """Create an error for an operator with no evaluation rule."""
    return LoxRuntimeError(
        message="Unexpected operator",
        token=operator,
        code="R003",
        help_text=f"'{operator.lexeme}' cannot be used in this position."
    )


def create_eval_too_deep_error(limit: int) -> LoxRuntimeError:
    return LoxRuntimeError(
        message="Expression nesting too deep.",
        code="R004",
        help_text=f"Evaluation may nest at most {limit} levels."
    )
