"""
Error handling for the loxpy parser.

A parse error is fatal to the current parse. ``SyntaxErrorRecovery`` holds
the statement-boundary synchronization used for recovery once the grammar
grows statements; the expression grammar has no boundary to recover to.
"""

from typing import List, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Located at the offending (unconsumed) token.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            line=token.line,
            severity="error",
            code=code,
            help_text=help_text
        )

    def report(self) -> str:
        """One-line report in the driver's output format."""
        return f"Error on line {self.token.line}: {self.message}"

    def __str__(self) -> str:
        return self.message


class SyntaxErrorRecovery:
    """
    Utilities for error recovery in the parser.
    """

    # Token types that begin a statement
    STATEMENT_BOUNDARIES = {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }

    @staticmethod
    def synchronize_to_statement_boundary(tokens: List[Token], current_pos: int) -> int:
        """
        Skip past the offending token to the next likely statement start.

        Stops right after a semicolon, or before a statement keyword.

        Returns the position to resume parsing from.
        """
        current_pos += 1

        while current_pos < len(tokens) and tokens[current_pos].type != TokenType.EOF:
            if tokens[current_pos - 1].type == TokenType.SEMICOLON:
                return current_pos
            if tokens[current_pos].type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES:
                return current_pos
            current_pos += 1

        return current_pos


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Expected expression",
    "P002": "Expected token not found",
    "P003": "Unexpected token after expression",
    "P004": "Expression nesting too deep",
}


# Helper functions for creating common parser errors

def create_expect_expression_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    if found.type == TokenType.EOF:
        help_text = "The input ended where an operand was expected."
    elif found.is_keyword:
        help_text = f"'{found.lexeme}' is a reserved word and cannot start an expression."
    else:
        help_text = f"'{found.lexeme}' cannot start an expression."

    return ParseError(
        message="Expect expression.",
        token=found,
        code="P001",
        help_text=help_text
    )


def create_missing_token_error(message: str, found: Token) -> ParseError:
    """Create an error for a missing closing token."""
    return ParseError(
        message=message,
        token=found,
        code="P002"
    )


def create_trailing_tokens_error(found: Token) -> ParseError:
    """Create an error for input left over after a complete expression."""
    return ParseError(
        message="Expect end of expression.",
        token=found,
        code="P003",
        help_text=f"Unexpected '{found.lexeme}' after a complete expression."
    )


def create_nesting_too_deep_error(found: Token, limit: int) -> ParseError:
    """Create an error for input nested past the parser's depth limit."""
    return ParseError(
        message="Expression nesting too deep.",
        token=found,
        code="P004",
        help_text=f"Groupings and prefix operators may nest at most {limit} levels."
    )
