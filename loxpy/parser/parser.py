"""
loxpy Recursive Descent Parser

Implements the expression grammar, one method per rule, from the lowest
precedence rule down to the highest:

    expression → comma
    comma      → ternary ( "," ternary )*
    ternary    → equality ( "?" expression ":" expression )?
    equality   → comparison ( ( "!=" | "==" ) comparison )*
    comparison → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term       → factor ( ( "-" | "+" ) factor )*
    factor     → unary ( ( "/" | "*" ) unary )*
    unary      → ( "!" | "-" ) unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil"
               | "(" expression ")"

Binary rules fold left, so ``a - b - c`` parses as ``(a - b) - c``. The
ternary branches recurse into ``expression``, which makes ``?:`` right
associative.
"""

import logging
from contextlib import contextmanager
from typing import Callable, List, Optional

from ..config import DEFAULT_MAX_NESTING_DEPTH, InterpreterConfig
from ..lexer.tokens import Token, TokenType
from ..lexer.literals import BooleanLiteral
from .ast_nodes import Binary, Expression, Grouping, LiteralExpr, Ternary, Unary
from .errors import (
    SyntaxErrorRecovery, create_expect_expression_error,
    create_missing_token_error, create_trailing_tokens_error,
    create_nesting_too_deep_error
)

logger = logging.getLogger(__name__)


class Parser:
    """
    loxpy recursive descent parser.

    Stops at the first syntax error; there is no statement boundary to
    recover to in an expression-only grammar.
    """

    def __init__(self, tokens: List[Token], max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Valid tokens from the lexer, normally ending with EOF
            max_nesting_depth: Deepest allowed nesting of groupings,
                ternary branches and prefix operators
        """
        self.tokens = tokens
        self.current = 0
        self.depth = 0
        self.max_nesting_depth = max_nesting_depth

    def parse(self) -> Expression:
        """
        Parse the token stream into one expression tree.

        Raises:
            ParseError: On the first syntax error
        """
        expr = self._expression()

        if not self._is_at_end():
            raise create_trailing_tokens_error(self._peek())

        logger.debug("Parsed %d tokens into %s", len(self.tokens), type(expr).__name__)
        return expr

    def synchronize(self):
        """Skip tokens until the start of the next statement."""
        self.current = SyntaxErrorRecovery.synchronize_to_statement_boundary(
            self.tokens, self.current
        )

    # Grammar rules

    def _expression(self) -> Expression:
        with self._nested():
            return self._comma()

    def _comma(self) -> Expression:
        return self._left_associative([TokenType.COMMA], self._ternary)

    def _ternary(self) -> Expression:
        expr = self._equality()

        if self._match(TokenType.QUESTION):
            then_branch = self._expression()
            self._consume(TokenType.COLON, "Expect ':' after then branch.")
            else_branch = self._expression()
            expr = Ternary(expr, then_branch, else_branch)

        return expr

    def _equality(self) -> Expression:
        return self._left_associative(
            [TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL],
            self._comparison
        )

    def _comparison(self) -> Expression:
        return self._left_associative(
            [TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL],
            self._term
        )

    def _term(self) -> Expression:
        return self._left_associative([TokenType.MINUS, TokenType.PLUS], self._factor)

    def _factor(self) -> Expression:
        return self._left_associative([TokenType.SLASH, TokenType.STAR], self._unary)

    def _unary(self) -> Expression:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            with self._nested():
                right = self._unary()
            return Unary(operator, right)

        return self._primary()

    def _primary(self) -> Expression:
        if self._match(TokenType.FALSE):
            return LiteralExpr(BooleanLiteral(False))
        if self._match(TokenType.TRUE):
            return LiteralExpr(BooleanLiteral(True))
        if self._match(TokenType.NIL):
            return LiteralExpr(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return LiteralExpr(self._previous().literal)

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise create_expect_expression_error(self._peek())

    def _left_associative(self, operator_types: List[TokenType],
                          operand: Callable[[], Expression]) -> Expression:
        """Parse ``operand ( operator operand )*`` into a left-leaning chain."""
        expr = operand()

        while self._match(*operator_types):
            operator = self._previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    @contextmanager
    def _nested(self):
        """Track nesting depth so pathological input fails cleanly."""
        self.depth += 1
        try:
            if self.depth > self.max_nesting_depth:
                raise create_nesting_too_deep_error(self._peek(), self.max_nesting_depth)
            yield
        finally:
            self.depth -= 1

    # Utility methods

    def _match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any type and consume if so."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        # Token list without an EOF marker
        line = self.tokens[-1].line if self.tokens else 1
        return Token(TokenType.EOF, "", None, line)

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()

        raise create_missing_token_error(message, self._peek())


def parse_string(source: str, config: Optional[InterpreterConfig] = None) -> Expression:
    """
    Convenience function to scan and parse a source string.

    Raises:
        LexerError: The first lexical error, if any
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    config = config or InterpreterConfig()
    tokens = tokenize_string(source)
    return Parser(tokens, config.max_nesting_depth).parse()
