"""
loxpy Lexer - turns source text into tokens

Scans extended grapheme clusters rather than code points, so a letter with
combining marks (or an emoji sequence) is always handled as one unit and is
never split in the middle of a lexeme.

Lexical errors are collected in the output sequence next to the tokens;
the scan itself always runs to the end of the input.
"""

import logging
from typing import List, Union

import regex

from .tokens import (
    Token, TokenType, KEYWORDS, SINGLE_CHAR_TOKENS, ONE_OR_TWO_CHAR_TOKENS
)
from .literals import Literal, IdentifierLiteral, NumberLiteral, StringLiteral
from .errors import (
    LexerError, LexerWarning, create_invalid_character_error,
    create_unterminated_string_error,
    create_unterminated_comment_warning
)

logger = logging.getLogger(__name__)

# \X matches one extended grapheme cluster
_GRAPHEME_PATTERN = regex.compile(r"\X")

_NEWLINES = ("\n", "\r\n")
_WHITESPACE = (" ", "\r", "\t")

ScanResult = Union[Token, LexerError]


class Lexer:
    """
    loxpy lexical analyzer.

    Converts source text into an ordered sequence of tokens and lexical
    errors, terminated by an EOF token.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string (already decoded from UTF-8)
        """
        self.source = source
        self.graphemes: List[str] = _GRAPHEME_PATTERN.findall(source)
        self.start = 0
        self.pos = 0
        self.line = 1
        self.results: List[ScanResult] = []
        self.warnings: List[LexerWarning] = []

    def scan(self) -> List[ScanResult]:
        """
        Scan the entire source.

        Returns:
            Tokens and lexical errors in source order, ending with EOF
        """
        self.start = 0
        self.pos = 0
        self.line = 1
        self.results.clear()
        self.warnings.clear()

        while not self._is_at_end():
            self.start = self.pos
            try:
                self._scan_token()
            except LexerError as e:
                self.results.append(e)

        self.results.append(Token(TokenType.EOF, "", None, self.line))

        logger.debug(
            "Scanned %d graphemes into %d tokens (%d errors, %d warnings)",
            len(self.graphemes), len(self.tokens), len(self.errors), len(self.warnings)
        )
        return list(self.results)

    @property
    def tokens(self) -> List[Token]:
        """Valid tokens only, in source order."""
        return [r for r in self.results if isinstance(r, Token)]

    @property
    def errors(self) -> List[LexerError]:
        return [r for r in self.results if isinstance(r, LexerError)]

    def _scan_token(self):
        """Scan the lexeme starting at ``self.start``."""
        g = self._advance()

        if g in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[g])
            return

        # Maximal munch: prefer '!=' over '!', and so on
        if g in ONE_OR_TWO_CHAR_TOKENS:
            short_type, long_type = ONE_OR_TWO_CHAR_TOKENS[g]
            self._add_token(long_type if self._match("=") else short_type)
            return

        if g == "/":
            if self._match("/"):
                self._skip_line_comment()
            elif self._match("*"):
                self._skip_block_comment()
            else:
                self._add_token(TokenType.SLASH)
            return

        if g in _WHITESPACE:
            return

        if g in _NEWLINES:
            self.line += 1
            return

        if g == '"':
            self._scan_string()
            return

        if _is_digit(g):
            self._scan_number()
            return

        if _is_alpha(g):
            self._scan_identifier()
            return

        raise create_invalid_character_error(g, self.line, self.start)

    def _skip_line_comment(self):
        # The newline is left for the main loop so it still bumps the line
        while not self._is_at_end() and self._peek() not in _NEWLINES:
            self._advance()

    def _skip_block_comment(self):
        """Skip a (possibly nested) block comment; the opening '/*' is consumed."""
        start_line = self.line
        depth = 1

        while not self._is_at_end():
            if self._peek() == "/" and self._peek_next() == "*":
                self._advance_by(2)
                depth += 1
            elif self._peek() == "*" and self._peek_next() == "/":
                self._advance_by(2)
                depth -= 1
                if depth == 0:
                    return
            else:
                if self._advance() in _NEWLINES:
                    self.line += 1

        self.warnings.append(create_unterminated_comment_warning(start_line, depth))

    def _scan_string(self):
        """Scan a string literal; the opening quote is consumed."""
        start_line = self.line

        while not self._is_at_end() and self._peek() != '"':
            if self._advance() in _NEWLINES:
                self.line += 1

        if self._is_at_end():
            raise create_unterminated_string_error(start_line, self.start)

        self._advance()  # Closing quote

        value = "".join(self.graphemes[self.start + 1:self.pos - 1])
        self._add_token(TokenType.STRING, StringLiteral(value), line=start_line)

    def _scan_number(self):
        """Scan digits with at most one decimal point."""
        has_decimal = False

        while not self._is_at_end():
            g = self._peek()
            if g == ".":
                if has_decimal:
                    break
                has_decimal = True
            elif not _is_digit(g):
                break
            self._advance()

        # The loop only admits ASCII digits and one dot, which float() always accepts
        self._add_token(TokenType.NUMBER, NumberLiteral(float(self._lexeme())))

    def _scan_identifier(self):
        """Scan an identifier or reserved word."""
        while not self._is_at_end() and _is_alphanumeric(self._peek()):
            self._advance()

        text = self._lexeme()
        keyword = KEYWORDS.get(text)
        if keyword is not None:
            self._add_token(keyword)
        else:
            self._add_token(TokenType.IDENTIFIER, IdentifierLiteral(text))

    def _add_token(self, token_type: TokenType, literal: Literal = None, line: int = None):
        self.results.append(Token(
            token_type,
            self._lexeme(),
            literal,
            self.line if line is None else line
        ))

    def _lexeme(self) -> str:
        return "".join(self.graphemes[self.start:self.pos])

    def _match(self, expected: str) -> bool:
        """Consume the next grapheme if it equals ``expected``."""
        if self._is_at_end() or self.graphemes[self.pos] != expected:
            return False
        self.pos += 1
        return True

    def _advance(self) -> str:
        g = self.graphemes[self.pos]
        self.pos += 1
        return g

    def _advance_by(self, count: int):
        for _ in range(count):
            if not self._is_at_end():
                self._advance()

    def _peek(self) -> str:
        if self._is_at_end():
            return ""
        return self.graphemes[self.pos]

    def _peek_next(self) -> str:
        if self.pos + 1 >= len(self.graphemes):
            return ""
        return self.graphemes[self.pos + 1]

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.graphemes)

    def has_errors(self) -> bool:
        """Check if the scan produced any lexical errors."""
        return any(isinstance(r, LexerError) for r in self.results)

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def _is_digit(g: str) -> bool:
    """ASCII digits only; '²' or a digit with a combining mark is not a digit."""
    return len(g) == 1 and "0" <= g <= "9"


def _is_alpha(g: str) -> bool:
    return g[0].isalpha() or g[0] == "_"


def _is_alphanumeric(g: str) -> bool:
    return g[0].isalnum() or g[0] == "_"


def scan_tokens(source: str) -> List[ScanResult]:
    """
    Convenience function to scan a source string.

    Returns:
        Tokens and lexical errors in source order, ending with EOF
    """
    return Lexer(source).scan()


def tokenize_string(source: str) -> List[Token]:
    """
    Scan a source string and return only the tokens.

    Raises:
        LexerError: The first lexical error, if any
    """
    lexer = Lexer(source)
    lexer.scan()

    if lexer.has_errors():
        raise lexer.errors[0]

    return lexer.tokens
