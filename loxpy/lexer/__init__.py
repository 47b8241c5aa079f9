"""
loxpy Lexer Package

Implements the scanner for the language, plus the token and literal value
model shared by the later stages.

Key Features:
- Grapheme-cluster based scanning (multi code point characters stay whole)
- Maximal munch for two-character operators
- Nested block comments
- Error collection without aborting the scan
"""

from .tokens import Token, TokenType, KEYWORDS
from .literals import (
    Literal, IdentifierLiteral, StringLiteral, NumberLiteral, BooleanLiteral,
    format_number, stringify, is_truthy, values_equal
)
from .lexer import Lexer, scan_tokens, tokenize_string
from .errors import Diagnostic, LexerError, LexerWarning

__all__ = [
    "Lexer",
    "scan_tokens",
    "tokenize_string",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Literal",
    "IdentifierLiteral",
    "StringLiteral",
    "NumberLiteral",
    "BooleanLiteral",
    "format_number",
    "stringify",
    "is_truthy",
    "values_equal",
    "Diagnostic",
    "LexerError",
    "LexerWarning",
]
