"""
Error handling for the loxpy scanner.

Lexical errors never stop the scan: they are collected alongside the
tokens so every bad character in the input is reported in one pass.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings) shared by all stages."""
    message: str
    line: int
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.severity.upper()}: {self.message}\n"
        result += f"  --> line {self.line}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class LexerError(Exception):
    """
    Exception describing an invalid character or unterminated string.

    Raised inside the scanner and collected; it never escapes ``Lexer.scan``.
    """

    def __init__(
        self,
        message: str,
        line: int,
        position: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.position = position
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            severity="error",
            code=code,
            help_text=help_text
        )

    @property
    def location(self) -> str:
        return f"line {self.line} pos {self.position}"

    def report(self) -> str:
        """One-line report in the driver's output format."""
        return f"Error on line {self.line}: {self.message}"

    def __str__(self) -> str:
        return self.message


class LexerWarning:
    """
    Represents a scanner warning that doesn't affect the token stream.
    """

    def __init__(
        self,
        message: str,
        line: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        self.message = message
        self.line = line
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            severity="warning",
            code=code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
    "W001": "Unterminated block comment",
}


# Helper functions for creating common errors
def create_invalid_character_error(grapheme: str, line: int, position: int) -> LexerError:
    """Create an error for a character that starts no token."""
    if grapheme.isprintable():
        help_text = f"The character '{grapheme}' is not valid outside a string literal."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(grapheme[0]):04X}) is not allowed."

    return LexerError(
        message=f"Invalid token at line {line} pos {position}: {grapheme}",
        line=line,
        position=position,
        code="L001",
        help_text=help_text
    )


def create_unterminated_string_error(line: int, position: int) -> LexerError:
    """Create an error for a string literal missing its closing quote."""
    return LexerError(
        message=f"Unterminated string at line {line} pos {position}",
        line=line,
        position=position,
        code="L002",
        help_text="String literals must be closed with a matching '\"'."
    )


def create_unterminated_comment_warning(line: int, depth: int) -> LexerWarning:
    """Create a warning for a block comment still open at end of input."""
    return LexerWarning(
        message=f"Unterminated block comment starting on line {line}",
        line=line,
        code="W001",
        help_text=f"{depth} '/*' still open at end of input; the rest of the file was ignored."
    )
