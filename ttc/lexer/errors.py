"""
Error handling for the ttc lexer and indent transform.

Every front-end failure is fatal for the compilation it happens in. Errors
carry a diagnostic with a source location and a stable error code so the
driver and tests can inspect what went wrong instead of the process exiting.
"""

from enum import Enum
from typing import Optional, List, TYPE_CHECKING
from dataclasses import dataclass

from .tokens import SourceLocation

if TYPE_CHECKING:
    from .tokens import Token


class ErrorKind(Enum):
    """Which stage rejected the input."""
    LEXICAL = "lexical"
    STRUCTURAL = "structural"
    SYNTACTIC = "syntactic"


@dataclass
class Diagnostic:
    """A single error report."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class CompileError(Exception):
    """
    Base class for every front-end error.

    Subclasses fix ``kind``; instances hold the diagnostic and, where the
    failure is tied to one token, that token.
    """

    kind: ErrorKind = ErrorKind.LEXICAL

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        token: Optional["Token"] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        if location is None and token is not None:
            location = token.location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerError(CompileError):
    """Raised when the source text is not in the lexical grammar."""
    kind = ErrorKind.LEXICAL


class IndentError(CompileError):
    """Raised when indentation cannot be turned into block structure."""
    kind = ErrorKind.STRUCTURAL


ERROR_CODES = {
    "L001": "Unexpected character",
    "L003": "Invalid numeric literal",
    "L011": "Lexeme too long",
    "I001": "Too many indentation levels",
    "I002": "Inconsistent indentation",
}


def create_unexpected_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character no token can start with."""
    if char.isprintable():
        help_text = f"The character '{char}' cannot start a token."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Unexpected character '{char}'",
        location=location,
        code="L001",
        help_text=help_text
    )


def create_undecodable_byte_error(byte: int, location: SourceLocation) -> LexerError:
    """Create an error for a source byte that is not valid UTF-8."""
    return LexerError(
        message=f"Unexpected character 0x{byte:02X}",
        location=location,
        code="L001",
        help_text="Source files must be UTF-8 text."
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation) -> LexerError:
    """Create an error for a digit run that is neither integer nor real."""
    return LexerError(
        message=f"Invalid number {lexeme}",
        location=location,
        code="L003",
        help_text="Numbers are digits with an optional fraction and an optional E exponent.",
        suggestions=["Put at least one digit after the decimal point",
                     "Write exponents as 1E5 or 1E-5"]
    )


def create_lexeme_too_long_error(lexeme: str, limit: int, location: SourceLocation) -> LexerError:
    """Create an error for a lexeme longer than the configured limit."""
    preview = lexeme if len(lexeme) <= 20 else lexeme[:20] + "..."
    return LexerError(
        message=f"Lexeme is too long ({preview})",
        location=location,
        code="L011",
        help_text=f"Identifiers, numbers and strings are limited to {limit} characters."
    )


def create_indent_overflow_error(depth: int, location: Optional[SourceLocation]) -> IndentError:
    """Create an error for nesting deeper than the indentation stack allows."""
    return IndentError(
        message="Too many indents",
        location=location,
        code="I001",
        help_text=f"Blocks can be nested at most {depth - 1} levels deep."
    )


def create_inconsistent_indent_error(target: int, enclosing: int,
                                     location: Optional[SourceLocation]) -> IndentError:
    """Create an error for a dedent that matches no enclosing block."""
    return IndentError(
        message="Inconsistent indentation",
        location=location,
        code="I002",
        help_text=(f"Indentation of {target} does not match any enclosing block; "
                   f"the nearest enclosing level is {enclosing}.")
    )
