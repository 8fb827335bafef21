"""
Error handling for the ttc parser.

Syntax errors are fatal: the first one aborts parsing and no partial tree is
returned.
"""

from typing import Optional, Iterable, Union

from ..lexer.tokens import Token, TokenCategory, SourceLocation
from ..lexer.errors import CompileError, ErrorKind


class ParseError(CompileError):
    """Raised when the token sequence is not in the grammar."""
    kind = ErrorKind.SYNTACTIC


ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Unexpected end of input",
    "P003": "Bad statement",
    "P004": "Expected expression",
    "P005": "Bad top-level item",
}

# Hints for tokens that are commonly forgotten
_MISSING_TOKEN_HINTS = {
    TokenCategory.RPAREN: "Add a closing parenthesis ')'",
    TokenCategory.RSQUARE: "Add a closing bracket ']'",
    TokenCategory.COLON: "Add a colon ':' before the block",
    TokenCategory.NEWLINE: "Start a new line after this statement",
    TokenCategory.IN: "Use 'for x in items:' or 'for i = a to b:'",
    TokenCategory.TO: "Ranges are written 'start to end'",
}


def _describe(categories: Union[str, Iterable[TokenCategory]]) -> str:
    if isinstance(categories, str):
        return categories
    return " or ".join(f"'{category.display_name}'" for category in categories)


def create_unexpected_token_error(expected: Iterable[TokenCategory], found: Token) -> ParseError:
    """Create an error for a mandatory token that is not there."""
    expected = tuple(expected)
    suggestions = [_MISSING_TOKEN_HINTS[c] for c in expected if c in _MISSING_TOKEN_HINTS]
    return ParseError(
        message=f"Unexpected token, {found.category.display_name}",
        token=found,
        code="P001",
        help_text=f"Expected {_describe(expected)} but found {found}.",
        suggestions=suggestions or None
    )


def create_unexpected_eof_error(expected: Union[str, Iterable[TokenCategory]],
                                location: Optional[SourceLocation]) -> ParseError:
    """Create an error for input that ends in the middle of a construct."""
    return ParseError(
        message="Unexpected end of input",
        location=location,
        code="P002",
        help_text=f"Expected {_describe(expected)}."
    )


def create_bad_statement_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start a statement."""
    return ParseError(
        message=f"Bad token {found}",
        token=found,
        code="P003",
        help_text="Statements start with var, def, an identifier, if, elif, else, "
                  "while, until, for, return, break, continue or an indented block."
    )


def create_missing_operand_error(found: Optional[Token],
                                 location: Optional[SourceLocation]) -> ParseError:
    """Create an error for an operator or keyword with nothing to apply to."""
    if found is None:
        return ParseError(
            message="Expected an expression before end of input",
            location=location,
            code="P004"
        )
    return ParseError(
        message=f"Expected an expression, found {found}",
        token=found,
        code="P004",
        help_text="Operands are identifiers, numbers, strings, true, false, none, "
                  "[array] literals or (parenthesized) expressions."
    )


def create_bad_top_level_error(found: Token) -> ParseError:
    """Create an error for something other than var/def at the top level."""
    return ParseError(
        message=f"Unexpected token, {found.category.display_name}",
        token=found,
        code="P005",
        help_text="Only 'var' declarations and 'def' functions may appear at the top level.",
        suggestions=["Move the statement into a function body"]
    )
