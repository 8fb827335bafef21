"""
Token definitions for the ttc lexer.

This module defines every token category of the Tilemap Town scripting
language:
- Interned categories (identifiers, integers, reals, strings)
- Operator and punctuation categories, each with its list of spellings
- Keywords, one category per reserved word
- Structural categories produced by the lexer and the indent transform
  (line breaks, block enter, block exit)
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .symbol_table import Symbol


class TokenCategory(Enum):
    """
    Enumeration of all token categories.

    The declaration order matters: keywords are declared contiguously
    between IF and RETURN, mirroring the reserved word table.
    """

    # ========================================================================
    # Interned categories
    # ========================================================================
    IDENTIFIER = auto()             # name, _tmp, @self
    INTEGER = auto()                # 42
    REAL = auto()                   # 3.14, 1E5
    STRING = auto()                 # "hello"

    # ========================================================================
    # Operators
    # ========================================================================
    ADDSUB = auto()                 # + -
    MULDIV = auto()                 # * / %
    LOGICAL = auto()                # < > <= >= == <>
    SHIFT = auto()                  # << >>
    BITMATH = auto()                # & | ^
    UNARY = auto()                  # ! ~

    # ========================================================================
    # Punctuation
    # ========================================================================
    LPAREN = auto()                 # (
    RPAREN = auto()                 # )
    LCURLY = auto()                 # {
    RCURLY = auto()                 # }
    LSQUARE = auto()                # [
    RSQUARE = auto()                # ]
    ASSIGNMENT = auto()             # =
    COMMA = auto()                  # ,
    COLON = auto()                  # :

    # ========================================================================
    # Keywords
    # ========================================================================
    IF = auto()
    ELSE = auto()
    ELIF = auto()
    UNTIL = auto()
    WHILE = auto()
    FOR = auto()
    IN = auto()
    STEP = auto()
    TO = auto()
    CONTINUE = auto()
    BREAK = auto()
    NONE = auto()                   # the "none" value
    DEF = auto()
    VAR = auto()
    TRUE = auto()
    FALSE = auto()
    RETURN = auto()

    # ========================================================================
    # Structural tokens
    # ========================================================================
    NEWLINE = auto()                # variant carries the next line's indentation
    INDENT_IN = auto()              # block enter
    INDENT_OUT = auto()             # block exit

    @property
    def display_name(self) -> str:
        """Name used by the diagnostic renderings."""
        return DISPLAY_NAMES[self]

    @property
    def is_interned(self) -> bool:
        """Check if tokens of this category reference a symbol table entry."""
        return self in INTERNED_CATEGORIES

    @property
    def is_keyword(self) -> bool:
        """Check if this category is a reserved word."""
        return self in KEYWORD_CATEGORIES


INTERNED_CATEGORIES = frozenset({
    TokenCategory.IDENTIFIER,
    TokenCategory.INTEGER,
    TokenCategory.REAL,
    TokenCategory.STRING,
})

# Reserved words, in declaration order
KEYWORDS: Dict[str, TokenCategory] = {
    "if": TokenCategory.IF,
    "else": TokenCategory.ELSE,
    "elif": TokenCategory.ELIF,
    "until": TokenCategory.UNTIL,
    "while": TokenCategory.WHILE,
    "for": TokenCategory.FOR,
    "in": TokenCategory.IN,
    "step": TokenCategory.STEP,
    "to": TokenCategory.TO,
    "continue": TokenCategory.CONTINUE,
    "break": TokenCategory.BREAK,
    "none": TokenCategory.NONE,
    "def": TokenCategory.DEF,
    "var": TokenCategory.VAR,
    "true": TokenCategory.TRUE,
    "false": TokenCategory.FALSE,
    "return": TokenCategory.RETURN,
}

KEYWORD_CATEGORIES = frozenset(KEYWORDS.values())

# Spellings per category; a token's variant is the index into its tuple
SPELLINGS: Dict[TokenCategory, Tuple[str, ...]] = {
    TokenCategory.ADDSUB: ("+", "-"),
    TokenCategory.MULDIV: ("*", "/", "%"),
    TokenCategory.LOGICAL: ("<", ">", "<=", ">=", "==", "<>"),
    TokenCategory.SHIFT: ("<<", ">>"),
    TokenCategory.BITMATH: ("&", "|", "^"),
    TokenCategory.UNARY: ("!", "~"),
    TokenCategory.LPAREN: ("(",),
    TokenCategory.RPAREN: (")",),
    TokenCategory.LCURLY: ("{",),
    TokenCategory.RCURLY: ("}",),
    TokenCategory.LSQUARE: ("[",),
    TokenCategory.RSQUARE: ("]",),
    TokenCategory.ASSIGNMENT: ("=",),
    TokenCategory.COMMA: (",",),
    TokenCategory.COLON: (":",),
    TokenCategory.INDENT_IN: ("{{",),
    TokenCategory.INDENT_OUT: ("}}",),
    **{category: (word,) for word, category in KEYWORDS.items()},
}

DISPLAY_NAMES: Dict[TokenCategory, str] = {
    TokenCategory.IDENTIFIER: "identifier",
    TokenCategory.INTEGER: "integer",
    TokenCategory.REAL: "real",
    TokenCategory.STRING: "string",
    TokenCategory.ADDSUB: "add/sub",
    TokenCategory.MULDIV: "mul/div",
    TokenCategory.LOGICAL: "logical",
    TokenCategory.SHIFT: "shift",
    TokenCategory.BITMATH: "bitmath",
    TokenCategory.UNARY: "unary",
    TokenCategory.LPAREN: "lparen",
    TokenCategory.RPAREN: "rparen",
    TokenCategory.LCURLY: "lcurly",
    TokenCategory.RCURLY: "rcurly",
    TokenCategory.LSQUARE: "lsquare",
    TokenCategory.RSQUARE: "rsquare",
    TokenCategory.ASSIGNMENT: "assignment",
    TokenCategory.COMMA: "comma",
    TokenCategory.COLON: "colon",
    TokenCategory.NEWLINE: "newline",
    TokenCategory.INDENT_IN: "{{",
    TokenCategory.INDENT_OUT: "}}",
    **{category: word for word, category in KEYWORDS.items()},
}

# Single character tokens the lexer emits without lookahead
SINGLE_CHAR_TOKENS: Dict[str, TokenCategory] = {
    "+": TokenCategory.ADDSUB,
    "-": TokenCategory.ADDSUB,
    "*": TokenCategory.MULDIV,
    "/": TokenCategory.MULDIV,
    "%": TokenCategory.MULDIV,
    "!": TokenCategory.UNARY,
    "~": TokenCategory.UNARY,
    "&": TokenCategory.BITMATH,
    "|": TokenCategory.BITMATH,
    "^": TokenCategory.BITMATH,
    "(": TokenCategory.LPAREN,
    ")": TokenCategory.RPAREN,
    "{": TokenCategory.LCURLY,
    "}": TokenCategory.RCURLY,
    "[": TokenCategory.LSQUARE,
    "]": TokenCategory.RSQUARE,
    ",": TokenCategory.COMMA,
    ":": TokenCategory.COLON,
}


def variant_of(category: TokenCategory, spelling: str) -> int:
    """Return the variant index of a spelling within its category."""
    return SPELLINGS[category].index(spelling)


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and the diagnostic dumps.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Interned categories reference their symbol table entry; every other
    category records which spelling matched through ``variant``. For
    NEWLINE tokens ``variant`` is the count of tab/space characters that
    open the following line.
    """
    category: TokenCategory
    variant: int = 0
    symbol: Optional["Symbol"] = None
    location: Optional[SourceLocation] = None

    @property
    def lexeme(self) -> str:
        """The text this token stands for."""
        if self.symbol is not None:
            return self.symbol.lexeme
        if self.category == TokenCategory.NEWLINE:
            return "\n"
        return SPELLINGS[self.category][self.variant]

    @property
    def indent(self) -> int:
        """Indentation of the line following a NEWLINE token."""
        if self.category != TokenCategory.NEWLINE:
            raise AttributeError(f"{self.category.name} tokens carry no indentation")
        return self.variant

    def is_a(self, *categories: TokenCategory) -> bool:
        """Check if this token belongs to any of the given categories."""
        return self.category in categories

    def __str__(self) -> str:
        name = self.category.display_name
        if self.category == TokenCategory.NEWLINE:
            return "{\\n %d}" % self.variant
        if self.symbol is not None:
            return f"({self.symbol.lexeme}, {name})"
        spelling = SPELLINGS[self.category][self.variant]
        if spelling == name:
            return f"({name})"
        return f"({spelling}, {name})"

    def __repr__(self) -> str:
        return (f"Token({self.category.name}, {self.lexeme!r}, "
                f"variant={self.variant}, {self.location!r})")
