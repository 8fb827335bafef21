"""
ttc Lexer - turns script source into a flat list of tokens

Single left-to-right pass with one character of lookahead. Identifiers and
literals are interned into the symbol table as they are found; everything
else records which spelling of its category matched. Indentation is only
measured here (as the variant of each NEWLINE token); turning it into block
structure is the job of the indent transform.
"""

import logging
from typing import List, Optional

from ..config import CompilerOptions, DEFAULT_OPTIONS
from .tokens import (
    Token, TokenCategory, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS, variant_of
)
from .symbol_table import SymbolTable
from .numeric import NumberKind, classify_number
from .errors import (
    create_unexpected_character_error, create_invalid_number_error,
    create_lexeme_too_long_error, create_undecodable_byte_error
)

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")
LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
IDENTIFIER_START = LETTERS | {"_", "@"}
IDENTIFIER_CONTINUE = LETTERS | DIGITS | {"_"}
NUMBER_CHARS = DIGITS | {".", "E"}
INDENT_CHARS = frozenset(" \t")
# Whitespace that is simply discarded; newline is significant
BLANKS = frozenset(" \t\r\v\f")


class Lexer:
    """
    Lexical analyzer for Tilemap Town scripts.

    Converts source text into tokens. The first error aborts the scan; no
    partial token list is returned.
    """

    def __init__(self, source: str, filename: str = "<unknown>",
                 symbols: Optional[SymbolTable] = None,
                 options: Optional[CompilerOptions] = None):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
            symbols: Symbol table to intern into; a fresh one by default
            options: Compiler limits
        """
        self.source = source
        self.filename = filename
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.options = options or DEFAULT_OPTIONS
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens. There is no terminal token; the end of the list
            is the end of input.

        Raises:
            LexerError: On the first lexical error
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []

        while self.pos < len(self.source):
            char = self.source[self.pos]

            if char in BLANKS:
                self._advance()
            elif char == "\n":
                self._tokenize_newline()
            elif char in SINGLE_CHAR_TOKENS:
                location = self._location()
                self._advance()
                category = SINGLE_CHAR_TOKENS[char]
                self._emit(category, variant_of(category, char), location)
            elif char == "=":
                self._tokenize_equals()
            elif char == ">":
                self._tokenize_greater()
            elif char == "<":
                self._tokenize_less()
            elif char == '"':
                self._tokenize_string()
            elif char in IDENTIFIER_START:
                self._tokenize_identifier_or_keyword()
            elif char in DIGITS:
                self._tokenize_number()
            elif char == "#":
                self._skip_comment()
            else:
                raise create_unexpected_character_error(char, self._location())

        logger.debug("%s: %d tokens, %d symbols", self.filename,
                     len(self.tokens), len(self.symbols))
        return self.tokens

    def _tokenize_newline(self):
        """Emit a NEWLINE carrying the indentation of the next line."""
        location = self._location()
        self._advance()
        indent = 0
        while self.pos < len(self.source) and self.source[self.pos] in INDENT_CHARS:
            self._advance()
            indent += 1
        self.tokens.append(Token(TokenCategory.NEWLINE, indent, None, location))

    def _tokenize_equals(self):
        """Tell ``=`` from ``==``."""
        location = self._location()
        self._advance()
        if self._current() == "=":
            self._advance()
            self._emit(TokenCategory.LOGICAL, variant_of(TokenCategory.LOGICAL, "=="), location)
        else:
            self._emit(TokenCategory.ASSIGNMENT, 0, location)

    def _tokenize_greater(self):
        """Tell ``>``, ``>=`` and ``>>`` apart."""
        location = self._location()
        self._advance()
        following = self._current()
        if following == ">":
            self._advance()
            self._emit(TokenCategory.SHIFT, variant_of(TokenCategory.SHIFT, ">>"), location)
        elif following == "=":
            self._advance()
            self._emit(TokenCategory.LOGICAL, variant_of(TokenCategory.LOGICAL, ">="), location)
        else:
            self._emit(TokenCategory.LOGICAL, variant_of(TokenCategory.LOGICAL, ">"), location)

    def _tokenize_less(self):
        """Tell ``<``, ``<=``, ``<>`` and ``<<`` apart."""
        location = self._location()
        self._advance()
        following = self._current()
        if following == "<":
            self._advance()
            self._emit(TokenCategory.SHIFT, variant_of(TokenCategory.SHIFT, "<<"), location)
        elif following in ("=", ">"):
            self._advance()
            self._emit(TokenCategory.LOGICAL,
                       variant_of(TokenCategory.LOGICAL, "<" + following), location)
        else:
            self._emit(TokenCategory.LOGICAL, variant_of(TokenCategory.LOGICAL, "<"), location)

    def _tokenize_string(self):
        """Scan a string up to and including its closing quote, or to end of input."""
        location = self._location()
        start_pos = self.pos
        self._advance()  # opening quote

        while self.pos < len(self.source):
            char = self.source[self.pos]
            self._advance()
            if char == '"':
                break

        lexeme = self.source[start_pos:self.pos]
        self._check_length(lexeme, location)
        if self.options.strip_string_quotes:
            lexeme = lexeme[1:-1] if len(lexeme) > 1 and lexeme.endswith('"') else lexeme[1:]
        self._emit_symbol(TokenCategory.STRING, lexeme, location)

    def _tokenize_identifier_or_keyword(self):
        """Scan an identifier; reserved words become keyword tokens."""
        location = self._location()
        start_pos = self.pos
        self._advance()  # first character already validated

        while self.pos < len(self.source) and self.source[self.pos] in IDENTIFIER_CONTINUE:
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        self._check_length(lexeme, location)

        keyword = KEYWORDS.get(lexeme)
        if keyword is not None:
            self._emit(keyword, 0, location)
        else:
            self._emit_symbol(TokenCategory.IDENTIFIER, lexeme, location)

    def _tokenize_number(self):
        """Scan a maximal run of digits, points and E, then classify it."""
        location = self._location()
        start_pos = self.pos

        while self.pos < len(self.source) and self.source[self.pos] in NUMBER_CHARS:
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        self._check_length(lexeme, location)

        kind = classify_number(lexeme)
        if kind == NumberKind.INVALID:
            raise create_invalid_number_error(lexeme, location)
        category = TokenCategory.REAL if kind == NumberKind.FLOAT else TokenCategory.INTEGER
        self._emit_symbol(category, lexeme, location)

    def _skip_comment(self):
        """Discard from ``#`` up to, not including, the end of the line."""
        while self.pos < len(self.source) and self.source[self.pos] != "\n":
            self._advance()

    def _check_length(self, lexeme: str, location: SourceLocation):
        if len(lexeme) > self.options.max_lexeme_length:
            raise create_lexeme_too_long_error(lexeme, self.options.max_lexeme_length, location)

    def _emit(self, category: TokenCategory, variant: int, location: SourceLocation):
        self.tokens.append(Token(category, variant, None, location))

    def _emit_symbol(self, category: TokenCategory, lexeme: str, location: SourceLocation):
        symbol = self.symbols.intern(lexeme, category)
        self.tokens.append(Token(category, 0, symbol, location))

    def _current(self) -> str:
        """Current character, or empty string at end of input."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1


def decode_source(data: bytes, filename: str = "<unknown>") -> str:
    """
    Decode raw source bytes as UTF-8.

    Raises:
        LexerError: At the first byte that does not decode, located like any
            other unexpected character
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        prefix = data[:e.start].decode("utf-8")
        line = prefix.count("\n") + 1
        column = len(prefix) - (prefix.rfind("\n") + 1) + 1
        location = SourceLocation(filename, line, column, len(prefix))
        raise create_undecodable_byte_error(data[e.start], location) from e


def read_source(filepath: str) -> str:
    """
    Read a whole source file; it is closed before this returns.

    Raises:
        LexerError: If the file is not UTF-8 text
        OSError: If the file cannot be read
    """
    with open(filepath, "rb") as f:
        data = f.read()

    return decode_source(data, filepath)


def tokenize_string(source: str, filename: str = "<string>",
                    symbols: Optional[SymbolTable] = None,
                    options: Optional[CompilerOptions] = None) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename, symbols, options).tokenize()


def tokenize_file(filepath: str, symbols: Optional[SymbolTable] = None,
                  options: Optional[CompilerOptions] = None) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    The file is closed before the tokens are returned.

    Raises:
        LexerError: If the file is not UTF-8 text or lexing fails
        OSError: If the file cannot be read
    """
    source = read_source(filepath)
    return tokenize_string(source, filepath, symbols, options)
