"""
ttc Lexer Package

Lexical analysis for Tilemap Town scripts: text to tokens, numeric literal
classification, symbol interning, and the indent transform that turns
significant whitespace into explicit block tokens.
"""

from .tokens import Token, TokenCategory, SourceLocation, KEYWORDS, SPELLINGS
from .symbol_table import Symbol, SymbolTable
from .numeric import NumberKind, classify_number
from .lexer import Lexer, tokenize_string, tokenize_file, decode_source, read_source
from .indentation import normalize_indentation
from .errors import CompileError, ErrorKind, Diagnostic, LexerError, IndentError

__all__ = [
    "Lexer",
    "Token",
    "TokenCategory",
    "SourceLocation",
    "KEYWORDS",
    "SPELLINGS",
    "Symbol",
    "SymbolTable",
    "NumberKind",
    "classify_number",
    "tokenize_string",
    "tokenize_file",
    "decode_source",
    "read_source",
    "normalize_indentation",
    "CompileError",
    "ErrorKind",
    "Diagnostic",
    "LexerError",
    "IndentError",
]
