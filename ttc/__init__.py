"""
ttc - Tilemap Town Scripting Compiler

Front end of the compiler for Tilemap Town's indentation-based scripting
language: source text to syntax tree.

Architecture:
    ttc/
    ├── lexer/           # Tokens, numeric literals, symbol table, indent transform
    ├── parser/          # Recursive descent parser and syntax tree
    ├── driver.py        # Whole-pipeline compile returning a result object
    ├── printer.py       # Token / symbol table / tree dumps
    └── cli.py           # `ttc` command

License: GPL-2.0-or-later
"""

__version__ = "0.2.0"
__license__ = "GPL-2.0-or-later"

from .config import CompilerOptions, DEFAULT_OPTIONS
from .lexer import (
    Lexer, Token, TokenCategory, Symbol, SymbolTable, normalize_indentation,
    CompileError, ErrorKind, LexerError, IndentError
)
from .parser import Parser, SyntaxTree, SyntaxNode, ParseError
from .driver import CompilationResult, compile_source, compile_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenCategory",
    "Symbol",
    "SymbolTable",
    "SyntaxTree",
    "SyntaxNode",
    "normalize_indentation",

    # Pipeline
    "CompilerOptions",
    "DEFAULT_OPTIONS",
    "CompilationResult",
    "compile_source",
    "compile_file",

    # Errors
    "CompileError",
    "ErrorKind",
    "LexerError",
    "IndentError",
    "ParseError",

    # Version info
    "__version__",
    "__license__",
]
