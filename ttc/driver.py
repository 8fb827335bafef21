"""
Front-end driver: source text in, tokens, symbols and syntax tree out.

Runs the lexer, the indent transform and the parser in sequence with a fresh
symbol table per compilation. Errors do not escape; they come back inside the
CompilationResult so callers decide what to do with them.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import CompilerOptions, DEFAULT_OPTIONS
from .lexer import (
    Lexer, SymbolTable, Token, normalize_indentation, read_source, CompileError
)
from .parser import Parser, SyntaxTree

logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """Outcome of one compilation; ``error`` is set when it failed."""
    filename: str
    symbols: SymbolTable
    tokens: List[Token] = field(default_factory=list)
    tree: Optional[SyntaxTree] = None
    error: Optional[CompileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self):
        """Re-raise the stored error, if any."""
        if self.error is not None:
            raise self.error


def compile_source(source: str, filename: str = "<string>",
                   options: Optional[CompilerOptions] = None) -> CompilationResult:
    """
    Run the whole front end over a source string.

    Args:
        source: Script text
        filename: Name used in diagnostics
        options: Compiler limits

    Returns:
        CompilationResult with the block-annotated tokens, the symbol table
        and the tree, or with only ``error`` set (the symbol table comes back
        empty)
    """
    options = options or DEFAULT_OPTIONS
    symbols = SymbolTable()
    result = CompilationResult(filename=filename, symbols=symbols)

    try:
        tokens = Lexer(source, filename, symbols, options).tokenize()
        tokens = normalize_indentation(tokens, options)
        tree = Parser(tokens, filename).parse()
    except CompileError as e:
        logger.debug("%s: %s error %s", filename, e.kind.value, e.code)
        symbols.clear()
        result.error = e
        return result

    result.tokens = tokens
    result.tree = tree
    return result


def compile_file(filepath: str, options: Optional[CompilerOptions] = None) -> CompilationResult:
    """
    Run the whole front end over a file.

    The file is read completely and closed before compilation starts. A file
    that is not UTF-8 text fails like any other lexical error.

    Raises:
        OSError: If the file cannot be read
    """
    try:
        source = read_source(filepath)
    except CompileError as e:
        logger.debug("%s: %s error %s", filepath, e.kind.value, e.code)
        return CompilationResult(filename=filepath, symbols=SymbolTable(), error=e)

    return compile_source(source, filepath, options)
