"""
Diagnostic renderings of the front end's products.

Plain-text dumps of the token list, the symbol table and the syntax tree in
the layout the script compiler has always printed them.
"""

from typing import Iterable, List

from .lexer import Token, SymbolTable
from .parser import SyntaxTree

TREE_INDENT = "   "


def format_token(token: Token) -> str:
    """``{\\n N}`` for line breaks, ``(lexeme, category)`` for interned tokens,
    ``(spelling, category)`` for operators and ``(name)`` for keywords."""
    return str(token)


def format_tokens(tokens: Iterable[Token]) -> List[str]:
    return [format_token(token) for token in tokens]


def format_symbol_table(symbols: SymbolTable) -> List[str]:
    """One ``(lexeme, category)`` line per entry, in insertion order."""
    return [str(symbol) for symbol in symbols]


def format_tree(tree: SyntaxTree) -> List[str]:
    """One line per node, indented three spaces per level."""
    return [TREE_INDENT * depth + str(node) for depth, node in tree.walk()]


def render_report(tokens: Iterable[Token], symbols: SymbolTable, tree: SyntaxTree,
                  show_tokens: bool = True, show_symbols: bool = True,
                  show_tree: bool = True) -> str:
    """The full dump: token list, symbol table, syntax tree."""
    sections = []
    if show_tokens:
        sections.append("\n".join(["Token list:"] + format_tokens(tokens)))
    if show_symbols:
        sections.append("\n".join(["Symbol table:"] + format_symbol_table(symbols)))
    if show_tree:
        sections.append("\n".join(["Syntax tree:"] + format_tree(tree)))
    return "\n\n\n".join(sections) + "\n"
