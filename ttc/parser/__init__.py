"""
ttc Parser Package

Recursive descent syntactic analysis for Tilemap Town scripts. Produces an
arena-backed syntax tree whose nodes reference the tokens that produced them.
"""

from .syntax_tree import SyntaxNode, SyntaxTree, TreeBuilder
from .parser import Parser, AcceptMode, parse_tokens, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "AcceptMode",
    "parse_tokens",
    "parse_string",
    "parse_file",

    # Tree
    "SyntaxNode",
    "SyntaxTree",
    "TreeBuilder",

    # Error handling
    "ParseError",
]
