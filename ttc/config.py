"""
Compiler options shared by every front-end stage.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompilerOptions:
    """Limits and policies for one compilation"""

    # Lexer limits
    max_lexeme_length: int = 99         # longest identifier/number/string accepted

    # Indent transform limits
    max_indent_depth: int = 20          # indentation stack size, base level included

    # String literals keep their quotes in the symbol table unless this is set
    strip_string_quotes: bool = False

    def __post_init__(self):
        if self.max_lexeme_length < 1:
            raise ValueError("max_lexeme_length must be at least 1")
        if self.max_indent_depth < 1:
            raise ValueError("max_indent_depth must be at least 1")


DEFAULT_OPTIONS = CompilerOptions()
