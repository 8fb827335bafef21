"""
Indent transform.

Rewrites the lexer's NEWLINE indentation counts into explicit INDENT_IN /
INDENT_OUT tokens so the parser can treat blocks like brace-delimited code.
Runs of line breaks collapse into the last one, since blank lines only
matter for the indentation of the line that follows them.
"""

import logging
from typing import List, Optional, Sequence

from ..config import CompilerOptions, DEFAULT_OPTIONS
from .tokens import Token, TokenCategory
from .errors import create_indent_overflow_error, create_inconsistent_indent_error

logger = logging.getLogger(__name__)


def normalize_indentation(tokens: Sequence[Token],
                          options: Optional[CompilerOptions] = None) -> List[Token]:
    """
    Produce a block-annotated copy of a token sequence.

    Args:
        tokens: Lexer output; left untouched
        options: Compiler limits (indentation stack size)

    Returns:
        New token list with INDENT_IN after every line break that opens a
        deeper level and one INDENT_OUT per level closed. Blocks still open
        at end of input are closed there.

    Raises:
        IndentError: If nesting overflows the stack or a dedent lands on a
            level that was never opened
    """
    options = options or DEFAULT_OPTIONS
    levels = [0]
    result: List[Token] = []
    blocks = 0

    for position, token in enumerate(tokens):
        if token.category != TokenCategory.NEWLINE:
            result.append(token)
            continue

        # only the last of consecutive line breaks survives
        following = tokens[position + 1] if position + 1 < len(tokens) else None
        if following is not None and following.category == TokenCategory.NEWLINE:
            continue

        result.append(token)
        target = token.indent

        if target > levels[-1]:
            if len(levels) >= options.max_indent_depth:
                raise create_indent_overflow_error(options.max_indent_depth, token.location)
            levels.append(target)
            result.append(Token(TokenCategory.INDENT_IN, 0, None, token.location))
            blocks += 1
        elif target < levels[-1]:
            while levels[-1] > target:
                levels.pop()
                result.append(Token(TokenCategory.INDENT_OUT, 0, None, token.location))
            if levels[-1] != target:
                raise create_inconsistent_indent_error(target, levels[-1], token.location)

    if len(levels) > 1:
        location = result[-1].location if result else None
        if result[-1].category not in (TokenCategory.NEWLINE, TokenCategory.INDENT_IN):
            result.append(Token(TokenCategory.NEWLINE, 0, None, location))
        while len(levels) > 1:
            levels.pop()
            result.append(Token(TokenCategory.INDENT_OUT, 0, None, location))

    logger.debug("indent transform: %d tokens in, %d out, %d blocks",
                 len(tokens), len(result), blocks)
    return result
