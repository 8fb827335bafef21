"""
ttc Recursive Descent Parser

Consumes the block-annotated token list produced by the indent transform and
builds a SyntaxTree whose nodes point at the tokens that produced them.

Tree shapes follow one rule: an accepted token becomes a node at the current
insertion point and then becomes the insertion point for what follows, until
the production restores the point it started from. Binary operators become
the parent of both operands. Every binary level is right-recursive, so
``1 - 2 - 3`` groups as ``1 - (2 - 3)``; that is the language's rule for all
binary operators.

Grammar (highest precedence first):
    factor      := [unary] ( identifier [index] [call]
                           | '[' [expression {',' expression}] ']'
                           | integer | real | string | none | true | false
                           | '(' expression ')' )
    term        := factor [muldiv term]
    addition    := [addsub] term [addsub addition]
    expression  := addition [logical expression]
"""

import logging
from enum import IntFlag
from typing import Callable, List, Optional

from ..config import CompilerOptions
from ..lexer.tokens import Token, TokenCategory, SourceLocation
from ..lexer.symbol_table import SymbolTable
from .syntax_tree import SyntaxTree, TreeBuilder
from .errors import (
    create_unexpected_token_error, create_unexpected_eof_error,
    create_bad_statement_error, create_missing_operand_error,
    create_bad_top_level_error
)

logger = logging.getLogger(__name__)

T = TokenCategory

LITERALS = (T.INTEGER, T.REAL, T.STRING, T.NONE, T.TRUE, T.FALSE)
CONDITIONALS = (T.IF, T.ELIF, T.WHILE, T.UNTIL)


class AcceptMode(IntFlag):
    """How ``Parser._accept`` treats the current token."""
    OPTIONAL = 0    # consume and attach if it matches
    NEEDED = 1      # it is an error if it does not match
    OMIT = 2        # consume without adding a node to the tree
    TEST = 4        # only report whether it matches


OPTIONAL = AcceptMode.OPTIONAL
NEEDED = AcceptMode.NEEDED
OMIT = AcceptMode.OMIT
TEST = AcceptMode.TEST


class Parser:
    """
    Parser for Tilemap Town scripts.

    Fails fast: the first syntax error is raised and no tree is returned.
    """

    def __init__(self, tokens: List[Token], filename: str = "<unknown>"):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Output of the indent transform
            filename: Used for end-of-input diagnostics
        """
        self.tokens = tokens
        self.filename = filename
        self.current = 0
        self.tree = SyntaxTree()
        self.builder = TreeBuilder(self.tree)

    def parse(self) -> SyntaxTree:
        """
        Parse a whole script: top-level ``var`` and ``def`` declarations.

        Returns:
            SyntaxTree whose roots are the declarations in source order

        Raises:
            ParseError: On the first syntax error
        """
        self._restart()
        while not self._is_at_end():
            self.builder.reset()
            if self._accept(OMIT, T.NEWLINE):
                continue
            elif self._accept(OPTIONAL, T.VAR):
                self._variable_declaration()
            elif self._accept(OPTIONAL, T.DEF):
                self._function_definition()
            else:
                raise create_bad_top_level_error(self._peek())

        logger.debug("%s: %d top-level declarations, %d nodes",
                     self.filename, len(self.tree.roots), len(self.tree))
        return self.tree

    def parse_statements(self) -> SyntaxTree:
        """Parse a sequence of statements, each becoming a root."""
        self._restart()
        while not self._is_at_end():
            self.builder.reset()
            self._statement()
        return self.tree

    def parse_expression(self) -> SyntaxTree:
        """Parse a single expression, optionally followed by line breaks."""
        self._restart()
        self._expression()
        while self._accept(OMIT, T.NEWLINE):
            pass
        if not self._is_at_end():
            raise create_unexpected_token_error([T.NEWLINE], self._peek())
        return self.tree

    # Statements

    def _statement(self):
        """One statement of any kind."""
        with self.builder.preserve():
            if self._accept(OPTIONAL, T.VAR):
                self._variable_declaration()
            elif self._accept(OPTIONAL, T.DEF):
                self._function_definition()
            elif self._accept(TEST, T.IDENTIFIER):
                self._assignment_or_call()
            elif self._accept(OPTIONAL, T.INDENT_IN):
                # a block; the INDENT_IN node groups its statements
                while not self._accept(OMIT, T.INDENT_OUT):
                    self._statement()
            elif self._accept(OMIT, T.NEWLINE):
                pass  # empty statement
            elif self._accept(OPTIONAL, *CONDITIONALS):
                self._expression()
                self._accept(NEEDED | OMIT, T.COLON)
                self._accept(NEEDED | OMIT, T.NEWLINE)
                self._statement()
            elif self._accept(OPTIONAL, T.FOR):
                self._for_statement()
            elif self._accept(OPTIONAL, T.ELSE):
                self._accept(OMIT, T.COLON)
                self._accept(OMIT, T.NEWLINE)
                self._statement()
            elif self._accept(OPTIONAL, T.RETURN):
                if not self._accept(TEST, T.NEWLINE):
                    self._expression()
                self._accept(NEEDED | OMIT, T.NEWLINE)
            elif self._accept(OPTIONAL, T.BREAK, T.CONTINUE):
                self._accept(NEEDED | OMIT, T.NEWLINE)
            elif self._is_at_end():
                raise create_unexpected_eof_error("a statement", self._end_location())
            else:
                raise create_bad_statement_error(self._peek())

    def _assignment_or_call(self):
        """
        ``name[index] = expression`` or ``name(arguments)``.

        The target is parsed aside first; for an assignment the ``=`` node
        becomes its parent, for a call it goes in place unchanged.
        """
        with self.builder.scratch() as target:
            self._accept(NEEDED, T.IDENTIFIER)
            self._array_index()

        if self._accept(OPTIONAL, T.ASSIGNMENT):
            self.builder.extend(target)
            self._expression()
            return

        self.builder.extend(target)
        self.builder.move_to(target[0])
        if self._accept(OPTIONAL, T.LPAREN):
            self._argument_list(T.RPAREN)
            self._accept(NEEDED | OMIT, T.NEWLINE)
        else:
            self._fail([T.ASSIGNMENT, T.LPAREN])

    def _for_statement(self):
        """``for name = start to end [step by]:`` or ``for name in items:``."""
        with self.builder.preserve():
            self._accept(NEEDED, T.IDENTIFIER)

        with self.builder.preserve():
            if self._accept(OPTIONAL, T.ASSIGNMENT):
                self._expression()
                # "to" is a marker leaf; the end expression is its sibling
                with self.builder.preserve():
                    self._accept(NEEDED, T.TO)
                self._expression()
                if self._accept(OPTIONAL, T.STEP):
                    self._expression()
            else:
                self._accept(NEEDED, T.IN)
                self._expression()

        self._accept(NEEDED | OMIT, T.COLON)
        self._accept(NEEDED | OMIT, T.NEWLINE)
        self._statement()

    def _variable_declaration(self):
        """``var a [= expression] {, b [= expression]}``."""
        while True:
            with self.builder.preserve():
                self._accept(NEEDED, T.IDENTIFIER)
                if self._accept(OMIT, T.ASSIGNMENT):
                    self._expression()
            if not self._accept(OMIT, T.COMMA):
                break
        self._accept(OMIT, T.NEWLINE)

    def _function_definition(self):
        """``def name(params): body``; parameters hang off a ``(`` node."""
        with self.builder.preserve():
            self._accept(NEEDED, T.IDENTIFIER)

            with self.builder.preserve():
                self._accept(NEEDED, T.LPAREN)
                if not self._accept(OMIT, T.RPAREN):
                    while True:
                        with self.builder.preserve():
                            self._accept(NEEDED, T.IDENTIFIER)
                        if not self._accept(OMIT, T.COMMA):
                            break
                    self._accept(NEEDED | OMIT, T.RPAREN)

            self._accept(NEEDED | OMIT, T.COLON)
            self._accept(OMIT, T.NEWLINE)
            self._statement()

    # Expressions

    def _expression(self):
        """Comparison level."""
        self._binary_level(self._addition, T.LOGICAL, self._expression)

    def _addition(self):
        """Additive level; the first term may carry a sign."""
        self._binary_level(self._signed_term, T.ADDSUB, self._addition)

    def _signed_term(self):
        with self.builder.preserve():
            self._accept(OPTIONAL, T.ADDSUB)
            self._term()

    def _term(self):
        """Multiplicative level."""
        self._binary_level(self._factor, T.MULDIV, self._term)

    def _binary_level(self, operand: Callable[[], None], operator: TokenCategory,
                      rest: Callable[[], None]):
        """
        ``operand [operator rest]``.

        The left operand is built aside; if an operator follows, its node
        takes the operand as first child and ``rest`` as second.
        """
        with self.builder.preserve():
            with self.builder.scratch() as left:
                operand()
            if self._accept(OPTIONAL, operator):
                self.builder.extend(left)
                rest()
            else:
                self.builder.extend(left)

    def _factor(self):
        """Operand with an optional unary prefix."""
        with self.builder.preserve():
            self._accept(OPTIONAL, T.UNARY)

            if self._accept(OPTIONAL, T.IDENTIFIER):
                self._array_index()
                if self._accept(OPTIONAL, T.LPAREN):
                    self._argument_list(T.RPAREN)
            elif self._accept(OPTIONAL, T.LSQUARE):
                self._argument_list(T.RSQUARE)
            elif self._accept(OPTIONAL, *LITERALS):
                pass
            elif self._accept(OPTIONAL, T.LPAREN):
                self._expression()
                self._accept(NEEDED | OMIT, T.RPAREN)
            else:
                raise create_missing_operand_error(self._peek(), self._end_location())

    def _array_index(self):
        """Optional ``[expression]`` after an identifier."""
        with self.builder.preserve():
            if self._accept(OPTIONAL, T.LSQUARE):
                self._expression()
                self._accept(NEEDED | OMIT, T.RSQUARE)

    def _argument_list(self, closer: TokenCategory):
        """Comma separated expressions up to ``closer``, under the opener node."""
        if self._accept(OMIT, closer):
            return
        while True:
            self._expression()
            if not self._accept(OMIT, T.COMMA):
                break
        self._accept(NEEDED | OMIT, closer)

    # Utility methods

    def _accept(self, mode: AcceptMode, *categories: TokenCategory) -> bool:
        """
        Try to accept the current token.

        Args:
            mode: Combination of AcceptMode flags
            categories: Acceptable token categories

        Returns:
            Whether the current token is one of ``categories``

        Raises:
            ParseError: If the token is NEEDED and does not match
        """
        token = self._peek()
        passing = token is not None and token.category in categories

        if mode & TEST:
            return passing
        if not passing:
            if mode & NEEDED:
                self._fail(categories)
            return False

        if not mode & OMIT:
            self.builder.add(token)
        self.current += 1
        return True

    def _fail(self, expected):
        token = self._peek()
        if token is None:
            raise create_unexpected_eof_error(expected, self._end_location())
        raise create_unexpected_token_error(expected, token)

    def _peek(self) -> Optional[Token]:
        """Return current token without consuming, None past the end."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return None

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _end_location(self) -> Optional[SourceLocation]:
        """Location of the last token, for end-of-input diagnostics."""
        if self.tokens:
            return self.tokens[-1].location
        return SourceLocation(self.filename, 1, 1, 0)

    def _restart(self):
        self.current = 0
        self.tree = SyntaxTree()
        self.builder = TreeBuilder(self.tree)


def parse_tokens(tokens: List[Token], filename: str = "<unknown>") -> SyntaxTree:
    """
    Convenience function to parse an indent-transformed token list.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokens, filename).parse()


def parse_string(source: str, filename: str = "<string>",
                 symbols: Optional[SymbolTable] = None,
                 options: Optional[CompilerOptions] = None) -> SyntaxTree:
    """
    Convenience function to lex, indent-transform and parse a source string.

    Raises:
        CompileError: LexerError, IndentError or ParseError
    """
    from ..lexer import tokenize_string, normalize_indentation

    tokens = tokenize_string(source, filename, symbols, options)
    tokens = normalize_indentation(tokens, options)
    return Parser(tokens, filename).parse()


def parse_file(filepath: str, symbols: Optional[SymbolTable] = None,
               options: Optional[CompilerOptions] = None) -> SyntaxTree:
    """
    Convenience function to parse a source file.

    Raises:
        CompileError: LexerError, IndentError or ParseError
        OSError: If the file cannot be read
    """
    from ..lexer import tokenize_file, normalize_indentation

    tokens = tokenize_file(filepath, symbols, options)
    tokens = normalize_indentation(tokens, options)
    return Parser(tokens, filepath).parse()
