"""
Tests for the ttc parser.

Tree shapes are compared through SyntaxTree.shape: a leaf is its lexeme and
an inner node is a tuple of its lexeme followed by its children's shapes.
"""

import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from ttc.lexer import Lexer, normalize_indentation, ErrorKind
from ttc.parser import Parser, ParseError, SyntaxTree, TreeBuilder
from ttc.parser.parser import parse_string, parse_tokens, parse_file


def parser_for(source):
    tokens = normalize_indentation(Lexer(source).tokenize())
    return Parser(tokens)


def parse(source):
    return parser_for(source).parse().forest_shape()


def expression(source):
    return parser_for(source).parse_expression().forest_shape()[0]


def statements(source):
    return parser_for(source).parse_statements().forest_shape()


def body(source):
    """Shape of the block of a one-function script wrapped around ``source``."""
    lines = "".join("    " + line + "\n" for line in source.splitlines())
    tree = parse("def f():\n" + lines)
    return tree[0][1][2]


class TestExpressions(unittest.TestCase):

    def test_operand(self):
        self.assertEqual(expression("x"), "x")
        self.assertEqual(expression("42"), "42")
        self.assertEqual(expression('"s"'), '"s"')
        for keyword in ["true", "false", "none"]:
            self.assertEqual(expression(keyword), keyword)

    def test_binary(self):
        self.assertEqual(expression("a + b"), ("+", "a", "b"))
        self.assertEqual(expression("a * b"), ("*", "a", "b"))
        self.assertEqual(expression("a == b"), ("==", "a", "b"))

    def test_right_associative(self):
        self.assertEqual(expression("1 - 2 - 3"), ("-", "1", ("-", "2", "3")))
        self.assertEqual(expression("8 / 4 / 2"), ("/", "8", ("/", "4", "2")))
        self.assertEqual(expression("a < b < c"), ("<", "a", ("<", "b", "c")))

    def test_precedence(self):
        self.assertEqual(expression("a + b * c"), ("+", "a", ("*", "b", "c")))
        self.assertEqual(expression("a * b + c"), ("+", ("*", "a", "b"), "c"))
        self.assertEqual(expression("a + 1 < b * 2"),
                         ("<", ("+", "a", "1"), ("*", "b", "2")))

    def test_parentheses_are_nodes(self):
        self.assertEqual(expression("(a + b) * c"),
                         ("*", ("(", ("+", "a", "b")), "c"))

    def test_leading_sign(self):
        self.assertEqual(expression("-x"), ("-", "x"))
        self.assertEqual(expression("-x + y"), ("+", ("-", "x"), "y"))
        self.assertEqual(expression("-a * b"), ("-", ("*", "a", "b")))

    def test_unary(self):
        self.assertEqual(expression("!done"), ("!", "done"))
        self.assertEqual(expression("~mask"), ("~", "mask"))

    def test_call(self):
        self.assertEqual(expression("f(1, x)"), ("f", ("(", "1", "x")))
        self.assertEqual(expression("f()"), ("f", "("))
        self.assertEqual(expression("f(g(1))"), ("f", ("(", ("g", ("(", "1")))))

    def test_index(self):
        self.assertEqual(expression("a[0]"), ("a", ("[", "0")))
        self.assertEqual(expression("a[i + 1] * 2"),
                         ("*", ("a", ("[", ("+", "i", "1"))), "2"))

    def test_array_literal(self):
        self.assertEqual(expression("[1, 2, 3]"), ("[", "1", "2", "3"))
        self.assertEqual(expression("[]"), "[")

    def test_trailing_newlines_allowed(self):
        self.assertEqual(expression("a + b\n\n"), ("+", "a", "b"))

    def test_leftover_tokens(self):
        with self.assertRaises(ParseError) as ctx:
            expression("a b")
        self.assertEqual(ctx.exception.code, "P001")

    def test_shift_operators_are_not_expressions(self):
        with self.assertRaises(ParseError):
            expression("a << 2")
        with self.assertRaises(ParseError):
            expression("a & b")


class TestDeclarations(unittest.TestCase):

    def test_end_to_end_function(self):
        tree = parse("def add(a, b):\n    return a + b\n")
        self.assertEqual(tree, [
            ("def", ("add", ("(", "a", "b"), ("{{", ("return", ("+", "a", "b"))))),
        ])

    def test_function_without_parameters(self):
        self.assertEqual(parse("def f():\n    return\n"),
                         [("def", ("f", "(", ("{{", "return")))])

    def test_variable_declaration(self):
        self.assertEqual(parse("var x = 1, y\n"), [("var", ("x", "1"), "y")])
        self.assertEqual(parse("var z"), [("var", "z")])

    def test_multiple_declarations_in_order(self):
        tree = parse("var a\n\ndef f():\n    return a\n\nvar b = 2\n")
        self.assertEqual([shape[0] for shape in tree], ["var", "def", "var"])

    def test_empty_script(self):
        self.assertEqual(parse(""), [])
        self.assertEqual(parse("\n\n"), [])

    def test_nodes_reference_tokens(self):
        tokens = normalize_indentation(Lexer("var count = 3\n").tokenize())
        tree = Parser(tokens).parse()
        root = tree.root_nodes()[0]
        self.assertIs(root.token, tokens[0])
        name = tree.children(root.index)[0]
        self.assertIs(name.token.symbol, tokens[1].symbol)


class TestStatements(unittest.TestCase):

    def test_assignment(self):
        self.assertEqual(body("x = 1"), ("{{", ("=", "x", "1")))

    def test_indexed_assignment(self):
        self.assertEqual(body("x[i] = y + 1"),
                         ("{{", ("=", ("x", ("[", "i")), ("+", "y", "1"))))

    def test_call_statement(self):
        self.assertEqual(body("print(x, 2)"), ("{{", ("print", ("(", "x", "2"))))

    def test_if_elif_else(self):
        source = "if a:\n    b = 1\nelif c:\n    b = 2\nelse:\n    b = 3"
        self.assertEqual(body(source), ("{{",
            ("if", "a", ("{{", ("=", "b", "1"))),
            ("elif", "c", ("{{", ("=", "b", "2"))),
            ("else", ("{{", ("=", "b", "3"))),
        ))

    def test_else_without_colon(self):
        self.assertEqual(body("else\n    x = 1"),
                         ("{{", ("else", ("{{", ("=", "x", "1")))))

    def test_while_and_until(self):
        self.assertEqual(body("while i < 10:\n    i = i + 1"),
                         ("{{", ("while", ("<", "i", "10"),
                                 ("{{", ("=", "i", ("+", "i", "1"))))))
        self.assertEqual(body("until done:\n    break"),
                         ("{{", ("until", "done", ("{{", "break"))))

    def test_for_range(self):
        self.assertEqual(body("for i = 1 to 10:\n    continue"),
                         ("{{", ("for", "i", ("=", "1", "to", "10"),
                                 ("{{", "continue"))))

    def test_for_range_with_step(self):
        self.assertEqual(body("for i = 10 to 0 step -2:\n    f(i)"),
                         ("{{", ("for", "i",
                                 ("=", "10", "to", "0", ("step", ("-", "2"))),
                                 ("{{", ("f", ("(", "i"))))))

    def test_for_in(self):
        self.assertEqual(body("for x in items:\n    f(x)"),
                         ("{{", ("for", "x", ("in", "items"),
                                 ("{{", ("f", ("(", "x"))))))

    def test_return_value(self):
        self.assertEqual(body("return [a, b]"), ("{{", ("return", ("[", "a", "b"))))

    def test_nested_blocks(self):
        source = "while a:\n    if b:\n        c = 1\n    d = 2"
        self.assertEqual(body(source), ("{{",
            ("while", "a", ("{{",
                ("if", "b", ("{{", ("=", "c", "1"))),
                ("=", "d", "2"))),
        ))

    def test_local_declarations(self):
        self.assertEqual(body("var t = 0"), ("{{", ("var", ("t", "0"))))

    def test_parse_statements_roots(self):
        self.assertEqual(statements("x = 1\nf()\n"),
                         [("=", "x", "1"), ("f", "(")])


class TestParseErrors(unittest.TestCase):

    def _error(self, source):
        with self.assertRaises(ParseError) as ctx:
            parse(source)
        self.assertEqual(ctx.exception.kind, ErrorKind.SYNTACTIC)
        return ctx.exception

    def test_bad_top_level(self):
        error = self._error("x = 1\n")
        self.assertEqual(error.code, "P005")
        self.assertEqual(error.message, "Unexpected token, identifier")

    def test_unexpected_token(self):
        error = self._error("def f(:\n    return\n")
        self.assertEqual(error.code, "P001")
        self.assertEqual(error.message, "Unexpected token, colon")
        self.assertEqual(error.token.lexeme, ":")

    def test_missing_colon(self):
        error = self._error("def f():\n    if a\n        return\n")
        self.assertEqual(error.code, "P001")

    def test_identifier_statement_without_assignment_or_call(self):
        error = self._error("def f():\n    x\n")
        self.assertEqual(error.code, "P001")

    def test_unexpected_end(self):
        error = self._error("def f(a")
        self.assertEqual(error.code, "P002")
        self.assertEqual(error.message, "Unexpected end of input")

    def test_missing_body(self):
        self.assertEqual(self._error("def f():\n").code, "P002")

    def test_bad_statement(self):
        error = self._error("def f():\n    )\n")
        self.assertEqual(error.code, "P003")
        self.assertEqual(error.message, "Bad token (), rparen)")

    def test_missing_operand(self):
        self.assertEqual(self._error("var x = \n").code, "P004")
        self.assertEqual(self._error("var x = ").code, "P004")
        self.assertEqual(self._error("def f():\n    return 1 +\n").code, "P004")

    def test_unclosed_parenthesis(self):
        error = self._error("var x = (1 + 2\n")
        self.assertEqual(error.code, "P001")
        self.assertIn("Add a closing parenthesis ')'", error.diagnostic.suggestions)

    def test_error_location(self):
        error = self._error("def f():\n    )\n")
        self.assertEqual((error.location.line, error.location.column), (2, 5))


class TestTreeBuilder(unittest.TestCase):
    """The insertion-point rules the parser relies on."""

    def setUp(self):
        self.tokens = Lexer("a b c d").tokenize()
        self.tree = SyntaxTree()
        self.builder = TreeBuilder(self.tree)

    def test_add_descends(self):
        first = self.builder.add(self.tokens[0])
        self.builder.add(self.tokens[1])
        self.assertEqual(self.tree.roots, [first])
        self.assertEqual(self.tree.forest_shape(), [("a", "b")])

    def test_preserve_restores(self):
        self.builder.add(self.tokens[0])
        with self.builder.preserve():
            self.builder.add(self.tokens[1])
            self.builder.add(self.tokens[2])
        self.builder.add(self.tokens[3])
        self.assertEqual(self.tree.forest_shape(), [("a", ("b", "c"), "d")])

    def test_scratch_and_extend(self):
        with self.builder.scratch() as held:
            self.builder.add(self.tokens[0])
        self.assertEqual(self.tree.roots, [])
        self.builder.add(self.tokens[1])
        self.builder.extend(held)
        self.assertEqual(self.tree.forest_shape(), [("b", "a")])

    def test_walk_is_preorder(self):
        self.builder.add(self.tokens[0])
        with self.builder.preserve():
            self.builder.add(self.tokens[1])
        self.builder.add(self.tokens[2])
        self.builder.reset()
        self.builder.add(self.tokens[3])
        walked = [(depth, node.lexeme) for depth, node in self.tree.walk()]
        self.assertEqual(walked, [(0, "a"), (1, "b"), (1, "c"), (0, "d")])

    def test_synthetic_node(self):
        index = self.tree.new_node(None)
        self.assertEqual(self.tree[index].lexeme, "?")
        self.assertEqual(str(self.tree[index]), "?")


class TestConvenienceFunctions(unittest.TestCase):

    def test_parse_string(self):
        tree = parse_string("var x\n")
        self.assertEqual(tree.forest_shape(), [("var", "x")])

    def test_parse_tokens(self):
        tokens = normalize_indentation(Lexer("def f():\n    return 1\n", "f.tt").tokenize())
        tree = parse_tokens(tokens, "f.tt")
        self.assertEqual(tree.forest_shape(), [("def", ("f", "(", ("{{", ("return", "1"))))])

    def test_parse_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".tt", delete=False) as f:
            f.write("var x = 1\n\ndef g(a):\n    return a\n")
            path = f.name
        try:
            tree = parse_file(path)
        finally:
            os.unlink(path)
        self.assertEqual([node.lexeme for node in tree.root_nodes()], ["var", "def"])
        self.assertEqual(tree.root_nodes()[0].token.location.filename, path)

    def test_parse_file_errors_carry_path(self):
        with tempfile.NamedTemporaryFile("w", suffix=".tt", delete=False) as f:
            f.write("x = 1\n")
            path = f.name
        try:
            with self.assertRaises(ParseError) as ctx:
                parse_file(path)
        finally:
            os.unlink(path)
        self.assertEqual(ctx.exception.location.filename, path)


if __name__ == '__main__':
    unittest.main()
