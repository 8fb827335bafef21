"""
Tests for the symbol table.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from ttc.lexer.symbol_table import Symbol, SymbolTable
from ttc.lexer.tokens import TokenCategory


class TestSymbolTable(unittest.TestCase):

    def setUp(self):
        self.table = SymbolTable()

    def test_intern_creates_entry(self):
        symbol = self.table.intern("x", TokenCategory.IDENTIFIER)
        self.assertIsInstance(symbol, Symbol)
        self.assertEqual(symbol.lexeme, "x")
        self.assertEqual(symbol.category, TokenCategory.IDENTIFIER)
        self.assertEqual(len(self.table), 1)

    def test_intern_is_idempotent(self):
        first = self.table.intern("x", TokenCategory.IDENTIFIER)
        second = self.table.intern("x", TokenCategory.IDENTIFIER)
        self.assertIs(first, second)
        self.assertEqual(len(self.table), 1)

    def test_same_lexeme_different_category(self):
        ident = self.table.intern("1", TokenCategory.IDENTIFIER)
        number = self.table.intern("1", TokenCategory.INTEGER)
        self.assertIsNot(ident, number)
        self.assertEqual(len(self.table), 2)

    def test_textual_identity(self):
        # 1 and 01 are the same value but different lexemes
        self.table.intern("1", TokenCategory.INTEGER)
        self.table.intern("01", TokenCategory.INTEGER)
        self.assertEqual(len(self.table), 2)

    def test_lookup_does_not_create(self):
        self.assertIsNone(self.table.lookup("y", TokenCategory.IDENTIFIER))
        self.assertEqual(len(self.table), 0)
        symbol = self.table.intern("y", TokenCategory.IDENTIFIER)
        self.assertIs(self.table.lookup("y", TokenCategory.IDENTIFIER), symbol)

    def test_insertion_order(self):
        for lexeme in ["b", "a", "c", "a"]:
            self.table.intern(lexeme, TokenCategory.IDENTIFIER)
        self.assertEqual([s.lexeme for s in self.table], ["b", "a", "c"])

    def test_contains(self):
        self.table.intern('"hi"', TokenCategory.STRING)
        self.assertIn(('"hi"', TokenCategory.STRING), self.table)
        self.assertNotIn(('"hi"', TokenCategory.IDENTIFIER), self.table)

    def test_clear(self):
        self.table.intern("x", TokenCategory.IDENTIFIER)
        self.table.clear()
        self.assertEqual(len(self.table), 0)
        self.assertIsNone(self.table.lookup("x", TokenCategory.IDENTIFIER))

    def test_only_interned_categories(self):
        for category in [TokenCategory.IF, TokenCategory.ADDSUB, TokenCategory.NEWLINE]:
            with self.subTest(category=category):
                with self.assertRaises(ValueError):
                    self.table.intern("if", category)
        self.assertEqual(len(self.table), 0)

    def test_symbol_str(self):
        symbol = self.table.intern("3.5", TokenCategory.REAL)
        self.assertEqual(str(symbol), "(3.5, real)")


if __name__ == '__main__':
    unittest.main()
