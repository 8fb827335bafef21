"""
Symbol table for the ttc lexer.

Interns (lexeme, category) pairs so that repeated identifiers and literals
share one entry. The table is append-only: entries are created while lexing
and are never removed for the lifetime of a compilation.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .tokens import TokenCategory

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Symbol:
    """One interned entry; compared by identity."""
    lexeme: str
    category: TokenCategory

    def __str__(self) -> str:
        return f"({self.lexeme}, {self.category.display_name})"

    def __repr__(self) -> str:
        return f"Symbol({self.lexeme!r}, {self.category.name})"


class SymbolTable:
    """
    Insertion-ordered registry of interned symbols.

    Textually identical lexemes of the same category share one entry, so
    ``1`` and ``01`` are distinct integers while two ``x`` identifiers are
    the same symbol.
    """

    def __init__(self):
        self._entries: List[Symbol] = []
        self._index: Dict[Tuple[str, TokenCategory], Symbol] = {}

    def intern(self, lexeme: str, category: TokenCategory) -> Symbol:
        """
        Return the entry for (lexeme, category), creating it if needed.

        Raises:
            ValueError: If ``category`` is not identifier, integer, real or string
        """
        if not category.is_interned:
            raise ValueError(f"{category.name} tokens are not interned")
        symbol = self._index.get((lexeme, category))
        if symbol is None:
            symbol = Symbol(lexeme, category)
            self._entries.append(symbol)
            self._index[(lexeme, category)] = symbol
            logger.debug("interned %s", symbol)
        return symbol

    def lookup(self, lexeme: str, category: TokenCategory) -> Optional[Symbol]:
        """Return the entry for (lexeme, category) without creating it."""
        return self._index.get((lexeme, category))

    def clear(self):
        """Forget every entry; only valid between independent compilations."""
        self._entries.clear()
        self._index.clear()

    def __contains__(self, key: Tuple[str, TokenCategory]) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self._entries)} entries)"
