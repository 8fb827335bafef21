"""
Syntax tree storage for the ttc parser.

Nodes live in an arena (``SyntaxTree.nodes``) and are addressed by index.
Each node owns the ordered list of its children's indexes. The forest of
top-level declarations is ``SyntaxTree.roots``.

Parsing grows the tree through a ``TreeBuilder``, which keeps the current
insertion point: every accepted token becomes a new node appended to the
insertion point, and then becomes the insertion point itself.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from ..lexer.tokens import Token


@dataclass
class SyntaxNode:
    """One tree node; ``token`` is None for synthetic group nodes."""
    index: int
    token: Optional[Token]
    children: List[int] = field(default_factory=list)

    @property
    def lexeme(self) -> str:
        return self.token.lexeme if self.token is not None else "?"

    def __str__(self) -> str:
        return str(self.token) if self.token is not None else "?"


Shape = Union[str, Tuple]


class SyntaxTree:
    """Arena of syntax nodes plus the ordered forest of roots."""

    def __init__(self):
        self.nodes: List[SyntaxNode] = []
        self.roots: List[int] = []

    def new_node(self, token: Optional[Token]) -> int:
        """Allocate a detached node and return its index."""
        index = len(self.nodes)
        self.nodes.append(SyntaxNode(index, token))
        return index

    def __getitem__(self, index: int) -> SyntaxNode:
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)

    def children(self, index: int) -> List[SyntaxNode]:
        """Child nodes of a node, in order."""
        return [self.nodes[child] for child in self.nodes[index].children]

    def root_nodes(self) -> List[SyntaxNode]:
        """Top-level declarations, in source order."""
        return [self.nodes[root] for root in self.roots]

    def walk(self) -> Iterator[Tuple[int, SyntaxNode]]:
        """Pre-order traversal of the forest yielding (depth, node)."""
        stack = [(0, root) for root in reversed(self.roots)]
        while stack:
            depth, index = stack.pop()
            node = self.nodes[index]
            yield depth, node
            for child in reversed(node.children):
                stack.append((depth + 1, child))

    def shape(self, index: int) -> Shape:
        """
        Nested-tuple picture of a subtree, handy for comparisons.

        A leaf is its lexeme; an inner node is ``(lexeme, *child_shapes)``.
        """
        node = self.nodes[index]
        if not node.children:
            return node.lexeme
        return (node.lexeme,) + tuple(self.shape(child) for child in node.children)

    def forest_shape(self) -> List[Shape]:
        """``shape`` of every root."""
        return [self.shape(root) for root in self.roots]


class TreeBuilder:
    """
    Insertion-point cursor over a SyntaxTree.

    ``target`` is the child list new nodes are appended to: the forest's
    root list at top level, a node's children, or a scratch list that a
    production later splices into the real parent.
    """

    def __init__(self, tree: SyntaxTree):
        self.tree = tree
        self.target: List[int] = tree.roots

    def add(self, token: Token) -> int:
        """Append a node for ``token`` at the insertion point and descend into it."""
        index = self.tree.new_node(token)
        self.target.append(index)
        self.target = self.tree.nodes[index].children
        return index

    def extend(self, indexes: List[int]):
        """Splice already built nodes in at the insertion point."""
        self.target.extend(indexes)

    def move_to(self, index: int):
        """Make a node's child list the insertion point."""
        self.target = self.tree.nodes[index].children

    def reset(self):
        """Return the insertion point to the top level."""
        self.target = self.tree.roots

    @contextmanager
    def preserve(self):
        """Restore the insertion point when the block exits."""
        saved = self.target
        try:
            yield saved
        finally:
            self.target = saved

    @contextmanager
    def scratch(self):
        """
        Collect nodes into a throwaway list instead of the tree.

        Yields the list; once the block exits the insertion point is back
        where it was and the caller decides where the collected nodes go.
        """
        saved = self.target
        holder: List[int] = []
        self.target = holder
        try:
            yield holder
        finally:
            self.target = saved
