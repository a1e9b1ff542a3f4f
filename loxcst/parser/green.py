"""
Green tree: the immutable, structurally shared parse tree.

A green tree only knows kinds, texts and children. It has no parent links
and no offsets, so identical subtrees can be the same object no matter
where they occur. Positions are added later by the syntax tree view.

GreenNodeBuilder assembles a tree from the flat start/token/finish event
stream a recursive-descent parser emits. Children are collected in one flat
list; each open node remembers where its first child starts, and
finish_node() slices its children off the end and freezes them.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .errors import TreeBuilderError
from .syntax_kind import SyntaxKind, syntax_kind_from_raw

logger = logging.getLogger(__name__)

# nodes with more children than this are not interned
_MAX_CACHED_CHILDREN = 3


@dataclass(frozen=True)
class GreenToken:
    """A leaf: a kind and the exact source text it covers."""
    kind: SyntaxKind
    text: str

    @property
    def text_len(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class GreenNode:
    """A composite node: a kind and an ordered, immutable tuple of children."""
    kind: SyntaxKind
    children: Tuple["GreenElement", ...]
    text_len: int = field(init=False, compare=False, repr=False)
    _hash: int = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "text_len", sum(child.text_len for child in self.children))
        object.__setattr__(self, "_hash", hash((self.kind, self.children)))

    def __hash__(self) -> int:
        return self._hash

    def iter_tokens(self) -> Iterator[GreenToken]:
        """Yield every leaf below this node, left to right."""
        stack: List[GreenElement] = [self]
        while stack:
            element = stack.pop()
            if isinstance(element, GreenToken):
                yield element
            else:
                stack.extend(reversed(element.children))

    def text(self) -> str:
        return "".join(token.text for token in self.iter_tokens())

    def __str__(self) -> str:
        return self.text()


GreenElement = Union[GreenNode, GreenToken]


class NodeCache:
    """
    Interns green tokens and small green nodes.

    Equal tokens, and equal nodes with few children, come back as the same
    object. A cache can be shared by several builders.
    """

    def __init__(self):
        self._tokens: Dict[Tuple[SyntaxKind, str], GreenToken] = {}
        self._nodes: Dict[Tuple[SyntaxKind, Tuple[GreenElement, ...]], GreenNode] = {}

    def token(self, kind: SyntaxKind, text: str) -> GreenToken:
        key = (kind, text)
        token = self._tokens.get(key)
        if token is None:
            token = GreenToken(kind, text)
            self._tokens[key] = token
        return token

    def node(self, kind: SyntaxKind, children: Tuple[GreenElement, ...]) -> GreenNode:
        if len(children) > _MAX_CACHED_CHILDREN:
            return GreenNode(kind, children)
        key = (kind, children)
        node = self._nodes.get(key)
        if node is None:
            node = GreenNode(kind, children)
            self._nodes[key] = node
        return node

    def __len__(self) -> int:
        return len(self._tokens) + len(self._nodes)


@dataclass(frozen=True)
class Checkpoint:
    """Position in the builder's child list, see GreenNodeBuilder.checkpoint()."""
    position: int


class GreenNodeBuilder:
    """
    Stack-based builder for green trees.

    start_node(), token() and finish_node() are the only mutation surface.
    Nodes close in strict LIFO order and the builder produces exactly one
    root; anything else raises TreeBuilderError.
    """

    def __init__(self, cache: Optional[NodeCache] = None):
        self._cache = cache if cache is not None else NodeCache()
        # (kind, index of first child in self._children)
        self._parents: List[Tuple[SyntaxKind, int]] = []
        self._children: List[GreenElement] = []

    def start_node(self, kind: int) -> None:
        """Open a new node; it becomes the parent of everything until finish_node()."""
        self._check_single_root()
        self._parents.append((syntax_kind_from_raw(kind), len(self._children)))

    def token(self, kind: int, text: str) -> None:
        """Append a leaf to the innermost open node."""
        if not self._parents:
            raise TreeBuilderError("token() called with no open node")
        self._children.append(self._cache.token(syntax_kind_from_raw(kind), text))

    def finish_node(self) -> None:
        """Close the innermost open node and attach it to its parent."""
        if not self._parents:
            raise TreeBuilderError("finish_node() called with no open node")

        kind, first_child = self._parents.pop()
        children = tuple(self._children[first_child:])
        del self._children[first_child:]
        self._children.append(self._cache.node(kind, children))

    def checkpoint(self) -> Checkpoint:
        """
        Remember the current position so a node can be opened there later.

        Lets a parser wrap children it has already emitted, for example the
        left operand of an operator it has only just seen.
        """
        return Checkpoint(len(self._children))

    def start_node_at(self, checkpoint: Checkpoint, kind: int) -> None:
        """Open a node whose first child is the one emitted right after ``checkpoint``."""
        floor = self._parents[-1][1] if self._parents else 0
        if not floor <= checkpoint.position <= len(self._children):
            raise TreeBuilderError(
                f"checkpoint {checkpoint.position} is outside the open node "
                f"(children {floor}..{len(self._children)})"
            )
        if not self._parents and checkpoint.position > 0:
            raise TreeBuilderError("start_node_at() would create a second root")
        self._parents.append((syntax_kind_from_raw(kind), checkpoint.position))

    def finish(self) -> GreenNode:
        """
        Return the finished root.

        Raises:
            TreeBuilderError: If nodes are still open or no root was built
        """
        if self._parents:
            open_kinds = ", ".join(kind.name for kind, _ in self._parents)
            raise TreeBuilderError(f"cannot finish tree: unclosed nodes remain ({open_kinds})")
        if len(self._children) != 1 or not isinstance(self._children[0], GreenNode):
            raise TreeBuilderError("cannot finish tree: builder holds no root node")

        root = self._children.pop()
        logger.debug("built green tree %s with %d cached elements", root.kind.name, len(self._cache))
        return root

    def _check_single_root(self):
        if not self._parents and self._children:
            raise TreeBuilderError("start_node() would create a second root")
